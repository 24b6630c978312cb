import math

from screenflow.state_machine.display_state import BaseState


class IdleState(BaseState):
    """Idle screen with a pulsing dot"""
    name = "idle"

    def __init__(self, display, name: str | None = None):
        super().__init__(display, name)
        self.time = 0.0

    def enter(self, context):
        super().enter(context)
        self.time = 0.0

    def update(self, dt):
        self.time += dt

    def exit(self):
        super().exit()
        return {"time_in_idle": self.time}

    def render(self):
        self.display.draw_text("IDLE", 45, 8)

        # radius pulses between 0 and 4
        pulse = int((math.sin(self.time * 3) + 1) * 2)
        if pulse > 0:
            self.display.fill_circle(64, 24, pulse)
