from screenflow.state_machine.display_state import BaseState


class AlertState(BaseState):
    """Blinking framed message, text comes from the "message" context key"""
    name = "alert"

    def __init__(self, display, name: str | None = None):
        super().__init__(display, name)
        self.time = 0.0
        self.message = "ALERT"

    def enter(self, context):
        super().enter(context)
        self.time = 0.0
        self.message = str(context.get("message", "ALERT"))

    def update(self, dt):
        self.time += dt

    def exit(self):
        super().exit()
        return {"alert_duration": self.time}

    @property
    def visible(self) -> bool:
        # 2 blinks per second
        return int(self.time * 2) % 2 == 0

    def render(self):
        if not self.visible:
            return

        self.display.draw_rect(5, 5, 118, 22)
        self.display.draw_rect(6, 6, 116, 20)

        text_x = 64 - len(self.message) * 3
        self.display.draw_text(self.message, text_x, 12)
