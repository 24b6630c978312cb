import logging
import math

from screenflow.state_machine.display_state import BaseState

logger = logging.getLogger(__name__)


def _int_value(context, key: str, default: int) -> int:
    """Reads an integer context value, non-numeric input falls back to default"""
    value = context.get(key, default)
    try:
        return int(value)
    except (TypeError, ValueError, OverflowError):
        logger.warning(f"Ignoring non-numeric {key}: {value!r}")
        return default


class DashboardState(BaseState):
    """Two progress bars with simulated values"""
    name = "dashboard"

    def __init__(self, display, name: str | None = None):
        super().__init__(display, name)
        self.time = 0.0
        self.value1 = 75
        self.value2 = 50

    def enter(self, context):
        super().enter(context)
        self.time = 0.0
        self.value1 = _int_value(context, "value1", 75)
        self.value2 = _int_value(context, "value2", 50)

    def update(self, dt):
        self.time += dt

        # simulate value changes
        self.value1 = int(75 + math.sin(self.time) * 10)
        self.value2 = int(50 + math.cos(self.time * 1.5) * 15)

    def exit(self):
        super().exit()
        return {
            "last_value1": self.value1,
            "last_value2": self.value2,
        }

    def _draw_bar(self, x: int, y: int, value: int):
        self.display.draw_rect(x, y, 55, 6)
        filled = int(53 / 100 * max(0, min(100, value)))
        if filled > 0:
            self.display.fill_rect(x + 1, y + 1, filled, 4)

    def render(self):
        self.display.draw_text("DASHBOARD", 35, 0)

        self._draw_bar(5, 12, self.value1)
        self._draw_bar(68, 12, self.value2)

        self.display.draw_text(str(self.value1), 20, 20)
        self.display.draw_text(str(self.value2), 85, 20)
