import pytest

from screenflow.clock import FakeClock
from screenflow.render.surface import FrameSurface


class RecordingState:
    """DisplayState that records lifecycle calls, optionally into a shared log"""

    def __init__(self, name, exit_data=None, log=None, draw=None):
        self.name = name
        self.exit_data = exit_data or {}
        self.log = log if log is not None else []
        self.draw = draw
        self.contexts = []
        self.updates = []
        self.renders = 0

    def enter(self, context):
        self.log.append((self.name, "enter"))
        self.contexts.append(dict(context))

    def update(self, dt):
        self.updates.append(dt)

    def exit(self):
        self.log.append((self.name, "exit"))
        return dict(self.exit_data)

    def render(self):
        self.renders += 1
        if self.draw is not None:
            self.draw()

    def count(self, call):
        return sum(1 for name, c in self.log if name == self.name and c == call)


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def surface():
    return FrameSurface(128, 32)


@pytest.fixture
def make_state():
    return RecordingState
