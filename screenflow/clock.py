"""Time source shared by transitions, animations and the state machine loop."""

import asyncio
import time


class Clock:
    """Monotonic clock. All timing in screenflow goes through one of these."""

    def now(self) -> float:
        return time.monotonic()

    def sleep(self, seconds: float) -> None:
        if seconds > 0:
            time.sleep(seconds)

    async def sleep_async(self, seconds: float) -> None:
        # zero still yields to the event loop
        await asyncio.sleep(max(0.0, seconds))


class FakeClock(Clock):
    """
    Manually driven clock for tests and offline rendering.
    sleep() advances the time instead of blocking.
    """

    def __init__(self, start: float = 0.0):
        self._now = start
        self.sleeps: list[float] = []

    def now(self) -> float:
        return self._now

    def advance(self, seconds: float) -> float:
        self._now += max(0.0, seconds)
        return self._now

    def sleep(self, seconds: float) -> None:
        self.sleeps.append(seconds)
        self.advance(seconds)

    async def sleep_async(self, seconds: float) -> None:
        self.sleep(seconds)
        await asyncio.sleep(0)


# shared default instance
default_clock = Clock()
