"""
Frame-sequenced animation engine.

A timeline is an ordered list of (render callback, duration) frames.
tick() runs one playback step and returns, play()/play_async() loop over it.
"""

import logging
import threading
from dataclasses import dataclass
from typing import Any, Callable

from screenflow.clock import Clock, default_clock
from screenflow.render.compositing import Direction, direction_offset, dither_fade, shift
from screenflow.render.surface import BufferedSurface, DisplaySurface

logger = logging.getLogger(__name__)

FrameCallback = Callable[[Any, float], None]

# fixed step counts of the fade/slide helpers
FADE_STEPS = 10
SLIDE_STEPS = 20


@dataclass
class AnimationFrame:
    """One timeline step"""
    callback: FrameCallback  # callback(surface, progress)
    duration_ms: float

    def __post_init__(self):
        self.duration_ms = max(0.0, float(self.duration_ms))

    def progress_at(self, elapsed_ms: float) -> float:
        if self.duration_ms <= 0:
            return 1.0
        return max(0.0, min(1.0, elapsed_ms / self.duration_ms))


class AnimationEngine:
    """
    Plays a timeline on a display surface.

    Playing -> Paused -> Playing via pause()/resume(); the last frame of a
    non-looping timeline stops playback and fires on_complete once;
    stop() keeps the position, reset() rewinds to frame 0.
    """

    def __init__(
        self,
        display: DisplaySurface,
        clock: Clock | None = None,
        idle_wait_ms: float = 10.0,
        yield_ms: float = 1.0,
    ):
        self.display = display
        self.clock = clock or default_clock
        self.idle_wait = max(0.0, idle_wait_ms) / 1000.0
        self.yield_time = max(0.0, yield_ms) / 1000.0

        self.frames: list[AnimationFrame] = []
        self.current_frame = 0
        self._playing = False
        self._paused = False
        self._loop = False
        self._on_complete: Callable[[], None] | None = None
        self.start_time = 0.0
        self.frame_start_time = 0.0

    # ------ timeline building ------

    def add_frame(self, callback: FrameCallback, duration_ms: float) -> "AnimationEngine":
        self.frames.append(AnimationFrame(callback, duration_ms))
        return self

    def loop(self, enabled: bool = True) -> "AnimationEngine":
        self._loop = enabled
        return self

    def on_complete(self, callback: Callable[[], None]) -> "AnimationEngine":
        self._on_complete = callback
        return self

    def clear_frames(self) -> "AnimationEngine":
        self.frames = []
        self.reset()
        return self

    # ------ playback control ------

    def start(self) -> bool:
        """Begins playback without blocking; returns False when there is nothing to play"""
        if not self.frames:
            return False

        if self.current_frame >= len(self.frames):
            self.current_frame = 0

        self._playing = True
        self._paused = False
        self.start_time = self.clock.now()
        self.frame_start_time = self.start_time
        logger.debug(f"Animation started: {len(self.frames)} frames, loop={self._loop}")
        return True

    def tick(self) -> bool:
        """
        Runs one playback step: renders the current frame and advances when it's done.
        Returns True while playback is active (paused counts as active).
        """
        if not self._playing or not self.frames:
            return False
        if self._paused:
            return True

        now = self.clock.now()
        elapsed_ms = (now - self.frame_start_time) * 1000.0
        frame = self.frames[self.current_frame]
        progress = frame.progress_at(elapsed_ms)

        self.display.clear()
        frame.callback(self.display, progress)
        self.display.present()

        # the callback may have called stop() or reset()
        if not self._playing:
            return False

        if progress >= 1.0:
            self.current_frame += 1
            self.frame_start_time = now

            if self.current_frame >= len(self.frames):
                if self._loop:
                    self.current_frame = 0
                else:
                    self._finish()
                    return False

        return True

    def _finish(self) -> None:
        # index stays one past the last frame, the next start() rewinds
        self._playing = False
        self._paused = False
        logger.debug("Animation complete")
        if self._on_complete is not None:
            self._on_complete()

    def play(self, stop_event: threading.Event | None = None) -> None:
        """
        Plays the timeline, blocking until it finishes, stop() is called
        or stop_event is set. Looping timelines need one of the latter two.
        """
        if not self.start():
            return

        while self._playing:
            if stop_event is not None and stop_event.is_set():
                self.stop()
                break

            if self._paused:
                self.clock.sleep(self.idle_wait)
                continue

            if not self.tick():
                break

            # small delay so the loop doesn't spin
            self.clock.sleep(self.yield_time)

    def play_sync(self, stop_event: threading.Event | None = None) -> None:
        self.play(stop_event)

    async def play_async(self) -> None:
        """asyncio flavour of play(), cancelling the task stops playback"""
        if not self.start():
            return

        try:
            while self._playing:
                if self._paused:
                    await self.clock.sleep_async(self.idle_wait)
                    continue

                if not self.tick():
                    break

                await self.clock.sleep_async(self.yield_time)
        finally:
            # only a cancelled task still has the flag set here
            if self._playing:
                self.stop()

    def pause(self) -> None:
        self._paused = True

    def resume(self) -> None:
        if self._paused and self._playing:
            self._paused = False
            # paused time doesn't count towards the frame
            self.frame_start_time = self.clock.now()

    def stop(self) -> None:
        self._playing = False
        self._paused = False

    def reset(self) -> None:
        self.current_frame = 0
        self._playing = False
        self._paused = False
        self.start_time = 0.0
        self.frame_start_time = 0.0

    # ------ state ------

    @property
    def is_playing(self) -> bool:
        return self._playing and not self._paused

    @property
    def is_paused(self) -> bool:
        return self._paused

    @property
    def is_looping(self) -> bool:
        return self._loop

    def get_current_frame(self) -> int:
        return self.current_frame

    def get_frame_count(self) -> int:
        return len(self.frames)

    def get_total_duration(self) -> float:
        """Total timeline length in milliseconds"""
        return sum(frame.duration_ms for frame in self.frames)

    def get_progress(self) -> float:
        if not self.frames or not self._playing:
            return 0.0

        total = self.get_total_duration()
        if total <= 0:
            return 1.0

        elapsed_ms = (self.clock.now() - self.start_time) * 1000.0
        return max(0.0, min(1.0, elapsed_ms / total))

    def render_frame(self, index: int, progress: float = 1.0) -> None:
        """Renders one frame out of band, playback state is untouched"""
        if not 0 <= index < len(self.frames):
            return

        self.display.clear()
        self.frames[index].callback(self.display, max(0.0, min(1.0, progress)))
        self.display.present()

    # ------ ready-made timelines ------

    @classmethod
    def fade(
        cls,
        display: DisplaySurface,
        callback: Callable[[Any], None],
        duration_ms: float,
        fade_in: bool = True,
        composite: bool = False,
        **kwargs,
    ) -> "AnimationEngine":
        """
        Fade timeline of FADE_STEPS steps (FADE_STEPS + 1 frames).
        Without composite the callback content is drawn as is on every step;
        with composite on a buffered surface the step opacity is dithered in.
        """
        engine = cls(display, **kwargs)
        frame_duration = int(duration_ms / FADE_STEPS)
        apply = composite and isinstance(display, BufferedSurface)

        for i in range(FADE_STEPS + 1):
            opacity = i / FADE_STEPS if fade_in else 1 - i / FADE_STEPS
            engine.add_frame(_fade_step(callback, opacity, apply), frame_duration)

        return engine

    @classmethod
    def slide(
        cls,
        display: DisplaySurface,
        callback: Callable[[Any], None],
        duration_ms: float,
        direction: str | Direction = "left",
        composite: bool = False,
        **kwargs,
    ) -> "AnimationEngine":
        """
        Slide timeline of SLIDE_STEPS steps (SLIDE_STEPS + 1 frames), content moves
        out towards direction. The offset is only applied with composite on a buffered surface.
        """
        engine = cls(display, **kwargs)
        frame_duration = int(duration_ms / SLIDE_STEPS)
        direction = Direction.parse(direction)
        span = display.width if direction.is_horizontal else display.height
        apply = composite and isinstance(display, BufferedSurface)

        for i in range(SLIDE_STEPS + 1):
            offset = int(i / SLIDE_STEPS * span)
            engine.add_frame(_slide_step(callback, direction, offset, apply), frame_duration)

        return engine


def _fade_step(callback: Callable[[Any], None], opacity: float, apply: bool) -> FrameCallback:
    def render(display, progress: float) -> None:
        callback(display)
        if apply:
            display.load(dither_fade(display.snapshot(), opacity))
    return render


def _slide_step(callback: Callable[[Any], None], direction: Direction, offset: int, apply: bool) -> FrameCallback:
    def render(display, progress: float) -> None:
        callback(display)
        if apply:
            dx, dy = direction_offset(direction, offset)
            display.load(shift(display.snapshot(), dx, dy))
    return render
