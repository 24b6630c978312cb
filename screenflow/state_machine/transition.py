"""
Timed visual effect shown while the state machine switches states.
The transition renders both states itself; the machine only clears and presents.
"""

import logging
from enum import Enum

import numpy as np

from screenflow.clock import Clock, default_clock
from screenflow.render.compositing import Direction, dither_blend, slide_composite
from screenflow.render.surface import BLACK, BufferedSurface, DisplaySurface
from screenflow.state_machine.display_state import DisplayState

logger = logging.getLogger(__name__)


class TransitionEffect(Enum):
    """Transition effect kinds"""
    NONE = "none"
    FADE = "fade"
    SLIDE_LEFT = "slide_left"
    SLIDE_RIGHT = "slide_right"
    SLIDE_UP = "slide_up"
    SLIDE_DOWN = "slide_down"
    WIPE_LEFT = "wipe_left"
    WIPE_RIGHT = "wipe_right"

    @property
    def direction(self) -> Direction | None:
        """Direction carried by slide/wipe effects"""
        _, _, suffix = self.value.partition("_")
        return Direction(suffix) if suffix else None


_SLIDES = {
    Direction.LEFT: TransitionEffect.SLIDE_LEFT,
    Direction.RIGHT: TransitionEffect.SLIDE_RIGHT,
    Direction.UP: TransitionEffect.SLIDE_UP,
    Direction.DOWN: TransitionEffect.SLIDE_DOWN,
}

_WIPES = {
    Direction.LEFT: TransitionEffect.WIPE_LEFT,
    Direction.RIGHT: TransitionEffect.WIPE_RIGHT,
}


class Transition:
    """
    A timed effect between two states.

    With composite=False (default) fade is a hard cut at 50% and slides show
    the target state only. composite=True on a surface with snapshot()/load()
    turns fade into a dithered blend and slides into a real push.
    """

    def __init__(
        self,
        effect: TransitionEffect = TransitionEffect.NONE,
        duration: float = 0.3,
        composite: bool = False,
        clock: Clock | None = None,
    ):
        self.effect = effect
        self.duration = max(0.0, float(duration))
        self.composite = composite
        self.clock = clock or default_clock
        self.start_time: float = 0.0
        self.started = False

    def start(self, clock: Clock | None = None) -> None:
        """Starts timing; an owner may pass its own clock so both share one time source"""
        if clock is not None:
            self.clock = clock
        self.start_time = self.clock.now()
        self.started = True
        logger.debug(f"Transition started: {self.effect.value}, {self.duration:.2f}s")

    def reset(self) -> None:
        self.started = False
        self.start_time = 0.0

    def get_progress(self) -> float:
        """Progress in [0, 1], 0 until started"""
        if not self.started:
            return 0.0
        if self.duration <= 0:
            return 1.0
        elapsed = self.clock.now() - self.start_time
        return float(np.clip(elapsed / self.duration, 0.0, 1.0))

    @property
    def is_complete(self) -> bool:
        return self.started and self.get_progress() >= 1.0

    @property
    def direction(self) -> Direction | None:
        return self.effect.direction

    def render(self, surface: DisplaySurface, from_state: DisplayState, to_state: DisplayState) -> None:
        progress = self.get_progress()

        match self.effect:
            case TransitionEffect.NONE:
                to_state.render()
            case TransitionEffect.FADE:
                self._render_fade(surface, from_state, to_state, progress)
            case (TransitionEffect.SLIDE_LEFT | TransitionEffect.SLIDE_RIGHT
                  | TransitionEffect.SLIDE_UP | TransitionEffect.SLIDE_DOWN):
                self._render_slide(surface, from_state, to_state, progress)
            case TransitionEffect.WIPE_LEFT | TransitionEffect.WIPE_RIGHT:
                self._render_wipe(surface, to_state, progress)

    def _can_composite(self, surface: DisplaySurface) -> bool:
        return self.composite and isinstance(surface, BufferedSurface)

    def _capture_both(self, surface: BufferedSurface, from_state: DisplayState, to_state: DisplayState):
        """Renders each state into the surface in turn and returns both buffers"""
        from_state.render()
        from_pixels = surface.snapshot()
        surface.clear()
        to_state.render()
        to_pixels = surface.snapshot()
        return from_pixels, to_pixels

    def _render_fade(self, surface, from_state, to_state, progress: float) -> None:
        if self._can_composite(surface):
            from_pixels, to_pixels = self._capture_both(surface, from_state, to_state)
            surface.load(dither_blend(from_pixels, to_pixels, progress))
            return

        # hard cut at the midpoint
        if progress < 0.5:
            from_state.render()
        else:
            to_state.render()

    def _render_slide(self, surface, from_state, to_state, progress: float) -> None:
        if self._can_composite(surface):
            from_pixels, to_pixels = self._capture_both(surface, from_state, to_state)
            surface.load(slide_composite(from_pixels, to_pixels, progress, self.direction))
            return

        to_state.render()

    def _render_wipe(self, surface, to_state, progress: float) -> None:
        to_state.render()

        # cover the part of the new state that isn't revealed yet
        width = surface.width
        wipe_width = int(round(width * (1.0 - progress)))
        if wipe_width <= 0:
            return

        if self.effect is TransitionEffect.WIPE_LEFT:
            surface.fill_rect(width - wipe_width, 0, wipe_width, surface.height, BLACK)
        else:
            surface.fill_rect(0, 0, wipe_width, surface.height, BLACK)

    # ------ constructors ------

    @classmethod
    def fade(cls, duration: float = 0.3, **kwargs) -> "Transition":
        return cls(TransitionEffect.FADE, duration, **kwargs)

    @classmethod
    def slide(cls, direction: str | Direction = "left", duration: float = 0.3, **kwargs) -> "Transition":
        return cls(_SLIDES[Direction.parse(direction)], duration, **kwargs)

    @classmethod
    def wipe(cls, direction: str | Direction = "left", duration: float = 0.3, **kwargs) -> "Transition":
        effect = _WIPES.get(Direction.parse(direction), TransitionEffect.WIPE_LEFT)
        return cls(effect, duration, **kwargs)

    @classmethod
    def instant(cls, **kwargs) -> "Transition":
        return cls(TransitionEffect.NONE, 0.0, **kwargs)

    @classmethod
    def from_name(cls, effect: str, direction: str | Direction = "left", duration: float = 0.3, **kwargs) -> "Transition":
        """
        Builds a transition from a loose name: "fade", "slide", "wipe", "none"
        or a full effect value such as "slide_up". Raises ValueError for unknown names.
        """
        name = effect.lower()
        if name == "slide":
            return cls.slide(direction, duration, **kwargs)
        if name == "wipe":
            return cls.wipe(direction, duration, **kwargs)
        return cls(TransitionEffect(name), duration, **kwargs)

    def __repr__(self) -> str:
        return f"Transition(effect={self.effect.value}, duration={self.duration}, started={self.started})"
