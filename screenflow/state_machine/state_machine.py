import logging
import threading
from typing import Any

from screenflow.clock import Clock, default_clock
from screenflow.render.surface import DisplaySurface
from screenflow.state_machine.display_state import DisplayState
from screenflow.state_machine.transition import Transition

logger = logging.getLogger(__name__)


class StateMachine:
    """
    Owns the registered display states and switches between them.
    One tick() = update() + render(); run()/run_async() pace ticks to a target fps.
    """

    def __init__(self, display: DisplaySurface, clock: Clock | None = None):
        self.display = display
        self.clock = clock or default_clock
        self._states: dict[str, DisplayState] = {}
        self._current: DisplayState | None = None
        self._previous: DisplayState | None = None
        self._active_transition: Transition | None = None
        self._last_update = self.clock.now()

    def add_state(self, name: str, state: DisplayState) -> "StateMachine":
        """Registers a state, the first one added becomes current right away"""
        self._states[name] = state
        logger.debug(f"State registered: {name}")

        if self._current is None:
            self._current = state
            logger.info(f"Initial state: {name}")
            state.enter({})

        return self

    def transition(
        self,
        name: str,
        transition: Transition | None = None,
        context: dict[str, Any] | None = None,
    ) -> bool:
        """
        Switches to the state registered under name.
        Returns False for an unknown name, True when already there or switched.
        """
        target = self._states.get(name)
        if target is None:
            logger.warning(f"Transition to unknown state: {name}")
            return False

        if target is self._current:
            return True

        merged: dict[str, Any] = {}
        if self._current is not None:
            merged.update(self._current.exit() or {})
        # caller context wins over exit data
        merged.update(context or {})

        self._previous = self._current

        if transition is not None:
            self._active_transition = transition
            transition.start(self.clock)

        self._current = target
        logger.info(f"Switched to state: {name}" + (f" via {transition.effect.value}" if transition else ""))
        target.enter(merged)
        return True

    def update(self) -> None:
        now = self.clock.now()
        dt = now - self._last_update
        self._last_update = now

        if self._current is not None:
            self._current.update(dt)

        if self._active_transition is not None and self._active_transition.is_complete:
            self._active_transition = None
            self._previous = None

    def render(self) -> None:
        self.display.clear()

        if self._active_transition is not None and self._previous is not None and self._current is not None:
            self._active_transition.render(self.display, self._previous, self._current)
        elif self._current is not None:
            self._current.render()

        self.display.present()

    def tick(self) -> None:
        """One frame: update then render"""
        self.update()
        self.render()

    def run(self, iterations: int = 0, fps: int = 30, stop_event: threading.Event | None = None) -> int:
        """
        Blocking update/render loop paced to fps.
        iterations=0 runs until stop_event is set. Returns the number of frames run.
        """
        frame_time = 1.0 / max(1, fps)
        count = 0

        while iterations == 0 or count < iterations:
            if stop_event is not None and stop_event.is_set():
                break

            frame_start = self.clock.now()
            self.tick()

            # sleep the rest of the frame
            elapsed = self.clock.now() - frame_start
            self.clock.sleep(max(0.0, frame_time - elapsed))
            count += 1

        return count

    async def run_async(self, iterations: int = 0, fps: int = 30) -> int:
        """
        Same loop for an asyncio runtime, cancel the task to stop it.
        A failing frame is logged and the loop goes on.
        """
        frame_time = 1.0 / max(1, fps)
        count = 0

        while iterations == 0 or count < iterations:
            frame_start = self.clock.now()
            try:
                self.tick()
            except Exception as e:
                logger.error(f"Error in state machine loop: {e}", exc_info=True)

            elapsed = self.clock.now() - frame_start
            # even when late give other tasks a chance to run
            await self.clock.sleep_async(max(0.0, frame_time - elapsed))
            count += 1

        return count

    # ------ queries ------

    def get_current_state(self) -> DisplayState | None:
        return self._current

    def get_previous_state(self) -> DisplayState | None:
        return self._previous

    def get_current_state_name(self) -> str | None:
        if self._current is None:
            return None
        for name, state in self._states.items():
            if state is self._current:
                return name
        return None

    @property
    def is_transitioning(self) -> bool:
        return self._active_transition is not None

    def get_active_transition(self) -> Transition | None:
        return self._active_transition

    def has_state(self, name: str) -> bool:
        return name in self._states

    def get_state(self, name: str) -> DisplayState | None:
        return self._states.get(name)

    def get_all_states(self) -> dict[str, DisplayState]:
        return dict(self._states)

    def get_state_names(self) -> list[str]:
        return list(self._states.keys())

    def remove_state(self, name: str) -> bool:
        """Unregisters a state; the current state can't be removed"""
        state = self._states.get(name)
        if state is None or state is self._current:
            return False

        del self._states[name]
        logger.debug(f"State removed: {name}")
        return True
