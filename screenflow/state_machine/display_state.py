import logging
from typing import Any, Protocol, runtime_checkable

from screenflow.render.surface import DisplaySurface

logger = logging.getLogger(__name__)


@runtime_checkable
class DisplayState(Protocol):
    """
    A discrete screen driven by the state machine.
    None of the methods may block beyond rendering cost, timing is driven from outside.
    """

    name: str

    def enter(self, context: dict[str, Any]) -> None:
        """Called on activation with the previous state's exit data merged with the caller context"""
        ...

    def update(self, dt: float) -> None: ...

    def exit(self) -> dict[str, Any]:
        """Called right before the next activation, the result feeds the next enter()"""
        ...

    def render(self) -> None: ...


class StateData:
    """Scratch key/value storage for state-local counters"""

    def __init__(self):
        self._data: dict[str, Any] = {}

    def set(self, key: str, value: Any) -> "StateData":
        self._data[key] = value
        return self

    def get(self, key: str, default: Any = None) -> Any:
        return self._data.get(key, default)

    def has(self, key: str) -> bool:
        return key in self._data

    def all(self) -> dict[str, Any]:
        return dict(self._data)

    def clear(self) -> "StateData":
        self._data.clear()
        return self

    def __len__(self) -> int:
        return len(self._data)


class BaseState:
    """
    Convenience DisplayState: keeps the surface and a StateData bag.
    Subclasses override the lifecycle methods they need.
    """

    name: str = ""  # defaults to the class name

    def __init__(self, display: DisplaySurface, name: str | None = None):
        self.display = display
        self.data = StateData()
        if name:
            self.name = name
        elif not self.name:
            self.name = type(self).__name__

    # called when the state becomes active
    def enter(self, context: dict[str, Any]) -> None:
        logger.info(f"Entering state: {self.name}")

    def update(self, dt: float) -> None:
        pass

    # called when the state is deactivated
    def exit(self) -> dict[str, Any]:
        logger.info(f"Exiting state: {self.name}")
        return {}

    def render(self) -> None:
        pass

    def set_data(self, key: str, value: Any) -> "BaseState":
        self.data.set(key, value)
        return self

    def get_data(self, key: str, default: Any = None) -> Any:
        return self.data.get(key, default)

    def has_data(self, key: str) -> bool:
        return self.data.has(key)

    def get_all_data(self) -> dict[str, Any]:
        return self.data.all()

    def clear_data(self) -> "BaseState":
        self.data.clear()
        return self
