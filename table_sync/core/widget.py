from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Callable, Optional


class BaseWidget(ABC):
    """
    Abstract base class for table widgets registered with the coordinator.

    Defines the contract the refresh path relies on
    - 'reload_keeping_position' - re-issue the widget's data query, staying on the current page
    - 'redraw_keeping_position' - re-render the rows already held, staying on the current page
    - 'supports_reload' - False for widgets without a server-side data source

    The coordinator also accepts any object exposing the same methods, so
    subclassing is optional.
    """

    supports_reload: bool = True
    supports_redraw: bool = True

    @abstractmethod
    def reload_keeping_position(self) -> None:
        raise NotImplementedError()

    @abstractmethod
    def redraw_keeping_position(self) -> None:
        raise NotImplementedError()


class CallbackWidget(BaseWidget):
    """
    Adapter for widgets that only expose plain callables, e.g. a reload
    function handed over by a plugin.
    """

    def __init__(
            self,
            reload: Optional[Callable[[], Any]] = None,
            redraw: Optional[Callable[[], Any]] = None,
    ):
        self._reload = reload
        self._redraw = redraw
        self.supports_reload = reload is not None
        self.supports_redraw = redraw is not None

    def reload_keeping_position(self) -> None:
        if self._reload is None:
            raise NotImplementedError("No reload callable registered")
        self._reload()

    def redraw_keeping_position(self) -> None:
        if self._redraw is None:
            raise NotImplementedError("No redraw callable registered")
        self._redraw()


def can_reload(handle: Any) -> bool:
    reload = getattr(handle, "reload_keeping_position", None)
    return callable(reload) and bool(getattr(handle, "supports_reload", True))


def can_redraw(handle: Any) -> bool:
    redraw = getattr(handle, "redraw_keeping_position", None)
    return callable(redraw) and bool(getattr(handle, "supports_redraw", True))
