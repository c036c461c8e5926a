from __future__ import annotations

import logging
import time
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Callable, Dict, List, Optional, Sequence

from table_sync.exceptions import AutoRefreshRegistrationError

from .events import Topics, ViewEvent

if TYPE_CHECKING:
    from .coordinator import ViewCoordinator

logger = logging.getLogger(__name__)

ReloadCallback = Callable[[Any], None]


@dataclass
class AutoRefreshEntry:
    """
    Auto-refresh registration for one view.

    :param view_id: the view refreshed when any of the events fires
    :param events: topic names listened to (built-in or custom, e.g. "customer:updated")
    :param reload_callback: optional replacement for the default refresh, receives the widget handle
    """
    view_id: str
    events: List[str]
    reload_callback: Optional[ReloadCallback] = None
    unsubscribers: List[Callable[[], None]] = field(default_factory=list, repr=False)


class AutoRefreshRegistry:
    """
    Refreshes a view whenever one of its configured events is published.

    Bursts of events are debounced per view: each event pushes the refresh
    deadline back by debounce_seconds, and flush() runs the refreshes whose
    deadline has passed. A zero delay refreshes straight away.
    """

    def __init__(
            self,
            coordinator: "ViewCoordinator",
            debounce_seconds: float = 0.3,
            clock: Optional[Callable[[], float]] = None,
    ):
        self.coordinator = coordinator
        self.debounce_seconds = max(0.0, float(debounce_seconds))
        self._clock = clock or time.monotonic
        self._entries: Dict[str, AutoRefreshEntry] = {}
        self._pending: Dict[str, float] = {}

    def register(
            self,
            view_id: str,
            events: Sequence[str],
            reload_callback: Optional[ReloadCallback] = None,
    ) -> AutoRefreshEntry:
        """
        Listen for events and refresh view_id when they fire.

        Registering a view again replaces its previous registration.

        Raises:
            AutoRefreshRegistrationError: if view_id is empty or events is not a non-empty list of names
        """
        if not view_id:
            raise AutoRefreshRegistrationError("Auto-refresh registration needs a view id")

        if isinstance(events, str) or not events or not all(isinstance(e, str) and e for e in events):
            raise AutoRefreshRegistrationError(
                f"Auto-refresh registration for view '{view_id}' needs a non-empty list of event names"
            )

        if view_id in self._entries:
            self._drop(view_id)

        entry = AutoRefreshEntry(
            view_id=view_id,
            events=list(events),
            reload_callback=reload_callback,
        )

        def on_event(_payload: Any, _view_id: str = view_id) -> None:
            self.schedule(_view_id)

        for event_name in entry.events:
            entry.unsubscribers.append(self.coordinator.bus.subscribe(event_name, on_event))

        self._entries[view_id] = entry
        self.coordinator.diag("Auto-refresh registered", view_id=view_id, events=entry.events)
        return entry

    def unregister(self, view_id: str) -> None:
        if view_id not in self._entries:
            logger.warning("Cannot unregister auto-refresh, view not found", extra={"view_id": view_id})
            return
        self._drop(view_id)
        self.coordinator.diag("Auto-refresh unregistered", view_id=view_id)

    def clear(self) -> None:
        for view_id in list(self._entries):
            self._drop(view_id)

    def registered_views(self) -> List[str]:
        return list(self._entries.keys())

    def get_config(self, view_id: str) -> Optional[AutoRefreshEntry]:
        return self._entries.get(view_id)

    # ------------------------------------------------------------------
    # Debounce
    # ------------------------------------------------------------------
    def schedule(self, view_id: str) -> None:
        if self.debounce_seconds <= 0:
            self._run(view_id)
            return
        self._pending[view_id] = self._clock() + self.debounce_seconds
        self.coordinator.diag(
            "Debounced refresh scheduled",
            view_id=view_id,
            delay_seconds=self.debounce_seconds,
        )

    def pending_views(self) -> List[str]:
        return list(self._pending.keys())

    def flush(self, now: Optional[float] = None) -> List[str]:
        """
        Run every pending refresh whose debounce deadline has passed.
        :param now: clock reading to compare deadlines against, defaults to the registry clock
        :return: the view ids that were refreshed
        """
        now = self._clock() if now is None else now
        due = [view_id for view_id, deadline in self._pending.items() if deadline <= now]
        for view_id in due:
            del self._pending[view_id]
            self._run(view_id)
        return due

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------
    def _run(self, view_id: str) -> None:
        entry = self._entries.get(view_id)
        if entry is None:
            return

        if entry.reload_callback is None:
            self.coordinator.refresh(view_id)
            return

        handle = self.coordinator.registry.resolve(view_id)
        if handle is None:
            self.coordinator.diag("No widget registered for auto-refresh view", view_id=view_id)
            return

        self.coordinator.diag("Using custom reload callback", view_id=view_id)
        entry.reload_callback(handle)
        self.coordinator.bus.publish(Topics.Outbound.REFRESH_COMPLETE, ViewEvent(view_id=view_id))

    def _drop(self, view_id: str) -> None:
        entry = self._entries.pop(view_id)
        for unsubscribe in entry.unsubscribers:
            unsubscribe()
        self._pending.pop(view_id, None)
