from __future__ import annotations

import logging
from typing import Any, Callable, List, Optional

from .events import EventBus, FilterSignal, FiltersApplied, Topics, ViewEvent
from .filter_set import resolve_view_id
from .filter_store import FilterStore
from .view_registry import ViewRegistry
from .widget import can_redraw, can_reload

logger = logging.getLogger(__name__)


class EventRouter:
    """
    Turns inbound signals into filter store updates and widget refreshes.

    Handles, in order of arrival and each to completion:
    - filter apply (button click or Enter inside an input)
    - filter reset
    - external change notifications (item created/updated/deleted, refresh requested)

    Nothing here raises for a missing view marker, an unregistered view or a
    widget without a reload primitive. These end as a no-op, with a
    diagnostic log line when debug is on.
    """

    def __init__(self, registry: ViewRegistry, store: FilterStore, bus: EventBus, debug: bool = False):
        self.registry = registry
        self.store = store
        self.bus = bus
        self.debug = debug
        self._unsubscribers: List[Callable[[], None]] = []

    # ------------------------------------------------------------------
    # Binding
    # ------------------------------------------------------------------
    def bind(self) -> None:
        if self._unsubscribers:
            return

        for topic in Topics.FILTER_APPLY:
            self._unsubscribers.append(self.bus.subscribe(topic, self.on_apply))

        self._unsubscribers.append(
            self.bus.subscribe(Topics.Inbound.RESET_FILTERS_CLICKED, self.on_reset)
        )

        for topic in Topics.EXTERNAL_CHANGE:
            self._unsubscribers.append(self.bus.subscribe(topic, self.on_external_change))

        self._diag("Router bound", topics=len(self._unsubscribers))

    def unbind(self) -> None:
        for unsubscribe in self._unsubscribers:
            unsubscribe()
        self._unsubscribers.clear()

    @property
    def is_bound(self) -> bool:
        return bool(self._unsubscribers)

    # ------------------------------------------------------------------
    # Signal handlers
    # ------------------------------------------------------------------
    def on_apply(self, signal: Optional[FilterSignal]) -> None:
        container = getattr(signal, "container", None)
        view_id = self._view_for(container)
        if view_id is None:
            return

        filters = self.store.capture(container)
        self.store.apply(view_id, filters)
        self._diag("Filters applied", view_id=view_id, filters=filters)

        self.bus.publish(
            Topics.Outbound.FILTERS_APPLIED,
            FiltersApplied(view_id=view_id, filters=dict(filters)),
        )
        self.refresh(view_id)

    def on_reset(self, signal: Optional[FilterSignal]) -> None:
        container = getattr(signal, "container", None)
        view_id = self._view_for(container)
        if view_id is None:
            return

        self.store.reset(view_id, container)
        self._diag("Filters reset", view_id=view_id)

        self.bus.publish(Topics.Outbound.FILTERS_RESET, ViewEvent(view_id=view_id))
        self.refresh(view_id)

    def on_external_change(self, event: Any) -> None:
        view_id = getattr(event, "view_id", None)
        if not view_id:
            self._diag("External notification without view_id", payload=repr(event))
            return
        self.refresh(view_id)

    # ------------------------------------------------------------------
    # Refresh primitive
    # ------------------------------------------------------------------
    def refresh(self, view_id: str) -> bool:
        """
        Ask the widget registered for view_id to reload (or redraw) in place.

        The widget keeps its current page; the call is fire-and-forget, so a
        True return only means a reload/redraw was issued.
        :return: True when a refresh was issued and announced
        """
        handle = self.registry.resolve(view_id)
        if handle is None:
            self._diag("No widget registered for view", view_id=view_id)
            return False

        if can_reload(handle):
            handle.reload_keeping_position()
            mode = "reload"
        elif can_redraw(handle):
            handle.redraw_keeping_position()
            mode = "redraw"
        else:
            self._diag("Widget has no reload or redraw primitive", view_id=view_id)
            return False

        self._diag("Refresh issued", view_id=view_id, mode=mode)
        self.bus.publish(Topics.Outbound.REFRESH_COMPLETE, ViewEvent(view_id=view_id))
        return True

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------
    def _view_for(self, container) -> Optional[str]:
        if container is None:
            self._diag("Filter signal without a filter container")
            return None

        view_id = resolve_view_id(container)
        if view_id is None:
            self._diag(
                "No view id found for filter container",
                container_id=getattr(container, "container_id", None),
            )
        return view_id

    def _diag(self, message: str, **extra: Any) -> None:
        if self.debug:
            logger.debug(message, extra=extra)
