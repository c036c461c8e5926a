from __future__ import annotations

import logging
from typing import Any, Callable, Optional

from table_sync.config.model import CoordinatorConfig

from .auto_refresh import AutoRefreshRegistry
from .events import CoordinatorReady, EventBus, FilterSignal, Topics, ViewEvent
from .filter_set import FilterContainer, FilterSet
from .filter_store import FilterStore
from .router import EventRouter
from .view_registry import ViewRegistry

logger = logging.getLogger(__name__)


class ViewCoordinator:
    """
    Page-wide context linking filter panels to table widgets.

    One instance is created at startup and handed to whoever builds the page
    and registers callbacks. It owns:
    - registry: view id -> widget handle
    - store: view id -> last applied FilterSet
    - bus: inbound signals and outbound announcements
    - router: the handlers wiring the three together
    - auto_refresh: per-view refresh on arbitrary (debounced) events

    Lifecycle: start() binds the router and fires "coordinator_ready" once;
    stop() unbinds everything.
    """

    def __init__(self, config: Optional[CoordinatorConfig] = None, clock: Optional[Callable[[], float]] = None):
        self.config = config or CoordinatorConfig()
        self.registry = ViewRegistry()
        self.store = FilterStore()
        self.bus = EventBus()
        self.router = EventRouter(self.registry, self.store, self.bus, debug=self.config.debug)
        self.auto_refresh = AutoRefreshRegistry(
            self,
            debounce_seconds=self.config.auto_refresh.debounce_seconds,
            clock=clock,
        )
        self._ready_fired = False

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------
    def start(self) -> None:
        self.router.bind()

        if self.config.auto_refresh.enabled:
            self.diag(
                "Auto-refresh enabled",
                interval_seconds=self.config.auto_refresh.interval_seconds,
                debounce_seconds=self.config.auto_refresh.debounce_seconds,
            )

        if not self._ready_fired:
            self._ready_fired = True
            self.bus.publish(
                Topics.Outbound.COORDINATOR_READY,
                CoordinatorReady(view_ids=tuple(self.registry.view_ids())),
            )
            logger.info("View coordinator ready", extra={"debug": self.config.debug})

    def stop(self) -> None:
        self.auto_refresh.clear()
        self.router.unbind()

    # ------------------------------------------------------------------
    # Entry points for widget owners and fetch logic
    # ------------------------------------------------------------------
    def register(self, view_id: str, handle: Any) -> None:
        self.registry.register(view_id, handle)
        self.diag("Widget registered", view_id=view_id)

    def get_filters(self, view_id: str) -> FilterSet:
        return self.store.get(view_id)

    def refresh(self, view_id: str) -> bool:
        return self.router.refresh(view_id)

    # ------------------------------------------------------------------
    # Signal publishing helpers
    # ------------------------------------------------------------------
    def apply_filters(self, container: Optional[FilterContainer], via_enter: bool = False) -> None:
        topic = (
            Topics.Inbound.FILTER_INPUT_SUBMITTED if via_enter
            else Topics.Inbound.APPLY_FILTERS_CLICKED
        )
        self.bus.publish(topic, FilterSignal(container=container))

    def reset_filters(self, container: Optional[FilterContainer]) -> None:
        self.bus.publish(Topics.Inbound.RESET_FILTERS_CLICKED, FilterSignal(container=container))

    def notify(self, topic: str, view_id: str) -> None:
        """Publish an external change notification, e.g. notify(Topics.Inbound.ITEM_CREATED, "logs")."""
        self.bus.publish(topic, ViewEvent(view_id=view_id))

    def subscribe(self, topic: str, handler: Callable[[Any], None]) -> Callable[[], None]:
        return self.bus.subscribe(topic, handler)

    def diag(self, message: str, **extra: Any) -> None:
        if self.config.debug:
            logger.debug(message, extra=extra)
