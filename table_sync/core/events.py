from __future__ import annotations

import logging
from collections import defaultdict
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional

from .filter_set import FilterContainer, FilterSet

logger = logging.getLogger(__name__)

__all__ = [
    "Topics",
    "FilterSignal",
    "ViewEvent",
    "FiltersApplied",
    "CoordinatorReady",
    "EventBus",
]


class Topics:
    class Inbound:
        APPLY_FILTERS_CLICKED = "apply_filters_clicked"
        RESET_FILTERS_CLICKED = "reset_filters_clicked"
        FILTER_INPUT_SUBMITTED = "filter_input_submitted"

        ITEM_CREATED = "item_created"
        ITEM_UPDATED = "item_updated"
        ITEM_DELETED = "item_deleted"
        REFRESH_REQUESTED = "refresh_requested"

    class Outbound:
        FILTERS_APPLIED = "filters_applied"
        FILTERS_RESET = "filters_reset"
        REFRESH_COMPLETE = "refresh_complete"
        COORDINATOR_READY = "coordinator_ready"

    FILTER_APPLY = (Inbound.APPLY_FILTERS_CLICKED, Inbound.FILTER_INPUT_SUBMITTED)
    EXTERNAL_CHANGE = (
        Inbound.ITEM_CREATED,
        Inbound.ITEM_UPDATED,
        Inbound.ITEM_DELETED,
        Inbound.REFRESH_REQUESTED,
    )


@dataclass(frozen=True)
class FilterSignal:
    """A UI action on a filter panel (apply, reset or Enter in an input)."""
    container: Optional[FilterContainer]


@dataclass(frozen=True)
class ViewEvent:
    """Payload carrying only a view id: item created/updated/deleted, refresh requested, filters reset, refresh complete."""
    view_id: str


@dataclass(frozen=True)
class FiltersApplied:
    view_id: str
    filters: FilterSet = field(default_factory=dict)


@dataclass(frozen=True)
class CoordinatorReady:
    view_ids: tuple = ()


Handler = Callable[[Any], None]


class EventBus:
    """
    Synchronous publish/subscribe channel keyed by topic name.

    Handlers run in subscription order on the publisher's thread. A handler
    that raises is logged and skipped; the publisher never sees the error
    and the remaining handlers still run.
    """

    def __init__(self):
        self._handlers: Dict[str, List[Handler]] = defaultdict(list)

    def subscribe(self, topic: str, handler: Handler) -> Callable[[], None]:
        """
        :param topic: topic name, e.g. Topics.Outbound.FILTERS_APPLIED or a custom "customer:updated"
        :param handler: called with the published payload
        :return: a callable that removes this subscription
        """
        self._handlers[topic].append(handler)

        def unsubscribe() -> None:
            handlers = self._handlers.get(topic, [])
            if handler in handlers:
                handlers.remove(handler)

        return unsubscribe

    def publish(self, topic: str, payload: Any = None) -> None:
        for handler in list(self._handlers.get(topic, [])):
            try:
                handler(payload)
            except Exception:
                logger.exception(
                    "Event handler failed",
                    extra={"topic": topic, "handler": getattr(handler, "__qualname__", repr(handler))},
                )

    def has_subscribers(self, topic: str) -> bool:
        return bool(self._handlers.get(topic))
