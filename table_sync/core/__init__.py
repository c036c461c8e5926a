"""
Core coordination layer: view registry, filter store, event bus/router,
auto-refresh and the coordinator context tying them together
"""

from .filter_set import FilterContainer, FilterControl, FilterSet
from .view_registry import ViewRegistry
from .filter_store import FilterStore
from .events import EventBus, Topics
from .widget import BaseWidget, CallbackWidget
from .coordinator import ViewCoordinator

__all__ = [
    "FilterContainer",
    "FilterControl",
    "FilterSet",
    "ViewRegistry",
    "FilterStore",
    "EventBus",
    "Topics",
    "BaseWidget",
    "CallbackWidget",
    "ViewCoordinator",
]
