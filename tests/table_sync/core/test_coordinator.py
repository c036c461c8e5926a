from __future__ import annotations

from table_sync.config.model import CoordinatorConfig
from table_sync.core.coordinator import ViewCoordinator
from table_sync.core.events import Topics
from table_sync.core.filter_set import FilterContainer, FilterControl


def test_ready_fires_once():
    coordinator = ViewCoordinator()
    ready = []
    coordinator.subscribe(Topics.Outbound.COORDINATOR_READY, ready.append)

    coordinator.start()
    coordinator.start()

    assert len(ready) == 1
    assert coordinator.router.is_bound


def test_registration_inside_ready_handler():
    coordinator = ViewCoordinator()
    handle = object()
    coordinator.subscribe(
        Topics.Outbound.COORDINATOR_READY,
        lambda _ready: coordinator.register("logs", handle),
    )

    coordinator.start()

    assert coordinator.registry.resolve("logs") is handle


def test_signals_before_start_are_not_handled():
    coordinator = ViewCoordinator()
    container = FilterContainer("filters", "logs", [FilterControl("status", "active")])

    coordinator.apply_filters(container)

    assert coordinator.get_filters("logs") == {}


def test_stop_unbinds_router_and_auto_refresh():
    coordinator = ViewCoordinator(CoordinatorConfig(debug=True))
    coordinator.start()
    coordinator.auto_refresh.register("logs", ["log:rotated"])

    coordinator.stop()

    container = FilterContainer("filters", "logs", [FilterControl("status", "active")])
    coordinator.apply_filters(container)

    assert coordinator.get_filters("logs") == {}
    assert not coordinator.router.is_bound
    assert coordinator.auto_refresh.registered_views() == []
