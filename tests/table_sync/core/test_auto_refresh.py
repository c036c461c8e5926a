from __future__ import annotations

import pytest

from table_sync.config.model import AutoRefreshConfig, CoordinatorConfig
from table_sync.core.coordinator import ViewCoordinator
from table_sync.core.events import Topics, ViewEvent
from table_sync.exceptions import AutoRefreshRegistrationError


class _FakeClock:
    def __init__(self):
        self.now = 100.0

    def __call__(self):
        return self.now


class _CountingTable:
    def __init__(self):
        self.reloads = 0

    def reload_keeping_position(self):
        self.reloads += 1

    def redraw_keeping_position(self):
        pass


def _make_coordinator(debounce: float, clock=None):
    config = CoordinatorConfig(
        debug=True,
        auto_refresh=AutoRefreshConfig(enabled=True, debounce_seconds=debounce),
    )
    coordinator = ViewCoordinator(config, clock=clock)
    coordinator.start()
    table = _CountingTable()
    coordinator.register("customers", table)
    return coordinator, table


@pytest.mark.parametrize("events", [[], None, "customer:updated", ["ok", ""]])
def test_register_rejects_bad_events(events):
    coordinator, _ = _make_coordinator(debounce=0)

    with pytest.raises(AutoRefreshRegistrationError):
        coordinator.auto_refresh.register("customers", events)


def test_register_rejects_empty_view_id():
    coordinator, _ = _make_coordinator(debounce=0)

    with pytest.raises(AutoRefreshRegistrationError):
        coordinator.auto_refresh.register("", ["customer:updated"])


def test_custom_event_refreshes_immediately_without_debounce():
    coordinator, table = _make_coordinator(debounce=0)
    coordinator.auto_refresh.register("customers", ["customer:updated", "customer:created"])

    coordinator.bus.publish("customer:updated", {"id": 7})
    coordinator.bus.publish("customer:created", None)

    assert table.reloads == 2


def test_burst_of_events_is_debounced_into_one_refresh():
    clock = _FakeClock()
    coordinator, table = _make_coordinator(debounce=0.3, clock=clock)
    coordinator.auto_refresh.register("customers", ["customer:updated"])

    coordinator.bus.publish("customer:updated", None)
    clock.now += 0.2
    coordinator.bus.publish("customer:updated", None)

    clock.now += 0.2
    assert coordinator.auto_refresh.flush() == []
    assert table.reloads == 0
    assert coordinator.auto_refresh.pending_views() == ["customers"]

    clock.now += 0.2
    assert coordinator.auto_refresh.flush() == ["customers"]
    assert table.reloads == 1
    assert coordinator.auto_refresh.pending_views() == []


def test_reload_callback_replaces_default_refresh():
    coordinator, table = _make_coordinator(debounce=0)
    seen = []
    completed = []
    coordinator.subscribe(Topics.Outbound.REFRESH_COMPLETE, completed.append)
    coordinator.auto_refresh.register("customers", ["invoice:paid"], reload_callback=seen.append)

    coordinator.bus.publish("invoice:paid", None)

    assert seen == [table]
    assert table.reloads == 0
    assert completed == [ViewEvent(view_id="customers")]


def test_reload_callback_skipped_for_unregistered_view():
    coordinator, _ = _make_coordinator(debounce=0)
    seen = []
    coordinator.auto_refresh.register("orders", ["order:paid"], reload_callback=seen.append)

    coordinator.bus.publish("order:paid", None)

    assert seen == []


def test_reregistering_replaces_events():
    coordinator, table = _make_coordinator(debounce=0)
    coordinator.auto_refresh.register("customers", ["customer:updated"])
    coordinator.auto_refresh.register("customers", ["customer:deleted"])

    coordinator.bus.publish("customer:updated", None)
    coordinator.bus.publish("customer:deleted", None)

    assert table.reloads == 1
    assert coordinator.auto_refresh.get_config("customers").events == ["customer:deleted"]


def test_unregister_drops_pending_and_listeners():
    clock = _FakeClock()
    coordinator, table = _make_coordinator(debounce=0.3, clock=clock)
    coordinator.auto_refresh.register("customers", ["customer:updated"])
    coordinator.bus.publish("customer:updated", None)

    coordinator.auto_refresh.unregister("customers")
    coordinator.auto_refresh.unregister("customers")  # unknown now, only warns

    clock.now += 1
    coordinator.bus.publish("customer:updated", None)

    assert coordinator.auto_refresh.flush() == []
    assert table.reloads == 0
    assert coordinator.auto_refresh.get_config("customers") is None
