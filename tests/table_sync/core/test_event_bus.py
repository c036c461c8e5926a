from __future__ import annotations

from table_sync.core.events import EventBus, ViewEvent


def test_publish_reaches_subscribers_in_order():
    bus = EventBus()
    seen = []

    bus.subscribe("item_created", lambda e: seen.append(("first", e.view_id)))
    bus.subscribe("item_created", lambda e: seen.append(("second", e.view_id)))

    bus.publish("item_created", ViewEvent(view_id="logs"))

    assert seen == [("first", "logs"), ("second", "logs")]


def test_publish_without_subscribers_is_a_noop():
    bus = EventBus()

    bus.publish("nobody-listens", ViewEvent(view_id="logs"))

    assert not bus.has_subscribers("nobody-listens")


def test_unsubscribe_stops_delivery():
    bus = EventBus()
    seen = []

    unsubscribe = bus.subscribe("refresh_complete", seen.append)
    unsubscribe()
    unsubscribe()  # second call is harmless

    bus.publish("refresh_complete", ViewEvent(view_id="logs"))

    assert seen == []


def test_failing_handler_does_not_stop_others():
    bus = EventBus()
    seen = []

    def boom(_event):
        raise RuntimeError("subscriber bug")

    bus.subscribe("filters_reset", boom)
    bus.subscribe("filters_reset", seen.append)

    bus.publish("filters_reset", ViewEvent(view_id="logs"))

    assert seen == [ViewEvent(view_id="logs")]
