import json
import logging
from pathlib import Path

import pytest
from dash import Dash

from table_sync.logging_config import PACKAGE_LOGGER
from table_sync.ui.callbacks.callbacks_filters import build_filter_container
from table_sync.ui.ids import (
    data_table_id,
    filter_input_id,
    filter_select_id,
    refresh_token_id,
    tick_token_id,
)
from table_sync.ui.layout.build_layout import build_layout
from table_sync.ui.callbacks.callbacks_refresh import RefreshTicker
from table_sync.ui.dash_app import build_app_context, create_dash_app


def _write_config(root: Path, auto_refresh: dict | None = None, debug: bool = False) -> Path:
    (root / "views").mkdir(parents=True)
    (root / "data").mkdir()
    (root / "data" / "logs.csv").write_text(
        "id,owner,status\n1,alice,active\n2,bob,failed\n3,alice,active\n"
    )
    (root / "global.json").write_text(
        json.dumps({"ui_title": "Test", "debug": debug, "auto_refresh": auto_refresh or {"enabled": False}})
    )
    (root / "views" / "logs.json").write_text(
        json.dumps(
            {
                "id": "logs",
                "source": "data/logs.csv",
                "filters": [
                    {"name": "status", "kind": "select", "options": ["active", "failed"]},
                    {"name": "owner"},
                ],
                "refresh_on": ["log:rotated"],
            }
        )
    )
    return root


class _FakeClock:
    def __init__(self):
        self.now = 0.0

    def __call__(self):
        return self.now


@pytest.fixture(autouse=True)
def _clear_env(monkeypatch):
    monkeypatch.delenv("TABLE_SYNC_DEBUG", raising=False)
    monkeypatch.delenv("TABLE_SYNC_AUTO_REFRESH", raising=False)


@pytest.fixture
def _restore_package_log_level():
    package_logger = logging.getLogger(PACKAGE_LOGGER)
    level = package_logger.level
    yield
    package_logger.setLevel(level)


def _find(component, comp_id):
    if getattr(component, "id", None) == comp_id:
        return component
    children = getattr(component, "children", None)
    if children is None:
        return None
    if not isinstance(children, (list, tuple)):
        children = [children]
    for child in children:
        if hasattr(child, "to_plotly_json"):
            found = _find(child, comp_id)
            if found is not None:
                return found
    return None


def test_build_app_context_registers_and_loads_widgets(tmp_path):
    ctx = build_app_context(_write_config(tmp_path / "config"))

    widget = ctx.widgets["logs"]
    assert ctx.coordinator.registry.resolve("logs") is widget
    assert len(widget.rows) == 3
    assert widget.revision == 1
    assert ctx.coordinator.auto_refresh.registered_views() == ["logs"]


def test_refresh_ticker_sends_interval_refresh(tmp_path):
    root = _write_config(
        tmp_path / "config",
        auto_refresh={"enabled": True, "interval_seconds": 10, "debounce_seconds": 0.5},
    )
    ctx = build_app_context(root)
    clock = _FakeClock()
    ticker = RefreshTicker(ctx, clock=clock)

    assert ticker.tick() == []

    clock.now = 5
    assert ticker.tick() == []

    clock.now = 10
    assert ticker.tick() == ["logs"]
    assert ctx.widgets["logs"].revision == 2


def test_refresh_ticker_flushes_debounced_events(tmp_path):
    root = _write_config(
        tmp_path / "config",
        auto_refresh={"enabled": False, "debounce_seconds": 0.5},
    )
    ctx = build_app_context(root)
    widget = ctx.widgets["logs"]

    ctx.coordinator.bus.publish("log:rotated", None)
    assert widget.revision == 1

    ticker = RefreshTicker(ctx, clock=lambda: 1e12)
    assert ticker.tick() == ["logs"]
    assert widget.revision == 2


def test_create_dash_app_and_post_notification(tmp_path):
    app = create_dash_app(_write_config(tmp_path / "config"))
    assert isinstance(app, Dash)

    client = app.server.test_client()

    resp = client.post("/api/views/logs/events", json={"event": "item_created"})
    assert resp.status_code == 202
    assert resp.get_json() == {"view_id": "logs", "event": "item_created"}

    resp = client.post("/api/views/logs/events", json={"event": "log:rotated"})
    assert resp.status_code == 202

    resp = client.post("/api/views/logs/events", json={"event": "bogus"})
    assert resp.status_code == 400


def test_post_notification_rejects_non_object_bodies(tmp_path):
    app = create_dash_app(_write_config(tmp_path / "config"))
    client = app.server.test_client()

    for body in (["item_created"], "item_created", 3):
        resp = client.post("/api/views/logs/events", json=body)
        assert resp.status_code == 400
        assert "error" in resp.get_json()

    resp = client.post("/api/views/logs/events", json={"event": ["item_created"]})
    assert resp.status_code == 400


def test_post_notification_without_body_requests_refresh(tmp_path):
    app = create_dash_app(_write_config(tmp_path / "config"))
    client = app.server.test_client()

    resp = client.post("/api/views/logs/events")

    assert resp.status_code == 202
    assert resp.get_json() == {"view_id": "logs", "event": "refresh_requested"}


def test_layout_renders_filters_applied_before_page_load(tmp_path):
    ctx = build_app_context(_write_config(tmp_path / "config"))
    container = build_filter_container(
        "logs",
        ["status", "owner"],
        [filter_input_id("logs", "owner")],
        ["bob"],
        [filter_select_id("logs", "status")],
        [["failed"]],
    )
    ctx.coordinator.apply_filters(container)
    widget = ctx.widgets["logs"]
    assert widget.revision == 2

    layout = build_layout(ctx)

    assert _find(layout, filter_select_id("logs", "status")).value == ["failed"]
    assert _find(layout, filter_input_id("logs", "owner")).value == "bob"
    assert _find(layout, data_table_id("logs")).data == widget.rows
    assert len(widget.rows) == 1
    assert _find(layout, refresh_token_id("logs")).data == 2
    assert _find(layout, tick_token_id("logs")).data == 2


def test_layout_is_served_per_page_load(tmp_path):
    app = create_dash_app(_write_config(tmp_path / "config"))

    assert callable(app.layout)
    layout = app.layout()
    assert _find(layout, filter_select_id("logs", "status")).value is None
    assert _find(layout, filter_input_id("logs", "owner")).value == ""


def test_debug_config_enables_diagnostic_logging(tmp_path, _restore_package_log_level):
    create_dash_app(_write_config(tmp_path / "config", debug=True))

    assert logging.getLogger("table_sync.core.router").isEnabledFor(logging.DEBUG)


def test_diagnostics_off_leaves_level_to_root(tmp_path, _restore_package_log_level):
    logging.getLogger(PACKAGE_LOGGER).setLevel(logging.DEBUG)

    create_dash_app(_write_config(tmp_path / "config", debug=False))

    assert logging.getLogger(PACKAGE_LOGGER).level == logging.NOTSET
