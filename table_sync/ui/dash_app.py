from __future__ import annotations

import logging
from pathlib import Path
from typing import Dict

import dash_bootstrap_components as dbc
from dash import Dash

from .config import AppConfig
from table_sync.config.loader import load_app_settings
from table_sync.config.model import AppSettings
from table_sync.core.coordinator import ViewCoordinator
from table_sync.core.events import Topics
from table_sync.logging_config import set_diagnostics
from table_sync.services.table_source import CsvTableSource
from table_sync.ui.widgets import DashTableWidget
from table_sync.ui.layout.build_layout import build_layout
from table_sync.ui.callbacks.callbacks_filters import register_filter_callbacks
from table_sync.ui.callbacks.callbacks_table import register_table_callbacks
from table_sync.ui.callbacks.callbacks_refresh import register_refresh_callbacks

logger = logging.getLogger(__name__)


def _build_widgets(settings: AppSettings, coordinator: ViewCoordinator) -> Dict[str, DashTableWidget]:
    widgets: Dict[str, DashTableWidget] = {}
    for view in settings.views:
        source = CsvTableSource(view.source, fields=view.filters) if view.source else None
        widgets[view.id] = DashTableWidget(view.id, source, coordinator.get_filters)
    return widgets


def build_app_context(config_root: Path | str = Path("config")) -> AppConfig:
    """
    Load settings and wire the coordinator and table widgets together,
    without building any Dash objects.
    """
    config_root = Path(config_root)

    # 1) Load Config
    settings = load_app_settings(config_root)

    # 2) Coordinator + widgets
    coordinator = ViewCoordinator(settings.coordinator)
    widgets = _build_widgets(settings, coordinator)

    # Widgets register once the coordinator says it is ready
    def register_widgets(_ready) -> None:
        for view_id, widget in widgets.items():
            coordinator.register(view_id, widget)

    coordinator.subscribe(Topics.Outbound.COORDINATOR_READY, register_widgets)
    coordinator.start()

    # 3) Extra refresh events per view
    for view in settings.views:
        if view.refresh_on:
            coordinator.auto_refresh.register(view.id, view.refresh_on)

    # 4) Initial rows
    for view in settings.views:
        coordinator.refresh(view.id)

    ctx = AppConfig(
        config_root=config_root,
        settings=settings,
        coordinator=coordinator,
        widgets=widgets,
    )
    ctx.validate()
    return ctx


def create_dash_app(config_root: Path | str = Path("config")) -> Dash:
    ctx = build_app_context(config_root)
    set_diagnostics(ctx.settings.coordinator.debug)

    assets_path = Path(__file__).parent / "assets"

    app = Dash(
        __name__,
        external_stylesheets=[dbc.themes.FLATLY],
        assets_folder=str(assets_path),
    )
    app.title = ctx.settings.ui_title

    # one coordinator per process, so every page load renders its current state
    app.layout = lambda: build_layout(ctx)

    # Register callbacks
    register_filter_callbacks(app, ctx)
    register_table_callbacks(app, ctx)
    register_refresh_callbacks(app, ctx)

    logger.info(
        "Dash app created",
        extra={"views": [v.id for v in ctx.settings.views], "debug": ctx.settings.coordinator.debug},
    )
    return app
