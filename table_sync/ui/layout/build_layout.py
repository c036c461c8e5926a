from __future__ import annotations

from typing import TYPE_CHECKING

import dash_bootstrap_components as dbc
from dash import dcc

from table_sync.ui.ids import IDs
from table_sync.ui.layout.build_filter_panel import build_filter_panel
from table_sync.ui.layout.build_table_panel import build_table_panel

if TYPE_CHECKING:
    from table_sync.ui.config import AppConfig

# how often the browser polls for debounced / external refreshes
TICK_MILLISECONDS = 1000


def build_layout(ctx: "AppConfig"):
    """
    Render the page from the current coordinator state: the filters last applied
    to each view, and each widget's rows and revision. Served fresh on every page load.
    """
    rows = []
    for view in ctx.settings.views:
        widget = ctx.widgets[view.id]
        rows.append(
            dbc.Row(
                [
                    dbc.Col(build_filter_panel(view, ctx.coordinator.get_filters(view.id)), md=3, className="mt-3"),
                    dbc.Col(build_table_panel(view, widget), md=9, className="mt-3"),
                ],
                className="gx-3",
            )
        )

    return dbc.Container(
        fluid=True,
        className="tsy-root",
        children=[
            dbc.NavbarSimple(brand=ctx.settings.ui_title, color="primary", dark=True),
            dcc.Interval(id=IDs.Control.TICK_INTERVAL, interval=TICK_MILLISECONDS),
            *rows,
        ],
    )
