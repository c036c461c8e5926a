from __future__ import annotations

import dash_bootstrap_components as dbc
from dash import dash_table, dcc, html

from table_sync.config.model import ViewConfig
from table_sync.ui.ids import data_table_id, refresh_token_id, table_status_id, tick_token_id
from table_sync.ui.widgets import DashTableWidget


def _columns_for(view: ViewConfig, widget: DashTableWidget) -> list[dict]:
    names = view.field_names
    if widget.source is not None:
        try:
            names = widget.source.columns
        except (FileNotFoundError, OSError):
            pass
    return [{"name": n, "id": n} for n in names]


def build_table_panel(view: ViewConfig, widget: DashTableWidget) -> dbc.Card:
    return dbc.Card(
        [
            dbc.CardHeader(view.label, className="fw-semibold"),
            dbc.CardBody(
                [
                    # bumped by filter actions and by the interval tick respectively
                    dcc.Store(id=refresh_token_id(view.id), data=widget.revision),
                    dcc.Store(id=tick_token_id(view.id), data=widget.revision),
                    dash_table.DataTable(
                        id=data_table_id(view.id),
                        columns=_columns_for(view, widget),
                        data=widget.rows,
                        page_action="native",
                        page_current=0,
                        page_size=view.page_size,
                        sort_action="native",
                        style_table={"overflowX": "auto"},
                    ),
                    html.Small(
                        widget.status_text(),
                        id=table_status_id(view.id),
                        className="text-muted",
                    ),
                ]
            ),
        ],
        className="tsy-table mb-3",
    )
