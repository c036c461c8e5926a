from __future__ import annotations

import logging
from typing import TYPE_CHECKING

import dash
from dash import MATCH, Input, Output, State, exceptions

from table_sync.ui.ids import IDs

if TYPE_CHECKING:
    from table_sync.ui.config import AppConfig

logger = logging.getLogger(__name__)


def register_table_callbacks(app: dash.Dash, ctx: AppConfig) -> None:
    # ---------------------------------------------------------
    # Re-render a table when either of its tokens moves.
    # page_current is not an output, so the user stays on their page.
    # ---------------------------------------------------------
    @app.callback(
        Output({"type": IDs.Pattern.DATA_TABLE, "view": MATCH}, "data"),
        Output({"type": IDs.Pattern.TABLE_STATUS, "view": MATCH}, "children"),
        Input({"type": IDs.Pattern.REFRESH_TOKEN, "view": MATCH}, "data"),
        Input({"type": IDs.Pattern.TICK_TOKEN, "view": MATCH}, "data"),
        State({"type": IDs.Pattern.REFRESH_TOKEN, "view": MATCH}, "id"),
        prevent_initial_call=True,
    )
    def render_table(_refresh_token, _tick_token, token_id):
        view_id = (token_id or {}).get("view")
        widget = ctx.widgets.get(view_id)
        if widget is None:
            raise exceptions.PreventUpdate
        return widget.rows, widget.status_text()
