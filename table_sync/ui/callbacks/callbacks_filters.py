from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, List, Optional, Sequence

import dash
from dash import ALL, MATCH, Input, Output, State, exceptions, no_update

from table_sync.core.filter_set import FilterContainer, FilterControl
from table_sync.ui.ids import IDs

if TYPE_CHECKING:
    from table_sync.ui.config import AppConfig

logger = logging.getLogger(__name__)


def build_filter_container(
        view_id: Optional[str],
        field_order: Sequence[str],
        input_ids: Sequence[dict],
        input_values: Sequence[Any],
        select_ids: Sequence[dict],
        select_values: Sequence[Any],
) -> FilterContainer:
    """
    Pure helper turning the pattern-matching States of one filter panel into
    a FilterContainer. Controls are ordered as the fields appear in the view
    config; controls the config does not know go last, in page order.
    """
    controls: List[FilterControl] = []
    for ids, values in ((input_ids, input_values), (select_ids, select_values)):
        for comp_id, value in zip(ids or [], values or []):
            controls.append(FilterControl(name=comp_id.get("field", ""), value=value))

    rank = {name: i for i, name in enumerate(field_order)}
    controls.sort(key=lambda c: rank.get(c.name, len(rank)))

    container_id = f"{IDs.Pattern.FILTER_CONTAINER}-{view_id}" if view_id else IDs.Pattern.FILTER_CONTAINER
    return FilterContainer(container_id=container_id, view_id=view_id, controls=controls)


def values_in_page_order(container: FilterContainer, ids: Sequence[dict]) -> list:
    """Read the (possibly cleared) control values back in the order Dash expects them."""
    by_name = container.values()
    return [by_name.get(comp_id.get("field")) for comp_id in ids or []]


def handle_filter_action(
        ctx: AppConfig,
        triggered: Any,
        input_values: Sequence[Any],
        input_ids: Sequence[dict],
        select_values: Sequence[Any],
        select_ids: Sequence[dict],
) -> tuple:
    """
    Body of the apply / reset / Enter callback.

    :param triggered: dash.ctx.triggered_id, the id dict of the apply button,
        the reset button or the text input Enter was pressed in
    :return: (refresh token, text input values, select values); the control
        values are only rewritten on reset
    """
    if not isinstance(triggered, dict):
        raise exceptions.PreventUpdate

    view_id = triggered.get("view")
    view = ctx.view(view_id) if view_id else None
    field_order = view.field_names if view is not None else []

    container = build_filter_container(
        view_id, field_order, input_ids, input_values, select_ids, select_values
    )

    inputs_out: Any = no_update
    selects_out: Any = no_update

    if triggered.get("type") == IDs.Pattern.FILTER_RESET:
        ctx.coordinator.reset_filters(container)
        inputs_out = values_in_page_order(container, input_ids)
        selects_out = values_in_page_order(container, select_ids)
    else:
        via_enter = triggered.get("type") == IDs.Pattern.FILTER_INPUT
        ctx.coordinator.apply_filters(container, via_enter=via_enter)

    widget = ctx.widgets.get(view_id)
    token = widget.revision if widget is not None else no_update
    return token, inputs_out, selects_out


def register_filter_callbacks(app: dash.Dash, ctx: AppConfig) -> None:
    # ---------------------------------------------------------
    # Apply / reset / Enter inside a text filter
    # ---------------------------------------------------------
    @app.callback(
        Output({"type": IDs.Pattern.REFRESH_TOKEN, "view": MATCH}, "data"),
        Output({"type": IDs.Pattern.FILTER_INPUT, "view": MATCH, "field": ALL}, "value"),
        Output({"type": IDs.Pattern.FILTER_SELECT, "view": MATCH, "field": ALL}, "value"),
        Input({"type": IDs.Pattern.FILTER_APPLY, "view": MATCH}, "n_clicks"),
        Input({"type": IDs.Pattern.FILTER_RESET, "view": MATCH}, "n_clicks"),
        Input({"type": IDs.Pattern.FILTER_INPUT, "view": MATCH, "field": ALL}, "n_submit"),
        State({"type": IDs.Pattern.FILTER_INPUT, "view": MATCH, "field": ALL}, "value"),
        State({"type": IDs.Pattern.FILTER_INPUT, "view": MATCH, "field": ALL}, "id"),
        State({"type": IDs.Pattern.FILTER_SELECT, "view": MATCH, "field": ALL}, "value"),
        State({"type": IDs.Pattern.FILTER_SELECT, "view": MATCH, "field": ALL}, "id"),
        prevent_initial_call=True,
    )
    def on_filter_action(
            _apply_clicks,
            _reset_clicks,
            _submits,
            input_values,
            input_ids,
            select_values,
            select_ids,
    ):
        return handle_filter_action(
            ctx, dash.ctx.triggered_id, input_values, input_ids, select_values, select_ids
        )
