from __future__ import annotations

from typing import Mapping, Optional

import dash_bootstrap_components as dbc
from dash import dcc, html

from table_sync.config.model import FilterFieldConfig, ViewConfig
from table_sync.ui.ids import (
    filter_apply_id,
    filter_container_id,
    filter_input_id,
    filter_reset_id,
    filter_select_id,
)


def _build_control(view_id: str, field: FilterFieldConfig, applied: str):
    if field.kind == "select":
        return dcc.Dropdown(
            id=filter_select_id(view_id, field.name),
            options=[{"label": o, "value": o} for o in field.options],
            value=[v for v in applied.split(",") if v] or None,
            multi=True,
            placeholder=f"All {field.label.lower()}",
            className="mb-3",
        )

    # Enter inside a text input applies the filters (n_submit)
    return dbc.Input(
        id=filter_input_id(view_id, field.name),
        type="text",
        value=applied,
        debounce=True,
        placeholder=field.label,
        className="mb-3",
    )


def build_filter_panel(view: ViewConfig, applied: Optional[Mapping[str, str]] = None) -> dbc.Card:
    """
    Filter controls for one view. The container id carries the view id, which
    is how the callbacks know which view an apply/reset click belongs to.

    :param applied: the FilterSet last applied to the view, shown as the controls' initial values
    """
    applied = applied or {}
    controls = []
    for field in view.filters:
        controls.append(
            html.Div(
                [
                    html.Label(field.label, className="form-label"),
                    _build_control(view.id, field, applied.get(field.name, "")),
                ]
            )
        )

    return dbc.Card(
        [
            dbc.CardHeader(f"Filter {view.label}", className="fw-semibold"),
            dbc.CardBody(
                [
                    html.Div(controls),
                    html.Div(
                        [
                            dbc.Button(
                                "Apply Filters",
                                id=filter_apply_id(view.id),
                                color="primary",
                                size="sm",
                                className="me-2",
                            ),
                            dbc.Button(
                                "Reset",
                                id=filter_reset_id(view.id),
                                color="secondary",
                                outline=True,
                                size="sm",
                            ),
                        ],
                        className="tsy-filter-actions",
                    ),
                ]
            ),
        ],
        id=filter_container_id(view.id),
        className="tsy-filters mb-3",
    )
