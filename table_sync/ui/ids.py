from __future__ import annotations

__all__ = [
    "IDs",
    "filter_container_id",
    "filter_input_id",
    "filter_select_id",
    "filter_apply_id",
    "filter_reset_id",
    "data_table_id",
    "refresh_token_id",
    "tick_token_id",
    "table_status_id",
]


class IDs:
    class Control:
        TICK_INTERVAL = "refresh-tick-interval"

    class Pattern:
        # pattern-matching "type" strings, every id also carries "view"
        FILTER_CONTAINER = "filter-container"
        FILTER_INPUT = "filter-input"
        FILTER_SELECT = "filter-select"
        FILTER_APPLY = "filter-apply"
        FILTER_RESET = "filter-reset"
        DATA_TABLE = "data-table"
        REFRESH_TOKEN = "refresh-token"
        TICK_TOKEN = "tick-token"
        TABLE_STATUS = "table-status"


def filter_container_id(view_id: str) -> dict:
    return {"type": IDs.Pattern.FILTER_CONTAINER, "view": view_id}


def filter_input_id(view_id: str, field: str) -> dict:
    return {"type": IDs.Pattern.FILTER_INPUT, "view": view_id, "field": field}


def filter_select_id(view_id: str, field: str) -> dict:
    return {"type": IDs.Pattern.FILTER_SELECT, "view": view_id, "field": field}


def filter_apply_id(view_id: str) -> dict:
    return {"type": IDs.Pattern.FILTER_APPLY, "view": view_id}


def filter_reset_id(view_id: str) -> dict:
    return {"type": IDs.Pattern.FILTER_RESET, "view": view_id}


def data_table_id(view_id: str) -> dict:
    return {"type": IDs.Pattern.DATA_TABLE, "view": view_id}


def refresh_token_id(view_id: str) -> dict:
    return {"type": IDs.Pattern.REFRESH_TOKEN, "view": view_id}


def tick_token_id(view_id: str) -> dict:
    return {"type": IDs.Pattern.TICK_TOKEN, "view": view_id}


def table_status_id(view_id: str) -> dict:
    return {"type": IDs.Pattern.TABLE_STATUS, "view": view_id}
