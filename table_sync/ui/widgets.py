from __future__ import annotations

import logging
from typing import Any, Callable, Dict, List, Optional

from table_sync.core.filter_set import FilterSet
from table_sync.core.widget import BaseWidget
from table_sync.services.table_source import CsvTableSource

logger = logging.getLogger(__name__)


class DashTableWidget(BaseWidget):
    """
    Server-side handle for one dash_table.DataTable.

    The browser table re-renders whenever its refresh token changes, so both
    refresh primitives bump `revision`. A reload re-reads the source and
    re-runs the query; a redraw re-emits the rows already held. Neither
    touches the table's page_current, which keeps the user on their page.

    Filters are pulled from the coordinator at fetch time through
    `filters_provider`; nothing pushes them in.
    """

    def __init__(
            self,
            view_id: str,
            source: Optional[CsvTableSource],
            filters_provider: Callable[[str], FilterSet],
    ):
        self.view_id = view_id
        self.source = source
        self.filters_provider = filters_provider
        self.supports_reload = source is not None

        self.revision = 0
        self.rows: List[Dict[str, Any]] = []
        self.error: Optional[str] = None

    def reload_keeping_position(self) -> None:
        filters = self.filters_provider(self.view_id)
        try:
            self.source.invalidate()
            self.rows = self.source.fetch(filters)
            self.error = None
        except Exception as e:
            # fetch failures belong to the widget, the table just shows nothing
            logger.exception(
                "Failed to fetch rows for view",
                extra={"view_id": self.view_id, "filters": filters},
            )
            self.rows = []
            self.error = str(e)
        self.revision += 1

    def redraw_keeping_position(self) -> None:
        self.revision += 1

    def status_text(self) -> str:
        if self.error:
            return f"Could not load rows: {self.error}"
        filters = self.filters_provider(self.view_id)
        if not filters:
            return f"{len(self.rows)} rows"
        applied = ", ".join(f"{k}={v}" for k, v in filters.items())
        return f"{len(self.rows)} rows · {applied}"
