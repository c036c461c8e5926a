from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional

import pandas as pd

from table_sync.config.model import FilterFieldConfig

logger = logging.getLogger(__name__)


class CsvTableSource:
    """
    Row source for one view, backed by a CSV file loaded with pandas.

    The frame is read lazily on the first fetch and kept in memory;
    call invalidate() to force a re-read (e.g. after an "item created"
    notification from another process wrote to the file).
    """

    def __init__(
            self,
            path: Optional[Path] = None,
            fields: Optional[List[FilterFieldConfig]] = None,
            frame: Optional[pd.DataFrame] = None,
    ):
        self.path = Path(path) if path is not None else None
        self._match_by_field: Dict[str, str] = {f.name: f.match for f in (fields or [])}
        self._frame = frame

    @property
    def frame(self) -> pd.DataFrame:
        if self._frame is None:
            if self.path is None:
                raise FileNotFoundError("CsvTableSource has neither a path nor a frame")
            logger.info("Loading table source", extra={"path": str(self.path)})
            self._frame = pd.read_csv(self.path, dtype=str, keep_default_na=False)
        return self._frame

    @property
    def columns(self) -> List[str]:
        return [str(c) for c in self.frame.columns]

    def invalidate(self) -> None:
        if self.path is not None:
            self._frame = None

    def fetch(self, filters: Mapping[str, str]) -> List[Dict[str, Any]]:
        """
        Return the rows matching every filter in the FilterSet.

        Matching is case-insensitive; "exact" compares whole values and
        "contains" looks for a substring. Comma-separated values (from a
        multi-select) match any of the listed values. Filters naming a column
        the frame does not have are ignored.
        """
        df = self.frame
        mask = pd.Series(True, index=df.index)

        for name, value in filters.items():
            if name not in df.columns:
                logger.warning(
                    "Ignoring filter on unknown column",
                    extra={"column": name, "path": str(self.path) if self.path else None},
                )
                continue

            column = df[name].astype(str).str.lower()
            wanted = [v.strip().lower() for v in str(value).split(",") if v.strip()]
            if not wanted:
                continue

            if self._match_by_field.get(name, "exact") == "contains":
                col_mask = pd.Series(False, index=df.index)
                for w in wanted:
                    col_mask |= column.str.contains(w, regex=False)
            else:
                col_mask = column.isin(wanted)

            mask &= col_mask

        return df[mask].to_dict("records")
