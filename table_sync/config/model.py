from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional

from table_sync.exceptions import ConfigError

FILTER_KINDS = ("text", "select")
MATCH_MODES = ("exact", "contains")


@dataclass
class AutoRefreshConfig:
    """
    Auto-refresh settings.

    :param enabled: if False the interval tick is disabled; explicit events still refresh
    :param interval_seconds: period of the "refresh requested" tick sent to every view
    :param debounce_seconds: window in which repeated events for one view coalesce
    """
    enabled: bool = False
    interval_seconds: float = 30.0
    debounce_seconds: float = 0.3

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> AutoRefreshConfig:
        data = data or {}
        return cls(
            enabled=bool(data.get("enabled", False)),
            interval_seconds=float(data.get("interval_seconds", 30.0)),
            debounce_seconds=float(data.get("debounce_seconds", 0.3)),
        )


@dataclass
class CoordinatorConfig:
    debug: bool = False
    auto_refresh: AutoRefreshConfig = field(default_factory=AutoRefreshConfig)

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> CoordinatorConfig:
        data = data or {}
        return cls(
            debug=bool(data.get("debug", False)),
            auto_refresh=AutoRefreshConfig.from_dict(data.get("auto_refresh")),
        )


@dataclass
class FilterFieldConfig:
    """
    One filter control in a view's filter panel.

    Fields:

    - name: field name, also the column filtered on
    - label: human-readable label, defaults to the name
    - kind: "text" (free text, Enter applies) or "select" (dropdown)
    - options: choices for a select
    - match: "exact" or "contains"
    """
    name: str
    label: str = ""
    kind: str = "text"
    options: List[str] = field(default_factory=list)
    match: str = "exact"

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> FilterFieldConfig:
        name = data.get("name")
        if not name:
            raise ConfigError("Filter field is missing 'name'")

        kind = data.get("kind", "text")
        if kind not in FILTER_KINDS:
            raise ConfigError(f"Filter '{name}' has unknown kind '{kind}'")

        match = data.get("match", "exact")
        if match not in MATCH_MODES:
            raise ConfigError(f"Filter '{name}' has unknown match mode '{match}'")

        return cls(
            name=str(name),
            label=str(data.get("label") or name),
            kind=kind,
            options=[str(o) for o in data.get("options", [])],
            match=match,
        )


@dataclass
class ViewConfig:
    """
    Parsed config entry for a single tabular view.
    """
    id: str
    label: str
    source: Optional[Path] = None
    page_size: int = 10
    filters: List[FilterFieldConfig] = field(default_factory=list)
    # extra event names (e.g. "customer:updated") that refresh this view
    refresh_on: List[str] = field(default_factory=list)

    @property
    def field_names(self) -> List[str]:
        return [f.name for f in self.filters]

    @classmethod
    def from_raw(cls, raw: Dict[str, Any], root: Path) -> ViewConfig:
        view_id = raw.get("id")
        if not view_id:
            raise ConfigError("View config is missing 'id'")

        source_raw = raw.get("source")
        source: Optional[Path] = None
        if source_raw:
            source = Path(source_raw)
            if not source.is_absolute():
                source = (root / source).resolve()

        return cls(
            id=str(view_id),
            label=str(raw.get("label") or view_id),
            source=source,
            page_size=int(raw.get("page_size", 10)),
            filters=[FilterFieldConfig.from_dict(f) for f in raw.get("filters", [])],
            refresh_on=[str(e) for e in raw.get("refresh_on", [])],
        )


@dataclass
class AppSettings:
    ui_title: str
    coordinator: CoordinatorConfig
    views: List[ViewConfig]

    def view(self, view_id: str) -> Optional[ViewConfig]:
        return next((v for v in self.views if v.id == view_id), None)
