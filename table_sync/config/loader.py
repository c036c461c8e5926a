from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from typing import Dict, List

from table_sync.config.model import AppSettings, CoordinatorConfig, ViewConfig
from table_sync.exceptions import ConfigError

logger = logging.getLogger(__name__)


def _env_flag(name: str) -> bool | None:
    raw = os.getenv(name)
    if raw is None or raw == "":
        return None
    return raw.strip().lower() in ("1", "true", "yes", "on")


def load_app_settings(root: Path) -> AppSettings:
    """
    Load configuration from a directory using the multi-file layout.

    Expected structure:

        root/
            global.json
            views/
                logs.json
                users.json
                ...

    global.json holds the UI title and the coordinator options
    ("debug", "auto_refresh"). Each file in 'views/' is parsed into a
    ViewConfig; invalid files are logged and skipped.

    Environment overrides: TABLE_SYNC_DEBUG and TABLE_SYNC_AUTO_REFRESH.

    :param root: Directory containing 'global.json' and 'views/'.
    :return: An AppSettings instance.
    :raises FileNotFoundError: if global.json does not exist.
    :raises ConfigError: if no valid view could be loaded, or view ids collide.
    """
    root = Path(root)
    logger.info("Loading app settings", extra={"config_root": str(root)})

    global_path = root / "global.json"
    if not global_path.is_file():
        raise FileNotFoundError(f"File not found at {global_path}")

    with global_path.open() as f:
        raw_global = json.load(f)

    coordinator = CoordinatorConfig.from_dict(raw_global)

    debug_override = _env_flag("TABLE_SYNC_DEBUG")
    if debug_override is not None:
        coordinator.debug = debug_override

    auto_refresh_override = _env_flag("TABLE_SYNC_AUTO_REFRESH")
    if auto_refresh_override is not None:
        coordinator.auto_refresh.enabled = auto_refresh_override

    views: List[ViewConfig] = []
    seen: Dict[str, Path] = {}
    failed = 0

    views_dir = root / "views"
    if views_dir.is_dir():
        for view_file in sorted(views_dir.glob("*.json")):
            try:
                with view_file.open() as f:
                    raw = json.load(f)
                view = ViewConfig.from_raw(raw, root=root)
            except (ConfigError, json.JSONDecodeError) as e:
                failed += 1
                logger.error(
                    "Skipping view due to config error",
                    extra={"path": str(view_file), "error": str(e)},
                )
                continue

            if view.id in seen:
                raise ConfigError(
                    f"Duplicate view id '{view.id}' in {view_file} (already defined in {seen[view.id]})"
                )
            seen[view.id] = view_file
            views.append(view)

    logger.info(
        "Views loaded from config root",
        extra={
            "config_root": str(root),
            "n_views": len(views),
            "n_failed": failed,
            "view_ids": [v.id for v in views],
        },
    )

    if not views:
        raise ConfigError(f"No valid views could be loaded from config root: {root}")

    return AppSettings(
        ui_title=raw_global.get("ui_title", "Table Sync"),
        coordinator=coordinator,
        views=views,
    )
