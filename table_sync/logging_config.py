from __future__ import annotations

import logging
import os
from typing import Optional

from pythonjsonlogger import jsonlogger

# every module logs under this name via logging.getLogger(__name__)
PACKAGE_LOGGER = "table_sync"

PLAIN_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
JSON_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s"


def _build_formatter(format_mode: str) -> logging.Formatter:
    if format_mode == "plain":
        return logging.Formatter(PLAIN_FORMAT)
    return jsonlogger.JsonFormatter(JSON_FORMAT)


def configure_logging(
        level: int = logging.INFO,
        force_format: Optional[str] = None,
) -> None:
    """
    Install a single stream handler on the root logger.

    Output is JSON unless force_format (or env TABLE_SYNC_LOG_FORMAT) is "plain".
    Structured fields passed through extra={...} end up as JSON keys.
    """
    format_mode = force_format or os.getenv("TABLE_SYNC_LOG_FORMAT", "json")

    handler = logging.StreamHandler()
    handler.setFormatter(_build_formatter(format_mode.lower()))

    root = logging.getLogger()
    root.setLevel(level)
    root.handlers.clear()
    root.addHandler(handler)


def set_diagnostics(enabled: bool) -> None:
    """
    Coordinator diagnostics are logged at DEBUG under the package logger.
    Enabling them lowers that logger to DEBUG; disabling hands the level back
    to the root logger.
    """
    logging.getLogger(PACKAGE_LOGGER).setLevel(logging.DEBUG if enabled else logging.NOTSET)
