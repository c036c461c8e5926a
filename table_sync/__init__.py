"""
Top-level package for table_sync.

Links filter panels to independently rendered data tables. Most code should
import from submodules such as:
    table_sync.core
    table_sync.config
    table_sync.ui
"""

__all__: list[str] = []
