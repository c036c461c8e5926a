"""
Data sources used by the table widgets (never by the core)
"""

from .table_source import CsvTableSource

__all__ = ["CsvTableSource"]
