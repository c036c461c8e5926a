"""
Configuration models and loaders
"""

from .model import AppSettings, AutoRefreshConfig, CoordinatorConfig, FilterFieldConfig, ViewConfig
from .loader import load_app_settings

__all__ = [
    "AppSettings",
    "AutoRefreshConfig",
    "CoordinatorConfig",
    "FilterFieldConfig",
    "ViewConfig",
    "load_app_settings",
]
