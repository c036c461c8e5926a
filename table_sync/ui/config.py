from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Optional

from table_sync.config.model import AppSettings, ViewConfig
from table_sync.core.coordinator import ViewCoordinator
from table_sync.ui.widgets import DashTableWidget


@dataclass
class AppConfig:
    """
    Shared state for the Dash app: settings, the view coordinator and the
    table widgets. Passed into layout + callback registration functions
    instead of using module-level globals.
    """
    config_root: Path
    settings: AppSettings
    coordinator: Optional[ViewCoordinator] = None
    widgets: Dict[str, DashTableWidget] = field(default_factory=dict)

    def view(self, view_id: str) -> Optional[ViewConfig]:
        return self.settings.view(view_id)

    def validate(self) -> None:
        """Ensure all required services are attached before the app starts."""
        if self.coordinator is None:
            raise RuntimeError("AppConfig.coordinator must be initialized.")
        missing = [v.id for v in self.settings.views if v.id not in self.widgets]
        if missing:
            raise RuntimeError(f"No table widget built for views: {missing}")
