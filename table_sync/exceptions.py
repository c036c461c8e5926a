

class TableSyncError(Exception):
    """Base exception for all table_sync errors"""
    pass

class ConfigError(TableSyncError):
    """Invalid or inconsistent global.json or view config"""
    pass

class AutoRefreshRegistrationError(TableSyncError):
    """
    Auto-refresh registration was missing its events list
    or pointed at an empty view id
    """
    pass
