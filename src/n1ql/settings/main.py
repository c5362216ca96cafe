from typing import Optional

from .query import QuerySettings


_settings: Optional[QuerySettings] = None


def get_settings(force_reload: bool = False) -> QuerySettings:
    """Get the singleton settings instance.

    Settings are loaded from ``N1QL_*`` environment variables (and a local
    ``.env`` file) on first access and cached afterwards.

    Args:
        force_reload: If True, creates a new settings instance even if
                     one already exists. Useful for testing or when
                     environment variables have changed.

    Returns:
        QuerySettings: The singleton settings instance

    Note:
        This function is thread-safe for reading but not for the initial
        creation. In practice, settings are loaded once at application
        startup before threading begins.
    """
    global _settings

    if _settings is None or force_reload:
        _settings = QuerySettings()

    return _settings


def _reload_settings() -> QuerySettings:
    """Force reload of settings.

    This is primarily for testing purposes where you need to reset
    the singleton instance.

    Returns:
        A fresh QuerySettings instance
    """
    global _settings
    _settings = None
    return get_settings(force_reload=True)
