"""Settings management."""

from smartflow.config.settings import (
    SmartFlowSettings,
    get_settings,
    load_settings,
    reset_settings_cache,
)

__all__ = [
    "SmartFlowSettings",
    "get_settings",
    "load_settings",
    "reset_settings_cache",
]
