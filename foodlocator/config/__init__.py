"""
Configuration package for the Healthy Food Locator.
"""

from .settings import (
    Settings,
    Environment,
    LogLevel,
    GeocoderSettings,
    FoursquareSettings,
    SearchSettings,
    MapSettings,
    SecuritySettings,
    settings,
    get_settings,
    settings_from_env_file,
)

__all__ = [
    "Settings",
    "Environment",
    "LogLevel",
    "GeocoderSettings",
    "FoursquareSettings",
    "SearchSettings",
    "MapSettings",
    "SecuritySettings",
    "settings",
    "get_settings",
    "settings_from_env_file",
]
