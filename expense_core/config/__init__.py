"""Configuration package."""

from expense_core.config.settings import (
    AppSettings,
    FormatSettings,
    Settings,
    StoreSettings,
    get_settings,
    validate_all_settings,
)

__all__ = [
    "AppSettings",
    "FormatSettings",
    "Settings",
    "StoreSettings",
    "get_settings",
    "validate_all_settings",
]
