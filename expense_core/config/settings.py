"""
Configuration Management for Expense Core

Uses pydantic-settings for type-safe configuration from environment variables.

DESIGN DECISION: All configuration is centralized here.
The store, the formatters and the logger read their knobs from one place,
and every value has a working default so the core runs with no .env at all.
"""

from functools import lru_cache
from typing import Optional

from babel import Locale, UnknownLocaleError
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class StoreSettings(BaseSettings):
    """Persistent store and backend configuration."""

    model_config = SettingsConfigDict(
        env_prefix="EXPENSE_STORE_",
        extra="ignore"
    )

    namespace: Optional[str] = Field(
        default=None,
        description="Key prefix owned by the store; clear() only touches these keys"
    )
    data_file: str = Field(
        default="expense-core-data.json",
        description="Path of the JSON file used by the file backend"
    )
    write_retry_attempts: int = Field(
        default=3,
        ge=1,
        le=10,
        description="Attempts the file backend makes for a failing write"
    )

    # Caller-owned key scheme used by the repositories
    expenses_key: str = Field(
        default="expense-storage",
        min_length=1,
        description="Key holding the serialized expense list"
    )
    categories_key: str = Field(
        default="category-storage",
        min_length=1,
        description="Key holding the serialized category list"
    )


class FormatSettings(BaseSettings):
    """Locale and display configuration for formatting."""

    model_config = SettingsConfigDict(
        env_prefix="EXPENSE_FORMAT_",
        extra="ignore"
    )

    locale: str = Field(
        default="es_ES",
        description="Fixed application locale (not user-selectable)"
    )
    default_currency: str = Field(
        default="USD",
        min_length=3,
        max_length=3,
        description="ISO 4217 code used when none is given"
    )
    date_pattern: str = Field(
        default="dd/MM/yyyy",
        description="Default CLDR date pattern"
    )

    @field_validator('locale')
    @classmethod
    def validate_locale(cls, v: str) -> str:
        """Reject locales Babel has no data for."""
        try:
            Locale.parse(v)
        except (UnknownLocaleError, ValueError) as e:
            raise ValueError(f"Unsupported locale: {v}") from e
        return v

    @field_validator('default_currency')
    @classmethod
    def normalize_currency(cls, v: str) -> str:
        return v.upper()


class AppSettings(BaseSettings):
    """
    Main application settings.

    Loads configuration from environment variables and .env file.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    # Environment
    app_environment: str = Field(
        default="development",
        description="Application environment"
    )
    debug_mode: bool = Field(
        default=False,
        description="Enable debug mode (human-readable console logs)"
    )
    log_level: str = Field(
        default="INFO",
        pattern="^(DEBUG|INFO|WARNING|ERROR|CRITICAL)$",
        description="Minimum level for emitted log records"
    )


class Settings(BaseSettings):
    """
    Root settings container.

    Aggregates all sub-settings for easy access.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    @property
    def store(self) -> StoreSettings:
        return StoreSettings()

    @property
    def formatting(self) -> FormatSettings:
        return FormatSettings()

    @property
    def app(self) -> AppSettings:
        return AppSettings()


@lru_cache()
def get_settings() -> Settings:
    """
    Get application settings (cached).

    Call get_settings.cache_clear() to reload if needed.
    """
    return Settings()


def validate_all_settings() -> dict[str, bool]:
    """
    Validate all settings are properly configured.

    Returns a dict of {setting_name: is_valid}, plus a
    "<name>_error" entry for each section that failed.
    """
    results = {}
    settings = get_settings()

    sections = {
        "store": lambda: settings.store,
        "formatting": lambda: settings.formatting,
        "app": lambda: settings.app,
    }
    for name, load in sections.items():
        try:
            load()
            results[name] = True
        except ValueError as e:
            results[name] = False
            results[f"{name}_error"] = str(e)

    return results
