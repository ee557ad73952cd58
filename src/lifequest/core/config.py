"""Configuration management for the LifeQuest progression engine.

This module provides centralized configuration management using pydantic-settings,
supporting environment variables, .env files, and runtime configuration overrides.

Example:
    >>> from lifequest.core.config import get_settings
    >>> settings = get_settings()
    >>> settings.engine.xp_strategy
    'default'

Environment Variables:
    LIFEQUEST_LOG_LEVEL: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
    LIFEQUEST_JSON_LOGS: Emit JSON logs instead of console output
    LIFEQUEST_ENGINE_XP_STRATEGY: XP strategy name (default, always_award, high_risk)
    LIFEQUEST_ENGINE_CRITICAL_DAY_XP_MULTIPLIER: XP multiplier on a critical day
"""

from __future__ import annotations

from functools import lru_cache
from typing import Literal

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from lifequest.core.exceptions import ConfigurationError


class EngineSettings(BaseSettings):
    """Configuration for roll resolution.

    Attributes:
        xp_strategy: Name of the registered XP strategy used for rewards.
        outcome_strategy: Name of the registered outcome strategy.
        critical_day_xp_multiplier: XP multiplier applied on a critical day.
        initiative_context: Effect context that initiative rolls resolve in.
    """

    model_config = SettingsConfigDict(
        env_prefix="LIFEQUEST_ENGINE_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    xp_strategy: Literal["default", "always_award", "high_risk"] = Field(
        default="default",
        description="XP strategy used to convert outcomes into rewards",
    )
    outcome_strategy: Literal["default"] = Field(
        default="default",
        description="Outcome strategy used to judge die results",
    )
    critical_day_xp_multiplier: int = Field(
        default=2,
        ge=1,
        le=10,
        description="XP multiplier on a critical day",
    )
    initiative_context: Literal["ability_checks", "saving_throws"] = Field(
        default="ability_checks",
        description="Effect context used for initiative rolls",
    )


class Settings(BaseSettings):
    """Main application settings aggregating all configuration domains.

    Attributes:
        app_name: Application name.
        app_version: Application version string.
        debug: Enable debug mode.
        log_level: Application logging level.
        json_logs: Emit JSON formatted logs.
        engine: Roll resolution settings.
    """

    model_config = SettingsConfigDict(
        env_prefix="LIFEQUEST_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        env_nested_delimiter="__",
    )

    app_name: str = Field(
        default="LifeQuest",
        description="Application name",
    )
    app_version: str = Field(
        default="0.1.0",
        description="Application version",
    )
    debug: bool = Field(
        default=False,
        description="Enable debug mode",
    )
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="INFO",
        description="Logging level",
    )
    json_logs: bool = Field(
        default=False,
        description="Emit JSON formatted logs",
    )

    engine: EngineSettings = Field(default_factory=EngineSettings)

    @model_validator(mode="after")
    def validate_debug_log_level(self) -> "Settings":
        """Reject debug mode combined with a log level that hides debug output.

        Returns:
            Self if validation passes.

        Raises:
            ConfigurationError: If debug is on but log_level is above WARNING.
        """
        if self.debug and self.log_level in ("ERROR", "CRITICAL"):
            raise ConfigurationError(
                f"debug mode requires log_level DEBUG, INFO or WARNING, got {self.log_level}",
                config_key="log_level",
            )
        return self


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Get the application settings singleton.

    Returns:
        The application Settings instance.

    Raises:
        ConfigurationError: If required configuration is missing or invalid.
    """
    try:
        return Settings()
    except Exception as exc:
        raise ConfigurationError(
            f"Failed to load application settings: {exc}",
            details={"original_error": str(exc)},
        ) from exc


def clear_settings_cache() -> None:
    """Clear the settings cache, forcing a reload on next access.

    This is primarily useful for testing or when environment variables
    have changed at runtime.
    """
    get_settings.cache_clear()


__all__ = [
    "EngineSettings",
    "Settings",
    "get_settings",
    "clear_settings_cache",
]
