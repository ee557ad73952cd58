"""Core module providing configuration, logging, and base exceptions.

This module serves as the foundation for the LifeQuest progression engine,
providing essential infrastructure components used throughout the package.

Exports:
    Exceptions:
        LifeQuestError: Base exception for all package errors.
        ConfigurationError: Configuration-related errors.
        ValidationError: Data validation errors.
        ContextExpressionError: Malformed context expression trees.
        EngineError: Engine misconfiguration.
        UnknownStrategyError: Unregistered outcome or XP strategy.

    Configuration:
        Settings: Main application settings class.
        EngineSettings: Roll resolution settings.
        get_settings: Get the settings singleton.
        clear_settings_cache: Force settings reload.

    Logging:
        configure_logging: Set up application logging.
        get_logger: Get a configured logger instance.
        bind_context: Add context to log entries.
        clear_context: Clear logging context.
        character_context: Bind a character id for a block.
"""

from __future__ import annotations

from lifequest.core.config import (
    EngineSettings,
    Settings,
    clear_settings_cache,
    get_settings,
)
from lifequest.core.exceptions import (
    ConfigurationError,
    ContextExpressionError,
    EngineError,
    LifeQuestError,
    UnknownStrategyError,
    ValidationError,
)
from lifequest.core.logging import (
    bind_context,
    character_context,
    clear_context,
    configure_logging,
    get_logger,
)


__all__ = [
    # Base exception
    "LifeQuestError",
    # Configuration exceptions
    "ConfigurationError",
    "ValidationError",
    "ContextExpressionError",
    # Engine exceptions
    "EngineError",
    "UnknownStrategyError",
    # Configuration
    "Settings",
    "EngineSettings",
    "get_settings",
    "clear_settings_cache",
    # Logging
    "configure_logging",
    "get_logger",
    "bind_context",
    "clear_context",
    "character_context",
]
