"""Core module providing configuration, logging, and base exceptions.

Exports:
    Exceptions:
        DelverError: Base exception for all application errors.
        ConfigurationError: Configuration-related errors.
        GenerationError: No room could be carved.
        InvalidGameStateError: A world invariant was broken.
        InvalidIntentError: A player intent could not be carried out.
        PersistenceError: A saved record could not be reconstructed.

    Configuration:
        Settings: Main application settings class.
        get_settings: Get the settings singleton.
        clear_settings_cache: Force settings reload.

    Logging:
        configure_logging: Set up application logging.
        get_logger: Get a configured logger instance.
        bind_context: Add context to log entries.
        unbind_context: Remove context from log entries.
        configure_from_settings: Set up logging from Settings.
"""

from __future__ import annotations

from delver.core.config import (
    DungeonSettings,
    GameSettings,
    Settings,
    clear_settings_cache,
    get_settings,
)
from delver.core.exceptions import (
    ConfigurationError,
    DelverError,
    GameEngineError,
    GenerationError,
    InvalidGameStateError,
    InvalidIntentError,
    PersistenceError,
)
from delver.core.logging import (
    bind_context,
    configure_from_settings,
    configure_logging,
    get_logger,
    unbind_context,
)


__all__ = [
    # Exceptions
    "DelverError",
    "ConfigurationError",
    "GameEngineError",
    "GenerationError",
    "InvalidGameStateError",
    "InvalidIntentError",
    "PersistenceError",
    # Configuration
    "DungeonSettings",
    "GameSettings",
    "Settings",
    "get_settings",
    "clear_settings_cache",
    # Logging
    "configure_logging",
    "get_logger",
    "bind_context",
    "unbind_context",
    "configure_from_settings",
]
