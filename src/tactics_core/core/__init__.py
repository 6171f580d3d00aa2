"""Core module providing configuration, logging, and base exceptions.

Exports:
    Exceptions:
        TacticsError: Base exception for all engine errors.
        ContentError, ContentLoadError, DuplicateDefinitionError: Content errors.
        ProgressionError, ExperienceError: Progression precondition errors.
        SerializationError: Malformed save records.
        ConfigurationError, ValidationError: Configuration and data errors.

    Configuration:
        Settings: Main application settings class.
        get_settings: Get the settings singleton.
        clear_settings_cache: Force settings reload.

    Logging:
        configure_logging: Set up application logging.
        get_logger: Get a configured logger instance.
        bind_context: Add context to log entries.
        clear_context: Clear logging context.
"""

from __future__ import annotations

from tactics_core.core.config import (
    ContentSettings,
    EngineSettings,
    Settings,
    clear_settings_cache,
    get_settings,
)
from tactics_core.core.exceptions import (
    ConfigurationError,
    ContentError,
    ContentLoadError,
    DuplicateDefinitionError,
    ExperienceError,
    ProgressionError,
    SerializationError,
    TacticsError,
    ValidationError,
)
from tactics_core.core.logging import (
    bind_context,
    clear_context,
    configure_from_settings,
    configure_logging,
    get_logger,
)


__all__ = [
    # Base exception
    "TacticsError",
    # Content exceptions
    "ContentError",
    "ContentLoadError",
    "DuplicateDefinitionError",
    # Progression exceptions
    "ProgressionError",
    "ExperienceError",
    # Serialization
    "SerializationError",
    # Configuration exceptions
    "ConfigurationError",
    "ValidationError",
    # Configuration
    "Settings",
    "EngineSettings",
    "ContentSettings",
    "get_settings",
    "clear_settings_cache",
    # Logging
    "configure_logging",
    "configure_from_settings",
    "get_logger",
    "bind_context",
    "clear_context",
]
