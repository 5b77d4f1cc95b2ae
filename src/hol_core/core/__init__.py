"""Core module providing configuration, logging, and base exceptions.

Exports:
    Exceptions:
        HolError: Base exception for all core errors.
        InvalidArgumentError, OutOfRangeError, ConflictError, NotFoundError:
            Domain failure kinds raised by the value objects.

    Configuration:
        Settings: Main application settings class.
        get_settings: Get the settings singleton.
        clear_settings_cache: Force settings reload.

    Logging:
        configure_logging: Set up application logging.
        configure_from_settings: Set up logging from Settings.
        get_logger: Get a configured logger instance.
        bind_context: Add context to log entries.
        clear_context: Clear logging context.
"""

from __future__ import annotations

from hol_core.core.config import (
    DiceSettings,
    Settings,
    StorageSettings,
    clear_settings_cache,
    get_settings,
)
from hol_core.core.exceptions import (
    CodecError,
    ConfigurationError,
    ConflictError,
    DiceRollError,
    DomainError,
    HolError,
    InsufficientFundsError,
    InvalidArgumentError,
    NotFoundError,
    OutOfRangeError,
    PersistenceError,
)
from hol_core.core.logging import (
    bind_context,
    clear_context,
    configure_from_settings,
    configure_logging,
    get_logger,
)


__all__ = [
    # Base exception
    "HolError",
    # Domain exceptions
    "DomainError",
    "InvalidArgumentError",
    "OutOfRangeError",
    "ConflictError",
    "InsufficientFundsError",
    "NotFoundError",
    # Infrastructure exceptions
    "DiceRollError",
    "CodecError",
    "PersistenceError",
    "ConfigurationError",
    # Configuration
    "Settings",
    "StorageSettings",
    "DiceSettings",
    "get_settings",
    "clear_settings_cache",
    # Logging
    "configure_logging",
    "configure_from_settings",
    "get_logger",
    "bind_context",
    "clear_context",
]
