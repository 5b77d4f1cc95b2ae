"""Structured logging for the HoL core.

The dice engine and the repository log key/value events through structlog;
the value objects never log, they raise. When a HolError is logged with
``exc_info``, its ``details`` are lifted into the event so the failing
argument and value show up as fields rather than inside the message.

Example:
    >>> from hol_core.core.logging import configure_from_settings, get_logger
    >>> configure_from_settings()
    >>> get_logger(__name__).info("Treasure saved", treasure_id=4)
"""

from __future__ import annotations

import logging
import sys
from typing import TYPE_CHECKING, Any

import structlog
from structlog.types import Processor

from hol_core.core.exceptions import HolError


if TYPE_CHECKING:
    from structlog.types import EventDict, WrappedLogger

    from hol_core.core.config import Settings


APP_NAME = "hol_core"
STDLIB_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def add_app_context(
    logger: WrappedLogger,
    method_name: str,
    event_dict: EventDict,
) -> EventDict:
    """Tag every event with the application name."""
    event_dict["app"] = APP_NAME
    return event_dict


def add_error_details(
    logger: WrappedLogger,
    method_name: str,
    event_dict: EventDict,
) -> EventDict:
    """Copy the details of a logged HolError into the event.

    Existing event keys win over error details.

    Args:
        logger: The wrapped logger instance.
        method_name: Name of the logging method called.
        event_dict: The event dictionary to modify.

    Returns:
        The event dictionary, with ``error_type`` and the error details
        added when ``exc_info`` carries a HolError.
    """
    exc_info = event_dict.get("exc_info")
    if exc_info is True:
        exc_info = sys.exc_info()
    error = exc_info if isinstance(exc_info, BaseException) else None
    if isinstance(exc_info, tuple):
        error = exc_info[1]

    if isinstance(error, HolError):
        event_dict.setdefault("error_type", type(error).__name__)
        for key, value in error.details.items():
            event_dict.setdefault(key, value)
    return event_dict


def _build_processors(json_format: bool) -> list[Processor]:
    processors: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        add_app_context,
        add_error_details,
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
    ]
    if json_format:
        processors.append(structlog.processors.format_exc_info)
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(
            structlog.dev.ConsoleRenderer(exception_formatter=structlog.dev.plain_traceback)
        )
    return processors


def configure_logging(
    *,
    level: str = "INFO",
    json_format: bool = False,
    log_file: str | None = None,
) -> None:
    """Configure structlog and the standard library root logger.

    Args:
        level: The logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL).
        json_format: Render JSON lines instead of console output.
        log_file: Optional file that also receives standard library records.
    """
    log_level = logging.getLevelName(level.upper())
    if not isinstance(log_level, int):
        log_level = logging.INFO

    structlog.configure(
        processors=_build_processors(json_format),
        wrapper_class=structlog.make_filtering_bound_logger(log_level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=True,
    )

    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stdout)]
    if log_file:
        handlers.append(logging.FileHandler(log_file))
    logging.basicConfig(format=STDLIB_FORMAT, level=log_level, handlers=handlers, force=True)


def configure_from_settings(settings: Settings | None = None) -> None:
    """Configure logging from ``HOL_LOG_LEVEL`` and ``HOL_JSON_LOGS``.

    Args:
        settings: Settings to use; defaults to ``get_settings()``.
    """
    if settings is None:
        from hol_core.core.config import get_settings

        settings = get_settings()

    configure_logging(
        level="DEBUG" if settings.debug else settings.log_level,
        json_format=settings.json_logs,
    )


def get_logger(name: str | None = None) -> structlog.BoundLogger:
    """Get a structlog logger, typically with ``__name__``."""
    return structlog.get_logger(name)


def bind_context(**kwargs: Any) -> None:
    """Bind key/value pairs to every following event in this context.

    Example:
        >>> bind_context(race="Dwarf", currency_group_id=1)
    """
    structlog.contextvars.bind_contextvars(**kwargs)


def clear_context() -> None:
    """Drop all bound context variables."""
    structlog.contextvars.clear_contextvars()


__all__ = [
    "add_app_context",
    "add_error_details",
    "configure_logging",
    "configure_from_settings",
    "get_logger",
    "bind_context",
    "clear_context",
]
