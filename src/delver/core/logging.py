"""Structured logging configuration for delver.

Logging uses structlog so that generation and turn events carry their
context (depth, world path, entity names) as key/value pairs. Output is
human-readable during development and JSON in production.

The player-facing message feed lives in :mod:`delver.models.messages`;
these logs are diagnostics only.

Example:
    >>> from delver.core.logging import get_logger
    >>> logger = get_logger(__name__)
    >>> logger.info("Room carved", x1=3, y1=4, width=6, height=5)
"""

from __future__ import annotations

import logging
import sys
from typing import TYPE_CHECKING, Any

import structlog
from structlog.types import Processor


if TYPE_CHECKING:
    from structlog.types import EventDict, WrappedLogger

    from delver.core.config import Settings


def app_context(app_name: str) -> Processor:
    """Build a processor tagging every log entry with the application name.

    Args:
        app_name: Value written under the ``app`` key.

    Returns:
        A structlog processor.
    """

    def add_app_context(
        logger: WrappedLogger,
        method_name: str,
        event_dict: EventDict,
    ) -> EventDict:
        event_dict["app"] = app_name
        return event_dict

    return add_app_context


def configure_logging(
    *,
    level: str = "INFO",
    json_format: bool = False,
    log_file: str | None = None,
    app_name: str = "delver",
) -> None:
    """Configure application-wide logging.

    Args:
        level: The logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL).
        json_format: If True, output logs in JSON format for production.
        log_file: Optional path to a log file for persistent logging.
        app_name: Name tagged onto every entry.

    Example:
        >>> configure_logging(level="DEBUG", json_format=False)
    """
    shared_processors: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        app_context(app_name),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
    ]

    if json_format:
        processors: list[Processor] = [
            *shared_processors,
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ]
    else:
        processors = [
            *shared_processors,
            structlog.dev.ConsoleRenderer(
                colors=True,
                exception_formatter=structlog.dev.plain_traceback,
            ),
        ]

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(
            getattr(logging, level.upper(), logging.INFO)
        ),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=True,
    )

    logging.basicConfig(
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        level=getattr(logging, level.upper(), logging.INFO),
        stream=sys.stdout,
        force=True,
    )

    if log_file:
        file_handler = logging.FileHandler(log_file)
        file_handler.setLevel(getattr(logging, level.upper(), logging.INFO))
        file_handler.setFormatter(
            logging.Formatter("%(asctime)s [%(levelname)s] %(name)s: %(message)s")
        )
        logging.getLogger().addHandler(file_handler)


def configure_from_settings(settings: Settings) -> None:
    """Configure logging from application settings.

    ``debug`` forces the DEBUG level regardless of ``log_level``.
    """
    configure_logging(
        level="DEBUG" if settings.debug else settings.log_level,
        json_format=settings.log_json,
        app_name=settings.app_name,
    )


def get_logger(name: str | None = None) -> structlog.BoundLogger:
    """Get a configured logger instance.

    Args:
        name: Optional name for the logger (typically __name__).

    Returns:
        A configured structlog BoundLogger instance.
    """
    return structlog.get_logger(name)


def bind_context(**kwargs: Any) -> None:
    """Bind context variables included in all subsequent logs.

    The generator binds ``depth`` and ``world_path`` for the duration of a
    level build so that spawn logs can be traced back to it.

    Args:
        **kwargs: Key-value pairs to bind to the logging context.
    """
    structlog.contextvars.bind_contextvars(**kwargs)


def unbind_context(*keys: str) -> None:
    """Remove the given keys from the logging context.

    Args:
        *keys: Context keys previously bound with :func:`bind_context`.
    """
    structlog.contextvars.unbind_contextvars(*keys)


__all__ = [
    "app_context",
    "configure_logging",
    "get_logger",
    "bind_context",
    "unbind_context",
    "configure_from_settings",
]
