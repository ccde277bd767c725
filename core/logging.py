"""Structured logging setup."""

import logging
import sys
from typing import Any

import structlog
from structlog.processors import JSONRenderer, TimeStamper, add_log_level

from core.config import LogFormat, Settings


def setup_logging(settings: Settings) -> None:
    """Configure structlog for the CLI and the HTTP app.

    Logs go to stderr so that nothing interleaves with command output.
    """
    log_level = str(getattr(settings.app.log_level, "value", settings.app.log_level)).upper()
    log_format = getattr(
        settings.observability.log_record_format, "value", settings.observability.log_record_format
    )

    processors: list[Any] = [
        structlog.contextvars.merge_contextvars,
        add_log_level,
        TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
    ]

    if log_format == LogFormat.JSON.value:
        processors.append(JSONRenderer())
    else:
        processors.append(structlog.dev.ConsoleRenderer())

    structlog.configure(
        wrapper_class=structlog.make_filtering_bound_logger(logging.getLevelName(log_level)),
        processors=processors,
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
        cache_logger_on_first_use=False,
    )


def get_logger(name: str) -> structlog.BoundLogger:
    """Get a structured logger for a module."""
    return structlog.get_logger(name)
