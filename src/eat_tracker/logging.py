"""Structured logging for eat_tracker.

Services log event-style keys with structured fields, e.g.

    logger.warning("malformed_error_skipped", error_id=error.id)

Output is pretty console lines during development and one JSON object
per line when EAT_TRACKER_LOG_JSON_OUTPUT is set.
"""

import logging
import sys
from typing import Any

import structlog

from eat_tracker.config import LoggingSettings

__all__ = [
    "configure_from_settings",
    "configure_logging",
    "get_logger",
]


def _resolve_level(level: int | str) -> int:
    if isinstance(level, int):
        return level
    return logging.getLevelNamesMapping().get(level.upper(), logging.INFO)


def configure_logging(
    level: int | str = logging.INFO,
    json_output: bool = False,
    add_timestamp: bool = True,
) -> None:
    """Configure structlog on top of the standard library root logger.

    Args:
        level: Numeric level or level name; unknown names mean INFO
        json_output: Render JSON lines instead of console output
        add_timestamp: Prefix entries with an ISO timestamp
    """
    processors: list[Any] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
    ]
    if add_timestamp:
        processors.insert(0, structlog.processors.TimeStamper(fmt="iso"))

    if json_output:
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(
            structlog.dev.ConsoleRenderer(
                colors=False,
                exception_formatter=structlog.dev.plain_traceback,
            )
        )

    # Loggers cached before a reconfigure hold the configured list, so update it in place.
    configured: list[Any] = structlog.get_config()["processors"]
    configured[:] = processors

    structlog.configure(
        processors=configured,
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    resolved = _resolve_level(level)
    logging.basicConfig(format="%(message)s", stream=sys.stdout, level=resolved)
    logging.getLogger("eat_tracker").setLevel(resolved)


def configure_from_settings(settings: LoggingSettings | None = None) -> None:
    """Configure logging from EAT_TRACKER_LOG_* settings."""
    settings = settings or LoggingSettings()
    configure_logging(level=settings.level, json_output=settings.json_output)


def get_logger(name: str | None = None) -> structlog.stdlib.BoundLogger:
    """Get a structlog logger, usually named after the calling module."""
    return structlog.get_logger(name)


_configured = False


def _ensure_configured() -> None:
    global _configured
    if not _configured:
        configure_from_settings()
        _configured = True


_ensure_configured()
