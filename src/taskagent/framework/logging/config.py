"""
Logging configuration.

Provides a single entry point for configuring structured logging.
Level and output format come from explicit arguments or, when omitted,
from :class:`~taskagent.core.settings.TaskAgentSettings`
(``TASKAGENT_LOG_LEVEL`` / ``TASKAGENT_LOG_FORMAT``).

Usage:
    from taskagent.framework.logging import configure_logging
    configure_logging()

    # Or with explicit settings
    configure_logging(level="DEBUG", format="json")
"""

import logging
import sys
from typing import Literal

import structlog
from structlog.types import Processor

from taskagent.core.settings import LOG_LEVELS, LogLevel, get_settings
from taskagent.framework.logging.context import add_context_processor

_configured = False


def configure_logging(
    level: LogLevel | None = None,
    format: Literal["json", "console"] | None = None,
    force: bool = False,
) -> None:
    """
    Configure structured logging for the process.

    Should be called once at startup (CLI entry, worker startup, etc.).
    Subsequent calls are no-ops unless force=True.

    Args:
        level: Log level (overrides TASKAGENT_LOG_LEVEL)
        format: Output format (overrides TASKAGENT_LOG_FORMAT)
        force: Reconfigure even if already configured

    Raises:
        ValueError: If *level* is not one of DEBUG, INFO, WARNING, ERROR
    """
    global _configured

    if _configured and not force:
        return

    settings = get_settings()
    log_level = (level or settings.log_level).upper()
    if log_level not in LOG_LEVELS:
        raise ValueError(f"Unknown log level {level!r}, expected one of {', '.join(LOG_LEVELS)}")
    log_format = (format or settings.log_format).lower()

    processors: list[Processor] = [
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        add_context_processor,
        structlog.processors.format_exc_info,
        structlog.processors.StackInfoRenderer(),
    ]

    if log_format == "json":
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(
            structlog.dev.ConsoleRenderer(
                colors=sys.stderr.isatty(),
                exception_formatter=structlog.dev.plain_traceback,
            )
        )

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    logging.basicConfig(
        format="%(message)s",
        stream=sys.stderr,
        level=getattr(logging, log_level),
        force=True,
    )
    logging.getLogger("taskagent").setLevel(getattr(logging, log_level))

    _configured = True


def reset_logging() -> None:
    """Return structlog to its defaults (primarily for testing)."""
    global _configured
    structlog.reset_defaults()
    _configured = False


def is_configured() -> bool:
    """Check if logging has been configured."""
    return _configured
