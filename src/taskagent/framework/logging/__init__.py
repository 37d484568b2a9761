"""
Task agent logging - structured, task-aware logging.

This module provides:
- Structured logging with structlog
- Task context propagation via contextvars
- Timing utilities for attempt tracking
- Settings-based configuration

Usage:
    from taskagent.framework.logging import configure_logging, get_logger, log_step

    configure_logging()
    log = get_logger(__name__)

    with log_step("task.run"):
        executor.run()
"""

from taskagent.framework.logging.config import configure_logging, is_configured, reset_logging
from taskagent.framework.logging.context import (
    ContextToken,
    LogContext,
    bind_context,
    clear_context,
    get_context,
    get_logger,
    push_context,
    set_context,
)
from taskagent.framework.logging.timing import TimingResult, log_step, log_timing

__all__ = [
    # Configuration
    "configure_logging",
    "is_configured",
    "reset_logging",
    # Context
    "get_logger",
    "set_context",
    "clear_context",
    "get_context",
    "bind_context",
    "push_context",
    "ContextToken",
    "LogContext",
    # Timing
    "log_step",
    "log_timing",
    "TimingResult",
]
