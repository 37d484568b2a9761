"""
Logging context management using contextvars.

This module provides task-aware context that automatically attaches to
all log entries.  Context is propagated through the call stack without
explicit parameter passing, so an executor plugin logging from deep
inside its ``run()`` still reports which task it belongs to.

Design choice: contextvars
- Thread-safe and asyncio-compatible
- Each worker thread running an attempt sees only its own context
- Clean integration with structlog processors
"""

from contextvars import ContextVar, Token
from dataclasses import asdict, dataclass
from typing import Any

import structlog


@dataclass
class LogContext:
    """
    Execution context attached to all log entries.

    Task identifiers:
        task_id: Numeric id of the task being attempted
        task: Full display name of the task
        operator_type: Resolved operator type, once known

    Tracing (for nested timing blocks):
        span_id: Current span identifier
        parent_span_id: Parent span for nested operations

    Step context:
        step: Current processing step name
    """

    task_id: int | None = None
    task: str | None = None
    operator_type: str | None = None

    span_id: str | None = None
    parent_span_id: str | None = None

    step: str | None = None

    def to_dict(self) -> dict[str, Any]:
        """Return non-None fields as dict."""
        return {k: v for k, v in asdict(self).items() if v is not None}

    def merge(self, **kwargs) -> "LogContext":
        """Create new context with merged values."""
        current = asdict(self)
        current.update({k: v for k, v in kwargs.items() if v is not None})
        return LogContext(**current)


_log_context: ContextVar[LogContext] = ContextVar("log_context")  # noqa: B039


def get_context() -> LogContext:
    """Get the current log context."""
    return _log_context.get(LogContext())


def set_context(
    task_id: int | None = None,
    task: str | None = None,
    operator_type: str | None = None,
    span_id: str | None = None,
    parent_span_id: str | None = None,
    step: str | None = None,
) -> LogContext:
    """
    Set the current log context.

    This replaces the current context. Use bind_context() to add to existing.
    """
    ctx = LogContext(
        task_id=task_id,
        task=task,
        operator_type=operator_type,
        span_id=span_id,
        parent_span_id=parent_span_id,
        step=step,
    )
    _log_context.set(ctx)
    return ctx


def bind_context(**kwargs) -> LogContext:
    """Merge values into the current context and return the result."""
    updated = get_context().merge(**kwargs)
    _log_context.set(updated)
    return updated


def clear_context() -> None:
    """Clear the current context (reset to empty)."""
    _log_context.set(LogContext())


class ContextToken:
    """Token for restoring context after a scoped operation."""

    def __init__(self, token: Token):
        self._token = token

    def restore(self) -> None:
        """Restore the previous context."""
        _log_context.reset(self._token)


def push_context(**kwargs) -> ContextToken:
    """
    Push new context values, returning a token to restore later.

    Usage:
        token = push_context(step="resolve")
        try:
            do_work()
        finally:
            token.restore()
    """
    updated = get_context().merge(**kwargs)
    token = _log_context.set(updated)
    return ContextToken(token)


def add_context_processor(
    logger: Any,
    method_name: str,
    event_dict: dict[str, Any],
) -> dict[str, Any]:
    """
    Structlog processor that adds task context to every log entry.

    Explicit keys passed to the log call win over context values.
    """
    for key, value in get_context().to_dict().items():
        if key not in event_dict:
            event_dict[key] = value
    return event_dict


def get_logger(name: str | None = None) -> Any:
    """Get a structured logger that includes task context in every entry."""
    return structlog.get_logger(name)
