"""Execution exceptions raised by executors to end an attempt early.

An executor reports anything other than plain success by raising one of
exactly two exception types:

- :class:`TaskFailedError` - the attempt failed for good.  Carries an
  error payload and, optionally, an informational retry interval.
- :class:`PollNextError` - the attempt is not finished.  Carries a
  mandatory retry interval and no payload; the dispatcher hands the
  executor's state params to the callback so the next attempt can resume.

:class:`TaskExecutionError` is the shared base and cannot be raised on its
own, so an execution exception always has either a payload or an interval.

Tags:
    taskagent, agent, exceptions, polling, retry

Doc-Types:
    api-reference
"""

from __future__ import annotations

from typing import Any

from taskagent.core.config import Config


def _check_interval(retry_interval: Any, *, required: bool) -> int | None:
    if retry_interval is None:
        if required:
            raise TypeError("retry_interval is required")
        return None
    if isinstance(retry_interval, bool) or not isinstance(retry_interval, int):
        raise TypeError(f"retry_interval must be an int number of seconds, got {retry_interval!r}")
    if retry_interval < 0:
        raise ValueError(f"retry_interval must not be negative, got {retry_interval}")
    return retry_interval


class TaskExecutionError(Exception):
    """Base of the two execution outcomes an executor may raise."""

    def __init__(self, message: str):
        if type(self) is TaskExecutionError:
            raise TypeError("raise TaskFailedError or PollNextError, not TaskExecutionError")
        super().__init__(message)
        self.message = message


class TaskFailedError(TaskExecutionError):
    """Terminal failure reported by an executor.

    Args:
        message: Human readable summary
        error: Structured failure description handed to the callback
        retry_interval: Seconds hint forwarded to the callback as-is

    Example:
        >>> raise TaskFailedError.from_message("exit code 2")
    """

    def __init__(self, message: str, error: Config, retry_interval: int | None = None):
        if not isinstance(error, Config):
            raise TypeError(f"error must be a Config, got {type(error).__name__}")
        super().__init__(message)
        self.error = error
        self.retry_interval = _check_interval(retry_interval, required=False)

    @classmethod
    def from_message(cls, message: str, retry_interval: int | None = None) -> TaskFailedError:
        """Build a failure whose payload is ``{"message": message}``."""
        return cls(message, Config().set("message", message), retry_interval)


class PollNextError(TaskExecutionError):
    """The attempt should be re-run after ``retry_interval`` seconds."""

    def __init__(self, retry_interval: int, message: str | None = None):
        interval = _check_interval(retry_interval, required=True)
        super().__init__(message or f"poll again in {interval}s")
        self.retry_interval: int = interval  # type: ignore[assignment]
