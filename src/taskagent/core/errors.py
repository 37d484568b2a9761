"""
Structured error types for the task agent.

Every error raised by the agent itself (as opposed to errors raised by
executor plugins) extends :class:`TaskAgentError`, which carries a
category, an explicit retry flag and structured context so that the
dispatcher can turn it into a failure payload without losing detail.

Manifesto:
    - **Typed Error Hierarchy:** Configuration problems and contract
      violations are different error types
    - **Explicit Retry Semantics:** Each error knows if it's retryable
    - **Rich Context:** Errors carry task metadata for logging
    - **Error Chaining:** Preserve original exceptions as ``cause``

Architecture:
    ::

        ┌──────────────────────────────────────────────────────────┐
        │                     TaskAgentError                        │
        │  (category, retryable, retry_after, context, cause)      │
        ├──────────────────────────────────────────────────────────┤
        │                                                          │
        │  ConfigError (CONFIG)          OutcomeContractError      │
        │       │                        (INTERNAL)                │
        │  MissingConfigKeyError                                   │
        │  ConfigTypeError                                         │
        │  UnknownTaskTypeError                                    │
        │  DuplicateTaskTypeError                                  │
        └──────────────────────────────────────────────────────────┘

Guardrails:
    ❌ DON'T: Set retryable=True for configuration errors
    ✅ DO: Let the error type's default_retryable handle it

Tags:
    error-handling, exception-hierarchy, error-context, taskagent

Doc-Types:
    - API Reference
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class ErrorCategory(str, Enum):
    """Standard error categories for classification and routing."""

    CONFIG = "CONFIG"             # Missing keys, wrong types, unknown operator types
    INTERNAL = "INTERNAL"         # Bugs, broken plugin contracts


@dataclass
class ErrorContext:
    """
    Structured metadata attached to an error.

    Attributes:
        task_id: Identifier of the task whose attempt failed
        task: Full display name of the task
        operator_type: Resolved operator type, when known
        metadata: Additional key-value pairs
    """

    task_id: int | None = None
    task: str | None = None
    operator_type: str | None = None
    metadata: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for logging."""
        result: dict[str, Any] = {}
        for key in ["task_id", "task", "operator_type"]:
            value = getattr(self, key)
            if value is not None:
                result[key] = value
        if self.metadata:
            result.update(self.metadata)
        return result


class TaskAgentError(Exception):
    """
    Base exception for all task agent errors.

    Subclasses set ``default_category`` and ``default_retryable`` so that
    callers rarely need to pass them explicitly.

    Examples:
        >>> error = TaskAgentError("Something went wrong")
        >>> error.category
        <ErrorCategory.INTERNAL: 'INTERNAL'>
        >>> error.retryable
        False
    """

    default_category: ErrorCategory = ErrorCategory.INTERNAL

    default_retryable: bool = False

    def __init__(
        self,
        message: str,
        *,
        category: ErrorCategory | None = None,
        retryable: bool | None = None,
        retry_after: int | None = None,
        context: ErrorContext | None = None,
        cause: Exception | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.category = category or self.default_category
        self.retryable = retryable if retryable is not None else self.default_retryable
        self.retry_after = retry_after
        self.context = context or ErrorContext()
        self.cause = cause
        if cause is not None:
            self.__cause__ = cause

    def with_context(self, **kwargs: Any) -> TaskAgentError:
        """
        Add context to this error (fluent API).

        Usage:
            raise UnknownTaskTypeError("sh").with_context(task_id=7)
        """
        for key, value in kwargs.items():
            if hasattr(self.context, key) and key != "metadata":
                setattr(self.context, key, value)
            else:
                self.context.metadata[key] = value
        return self

    def to_dict(self) -> dict[str, Any]:
        """Convert error to dictionary for logging/serialization."""
        result: dict[str, Any] = {
            "error_type": self.__class__.__name__,
            "message": self.message,
            "category": self.category.value,
            "retryable": self.retryable,
        }
        if self.retry_after is not None:
            result["retry_after"] = self.retry_after
        context_dict = self.context.to_dict()
        if context_dict:
            result["context"] = context_dict
        if self.cause is not None:
            result["cause"] = str(self.cause)
        return result

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.message!r}, category={self.category.value})"


# =============================================================================
# CONFIGURATION ERRORS (Never Retryable)
# =============================================================================


class ConfigError(TaskAgentError):
    """Task configuration is missing, malformed or references unknown types."""

    default_category = ErrorCategory.CONFIG
    default_retryable = False


class MissingConfigKeyError(ConfigError):
    """A required key is absent from a configuration tree."""

    def __init__(self, key: str, message: str | None = None):
        super().__init__(message or f"Parameter '{key}' is required but not set")
        self.key = key


class ConfigTypeError(ConfigError):
    """A configuration value cannot be read as the requested type."""

    def __init__(self, key: str, expected: Any, value: Any, cause: Exception | None = None):
        expected_name = getattr(expected, "__name__", str(expected))
        super().__init__(
            f"Parameter '{key}' is expected to be {expected_name} but got {value!r}",
            cause=cause,
        )
        self.key = key
        self.expected = expected
        self.value = value


class UnknownTaskTypeError(ConfigError):
    """No executor factory is registered for the resolved operator type."""

    def __init__(self, operator_type: str, available: list[str] | None = None):
        message = f"Unknown task type: {operator_type}"
        if available is not None:
            message += f" (available: {', '.join(available) or 'none'})"
        super().__init__(message)
        self.operator_type = operator_type
        self.context.operator_type = operator_type


class DuplicateTaskTypeError(ConfigError):
    """Two executor factories claim the same operator type."""

    def __init__(self, operator_type: str):
        super().__init__(f"Executor factory for type '{operator_type}' is already registered")
        self.operator_type = operator_type


# =============================================================================
# INTERNAL ERRORS
# =============================================================================


class OutcomeContractError(TaskAgentError):
    """An execution outcome arrived in a shape the outcome mapper cannot handle."""

    default_category = ErrorCategory.INTERNAL
    default_retryable = False
