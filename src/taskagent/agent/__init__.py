"""
Task agent - single-attempt task dispatch.

Resolves a task's operator type, runs the matching executor plugin and
reports the outcome (success, failure or poll-next) to a callback.

Usage:
    from taskagent.agent import ExecutorRegistry, TaskInfo, TaskRequest, TaskRunner

    runner = TaskRunner(callback, ExecutorRegistry(factories))
    runner.run(TaskRequest(TaskInfo(1, "+main+step"), Config({"sh>": "make"})))
"""

from taskagent.agent.exceptions import PollNextError, TaskExecutionError, TaskFailedError
from taskagent.agent.outcome import map_execution_error
from taskagent.agent.registry import ExecutorRegistry, default_registry
from taskagent.agent.resolver import Resolution, resolve_operator_type
from taskagent.agent.runner import TaskRunner, make_exception_error
from taskagent.agent.scope import task_scope
from taskagent.agent.spi import (
    Executor,
    ExecutorFactory,
    TaskCallback,
    TaskInfo,
    TaskReport,
    TaskRequest,
    TaskResult,
)

__all__ = [
    # Dispatch
    "TaskRunner",
    "make_exception_error",
    "map_execution_error",
    "resolve_operator_type",
    "Resolution",
    "task_scope",
    # Registry
    "ExecutorRegistry",
    "default_registry",
    # Plugin interfaces
    "Executor",
    "ExecutorFactory",
    "TaskCallback",
    "TaskInfo",
    "TaskRequest",
    "TaskReport",
    "TaskResult",
    # Execution outcomes
    "TaskExecutionError",
    "TaskFailedError",
    "PollNextError",
]
