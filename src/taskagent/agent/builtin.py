"""Built-in demonstration executors.

WHY
───
New users, the CLI and integration tests need concrete executors to
exercise the dispatcher.  Each operator type here shows one of the three
attempt outcomes.

ARCHITECTURE
────────────
::

    echo>: <message>       ─ succeed, report the message as an output
    fail>: <message>       ─ raise TaskFailedError (optional retry_interval)
    poll>: <label>         ─ raise PollNextError until ``polls`` attempts
                             have been made, then succeed; the attempt
                             count survives in state param ``poll_count``

Usage::

    from taskagent.agent.registry import default_registry
    TaskRunner(callback, default_registry()).run(request)

Related modules:
    registry.py — default_registry() registers these factories
"""

from __future__ import annotations

from taskagent.agent.exceptions import PollNextError, TaskFailedError
from taskagent.agent.spi import ExecutorFactory, TaskReport, TaskRequest, TaskResult
from taskagent.core.config import Config
from taskagent.framework.logging import get_logger

logger = get_logger(__name__)


class _BaseExecutor:
    """Holds the request and a private copy of the carried state params."""

    def __init__(self, request: TaskRequest):
        self.request = request
        self.config = request.config
        self.state = request.last_state_params.deep_copy()

    def get_state_params(self) -> Config:
        return self.state


# ── echo ─────────────────────────────────────────────────────────────────


class EchoExecutor(_BaseExecutor):
    def run(self) -> TaskResult:
        message = self.config.get_or("command", str, "")
        logger.info("echo", message=message)
        report = TaskReport(outputs=[Config().set("message", message)])
        return TaskResult(report=report)


class EchoExecutorFactory:
    type = "echo"

    def new_executor(self, request: TaskRequest) -> EchoExecutor:
        return EchoExecutor(request)


# ── fail ─────────────────────────────────────────────────────────────────


class FailExecutor(_BaseExecutor):
    """Always fails; useful for exercising failure handling."""

    def run(self) -> TaskResult:
        message = self.config.get_or("command", str, "") or self.config.get_or(
            "message", str, "intentional task failure"
        )
        retry_interval = self.config.get_optional("retry_interval", int)
        raise TaskFailedError.from_message(message, retry_interval)


class FailExecutorFactory:
    type = "fail"

    def new_executor(self, request: TaskRequest) -> FailExecutor:
        return FailExecutor(request)


# ── poll ─────────────────────────────────────────────────────────────────


class PollExecutor(_BaseExecutor):
    """Polls an imaginary external job that finishes after ``polls`` checks.

    Config:
        polls: number of attempts before the job counts as done (default 3)
        interval: seconds between attempts (default 10)
        subtasks: optional subtask configuration emitted on completion
    """

    def run(self) -> TaskResult:
        polls = self.config.get_or("polls", int, 3)
        interval = self.config.get_or("interval", int, 10)

        count = self.state.get_or("poll_count", int, 0) + 1
        self.state.set("poll_count", count)

        if count < polls:
            logger.debug("poll.pending", poll_count=count, polls=polls)
            raise PollNextError(interval)

        logger.info("poll.done", poll_count=count)
        report = TaskReport(outputs=[Config().set("poll_count", count)])
        return TaskResult(subtask_config=self.config.get_nested("subtasks"), report=report)


class PollExecutorFactory:
    type = "poll"

    def new_executor(self, request: TaskRequest) -> PollExecutor:
        return PollExecutor(request)


def builtin_factories() -> list[ExecutorFactory]:
    """Fresh instances of every built-in executor factory."""
    return [EchoExecutorFactory(), FailExecutorFactory(), PollExecutorFactory()]
