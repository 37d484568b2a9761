"""
Test doubles for the task agent.

``RecordingCallback`` stands in for the attempt-completion transport and
records every notification; ``StaticExecutorFactory`` builds executors from
plain callables so a test can script exactly what ``run()`` does and how
state params change.

Usage:
    callback = RecordingCallback()
    factory = StaticExecutorFactory("sh", run=lambda ex: TaskResult.empty())
    TaskRunner(callback, ExecutorRegistry([factory])).run(request)
    event = callback.only()
    assert event.kind == "succeeded"
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Literal

from taskagent.agent.spi import TaskReport, TaskRequest, TaskResult
from taskagent.core.config import Config

CallbackKind = Literal["succeeded", "failed", "poll_next"]


@dataclass
class CallbackEvent:
    """One recorded callback notification."""

    kind: CallbackKind
    task_id: int
    state_params: Config
    error: Config | None = None
    retry_interval: int | None = None
    subtask_config: Config | None = None
    report: TaskReport | None = None


@dataclass
class RecordingCallback:
    """In-memory TaskCallback that records notifications in order."""

    events: list[CallbackEvent] = field(default_factory=list)

    def task_succeeded(
        self,
        task_id: int,
        state_params: Config,
        subtask_config: Config,
        report: TaskReport,
    ) -> None:
        self.events.append(
            CallbackEvent(
                "succeeded",
                task_id,
                state_params,
                subtask_config=subtask_config,
                report=report,
            )
        )

    def task_failed(
        self,
        task_id: int,
        error: Config,
        state_params: Config,
        retry_interval: int | None,
    ) -> None:
        self.events.append(
            CallbackEvent("failed", task_id, state_params, error=error, retry_interval=retry_interval)
        )

    def task_poll_next(self, task_id: int, state_params: Config, retry_interval: int) -> None:
        self.events.append(CallbackEvent("poll_next", task_id, state_params, retry_interval=retry_interval))

    def only(self) -> CallbackEvent:
        """Return the single recorded event, failing if there is not exactly one."""
        if len(self.events) != 1:
            raise AssertionError(f"expected exactly one callback, got {[e.kind for e in self.events]}")
        return self.events[0]

    def clear(self) -> None:
        self.events.clear()


class StaticExecutor:
    """Executor whose behavior is a callable receiving the executor itself."""

    def __init__(self, request: TaskRequest, run: Callable[[StaticExecutor], TaskResult], state: Config):
        self.request = request
        self.state = state
        self._run = run

    def run(self) -> TaskResult:
        return self._run(self)

    def get_state_params(self) -> Config:
        return self.state


class StaticExecutorFactory:
    """Factory for scripted executors; records the requests it received."""

    def __init__(
        self,
        type_: str,
        run: Callable[[StaticExecutor], TaskResult] | None = None,
        state: Config | None = None,
    ):
        self.type = type_
        self._run = run or (lambda executor: TaskResult.empty())
        self._state = state
        self.requests: list[TaskRequest] = []

    def new_executor(self, request: TaskRequest) -> StaticExecutor:
        self.requests.append(request)
        state = self._state.deep_copy() if self._state is not None else request.last_state_params.deep_copy()
        return StaticExecutor(request, self._run, state)
