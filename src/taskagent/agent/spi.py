"""Plugin interfaces and attempt data model.

Manifesto:
The dispatcher never imports an executor implementation.  Everything it
knows about plugins, callbacks and the values that flow between them is
declared here: ``typing.Protocol`` interfaces for the collaborators and
frozen dataclasses for the values.

ARCHITECTURE
────────────
::

    TaskRequest ─(config normalized)─▶ ExecutorFactory.new_executor()
                                           │
                                           ▼
                                       Executor.run() ──▶ TaskResult
                                       Executor.get_state_params()
                                           │
                                           ▼
                                       TaskCallback
                                         ├── task_succeeded
                                         ├── task_failed
                                         └── task_poll_next

Tags:
    taskagent, agent, spi, protocol, plugin, interface

Doc-Types:
    api-reference
"""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass, field
from typing import Protocol, runtime_checkable

from taskagent.core.config import Config


@dataclass(frozen=True)
class TaskInfo:
    """Identity of the task an attempt belongs to."""

    id: int
    full_name: str


@dataclass(frozen=True)
class TaskRequest:
    """One attempt of one task.

    ``last_state_params`` is whatever the previous attempt's executor
    left behind; it is empty on the first attempt.  Dispatch never mutates
    a request: it deep-copies ``config`` and hands factories a new
    request built with :meth:`with_config`.
    """

    task_info: TaskInfo
    config: Config = field(default_factory=Config)
    last_state_params: Config = field(default_factory=Config)

    @property
    def task_id(self) -> int:
        return self.task_info.id

    def with_config(self, config: Config) -> TaskRequest:
        """Return a copy of this request carrying *config*."""
        return dataclasses.replace(self, config=config)


@dataclass(frozen=True)
class TaskReport:
    """Outcome payload of a successful attempt."""

    inputs: list[Config] = field(default_factory=list)
    outputs: list[Config] = field(default_factory=list)
    carry_params: Config = field(default_factory=Config)

    @classmethod
    def empty(cls) -> TaskReport:
        return cls()

    def is_empty(self) -> bool:
        return not self.inputs and not self.outputs and self.carry_params.is_empty()


@dataclass(frozen=True)
class TaskResult:
    """Produced by an executor that completed normally.

    ``subtask_config`` describes child work generated by the task; it is
    an empty tree when there is none.
    """

    subtask_config: Config = field(default_factory=Config)
    report: TaskReport = field(default_factory=TaskReport.empty)

    @classmethod
    def empty(cls) -> TaskResult:
        return cls()


@runtime_checkable
class Executor(Protocol):
    """Runs one attempt.

    ``get_state_params`` must be callable after ``run`` whether ``run``
    returned or raised; the dispatcher always calls it.
    """

    def run(self) -> TaskResult:
        """Execute the attempt.

        Raises:
            TaskFailedError: Terminal failure with an error payload
            PollNextError: Not finished yet, call again after the interval
        """
        ...

    def get_state_params(self) -> Config:
        ...


@runtime_checkable
class ExecutorFactory(Protocol):
    """Builds executors for one operator type.

    Example implementation:
        >>> class ShFactory:
        ...     type = "sh"
        ...
        ...     def new_executor(self, request: TaskRequest) -> Executor:
        ...         return ShExecutor(request)
    """

    type: str

    def new_executor(self, request: TaskRequest) -> Executor:
        ...


@runtime_checkable
class TaskCallback(Protocol):
    """Receives exactly one notification per attempt."""

    def task_succeeded(
        self,
        task_id: int,
        state_params: Config,
        subtask_config: Config,
        report: TaskReport,
    ) -> None:
        ...

    def task_failed(
        self,
        task_id: int,
        error: Config,
        state_params: Config,
        retry_interval: int | None,
    ) -> None:
        ...

    def task_poll_next(
        self,
        task_id: int,
        state_params: Config,
        retry_interval: int,
    ) -> None:
        ...
