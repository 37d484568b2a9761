"""
TaskRunner - dispatch one task attempt to its executor.

The runner is the only place where operator-type resolution, the
executor registry and the outcome taxonomy meet.  One call to
:meth:`TaskRunner.run` handles one attempt and ends in exactly one
callback notification:

    ┌────────────────────────────┬───────────────────────────────────────┐
    │ Outcome                    │ Callback                              │
    ├────────────────────────────┼───────────────────────────────────────┤
    │ no operator type           │ task_succeeded (empty report)         │
    │ executor returned          │ task_succeeded                        │
    │ TaskFailedError            │ task_failed (executor payload)        │
    │ PollNextError              │ task_poll_next                        │
    │ unknown type / any other   │ task_failed (synthesized payload,     │
    │ exception                  │ no retry interval)                    │
    └────────────────────────────┴───────────────────────────────────────┘

Whatever the outcome, the state params handed to the callback are the
executor's state params *after* its run, falling back to the request's
carried state when no executor was built.

Usage:
    runner = TaskRunner(callback, ExecutorRegistry([ShFactory()]))
    runner.run(request)
"""

from __future__ import annotations

import traceback

from taskagent.agent.exceptions import TaskExecutionError
from taskagent.agent.outcome import map_execution_error
from taskagent.agent.registry import ExecutorRegistry
from taskagent.agent.resolver import resolve_operator_type
from taskagent.agent.scope import task_scope
from taskagent.agent.spi import Executor, ExecutorFactory, TaskCallback, TaskRequest, TaskResult
from taskagent.core.config import Config
from taskagent.core.errors import TaskAgentError, UnknownTaskTypeError
from taskagent.core.settings import TaskAgentSettings, get_settings
from taskagent.framework.logging import bind_context, get_logger, log_step, log_timing

logger = get_logger(__name__)


class TaskRunner:
    """
    Runs task attempts against a fixed executor registry.

    The runner holds no per-attempt state, so one instance can serve any
    number of worker threads.  Errors raised by the callback itself are
    not caught.
    """

    def __init__(
        self,
        callback: TaskCallback,
        registry: ExecutorRegistry,
        *,
        settings: TaskAgentSettings | None = None,
    ) -> None:
        self.callback = callback
        self.registry = registry
        self.settings = settings or get_settings()

    def run(self, request: TaskRequest) -> None:
        """Run one attempt and report its outcome to the callback."""
        task_id = request.task_id
        config = request.config.deep_copy()
        next_state = request.last_state_params

        with task_scope(request.task_info, self.settings):
            try:
                resolution = resolve_operator_type(config, self.settings.command_suffix)
                if resolution is None:
                    logger.warning("task.no_operator_type", keys=config.keys())
                    result = TaskResult.empty()
                else:
                    bind_context(operator_type=resolution.operator_type)
                    factory = self.registry.lookup(resolution.operator_type)
                    if factory is None:
                        raise UnknownTaskTypeError(resolution.operator_type, self.registry.types())

                    executor = self._build_executor(factory, request.with_config(resolution.config))
                    try:
                        with log_step("task.run", expected=(TaskExecutionError,)):
                            result = executor.run()
                    finally:
                        next_state = executor.get_state_params()

                    if not isinstance(result, TaskResult):
                        raise TypeError(
                            f"{type(executor).__name__}.run() returned {type(result).__name__}, expected TaskResult"
                        )

            except TaskExecutionError as ex:
                map_execution_error(self.callback, task_id, next_state, ex)

            except Exception as ex:
                logger.error(
                    "task.error",
                    error_type=type(ex).__name__,
                    error_message=str(ex),
                    exc_info=not isinstance(ex, TaskAgentError),
                )
                self.callback.task_failed(task_id, make_exception_error(ex), next_state, None)

            else:
                logger.info(
                    "task.succeeded",
                    has_subtasks=not result.subtask_config.is_empty(),
                )
                self.callback.task_succeeded(task_id, next_state, result.subtask_config, result.report)

    @log_timing("task.build_executor", log_start=False, level="debug")
    def _build_executor(self, factory: ExecutorFactory, request: TaskRequest) -> Executor:
        return factory.new_executor(request)


def make_exception_error(ex: BaseException) -> Config:
    """
    Build the failure payload for an unexpected exception.

    ``error`` holds ``"<qualified class>: <message>"`` and ``stacktrace``
    the traceback frames, outermost first, flattened into one string.
    Errors from the agent's own hierarchy also contribute their
    structured fields (``category``, ``retryable``, ...).
    """
    error = Config()
    error.set("error", _describe(ex))
    error.set(
        "stacktrace",
        ", ".join(
            f"{frame.name}({frame.filename}:{frame.lineno})"
            for frame in traceback.extract_tb(ex.__traceback__)
        ),
    )
    if isinstance(ex, TaskAgentError):
        details = ex.to_dict()
        details["retryable"] = False
        error.set_all(details)
    return error


def _describe(ex: BaseException) -> str:
    cls = type(ex)
    name = cls.__qualname__ if cls.__module__ == "builtins" else f"{cls.__module__}.{cls.__qualname__}"
    message = str(ex)
    return f"{name}: {message}" if message else name
