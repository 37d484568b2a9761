"""Map execution exceptions onto attempt-completion callbacks."""

from __future__ import annotations

from taskagent.agent.exceptions import PollNextError, TaskExecutionError, TaskFailedError
from taskagent.agent.spi import TaskCallback
from taskagent.core.config import Config
from taskagent.core.errors import OutcomeContractError
from taskagent.framework.logging import get_logger

logger = get_logger(__name__)


def map_execution_error(
    callback: TaskCallback,
    task_id: int,
    next_state: Config,
    exc: TaskExecutionError,
) -> None:
    """Invoke the one callback matching *exc*.

    Raises:
        OutcomeContractError: If *exc* is neither a TaskFailedError nor a
            PollNextError; no callback is invoked in that case.
    """
    if isinstance(exc, TaskFailedError):
        logger.info(
            "task.failed",
            reason=exc.message,
            retry_interval=exc.retry_interval,
        )
        callback.task_failed(task_id, exc.error, next_state, exc.retry_interval)
    elif isinstance(exc, PollNextError):
        logger.info("task.poll_next", retry_interval=exc.retry_interval)
        callback.task_poll_next(task_id, next_state, exc.retry_interval)
    else:
        logger.error("task.outcome_contract_violation", error_type=type(exc).__name__, reason=str(exc))
        raise OutcomeContractError(
            f"{type(exc).__name__} is not a recognized execution outcome",
            cause=exc,
        ).with_context(task_id=task_id)
