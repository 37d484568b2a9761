"""Tests for ``taskagent.agent.outcome`` — execution exception → callback."""

from __future__ import annotations

import pytest
from structlog.testing import capture_logs

from taskagent.agent import outcome
from taskagent.agent.exceptions import PollNextError, TaskExecutionError, TaskFailedError
from taskagent.agent.outcome import map_execution_error
from taskagent.core.config import Config
from taskagent.core.errors import OutcomeContractError
from taskagent.framework.logging import get_logger


class _RogueOutcome(TaskExecutionError):
    """A third variant no mapper knows about."""


def test_failed_with_interval(callback):
    state = Config({"cursor": 3})
    ex = TaskFailedError("boom", Config({"code": 1}), retry_interval=20)

    map_execution_error(callback, 9, state, ex)

    event = callback.only()
    assert event.kind == "failed"
    assert event.task_id == 9
    assert event.error == Config({"code": 1})
    assert event.state_params is state
    assert event.retry_interval == 20


def test_failed_without_interval(callback):
    map_execution_error(callback, 9, Config(), TaskFailedError.from_message("boom"))

    event = callback.only()
    assert event.kind == "failed"
    assert event.retry_interval is None
    assert event.error == Config({"message": "boom"})


def test_poll_next(callback):
    state = Config({"job_id": "j-1"})
    map_execution_error(callback, 4, state, PollNextError(45))

    event = callback.only()
    assert event.kind == "poll_next"
    assert event.retry_interval == 45
    assert event.state_params is state
    assert event.error is None


def test_unknown_variant_fails_loudly(callback):
    with pytest.raises(OutcomeContractError) as exc_info:
        map_execution_error(callback, 4, Config(), _RogueOutcome("??"))

    assert callback.events == []
    assert exc_info.value.context.task_id == 4
    assert isinstance(exc_info.value.__cause__, _RogueOutcome)


def test_unknown_variant_is_logged(callback, monkeypatch):
    with capture_logs() as logs:
        monkeypatch.setattr(outcome, "logger", get_logger(outcome.__name__))
        with pytest.raises(OutcomeContractError):
            map_execution_error(callback, 4, Config(), _RogueOutcome("??"))

    (event,) = [e for e in logs if e["event"] == "task.outcome_contract_violation"]
    assert event["log_level"] == "error"
    assert event["error_type"] == "_RogueOutcome"
