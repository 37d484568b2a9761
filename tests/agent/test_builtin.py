"""Tests for the built-in echo / fail / poll executors run through TaskRunner."""

from __future__ import annotations

import pytest

from taskagent.agent.builtin import (
    EchoExecutorFactory,
    FailExecutorFactory,
    PollExecutorFactory,
    builtin_factories,
)
from taskagent.agent.registry import ExecutorRegistry, default_registry
from taskagent.agent.runner import TaskRunner
from taskagent.core.config import Config


@pytest.fixture
def runner(callback) -> TaskRunner:
    return TaskRunner(callback, ExecutorRegistry(builtin_factories()))


def test_builtin_types():
    assert sorted(f.type for f in builtin_factories()) == ["echo", "fail", "poll"]
    assert default_registry().types() == ["echo", "fail", "poll"]


class TestEcho:
    def test_reports_message(self, runner, callback, make_request):
        runner.run(make_request({"echo>": "hello"}, {"kept": 1}))

        event = callback.only()
        assert event.kind == "succeeded"
        assert event.report.outputs == [Config({"message": "hello"})]
        assert event.state_params == Config({"kept": 1})

    def test_does_not_touch_request_state(self, make_request):
        request = make_request({"type": "echo", "command": "x"}, {"a": 1})
        executor = EchoExecutorFactory().new_executor(request)
        executor.get_state_params().set("a", 2)
        assert request.last_state_params == Config({"a": 1})


class TestFail:
    def test_command_is_message(self, runner, callback, make_request):
        runner.run(make_request({"fail>": "exit 3"}))

        event = callback.only()
        assert event.kind == "failed"
        assert event.error == Config({"message": "exit 3"})
        assert event.retry_interval is None

    def test_message_and_retry_interval_from_config(self, runner, callback, make_request):
        runner.run(make_request({"type": "fail", "message": "quota", "retry_interval": 120}))

        event = callback.only()
        assert event.error == Config({"message": "quota"})
        assert event.retry_interval == 120

    def test_default_message(self, callback, make_request):
        TaskRunner(callback, ExecutorRegistry([FailExecutorFactory()])).run(make_request({"type": "fail"}))
        assert callback.only().error.get("message", str) == "intentional task failure"


class TestPoll:
    def test_first_attempt_polls(self, runner, callback, make_request):
        runner.run(make_request({"poll>": "job", "interval": 7}))

        event = callback.only()
        assert event.kind == "poll_next"
        assert event.retry_interval == 7
        assert event.state_params == Config({"poll_count": 1})

    @pytest.mark.integration
    def test_state_carries_across_attempts(self, runner, callback, make_request):
        config = {"poll>": "job", "polls": 3, "interval": 1, "subtasks": {"+next": {"echo>": "done"}}}
        state: dict = {}

        for _ in range(3):
            callback.clear()
            runner.run(make_request(config, state))
            state = callback.only().state_params.to_dict()

        event = callback.only()
        assert event.kind == "succeeded"
        assert event.state_params == Config({"poll_count": 3})
        assert event.report.outputs == [Config({"poll_count": 3})]
        assert event.subtask_config == Config({"+next": {"echo>": "done"}})

    def test_single_poll_succeeds_immediately(self, callback, make_request):
        TaskRunner(callback, ExecutorRegistry([PollExecutorFactory()])).run(make_request({"poll>": "x", "polls": 1}))

        event = callback.only()
        assert event.kind == "succeeded"
        assert event.subtask_config == Config()
