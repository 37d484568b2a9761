"""Tests for ``taskagent.agent.resolver`` — operator type resolution."""

from __future__ import annotations

import pytest

from taskagent.agent.resolver import find_command_key, resolve_operator_type
from taskagent.core.config import Config
from taskagent.core.errors import ConfigTypeError


class TestExplicitType:
    def test_type_used_verbatim(self):
        resolution = resolve_operator_type(Config({"type": "sh", "command": "ls"}))
        assert resolution.operator_type == "sh"
        assert resolution.config.to_dict() == {"type": "sh", "command": "ls"}

    def test_explicit_type_wins_over_shorthand(self):
        config = Config({"py>": "tasks.run", "type": "sh"})
        resolution = resolve_operator_type(config)
        assert resolution.operator_type == "sh"
        assert not config.has("command")

    def test_non_string_type_raises(self):
        with pytest.raises(ConfigTypeError):
            resolve_operator_type(Config({"type": 42}))


class TestShorthand:
    def test_shorthand_key_normalized(self):
        resolution = resolve_operator_type(Config({"foo>": "bar"}))
        assert resolution.operator_type == "foo"
        assert resolution.config.get("type", str) == "foo"
        assert resolution.config.get("command", str) == "bar"

    def test_shorthand_key_kept(self):
        resolution = resolve_operator_type(Config({"foo>": "bar"}))
        assert resolution.config.keys() == ["foo>", "type", "command"]

    def test_first_key_in_order_wins(self):
        config = Config({"retry": 3, "sh>": "a", "py>": "b"})
        assert resolve_operator_type(config).operator_type == "sh"
        assert config.get("command") == "a"

    def test_command_value_copied_as_is(self):
        resolution = resolve_operator_type(Config({"http>": {"url": "x", "method": "GET"}}))
        assert resolution.config.get("command") == {"url": "x", "method": "GET"}

    def test_mutates_given_config(self):
        config = Config({"foo>": "bar"})
        resolution = resolve_operator_type(config)
        assert resolution.config is config
        assert config.get("type", str) == "foo"

    def test_custom_suffix(self):
        config = Config({"foo>": "ignored", "bar::": "cmd"})
        resolution = resolve_operator_type(config, suffix="::")
        assert resolution.operator_type == "bar"

    def test_bare_suffix_key_resolves_to_empty_type(self):
        assert resolve_operator_type(Config({">": "x"})).operator_type == ""


class TestUntyped:
    def test_empty_config_resolves_to_none(self):
        assert resolve_operator_type(Config()) is None

    def test_no_shorthand_resolves_to_none(self):
        config = Config({"command": "ls", "_export": {"a": 1}})
        assert resolve_operator_type(config) is None
        assert config.keys() == ["command", "_export"]


def test_find_command_key():
    assert find_command_key(Config({"a": 1, "sh>": 2})) == "sh>"
    assert find_command_key(Config({"a": 1})) is None
