"""Operator-type resolution for task configuration.

A task names its operator either canonically::

    type: sh
    command: echo hello

or with the shorthand form, where a key ending in the command suffix
(``>`` by default) names the operator and its value is the command::

    sh>: echo hello

Both resolve to type ``sh``; the shorthand form is rewritten in place to
carry ``type`` and ``command`` keys.  A configuration with neither is not
an error: it resolves to nothing and the attempt succeeds as a no-op.
"""

from __future__ import annotations

from dataclasses import dataclass

from taskagent.core.config import Config

DEFAULT_COMMAND_SUFFIX = ">"


@dataclass(frozen=True)
class Resolution:
    operator_type: str
    config: Config


def find_command_key(config: Config, suffix: str = DEFAULT_COMMAND_SUFFIX) -> str | None:
    """Return the first key, in key order, that ends with *suffix*."""
    return next((key for key in config.keys() if key.endswith(suffix)), None)


def resolve_operator_type(config: Config, suffix: str = DEFAULT_COMMAND_SUFFIX) -> Resolution | None:
    """Determine the operator type of *config*, normalizing shorthand keys.

    Mutates *config*; callers pass a deep copy.

    Raises:
        ConfigTypeError: If ``type`` is set but is not a string
    """
    if not config.has("type"):
        command_key = find_command_key(config, suffix)
        if command_key is None:
            return None
        config.set("type", command_key[: -len(suffix)])
        config.set("command", config.get(command_key))
    return Resolution(config.get("type", str), config)
