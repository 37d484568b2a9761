"""
Configuration tree - ordered key/value documents for task configuration.

A :class:`Config` is the loosely typed document a workflow author writes
for a task: string keys in a defined order, mapped to strings, nested
documents or any JSON-like value.  Values are stored as plain Python
objects and only checked when read, using pydantic to validate the
requested type.

Manifesto:
    Task configuration arrives from YAML files and previous attempts, so
    nothing about its shape can be trusted up front.  Reads are typed and
    fail with a :class:`~taskagent.core.errors.ConfigError`; writes are
    unchecked.

Features:
    - **Ordered keys:** ``keys()`` follows insertion order
    - **Typed reads:** ``get(key, int)`` validates with ``pydantic.TypeAdapter``
    - **Fluent writes:** ``set()`` returns the tree for chaining
    - **Isolation:** ``deep_copy()`` shares nothing with the original

Examples:
    >>> config = Config({"sh>": "echo hi"})
    >>> config.keys()
    ['sh>']
    >>> config.set("retry", 3).get("retry", int)
    3

Tags:
    configuration, config-tree, pydantic, taskagent

Doc-Types:
    - API Reference
"""

from __future__ import annotations

import copy
from collections.abc import Mapping
from functools import lru_cache
from typing import Any, TypeVar

from pydantic import TypeAdapter
from pydantic import ValidationError as PydanticValidationError

from taskagent.core.errors import ConfigError, ConfigTypeError, MissingConfigKeyError

T = TypeVar("T")

_MISSING = object()


@lru_cache(maxsize=128)
def _adapter(type_: Any) -> TypeAdapter:
    return TypeAdapter(type_)


class Config:
    """Ordered, mutable configuration tree.

    Nested mappings are stored as plain dicts; ``get_nested`` and
    ``get(key, Config)`` hand back independent ``Config`` copies of them.
    """

    __slots__ = ("_data",)

    def __init__(self, data: Mapping[str, Any] | None = None) -> None:
        self._data: dict[str, Any] = {}
        if data:
            for key, value in data.items():
                self.set(key, value)

    # --- read -----------------------------------------------------------------

    def has(self, key: str) -> bool:
        """Return True if *key* is set."""
        return key in self._data

    def keys(self) -> list[str]:
        """Return keys in insertion order."""
        return list(self._data.keys())

    def get(self, key: str, type_: type[T] | Any = Any) -> T:
        """Return the value for *key* validated as *type_*.

        Raises:
            MissingConfigKeyError: If the key is not set
            ConfigTypeError: If the value does not validate as *type_*
        """
        if key not in self._data:
            raise MissingConfigKeyError(key)
        return self._convert(key, self._data[key], type_)

    def get_optional(self, key: str, type_: type[T] | Any = Any) -> T | None:
        """Return the value for *key*, or None when unset or null."""
        value = self._data.get(key)
        if value is None:
            return None
        return self._convert(key, value, type_)

    def get_or(self, key: str, type_: type[T] | Any, default: T) -> T:
        """Return the value for *key*, or *default* when unset or null."""
        value = self.get_optional(key, type_)
        return default if value is None else value

    def get_nested(self, key: str) -> Config:
        """Return the nested tree under *key* (an empty tree if unset)."""
        if key not in self._data or self._data[key] is None:
            return Config()
        return self.get(key, Config)

    def _convert(self, key: str, value: Any, type_: Any) -> Any:
        if type_ is Config:
            if not isinstance(value, Mapping):
                raise ConfigTypeError(key, Config, value)
            return Config(copy.deepcopy(dict(value)))
        if type_ is Any:
            return value
        try:
            return _adapter(type_).validate_python(value)
        except PydanticValidationError as e:
            raise ConfigTypeError(key, type_, value, cause=e) from e

    # --- write ----------------------------------------------------------------

    def set(self, key: str, value: Any) -> Config:
        """Set *key* to *value* and return self."""
        if not isinstance(key, str):
            raise ConfigError(f"Config keys must be strings, got {key!r}")
        if isinstance(value, Config):
            value = value.to_dict()
        self._data[key] = value
        return self

    def set_all(self, other: Config | Mapping[str, Any]) -> Config:
        """Set every key of *other*, overwriting existing values."""
        items = other.to_dict() if isinstance(other, Config) else other
        for key, value in items.items():
            self.set(key, value)
        return self

    def remove(self, key: str) -> Config:
        """Remove *key* if present and return self."""
        self._data.pop(key, None)
        return self

    # --- copy / export --------------------------------------------------------

    def deep_copy(self) -> Config:
        """Return a copy that shares no mutable state with this tree."""
        duplicate = Config()
        duplicate._data = copy.deepcopy(self._data)
        return duplicate

    def to_dict(self) -> dict[str, Any]:
        """Return a deep plain-dict copy of the tree."""
        return copy.deepcopy(self._data)

    def is_empty(self) -> bool:
        return not self._data

    # --- dunder helpers -------------------------------------------------------

    def __contains__(self, key: object) -> bool:
        return key in self._data

    def __len__(self) -> int:
        return len(self._data)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Config):
            return NotImplemented
        return self._data == other._data

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"Config({self._data!r})"
