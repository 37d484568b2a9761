"""Executor Registry — immutable operator type → factory lookup.

Manifesto:
The dispatcher needs to resolve ``"sh"`` to the factory that builds
shell executors.  The registry is built once at process startup from
a known (or discovered) set of factories and never changes afterwards,
so worker threads can read it concurrently without locking.

ARCHITECTURE
────────────
::

    ExecutorRegistry(factories)
      ├── .lookup(type)     ─ factory or None
      ├── .types()          ─ sorted registered names
      └── type in registry  ─ existence check

    ExecutorRegistry.from_entry_points(group)  ─ discover installed plugins
    default_registry()                         ─ built-in executors only

Duplicate operator types are rejected when the registry is built
(``DuplicateTaskTypeError``), so each name maps to one factory for the
lifetime of the registry.

Related modules:
    runner.py  — TaskRunner uses the registry
    builtin.py — demonstration executor factories

Tags:
    taskagent, agent, registry, plugin-discovery, lookup

Doc-Types:
    api-reference
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Mapping
from importlib.metadata import entry_points
from types import MappingProxyType

from taskagent.agent.spi import ExecutorFactory
from taskagent.core.errors import ConfigError, DuplicateTaskTypeError
from taskagent.framework.logging import get_logger

logger = get_logger(__name__)

DEFAULT_ENTRY_POINT_GROUP = "taskagent.executors"


class ExecutorRegistry:
    """Read-only mapping of operator type names to executor factories.

    Example:
        >>> registry = ExecutorRegistry([EchoExecutorFactory()])
        >>> registry.lookup("echo")
        <taskagent.agent.builtin.EchoExecutorFactory object at ...>
        >>> registry.lookup("sh") is None
        True
    """

    def __init__(self, factories: Iterable[ExecutorFactory] = ()):
        factories_by_type: dict[str, ExecutorFactory] = {}
        for factory in factories:
            type_ = factory.type
            if not isinstance(type_, str) or not type_:
                raise ConfigError(f"Executor factory {factory!r} has no operator type name")
            if type_ in factories_by_type:
                raise DuplicateTaskTypeError(type_)
            factories_by_type[type_] = factory
            logger.debug("executor_factory_registered", operator_type=type_, cls=type(factory).__name__)
        self._factories: Mapping[str, ExecutorFactory] = MappingProxyType(factories_by_type)

    @classmethod
    def from_entry_points(
        cls,
        group: str = DEFAULT_ENTRY_POINT_GROUP,
        extra: Iterable[ExecutorFactory] = (),
    ) -> ExecutorRegistry:
        """Build a registry from installed plugin distributions.

        Each entry point in *group* must load either a factory instance or
        a zero-argument factory class.  Factories in *extra* are added
        after the discovered ones.
        """
        discovered: list[ExecutorFactory] = []
        for ep in sorted(entry_points(group=group), key=lambda e: e.name):
            target = ep.load()
            factory = target() if isinstance(target, type) else target
            logger.debug("executor_factory_discovered", entry_point=ep.name, value=ep.value)
            discovered.append(factory)
        return cls([*discovered, *extra])

    def lookup(self, type_: str) -> ExecutorFactory | None:
        """Return the factory registered for *type_*, or None."""
        return self._factories.get(type_)

    def types(self) -> list[str]:
        """List registered operator type names."""
        return sorted(self._factories)

    def __contains__(self, type_: object) -> bool:
        return type_ in self._factories

    def __len__(self) -> int:
        return len(self._factories)

    def __iter__(self) -> Iterator[str]:
        return iter(self.types())

    def __repr__(self) -> str:
        return f"ExecutorRegistry(types={self.types()})"


def default_registry() -> ExecutorRegistry:
    """Registry holding the built-in demonstration executors."""
    from taskagent.agent.builtin import builtin_factories

    return ExecutorRegistry(builtin_factories())
