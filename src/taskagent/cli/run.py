"""
Attempt commands — run one task attempt locally, list operator types.
"""

from __future__ import annotations

from pathlib import Path

import typer
from rich.table import Table

from taskagent.agent.builtin import builtin_factories
from taskagent.agent.registry import ExecutorRegistry
from taskagent.agent.runner import TaskRunner
from taskagent.agent.spi import TaskInfo, TaskRequest
from taskagent.agent.testing import RecordingCallback
from taskagent.cli.utils import console, load_config, output_event
from taskagent.core.config import Config
from taskagent.core.settings import get_settings


def build_registry(plugins: bool = True) -> ExecutorRegistry:
    """Built-in executors, plus installed plugins unless *plugins* is False."""
    if not plugins:
        return ExecutorRegistry(builtin_factories())
    return ExecutorRegistry.from_entry_points(get_settings().entry_point_group, extra=builtin_factories())


def run_command(
    config_file: Path = typer.Argument(..., exists=True, dir_okay=False, help="Task configuration (YAML or JSON)."),
    state_file: Path | None = typer.Option(
        None, "--state", exists=True, dir_okay=False, help="State params carried from a previous attempt."
    ),
    task_id: int = typer.Option(1, "--id", help="Task id reported to the callback."),
    name: str | None = typer.Option(None, "--name", help="Task display name (default: file stem)."),
    plugins: bool = typer.Option(True, "--plugins/--no-plugins", help="Load executors from installed plugins."),
    as_json: bool = typer.Option(False, "--json", help="Print the outcome as JSON."),
) -> None:
    """Run one attempt of a task and print its outcome."""
    config = load_config(config_file)
    state = load_config(state_file) if state_file else Config()

    callback = RecordingCallback()
    request = TaskRequest(TaskInfo(task_id, name or config_file.stem), config, state)
    TaskRunner(callback, build_registry(plugins)).run(request)

    event = callback.only()
    output_event(event, as_json=as_json)
    if event.kind == "failed":
        raise typer.Exit(code=1)


def types_command(
    plugins: bool = typer.Option(True, "--plugins/--no-plugins", help="Include executors from installed plugins."),
) -> None:
    """List registered operator types."""
    registry = build_registry(plugins)
    table = Table(title="Operator types")
    table.add_column("Type", style="cyan")
    table.add_column("Factory")
    for type_ in registry.types():
        factory = registry.lookup(type_)
        table.add_row(type_, f"{type(factory).__module__}.{type(factory).__qualname__}")
    console.print(table)
