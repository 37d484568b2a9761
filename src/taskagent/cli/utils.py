"""
CLI utility helpers — config loading and output formatting.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import typer
import yaml
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from taskagent.agent.testing import CallbackEvent
from taskagent.core.config import Config
from taskagent.core.errors import ConfigError

console = Console()


# ── Input helpers ────────────────────────────────────────────────────────


def load_config(path: Path) -> Config:
    """Read a YAML or JSON mapping from *path* into a :class:`Config`."""
    text = path.read_text(encoding="utf-8")
    try:
        data = json.loads(text) if path.suffix == ".json" else yaml.safe_load(text)
    except (json.JSONDecodeError, yaml.YAMLError) as e:
        raise typer.BadParameter(f"{path}: {e}") from e
    if data is None:
        return Config()
    if not isinstance(data, dict):
        raise typer.BadParameter(f"{path}: expected a mapping at the top level, got {type(data).__name__}")
    try:
        return Config(data)
    except ConfigError as e:
        raise typer.BadParameter(f"{path}: {e.message}") from e


# ── Output helpers ───────────────────────────────────────────────────────


def event_to_dict(event: CallbackEvent) -> dict[str, Any]:
    """Convert a recorded callback event to plain JSON-ready data."""
    result: dict[str, Any] = {
        "outcome": event.kind,
        "task_id": event.task_id,
        "state_params": event.state_params.to_dict(),
    }
    if event.kind == "succeeded":
        result["subtask_config"] = event.subtask_config.to_dict() if event.subtask_config else {}
        if event.report is not None:
            result["report"] = {
                "inputs": [c.to_dict() for c in event.report.inputs],
                "outputs": [c.to_dict() for c in event.report.outputs],
                "carry_params": event.report.carry_params.to_dict(),
            }
    if event.kind == "failed":
        result["error"] = event.error.to_dict() if event.error else {}
    if event.kind in ("failed", "poll_next"):
        result["retry_interval"] = event.retry_interval
    return result


_OUTCOME_STYLE = {"succeeded": "green", "failed": "red", "poll_next": "yellow"}


def output_event(event: CallbackEvent, *, as_json: bool = False) -> None:
    """Render the outcome of one attempt to the terminal."""
    payload = event_to_dict(event)
    if as_json:
        console.print_json(json.dumps(payload, default=str))
        return

    style = _OUTCOME_STYLE.get(event.kind, "white")
    table = Table(title=f"[bold {style}]{event.kind}[/bold {style}]", show_header=False)
    table.add_column("Field", style="cyan")
    table.add_column("Value")
    for key, value in payload.items():
        if key == "outcome":
            continue
        text = value if isinstance(value, str) else json.dumps(value, default=str)
        table.add_row(key, escape(text))
    console.print(table)
