"""
Root Typer application for the taskagent CLI.
"""

from __future__ import annotations

import click
import typer
from typer import Typer

from taskagent.core.settings import LOG_LEVELS
from taskagent.framework.logging import configure_logging

app = Typer(
    name="taskagent",
    help="taskagent — run single task attempts against executor plugins.",
    no_args_is_help=True,
    rich_markup_mode="rich",
)


# ── Version callback ─────────────────────────────────────────────────────


def _version_callback(value: bool) -> None:
    if value:
        from taskagent import __version__

        typer.echo(f"taskagent {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: bool | None = typer.Option(  # noqa: UP007
        None,
        "--version",
        "-V",
        help="Show version and exit.",
        callback=_version_callback,
        is_eager=True,
    ),
    log_level: str | None = typer.Option(
        None,
        "--log-level",
        click_type=click.Choice(LOG_LEVELS, case_sensitive=False),
        help="Log level (default: TASKAGENT_LOG_LEVEL).",
    ),
) -> None:
    """taskagent CLI — dispatch task attempts and inspect executors."""
    configure_logging(level=log_level.upper() if log_level else None)


# ── Commands ─────────────────────────────────────────────────────────────

from taskagent.cli.run import run_command, types_command  # noqa: E402

app.command("run")(run_command)
app.command("types")(types_command)
