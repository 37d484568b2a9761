"""
Centralized settings for the task agent.

Manifesto:
    One validated, cached settings object replaces scattered
    ``os.environ`` reads.  Every field can be set through a
    ``TASKAGENT_*`` environment variable or a ``.env`` file.

Tags:
    taskagent, configuration, settings, pydantic, caching

Doc-Types:
    api-reference
"""

from __future__ import annotations

from typing import Literal, get_args

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR"]
LOG_LEVELS: tuple[str, ...] = get_args(LogLevel)


class TaskAgentSettings(BaseSettings):
    """Task agent configuration.

    Fields
    ──────
    log_level          : Structlog log level
    log_format         : ``console`` for development, ``json`` for aggregation
    command_suffix     : Suffix marking a shorthand ``<type><suffix>: <command>`` key
    thread_name_prefix : Prefix of the thread name while a task runs
    rename_thread      : Whether to rename the worker thread at all
    entry_point_group  : Entry-point group scanned for executor factories
    """

    model_config = SettingsConfigDict(
        env_prefix="TASKAGENT_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # ── Logging ──────────────────────────────────────────────────
    log_level: LogLevel = Field(default="INFO")
    log_format: Literal["console", "json"] = Field(default="console")

    # ── Dispatch ─────────────────────────────────────────────────
    command_suffix: str = Field(default=">", min_length=1)
    thread_name_prefix: str = Field(default="task-")
    rename_thread: bool = Field(default=True)

    # ── Plugins ──────────────────────────────────────────────────
    entry_point_group: str = Field(default="taskagent.executors")

    @field_validator("log_level", mode="before")
    @classmethod
    def _upper_level(cls, value: object) -> object:
        return value.upper() if isinstance(value, str) else value

    @field_validator("log_format", mode="before")
    @classmethod
    def _lower_format(cls, value: object) -> object:
        return value.lower() if isinstance(value, str) else value


# ── Settings factory with caching ────────────────────────────────────────

_settings_cache: dict[str, TaskAgentSettings] = {}


def get_settings(*, _force_reload: bool = False) -> TaskAgentSettings:
    """Load, validate, and cache a :class:`TaskAgentSettings` instance."""
    if not _force_reload and "default" in _settings_cache:
        return _settings_cache["default"]
    settings = TaskAgentSettings()
    _settings_cache["default"] = settings
    return settings


def clear_settings_cache() -> None:
    """Clear the settings cache (primarily for testing)."""
    _settings_cache.clear()
