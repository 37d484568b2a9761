"""
Shared pytest fixtures and configuration for taskagent tests.

This module provides:
- Settings cache and log context reset for test isolation
- A recording callback and request builder for dispatch tests
"""

import logging
from pathlib import Path

import pytest

from taskagent.agent.spi import TaskInfo, TaskRequest
from taskagent.agent.testing import RecordingCallback
from taskagent.core.config import Config
from taskagent.core.settings import clear_settings_cache
from taskagent.framework.logging import clear_context, reset_logging


def pytest_collection_modifyitems(config: pytest.Config, items: list[pytest.Item]) -> None:
    """Auto-mark tests based on their markers."""
    for item in items:
        markers = {mark.name for mark in item.iter_markers()}
        if not markers.intersection({"unit", "integration"}):
            item.add_marker(pytest.mark.unit)


# =============================================================================
# Isolation Fixtures
# =============================================================================


@pytest.fixture(autouse=True)
def clean_state():
    """Reset cached settings and log context before and after each test."""
    clear_settings_cache()
    clear_context()
    yield
    clear_settings_cache()
    clear_context()


@pytest.fixture(autouse=True)
def clean_logging():
    """Undo configure_logging() calls made by a test (CLI runs, logging tests)."""
    root = logging.getLogger()
    handlers = list(root.handlers)
    level = root.level
    yield
    reset_logging()
    root.handlers[:] = handlers
    root.setLevel(level)
    logging.getLogger("taskagent").setLevel(logging.NOTSET)


# =============================================================================
# Dispatch Fixtures
# =============================================================================


@pytest.fixture
def callback() -> RecordingCallback:
    return RecordingCallback()


@pytest.fixture
def make_request():
    """Build a TaskRequest from plain dicts."""

    def _make(config=None, state=None, task_id: int = 1, name: str = "+wf+step") -> TaskRequest:
        return TaskRequest(
            TaskInfo(task_id, name),
            Config(config or {}),
            Config(state or {}),
        )

    return _make


@pytest.fixture
def tmp_task_file(tmp_path: Path):
    """Write a task config file and return its path."""

    def _write(content: str, name: str = "task.yml") -> Path:
        path = tmp_path / name
        path.write_text(content, encoding="utf-8")
        return path

    return _write
