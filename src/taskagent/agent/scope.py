"""Per-attempt diagnostic scope.

While an attempt runs, the worker thread is renamed after the task
(``task-<full name>``) and the task identity is pushed onto the log
context, so stdlib log records and structlog events both show which task
they came from.  Both are restored on exit, however the attempt ends.
"""

from __future__ import annotations

import threading
from collections.abc import Iterator
from contextlib import contextmanager

from taskagent.agent.spi import TaskInfo
from taskagent.core.settings import TaskAgentSettings, get_settings
from taskagent.framework.logging import push_context


@contextmanager
def thread_name(name: str) -> Iterator[None]:
    """Rename the current thread for the duration of the block."""
    thread = threading.current_thread()
    previous = thread.name
    thread.name = name
    try:
        yield
    finally:
        thread.name = previous


@contextmanager
def task_scope(task_info: TaskInfo, settings: TaskAgentSettings | None = None) -> Iterator[None]:
    """Scope thread name and log context to one task attempt."""
    settings = settings or get_settings()
    token = push_context(task_id=task_info.id, task=task_info.full_name)
    try:
        if settings.rename_thread:
            with thread_name(settings.thread_name_prefix + task_info.full_name):
                yield
        else:
            yield
    finally:
        token.restore()
