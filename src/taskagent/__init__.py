"""
taskagent - task execution dispatcher for a workflow-orchestration agent.

- taskagent.core: configuration tree, errors, settings
- taskagent.framework: structured logging
- taskagent.agent: operator-type resolution, executor registry, TaskRunner
"""

__version__ = "0.1.0"

from taskagent.agent import (  # noqa: E402
    ExecutorRegistry,
    PollNextError,
    TaskFailedError,
    TaskInfo,
    TaskRequest,
    TaskResult,
    TaskRunner,
)
from taskagent.core import Config  # noqa: E402

__all__ = [
    "__version__",
    "Config",
    "ExecutorRegistry",
    "PollNextError",
    "TaskFailedError",
    "TaskInfo",
    "TaskRequest",
    "TaskResult",
    "TaskRunner",
]
