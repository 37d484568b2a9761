"""
Core primitives: configuration tree, error hierarchy and settings.
"""

from taskagent.core.config import Config
from taskagent.core.errors import (
    ConfigError,
    ConfigTypeError,
    DuplicateTaskTypeError,
    ErrorCategory,
    ErrorContext,
    MissingConfigKeyError,
    OutcomeContractError,
    TaskAgentError,
    UnknownTaskTypeError,
)
from taskagent.core.settings import TaskAgentSettings, clear_settings_cache, get_settings

__all__ = [
    # Config tree
    "Config",
    # Errors
    "TaskAgentError",
    "ErrorCategory",
    "ErrorContext",
    "ConfigError",
    "ConfigTypeError",
    "MissingConfigKeyError",
    "UnknownTaskTypeError",
    "DuplicateTaskTypeError",
    "OutcomeContractError",
    # Settings
    "TaskAgentSettings",
    "get_settings",
    "clear_settings_cache",
]
