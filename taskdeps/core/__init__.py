"""Core module - configuration, exceptions and the dependency engine."""

from taskdeps.core.config import Settings, clear_settings_cache, get_settings
from taskdeps.core.exceptions import (
    CircularDependencyError,
    TaskDepsError,
    TaskLoadError,
    TaskNotFoundError,
)

__all__ = [
    "CircularDependencyError",
    "Settings",
    "TaskDepsError",
    "TaskLoadError",
    "TaskNotFoundError",
    "clear_settings_cache",
    "get_settings",
]
