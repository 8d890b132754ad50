"""Get It Done domain models.

This package contains Pydantic models for the task collection, its derived
views, and the application configuration.
"""

from .config_models import STORAGE_KEY, AppConfig, OutputConfig, StorageConfig, ViewConfig
from .task import (
    MAX_TASK_LENGTH,
    MIN_TASK_LENGTH,
    FilterMode,
    SortKey,
    SortOrder,
    Task,
    TaskStats,
    ValidationIssue,
    ViewOptions,
)

__all__ = [
    # Task models
    "Task",
    "TaskStats",
    "ViewOptions",
    "FilterMode",
    "SortKey",
    "SortOrder",
    "ValidationIssue",
    "MIN_TASK_LENGTH",
    "MAX_TASK_LENGTH",
    # Config models
    "AppConfig",
    "StorageConfig",
    "ViewConfig",
    "OutputConfig",
    "STORAGE_KEY",
]
