"""Services module for Get It Done - Business logic layer."""

from .config_service import ConfigError, ConfigService, get_config_service
from .persistence_service import TaskPersistence
from .store_factory import build_key_value_store, build_task_store
from .task_store import TaskStore, compute_stats, compute_view

__all__ = [
    "TaskStore",
    "TaskPersistence",
    "ConfigService",
    "ConfigError",
    "get_config_service",
    "build_key_value_store",
    "build_task_store",
    "compute_view",
    "compute_stats",
]
