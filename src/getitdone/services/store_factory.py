"""Wiring for a session's task store.

Selects the key-value backend from configuration once, at startup, and
injects it into the persistence service and the task store. Nothing below
this layer knows which backend is in use.
"""

from __future__ import annotations

from pathlib import Path

from getitdone.adapters import FileKeyValueStore, MemoryKeyValueStore, SqliteKeyValueStore
from getitdone.models import StorageConfig
from getitdone.repositories import KeyValueStore
from getitdone.services.config_service import ConfigService, get_config_service
from getitdone.services.persistence_service import TaskPersistence
from getitdone.services.task_store import TaskStore
from getitdone.utils.logger import get_logger


def build_key_value_store(storage: StorageConfig, data_dir: Path) -> KeyValueStore:
    """Instantiate the backend named by ``storage.backend``.

    Args:
        storage: Storage section of the configuration
        data_dir: Default location when ``storage.path`` is unset
    """
    if storage.backend == "memory":
        return MemoryKeyValueStore()
    if storage.backend == "sqlite":
        return SqliteKeyValueStore(db_path=storage.path or data_dir / "tasks.db")
    return FileKeyValueStore(directory=storage.path or data_dir)


def build_task_store(
    config_service: ConfigService | None = None,
    *,
    ephemeral: bool = False,
) -> TaskStore:
    """Build the task store for this session.

    Args:
        config_service: Configuration source; defaults to the shared service
        ephemeral: Use the memory backend regardless of configuration
    """
    config_service = config_service or get_config_service()
    config = config_service.config

    if ephemeral:
        kv_store: KeyValueStore = MemoryKeyValueStore()
    else:
        kv_store = build_key_value_store(config.storage, config_service.data_dir)

    get_logger().info(
        "task store ready backend=%s key=%s", kv_store.storage_type, config.storage.key
    )
    persistence = TaskPersistence(kv_store, key=config.storage.key)
    return TaskStore(persistence, view_options=config.view.to_options())
