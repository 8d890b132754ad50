"""Persistence service - loads and saves the task list.

The whole collection is serialized as one JSON array and stored under a
single key of a ``KeyValueStore``:

    [{"id": 1718000000000, "text": "Buy milk", "completed": false,
      "createdAt": "2024-06-10T06:13:20.000Z"}, ...]

There is no schema version; changing this layout breaks stored data.

Neither operation raises. A missing, unreadable or malformed blob loads as
an empty list, and a failed write is logged while the in-memory state stays
authoritative.
"""

from __future__ import annotations

import sqlite3

from pydantic import TypeAdapter, ValidationError

from getitdone.models import STORAGE_KEY, Task
from getitdone.repositories import KeyValueStore
from getitdone.utils.logger import get_logger

_TASK_LIST = TypeAdapter(list[Task])


class TaskPersistence:
    """Reads and writes the serialized task list under a fixed key."""

    def __init__(self, kv_store: KeyValueStore, key: str = STORAGE_KEY):
        """
        Args:
            kv_store: Backend holding the serialized collection
            key: Storage key of the collection
        """
        self.kv_store = kv_store
        self.key = key
        self.logger = get_logger("persistence")

    def load(self) -> list[Task]:
        try:
            raw = self.kv_store.get(self.key)
        except (OSError, sqlite3.Error, UnicodeDecodeError) as e:
            self.logger.warning(
                "failed to read %r from %s store, starting empty: %s",
                self.key,
                self.kv_store.storage_type,
                e,
            )
            return []

        if raw is None:
            self.logger.debug("no stored tasks under %r", self.key)
            return []

        try:
            tasks = _TASK_LIST.validate_json(raw)
        except ValidationError as e:
            self.logger.warning(
                "stored tasks under %r are malformed, starting empty: %s",
                self.key,
                e.errors(include_url=False, include_input=False)[:3],
            )
            return []

        self.logger.debug("loaded %d task(s) from %r", len(tasks), self.key)
        return tasks

    def save(self, tasks: list[Task]) -> None:
        payload = self.serialize(tasks)
        try:
            self.kv_store.set(self.key, payload)
        except (OSError, sqlite3.Error):
            self.logger.exception(
                "failed to save %d task(s) to %s store",
                len(tasks),
                self.kv_store.storage_type,
            )
            return
        self.logger.debug("saved %d task(s) to %r", len(tasks), self.key)

    def close(self) -> None:
        self.kv_store.close()

    @staticmethod
    def serialize(tasks: list[Task]) -> str:
        return _TASK_LIST.dump_json(list(tasks), by_alias=True).decode("utf-8")
