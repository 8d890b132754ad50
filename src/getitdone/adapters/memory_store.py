"""In-process key-value backend."""

from __future__ import annotations

from getitdone.repositories import KeyValueStore


class MemoryKeyValueStore(KeyValueStore):
    """Dict-backed store. Nothing survives the process."""

    def __init__(self, initial: dict[str, str] | None = None):
        self._data: dict[str, str] = dict(initial or {})

    def get(self, key: str) -> str | None:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self._data[key] = value

    def delete(self, key: str) -> None:
        self._data.pop(key, None)

    @property
    def storage_type(self) -> str:
        return "memory"
