"""Repository abstraction layer for Get It Done.

This module defines the storage port the persistence service depends on,
following the hexagonal architecture (Ports & Adapters) pattern.

The task list is persisted as one opaque string under a fixed key, so the
port is a plain key-value contract. Concrete backends live in
``getitdone.adapters``.
"""

from __future__ import annotations

from abc import ABC, abstractmethod


class KeyValueStore(ABC):
    """Abstract base class for durable string storage addressed by key.

    Backends raise their native errors (``OSError``, ``sqlite3.Error``);
    callers decide whether a failure is fatal.
    """

    @abstractmethod
    def get(self, key: str) -> str | None:
        """Read the value stored under a key.

        Args:
            key: Storage key

        Returns:
            The stored string, or None if the key is absent
        """
        raise NotImplementedError("KeyValueStore.get() must be implemented by adapter")

    @abstractmethod
    def set(self, key: str, value: str) -> None:
        """Store a value under a key, replacing any previous value.

        Args:
            key: Storage key
            value: Serialized payload
        """
        raise NotImplementedError("KeyValueStore.set() must be implemented by adapter")

    @abstractmethod
    def delete(self, key: str) -> None:
        """Remove a key. Deleting an absent key is not an error."""
        raise NotImplementedError(
            "KeyValueStore.delete() must be implemented by adapter"
        )

    def close(self) -> None:
        """Release backend resources. Default is a no-op."""
        return

    @property
    @abstractmethod
    def storage_type(self) -> str:
        """Get storage type identifier (for logging/debugging)."""
