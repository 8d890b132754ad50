"""Adapters module - Key-value store implementations for different backends.

This package contains concrete implementations (adapters) of the
``KeyValueStore`` port:
- file: one JSON file per key in a data directory
- sqlite: a ``kv`` table in a local SQLite database
- memory: a plain dict, nothing persisted
"""

from .file_store import FileKeyValueStore
from .memory_store import MemoryKeyValueStore
from .sqlite_store import SqliteKeyValueStore

__all__ = [
    "FileKeyValueStore",
    "SqliteKeyValueStore",
    "MemoryKeyValueStore",
]
