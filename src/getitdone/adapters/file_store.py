"""JSON file key-value backend.

Each key maps to ``<directory>/<key>.json``. Writes go to a temporary file
in the same directory and are moved into place with ``os.replace`` so a
crash mid-write never leaves a truncated task list behind.
"""

from __future__ import annotations

import os
import tempfile
from pathlib import Path

from platformdirs import user_data_dir

from getitdone.repositories import KeyValueStore


class FileKeyValueStore(KeyValueStore):
    """Key-value store keeping one file per key.

    Provides:
    - Automatic directory creation
    - Atomic replacement on write
    - Owner-only file permissions
    """

    def __init__(self, directory: str | Path | None = None):
        """
        Args:
            directory: Data directory. If None, uses the platform user data dir.
        """
        if directory is None:
            directory = user_data_dir("getitdone")
        self.directory = Path(directory)

    def _path_for(self, key: str) -> Path:
        return self.directory / f"{key}.json"

    def get(self, key: str) -> str | None:
        path = self._path_for(key)
        try:
            return path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return None

    def set(self, key: str, value: str) -> None:
        self.directory.mkdir(parents=True, exist_ok=True)
        path = self._path_for(key)

        fd, tmp_name = tempfile.mkstemp(
            prefix=f".{key}.", suffix=".tmp", dir=self.directory
        )
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                f.write(value)
            os.chmod(tmp_name, 0o600)
            os.replace(tmp_name, path)
        except BaseException:
            Path(tmp_name).unlink(missing_ok=True)
            raise

    def delete(self, key: str) -> None:
        self._path_for(key).unlink(missing_ok=True)

    @property
    def storage_type(self) -> str:
        return "file"
