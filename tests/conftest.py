"""Shared test fixtures and configuration.

Provides infrastructure to isolate tests from real filesystem state.
"""

from __future__ import annotations

import logging
from datetime import UTC, datetime, timedelta
from unittest.mock import patch

import pytest

from getitdone.adapters import MemoryKeyValueStore
from getitdone.models import Task
from getitdone.services.persistence_service import TaskPersistence
from getitdone.services.task_store import TaskStore

# ---------------------------------------------------------------------------
# Filesystem isolation
# ---------------------------------------------------------------------------


@pytest.fixture(autouse=True)
def isolate_dirs(tmp_path, monkeypatch):
    """Point config, data and log directories at *tmp_path*.

    Also resets the logger singleton and the cached config service so each
    test starts fresh.
    """
    import getitdone.utils.logger as logger_mod
    from getitdone.services.config_service import get_config_service

    config_dir = tmp_path / "config"
    data_dir = tmp_path / "data"
    log_dir = tmp_path / "logs"

    monkeypatch.setenv("GETITDONE_CONFIG_DIR", str(config_dir))
    logger_mod._logger = None
    logging.getLogger("getitdone").handlers.clear()
    get_config_service.cache_clear()

    with patch("getitdone.utils.logger.user_log_dir", return_value=str(log_dir)):
        with patch(
            "getitdone.services.config_service.user_data_dir",
            return_value=str(data_dir),
        ):
            yield tmp_path

    get_config_service.cache_clear()
    for handler in logging.getLogger("getitdone").handlers:
        handler.close()
    logging.getLogger("getitdone").handlers.clear()
    logger_mod._logger = None


@pytest.fixture()
def read_log(tmp_path):
    """Return a callable giving the current application log contents."""

    def _read() -> str:
        for handler in logging.getLogger("getitdone").handlers:
            handler.flush()
        log_file = tmp_path / "logs" / "getitdone.log"
        return log_file.read_text(encoding="utf-8") if log_file.exists() else ""

    return _read


# ---------------------------------------------------------------------------
# Store wiring
# ---------------------------------------------------------------------------


@pytest.fixture()
def kv_store():
    return MemoryKeyValueStore()


@pytest.fixture()
def persistence(kv_store):
    return TaskPersistence(kv_store)


@pytest.fixture()
def store(persistence):
    return TaskStore(persistence)


class FakeClock:
    """Deterministic clock advancing one second per call."""

    def __init__(self, start: datetime | None = None, step: timedelta | None = None):
        self.now = start or datetime(2024, 6, 10, 9, 0, tzinfo=UTC)
        self.step = step if step is not None else timedelta(seconds=1)

    def __call__(self) -> datetime:
        current = self.now
        self.now = self.now + self.step
        return current


@pytest.fixture()
def clock():
    return FakeClock()


@pytest.fixture()
def clocked_store(persistence, clock):
    return TaskStore(persistence, clock=clock)


@pytest.fixture()
def make_task():
    """Build a Task; creation time defaults to one minute per id after 2024-01-01."""

    def _make(
        task_id: int,
        text: str,
        completed: bool = False,
        created_at: datetime | None = None,
    ) -> Task:
        return Task(
            id=task_id,
            text=text,
            completed=completed,
            created_at=created_at
            or datetime(2024, 1, 1, tzinfo=UTC) + timedelta(minutes=task_id),
        )

    return _make
