"""Tests for the key-value store adapters."""

from __future__ import annotations

import os
import sqlite3
import stat
from unittest.mock import patch

import pytest

from getitdone.adapters import FileKeyValueStore, MemoryKeyValueStore, SqliteKeyValueStore
from getitdone.repositories import KeyValueStore


@pytest.fixture(params=["memory", "file", "sqlite"])
def backend(request, tmp_path):
    if request.param == "memory":
        store = MemoryKeyValueStore()
    elif request.param == "file":
        store = FileKeyValueStore(tmp_path / "kv")
    else:
        store = SqliteKeyValueStore(tmp_path / "kv" / "tasks.db")
    yield store
    store.close()


# ---------------------------------------------------------------------------
# Shared contract
# ---------------------------------------------------------------------------


class TestContract:
    def test_is_a_key_value_store(self, backend):
        assert isinstance(backend, KeyValueStore)

    def test_absent_key_reads_none(self, backend):
        assert backend.get("todoTasks") is None

    def test_set_then_get(self, backend):
        backend.set("todoTasks", '[{"id": 1}]')
        assert backend.get("todoTasks") == '[{"id": 1}]'

    def test_set_replaces_previous_value(self, backend):
        backend.set("todoTasks", "first")
        backend.set("todoTasks", "second")
        assert backend.get("todoTasks") == "second"

    def test_keys_are_independent(self, backend):
        backend.set("a", "1")
        backend.set("b", "2")
        assert backend.get("a") == "1"
        assert backend.get("b") == "2"

    def test_delete(self, backend):
        backend.set("todoTasks", "x")
        backend.delete("todoTasks")
        assert backend.get("todoTasks") is None

    def test_delete_absent_key_is_not_an_error(self, backend):
        backend.delete("missing")

    def test_unicode_round_trip(self, backend):
        backend.set("todoTasks", "Café ✓ 日本")
        assert backend.get("todoTasks") == "Café ✓ 日本"

    def test_storage_type(self, backend):
        assert backend.storage_type in {"memory", "file", "sqlite"}


# ---------------------------------------------------------------------------
# Memory
# ---------------------------------------------------------------------------


class TestMemoryStore:
    def test_initial_data_is_copied(self):
        initial = {"todoTasks": "[]"}
        store = MemoryKeyValueStore(initial)
        store.set("todoTasks", "changed")
        assert initial == {"todoTasks": "[]"}

    def test_storage_type(self):
        assert MemoryKeyValueStore().storage_type == "memory"


# ---------------------------------------------------------------------------
# File
# ---------------------------------------------------------------------------


class TestFileStore:
    def test_writes_one_file_per_key(self, tmp_path):
        store = FileKeyValueStore(tmp_path)
        store.set("todoTasks", "[]")
        assert (tmp_path / "todoTasks.json").read_text(encoding="utf-8") == "[]"

    def test_creates_missing_directory(self, tmp_path):
        target = tmp_path / "a" / "b"
        FileKeyValueStore(target).set("todoTasks", "[]")
        assert target.is_dir()

    def test_get_does_not_create_directory(self, tmp_path):
        target = tmp_path / "never"
        assert FileKeyValueStore(target).get("todoTasks") is None
        assert not target.exists()

    @pytest.mark.skipif(os.name == "nt", reason="POSIX permissions")
    def test_file_is_owner_only(self, tmp_path):
        FileKeyValueStore(tmp_path).set("todoTasks", "[]")
        mode = stat.S_IMODE((tmp_path / "todoTasks.json").stat().st_mode)
        assert mode == 0o600

    def test_no_temp_files_left_behind(self, tmp_path):
        store = FileKeyValueStore(tmp_path)
        store.set("todoTasks", "one")
        store.set("todoTasks", "two")
        assert sorted(p.name for p in tmp_path.iterdir()) == ["todoTasks.json"]

    def test_failed_replace_keeps_previous_value(self, tmp_path):
        store = FileKeyValueStore(tmp_path)
        store.set("todoTasks", "original")

        with patch("getitdone.adapters.file_store.os.replace", side_effect=OSError("disk")):
            with pytest.raises(OSError):
                store.set("todoTasks", "new")

        assert store.get("todoTasks") == "original"
        assert sorted(p.name for p in tmp_path.iterdir()) == ["todoTasks.json"]

    def test_defaults_to_user_data_dir(self, tmp_path):
        with patch(
            "getitdone.adapters.file_store.user_data_dir", return_value=str(tmp_path)
        ):
            store = FileKeyValueStore()
        assert store.directory == tmp_path


# ---------------------------------------------------------------------------
# SQLite
# ---------------------------------------------------------------------------


class TestSqliteStore:
    def test_value_is_stored_in_kv_table(self, tmp_path):
        db_path = tmp_path / "tasks.db"
        store = SqliteKeyValueStore(db_path)
        store.set("todoTasks", "[]")
        store.close()

        with sqlite3.connect(db_path) as conn:
            rows = conn.execute("SELECT key, value FROM kv").fetchall()
        assert rows == [("todoTasks", "[]")]

    def test_data_survives_reopen(self, tmp_path):
        db_path = tmp_path / "tasks.db"
        first = SqliteKeyValueStore(db_path)
        first.set("todoTasks", "[1]")
        first.close()

        second = SqliteKeyValueStore(db_path)
        try:
            assert second.get("todoTasks") == "[1]"
        finally:
            second.close()

    def test_connection_is_lazy(self, tmp_path):
        db_path = tmp_path / "lazy" / "tasks.db"
        SqliteKeyValueStore(db_path)
        assert not db_path.exists()

    def test_close_is_idempotent(self, tmp_path):
        store = SqliteKeyValueStore(tmp_path / "tasks.db")
        store.get("todoTasks")
        store.close()
        store.close()

    def test_reopens_after_close(self, tmp_path):
        store = SqliteKeyValueStore(tmp_path / "tasks.db")
        store.set("todoTasks", "x")
        store.close()
        assert store.get("todoTasks") == "x"
        store.close()

    @pytest.mark.skipif(os.name == "nt", reason="POSIX permissions")
    def test_new_database_is_owner_only(self, tmp_path):
        db_path = tmp_path / "tasks.db"
        store = SqliteKeyValueStore(db_path)
        store.get("todoTasks")
        store.close()
        assert stat.S_IMODE(db_path.stat().st_mode) == 0o600

    def test_retries_when_locked(self):
        calls = []

        class FlakyConnection:
            def execute(self, sql, params):
                calls.append(sql)
                if len(calls) < 3:
                    raise sqlite3.OperationalError("database is locked")
                return "cursor"

        with patch("getitdone.adapters.sqlite_store.time.sleep") as sleep:
            result = SqliteKeyValueStore._execute_with_retry(
                FlakyConnection(), "SELECT 1", ()
            )

        assert result == "cursor"
        assert len(calls) == 3
        assert [c.args[0] for c in sleep.call_args_list] == [0.1, 0.2]

    def test_gives_up_after_max_retries(self):
        class LockedConnection:
            def execute(self, sql, params):
                raise sqlite3.OperationalError("database is locked")

        with patch("getitdone.adapters.sqlite_store.time.sleep"):
            with pytest.raises(sqlite3.OperationalError):
                SqliteKeyValueStore._execute_with_retry(
                    LockedConnection(), "SELECT 1", (), max_retries=2
                )

    def test_other_errors_are_not_retried(self):
        calls = []

        class BrokenConnection:
            def execute(self, sql, params):
                calls.append(sql)
                raise sqlite3.OperationalError("no such table: kv")

        with pytest.raises(sqlite3.OperationalError):
            SqliteKeyValueStore._execute_with_retry(BrokenConnection(), "SELECT 1", ())
        assert len(calls) == 1
