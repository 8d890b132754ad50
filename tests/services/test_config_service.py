"""Tests for ConfigService."""

from __future__ import annotations

import json
import os
import stat

import pytest

from getitdone.models import AppConfig, SortKey
from getitdone.services.config_service import (
    ConfigError,
    ConfigService,
    get_config_service,
)


@pytest.fixture()
def service(tmp_path):
    return ConfigService(config_dir=tmp_path / "cfg")


class TestLoad:
    def test_missing_file_is_created_with_defaults(self, service):
        assert service.config == AppConfig()
        assert service.config_path.exists()
        assert json.loads(service.config_path.read_text())["storage"]["key"] == "todoTasks"

    @pytest.mark.skipif(os.name == "nt", reason="POSIX permissions")
    def test_config_file_is_owner_only(self, service):
        service.load_config()
        assert stat.S_IMODE(service.config_path.stat().st_mode) == 0o600

    def test_reads_existing_file(self, service):
        service.config_dir.mkdir(parents=True)
        service.config_path.write_text(json.dumps({"storage": {"backend": "sqlite"}}))

        assert service.config.storage.backend == "sqlite"
        assert service.config.view.sort_key is SortKey.DATE

    @pytest.mark.parametrize(
        "content", ["{not json", json.dumps({"storage": {"backend": "redis"}})]
    )
    def test_invalid_file_raises_config_error(self, service, content):
        service.config_dir.mkdir(parents=True)
        service.config_path.write_text(content)

        with pytest.raises(ConfigError, match="Failed to load config"):
            service.load_config()

    def test_config_is_cached(self, service):
        first = service.config
        service.config_path.write_text(json.dumps({"storage": {"backend": "sqlite"}}))
        assert service.config is first

    def test_env_var_selects_directory(self, tmp_path):
        # isolate_dirs points the env var at tmp_path/config
        assert ConfigService().config_dir == tmp_path / "config"

    def test_data_dir_uses_user_data_dir(self, tmp_path):
        assert ConfigService().data_dir == tmp_path / "data"


class TestGet:
    def test_nested_value(self, service):
        assert service.get("storage.backend") == "file"
        assert service.get("output.show_dates") is True

    def test_section(self, service):
        assert service.get("view") == service.config.view

    @pytest.mark.parametrize("key", ["nope", "storage.nope", "storage.backend.extra"])
    def test_unknown_key_raises(self, service, key):
        with pytest.raises(ConfigError, match="Unknown config key"):
            service.get(key)


class TestSet:
    def test_value_is_coerced_and_saved(self, service):
        service.set("view.sort_key", "name")
        service.set("output.show_dates", "false")

        assert service.config.view.sort_key is SortKey.NAME
        assert service.config.output.show_dates is False

        reloaded = ConfigService(config_dir=service.config_dir)
        assert reloaded.config.view.sort_key is SortKey.NAME
        assert reloaded.config.output.show_dates is False

    def test_invalid_value_raises_and_keeps_config(self, service):
        with pytest.raises(ConfigError, match="Invalid value for storage.backend"):
            service.set("storage.backend", "redis")
        assert service.config.storage.backend == "file"

    def test_unsafe_storage_key_is_rejected(self, service):
        with pytest.raises(ConfigError):
            service.set("storage.key", "../elsewhere")

    def test_unknown_key_raises(self, service):
        with pytest.raises(ConfigError, match="Unknown config key"):
            service.set("storage.colour", "red")


class TestReset:
    def test_reset_single_key(self, service):
        service.set("storage.backend", "sqlite")
        service.set("output.format", "json")

        service.reset("storage.backend")

        assert service.config.storage.backend == "file"
        assert service.config.output.format == "json"

    def test_reset_section(self, service):
        service.set("view.sort_order", "asc")
        service.reset("view")
        assert service.config.view == AppConfig().view

    def test_reset_everything(self, service):
        service.set("storage.backend", "memory")
        service.set("output.format", "yaml")

        service.reset()

        assert service.config == AppConfig()
        reloaded = ConfigService(config_dir=service.config_dir)
        assert reloaded.config == AppConfig()


def test_get_config_service_is_shared():
    assert get_config_service() is get_config_service()
