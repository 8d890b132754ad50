"""Configuration service for managing Get It Done configuration.

This module provides the ConfigService class, the single source of truth
for configuration. It handles:

- Loading and saving config.json
- Dotted-key access (``storage.backend``, ``view.sort_key``, ...)
- Config file initialization with sensible defaults
"""

from __future__ import annotations

import os
from functools import lru_cache
from pathlib import Path
from typing import Any

from platformdirs import user_config_dir, user_data_dir
from pydantic import BaseModel, ValidationError

from getitdone.models.config_models import AppConfig

CONFIG_DIR_ENV = "GETITDONE_CONFIG_DIR"


class ConfigError(RuntimeError):
    """Configuration could not be loaded, saved or updated."""


class ConfigService:
    """Service for managing application configuration.

    Configuration lives in ``config.json`` under the platform user config
    directory (or ``$GETITDONE_CONFIG_DIR``). A missing file is created
    with defaults on first load.
    """

    def __init__(self, config_dir: str | Path | None = None):
        """Initialize the config service."""
        if config_dir is None:
            config_dir = os.environ.get(CONFIG_DIR_ENV) or user_config_dir("getitdone")
        self.config_dir = Path(config_dir)
        self.config_path = self.config_dir / "config.json"
        self.data_dir = Path(user_data_dir("getitdone"))

        self._config: AppConfig | None = None

    @property
    def config(self) -> AppConfig:
        """Get or load the current configuration."""
        if self._config is None:
            self._config = self.load_config()
        return self._config

    def load_config(self) -> AppConfig:
        """Load configuration from storage."""
        if self._config is not None:
            return self._config  # Return cached config if already loaded

        try:
            with open(self.config_path, encoding="utf-8") as f:
                self._config = AppConfig.model_validate_json(f.read())
        except FileNotFoundError:
            # First run: write defaults so users have a file to edit
            self._config = AppConfig()
            self.save_config()
        except Exception as e:
            raise ConfigError(f"Failed to load config: {e}") from e

        return self._config

    def save_config(self) -> None:
        """Save the current configuration to storage."""
        try:
            self.config_path.parent.mkdir(parents=True, exist_ok=True)
            with open(self.config_path, "w", encoding="utf-8") as f:
                f.write(self.config.model_dump_json(indent=4))

            self.config_path.chmod(0o600)
        except Exception as e:
            raise ConfigError(f"Failed to save config: {e}") from e

    def get(self, key: str) -> Any:
        """Get a configuration value by dot-separated key."""
        value: Any = self.config
        for k in key.split("."):
            if not isinstance(value, BaseModel) or k not in type(value).model_fields:
                raise ConfigError(f"Unknown config key: {key}")
            value = getattr(value, k)
        return value

    def set(self, key: str, value: Any) -> None:
        """Set a configuration value by dot-separated key and save.

        Values are validated by the config models, so strings such as
        ``"sqlite"`` or ``"false"`` are coerced to the field's type.
        """
        self.get(key)  # raises on unknown keys
        keys = key.split(".")
        config_dict = self.config.model_dump()

        current = config_dict
        for k in keys[:-1]:
            current = current[k]
        current[keys[-1]] = value

        try:
            self._config = AppConfig.model_validate(config_dict)
        except ValidationError as e:
            raise ConfigError(f"Invalid value for {key}: {value!r}") from e
        self.save_config()

    def reset(self, key: str | None = None) -> None:
        """Reset configuration (or a single key) to defaults."""
        if key is None:
            self._config = AppConfig()
            self.save_config()
            return

        default_value: Any = AppConfig()
        for k in key.split("."):
            if not isinstance(default_value, BaseModel):
                raise ConfigError(f"Unknown config key: {key}")
            default_value = getattr(default_value, k, None)
        if isinstance(default_value, BaseModel):
            default_value = default_value.model_dump()
        self.set(key, default_value)


@lru_cache(maxsize=1)
def get_config_service() -> ConfigService:
    """Return the process-wide config service."""
    return ConfigService()
