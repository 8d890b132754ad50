"""Configuration models.

This module defines the settings persisted in ``config.json``: where tasks
are stored, how the list is presented by default, and output preferences.
"""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field, field_validator

from .task import FilterMode, SortKey, SortOrder, ViewOptions

STORAGE_KEY = "todoTasks"


class StorageConfig(BaseModel):
    """Storage backend configuration.

    Selects the key-value backend holding the serialized task list.
    """

    backend: Literal["file", "sqlite", "memory"] = Field(
        default="file", description="Key-value backend"
    )
    path: str | None = Field(
        default=None, description="Data directory (file) or database path (sqlite)"
    )
    key: str = Field(default=STORAGE_KEY, description="Key holding the task list")

    @field_validator("key")
    @classmethod
    def validate_key(cls, v: str) -> str:
        """Keys name files on disk, so they must be plain identifiers."""
        if not v or not v.strip():
            raise ValueError("key cannot be empty")
        v = v.strip()
        if any(sep in v for sep in ("/", "\\", "..")):
            raise ValueError("key cannot contain path separators")
        return v


class ViewConfig(BaseModel):
    """Default view parameters for the task list."""

    filter_mode: FilterMode = Field(default=FilterMode.ALL)
    sort_key: SortKey = Field(default=SortKey.DATE)
    sort_order: SortOrder = Field(default=SortOrder.DESC)

    def to_options(self) -> ViewOptions:
        return ViewOptions(
            filter_mode=self.filter_mode,
            sort_key=self.sort_key,
            sort_order=self.sort_order,
        )


class OutputConfig(BaseModel):
    """Output configuration."""

    format: Literal["pretty", "table", "json", "yaml"] = Field(default="pretty")
    show_dates: bool = Field(default=True)


class AppConfig(BaseModel):
    """Main Get It Done configuration"""

    storage: StorageConfig = Field(default_factory=StorageConfig)
    view: ViewConfig = Field(default_factory=ViewConfig)
    output: OutputConfig = Field(default_factory=OutputConfig)
