"""Task data models."""

from __future__ import annotations

from datetime import UTC, datetime
from enum import StrEnum

from pydantic import BaseModel, ConfigDict, Field, field_serializer, field_validator

MIN_TASK_LENGTH = 2
MAX_TASK_LENGTH = 100


class FilterMode(StrEnum):
    """Which subset of tasks a view includes."""

    ALL = "all"
    PENDING = "pending"
    COMPLETED = "completed"


class SortKey(StrEnum):
    """Attribute used to order a view."""

    DATE = "date"
    NAME = "name"
    STATUS = "status"


class SortOrder(StrEnum):
    """Direction applied on top of the sort key comparator."""

    ASC = "asc"
    DESC = "desc"

    def toggled(self) -> SortOrder:
        return SortOrder.DESC if self is SortOrder.ASC else SortOrder.ASC


class ValidationIssue(StrEnum):
    """Reasons a candidate task text is rejected.

    Issues are returned to the caller, never raised. Each carries the
    message shown to the user next to the input.
    """

    EMPTY_TASK = "empty_task"
    TOO_SHORT = "too_short"
    TOO_LONG = "too_long"
    DUPLICATE_TASK = "duplicate_task"

    @property
    def message(self) -> str:
        return _ISSUE_MESSAGES[self]


_ISSUE_MESSAGES = {
    ValidationIssue.EMPTY_TASK: "Task cannot be empty",
    ValidationIssue.TOO_SHORT: f"Task must be at least {MIN_TASK_LENGTH} characters long",
    ValidationIssue.TOO_LONG: f"Task cannot exceed {MAX_TASK_LENGTH} characters",
    ValidationIssue.DUPLICATE_TASK: "Task already exists",
}


class Task(BaseModel):
    """A single to-do item.

    Instances are frozen: the task store replaces a task with an updated
    copy instead of mutating it, so tasks handed out by views can be held
    freely without affecting store state.

    Attributes:
        id: Unique identifier, never reused within a process
        text: Trimmed task text, 2 to 100 characters
        completed: Completion flag
        created_at: Creation timestamp (UTC), stored as ``createdAt``
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: int
    text: str = Field(min_length=MIN_TASK_LENGTH, max_length=MAX_TASK_LENGTH)
    completed: bool = False
    created_at: datetime = Field(alias="createdAt")

    @field_validator("created_at")
    @classmethod
    def ensure_utc(cls, value: datetime) -> datetime:
        """Treat naive timestamps as UTC."""
        if value.tzinfo is None:
            return value.replace(tzinfo=UTC)
        return value.astimezone(UTC)

    @field_serializer("created_at")
    def serialize_created_at(self, value: datetime) -> str:
        return value.isoformat(timespec="milliseconds").replace("+00:00", "Z")


class TaskStats(BaseModel):
    """Aggregate counts over the whole collection."""

    total: int = 0
    completed: int = 0
    pending: int = 0


class ViewOptions(BaseModel):
    """Parameters of the derived task view.

    The defaults match what the list starts with: every task, newest first.
    """

    filter_mode: FilterMode = FilterMode.ALL
    sort_key: SortKey = SortKey.DATE
    sort_order: SortOrder = SortOrder.DESC
