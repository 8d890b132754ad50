"""Task store - the authoritative in-memory task collection.

The store owns every ``Task``. It validates candidates before insertion,
applies the few mutations the app supports (insert, remove, toggle, clear
completed), saves through ``TaskPersistence`` after each of them, and
computes derived views on demand.

A store is constructed once per session and handed to whatever needs it;
there is no module-level instance.
"""

from __future__ import annotations

import locale
from collections.abc import Callable, Iterable, Iterator
from datetime import UTC, datetime
from functools import cmp_to_key

from getitdone.models import (
    MAX_TASK_LENGTH,
    MIN_TASK_LENGTH,
    FilterMode,
    SortKey,
    SortOrder,
    Task,
    TaskStats,
    ValidationIssue,
    ViewOptions,
)
from getitdone.services.persistence_service import TaskPersistence
from getitdone.utils.logger import get_logger

Listener = Callable[[], None]
Comparator = Callable[[Task, Task], int]


# ---------------------------------------------------------------------------
# Derived views
# ---------------------------------------------------------------------------


def _compare_name(a: Task, b: Task) -> int:
    return locale.strcoll(a.text, b.text)


def _compare_status(a: Task, b: Task) -> int:
    if a.completed == b.completed:
        return 0
    return 1 if a.completed else -1


def _compare_date(a: Task, b: Task) -> int:
    return (a.created_at > b.created_at) - (a.created_at < b.created_at)


_COMPARATORS: dict[SortKey, Comparator] = {
    SortKey.NAME: _compare_name,
    SortKey.STATUS: _compare_status,
    SortKey.DATE: _compare_date,
}


def filter_tasks(tasks: Iterable[Task], mode: FilterMode) -> list[Task]:
    """Return the tasks passing ``mode``, in their original order."""
    if mode is FilterMode.PENDING:
        return [t for t in tasks if not t.completed]
    if mode is FilterMode.COMPLETED:
        return [t for t in tasks if t.completed]
    return list(tasks)


def sort_tasks(tasks: Iterable[Task], key: SortKey, order: SortOrder) -> list[Task]:
    """Stable sort of ``tasks``; descending negates the comparator.

    Ties keep their relative input order in both directions.
    """
    compare = _COMPARATORS[key]
    sign = -1 if order is SortOrder.DESC else 1
    return sorted(tasks, key=cmp_to_key(lambda a, b: sign * compare(a, b)))


def compute_view(tasks: Iterable[Task], options: ViewOptions) -> list[Task]:
    """Filter then sort ``tasks`` according to ``options``."""
    filtered = filter_tasks(tasks, options.filter_mode)
    return sort_tasks(filtered, options.sort_key, options.sort_order)


def compute_stats(tasks: Iterable[Task]) -> TaskStats:
    total = 0
    completed = 0
    for task in tasks:
        total += 1
        if task.completed:
            completed += 1
    return TaskStats(total=total, completed=completed, pending=total - completed)


def character_count(raw_text: str) -> str:
    """Counter shown under the input, e.g. ``"12/100 characters"``."""
    return f"{len(raw_text)}/{MAX_TASK_LENGTH} characters"


# ---------------------------------------------------------------------------
# Store
# ---------------------------------------------------------------------------


class TaskStore:
    """In-memory task collection with validated insertion and derived views.

    The collection is loaded once, in the constructor, before any mutation
    is accepted. Every mutator saves the full collection afterwards and then
    notifies subscribers.
    """

    def __init__(
        self,
        persistence: TaskPersistence,
        view_options: ViewOptions | None = None,
        clock: Callable[[], datetime] | None = None,
    ):
        """
        Args:
            persistence: Adapter used to load the collection and save changes
            view_options: Initial view parameters (defaults: all, date, desc)
            clock: Returns the current time; defaults to ``datetime.now(UTC)``
        """
        self.persistence = persistence
        self.logger = get_logger("store")
        self._clock = clock or (lambda: datetime.now(UTC))
        self._tasks: list[Task] = list(persistence.load())
        self._view = view_options.model_copy() if view_options else ViewOptions()
        self._listeners: list[Listener] = []
        self._last_id = max((t.id for t in self._tasks), default=0)

    # ---- queries ----

    @property
    def tasks(self) -> tuple[Task, ...]:
        """Snapshot of the collection in insertion order."""
        return tuple(self._tasks)

    def __len__(self) -> int:
        return len(self._tasks)

    def __iter__(self) -> Iterator[Task]:
        return iter(tuple(self._tasks))

    def get(self, task_id: int) -> Task | None:
        for task in self._tasks:
            if task.id == task_id:
                return task
        return None

    def validate_candidate(self, raw_text: str) -> ValidationIssue | None:
        """Check a raw input without touching the collection.

        Checks run in order and stop at the first failure: empty, too
        short, too long, duplicate (case-insensitive, after trimming).

        Returns:
            The first issue found, or None if the text can be inserted
        """
        text = raw_text.strip()
        if not text:
            return ValidationIssue.EMPTY_TASK
        if len(text) < MIN_TASK_LENGTH:
            return ValidationIssue.TOO_SHORT
        if len(text) > MAX_TASK_LENGTH:
            return ValidationIssue.TOO_LONG
        folded = text.lower()
        if any(task.text.lower() == folded for task in self._tasks):
            return ValidationIssue.DUPLICATE_TASK
        return None

    def compute_view(self) -> list[Task]:
        return compute_view(self._tasks, self._view)

    def compute_stats(self) -> TaskStats:
        return compute_stats(self._tasks)

    def view_summary(self) -> str:
        return f"Showing {len(self.compute_view())} of {len(self._tasks)} tasks"

    def empty_message(self) -> str:
        """Placeholder for an empty view."""
        if not self._tasks:
            return "No tasks yet. Add one above!"
        return "No tasks match the current filter."

    # ---- mutations ----

    def insert(self, raw_text: str) -> Task | ValidationIssue:
        """Validate and append a new task.

        Returns:
            The created Task, or the ValidationIssue that blocked it. A
            rejected candidate leaves the collection untouched and unsaved.
        """
        issue = self.validate_candidate(raw_text)
        if issue is not None:
            self.logger.debug("insert rejected: %s", issue.value)
            return issue

        now = self._clock()
        task = Task(
            id=self._next_id(now),
            text=raw_text.strip(),
            completed=False,
            created_at=now,
        )
        self._tasks.append(task)
        self.logger.debug("task inserted id=%s", task.id)
        self._commit()
        return task

    def remove(self, task_id: int) -> None:
        """Remove a task. Unknown ids are ignored."""
        remaining = [t for t in self._tasks if t.id != task_id]
        if len(remaining) != len(self._tasks):
            self.logger.debug("task removed id=%s", task_id)
        self._tasks = remaining
        self._commit()

    def toggle(self, task_id: int) -> None:
        """Flip completion of every task with ``task_id``. Unknown ids are ignored."""
        for index, task in enumerate(self._tasks):
            if task.id == task_id:
                self._tasks[index] = task.model_copy(
                    update={"completed": not task.completed}
                )
                self.logger.debug(
                    "task toggled id=%s completed=%s", task_id, not task.completed
                )
        self._commit()

    def clear_completed(self) -> int:
        """Remove every completed task.

        Returns:
            Number of tasks removed
        """
        remaining = [t for t in self._tasks if not t.completed]
        removed = len(self._tasks) - len(remaining)
        self._tasks = remaining
        self.logger.debug("cleared %d completed task(s)", removed)
        self._commit()
        return removed

    # ---- view parameters ----

    @property
    def view_options(self) -> ViewOptions:
        return self._view.model_copy()

    def set_filter(self, mode: FilterMode | str) -> None:
        self._view.filter_mode = FilterMode(mode)

    def set_sort(self, key: SortKey | str) -> None:
        self._view.sort_key = SortKey(key)

    def set_sort_order(self, order: SortOrder | str) -> None:
        self._view.sort_order = SortOrder(order)

    def toggle_sort_order(self) -> SortOrder:
        self._view.sort_order = self._view.sort_order.toggled()
        return self._view.sort_order

    # ---- change notification ----

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register ``listener`` to run after every mutation.

        Returns:
            A callable that unregisters the listener
        """
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def close(self) -> None:
        """Release the storage backend."""
        self.persistence.close()

    # ---- internals ----

    def _next_id(self, now: datetime) -> int:
        # Millisecond timestamps, bumped past the last id on collisions.
        nid = max(int(now.timestamp() * 1000), self._last_id + 1)
        self._last_id = nid
        return nid

    def _commit(self) -> None:
        self.persistence.save(self._tasks)
        for listener in list(self._listeners):
            try:
                listener()
            except Exception:
                self.logger.exception("change listener %r failed", listener)
