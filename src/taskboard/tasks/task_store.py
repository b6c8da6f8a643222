# src/taskboard/tasks/task_store.py

from __future__ import annotations

import logging
import threading
import uuid
from collections.abc import Callable, Iterable, Mapping
from dataclasses import replace
from datetime import UTC, date, datetime
from typing import Any

from .task_models import (
    UPDATABLE_FIELDS,
    Task,
    TaskPriority,
    TaskStatus,
    coerce_due_date,
    coerce_optional_text,
    coerce_title,
)

logger = logging.getLogger(__name__)

Clock = Callable[[], datetime]


def _utc_now() -> datetime:
    return datetime.now(UTC)


class TaskStore:
    """
    In-memory task store.

    The collection is a dict keyed by task id and owned exclusively by the store.
    Tasks are frozen dataclasses: updates build a new record with
    dataclasses.replace and swap it in, so readers never see a half-written task.

    Thread-safety:
    - every method takes the same lock, mutations are serialized
    - query results are fresh lists, safe to hold after the lock is released

    Nothing survives a restart.
    """

    def __init__(self, clock: Clock | None = None) -> None:
        self._clock: Clock = clock or _utc_now
        self._tasks: dict[str, Task] = {}
        self._lock = threading.Lock()
        logger.info("TaskStore ready (in-memory)")

    # ---- low-level helpers ----

    def _new_id(self) -> str:
        while True:
            task_id = str(uuid.uuid4())
            if task_id not in self._tasks:
                return task_id

    @staticmethod
    def _newest_first(tasks: Iterable[Task]) -> list[Task]:
        # sorted() is stable with reverse=True, so equal timestamps keep insertion order.
        return sorted(tasks, key=lambda t: t.created_at, reverse=True)

    @staticmethod
    def _coerce_changes(changes: Mapping[str, Any]) -> dict[str, Any]:
        unknown = set(changes) - UPDATABLE_FIELDS
        if unknown:
            raise ValueError(f"fields cannot be updated: {', '.join(sorted(unknown))}")

        out: dict[str, Any] = {}
        for name, value in changes.items():
            if name == "title":
                out[name] = coerce_title(value)
            elif name == "status":
                out[name] = TaskStatus.parse(value)
            elif name == "priority":
                out[name] = TaskPriority.parse(value)
            elif name == "due_date":
                out[name] = coerce_due_date(value)
            else:
                out[name] = coerce_optional_text(value)
        return out

    # ---- public API ----

    def count_tasks(self) -> int:
        with self._lock:
            return len(self._tasks)

    def list_tasks(self) -> list[Task]:
        """All tasks, most recently created first."""
        with self._lock:
            snapshot = list(self._tasks.values())
        return self._newest_first(snapshot)

    def get_task(self, task_id: str) -> Task | None:
        with self._lock:
            return self._tasks.get(str(task_id))

    def add_task(
        self,
        *,
        title: str,
        description: str | None = None,
        status: TaskStatus | str = TaskStatus.PENDING,
        priority: TaskPriority | str = TaskPriority.MEDIUM,
        due_date: date | str | None = None,
        assignee: str | None = None,
    ) -> Task:
        # Coerce before taking the lock: a bad value must not leave anything behind.
        clean_title = coerce_title(title)
        clean_status = TaskStatus.parse(status or TaskStatus.PENDING)
        clean_priority = TaskPriority.parse(priority or TaskPriority.MEDIUM)
        clean_due = coerce_due_date(due_date)
        clean_description = coerce_optional_text(description)
        clean_assignee = coerce_optional_text(assignee)

        with self._lock:
            now = self._clock()
            task = Task(
                id=self._new_id(),
                title=clean_title,
                description=clean_description,
                status=clean_status,
                priority=clean_priority,
                due_date=clean_due,
                assignee=clean_assignee,
                created_at=now,
                updated_at=now,
            )
            self._tasks[task.id] = task

        logger.debug(
            "Task added id=%s status=%s priority=%s due=%s",
            task.id,
            task.status.value,
            task.priority.value,
            task.due_date,
        )
        return task

    def update_task(self, task_id: str, changes: Mapping[str, Any]) -> Task | None:
        """
        Merge `changes` over the stored task and refresh updated_at.

        Only keys present in `changes` are touched; an explicit None clears an
        optional field. Returns None if the id is unknown.
        """
        clean = self._coerce_changes(changes)

        with self._lock:
            existing = self._tasks.get(str(task_id))
            if existing is None:
                return None
            # updated_at never moves backwards, even if the clock does.
            now = max(self._clock(), existing.updated_at)
            updated = replace(existing, **clean, updated_at=now)
            self._tasks[existing.id] = updated

        logger.debug("Task updated id=%s fields=%s", updated.id, sorted(clean))
        return updated

    def delete_task(self, task_id: str) -> bool:
        with self._lock:
            removed = self._tasks.pop(str(task_id), None)
        if removed is None:
            return False
        logger.debug("Task deleted id=%s", removed.id)
        return True

    def search_tasks(self, query: str) -> list[Task]:
        """
        Case-insensitive substring match over title, description and assignee.
        An empty query matches every task.
        """
        needle = (query or "").casefold()

        def matches(task: Task) -> bool:
            fields = (task.title, task.description, task.assignee)
            return any(f is not None and needle in f.casefold() for f in fields)

        with self._lock:
            snapshot = list(self._tasks.values())
        return self._newest_first(t for t in snapshot if matches(t))

    def filter_tasks(
        self,
        *,
        status: TaskStatus | str | None = None,
        priority: TaskPriority | str | None = None,
    ) -> list[Task]:
        """Exact match on each supplied criterion; None matches anything."""
        want_status = TaskStatus.parse(status) if status is not None else None
        want_priority = TaskPriority.parse(priority) if priority is not None else None

        with self._lock:
            snapshot = list(self._tasks.values())
        return self._newest_first(
            t
            for t in snapshot
            if (want_status is None or t.status == want_status)
            and (want_priority is None or t.priority == want_priority)
        )
