# src/taskboard/core/ports.py

from __future__ import annotations

"""
Ports (interfaces) used by the connectors.

Connectors and helpers depend on this Protocol instead of the concrete TaskStore.
This keeps storage swappable and makes testing easier.
"""

from collections.abc import Mapping
from datetime import date
from typing import Any, Protocol

from ..tasks.task_models import Task, TaskPriority, TaskStatus


class TaskRepo(Protocol):
    def count_tasks(self) -> int: ...
    def list_tasks(self) -> list[Task]: ...
    def get_task(self, task_id: str) -> Task | None: ...

    def add_task(
            self,
            *,
            title: str,
            description: str | None = None,
            status: TaskStatus | str = TaskStatus.PENDING,
            priority: TaskPriority | str = TaskPriority.MEDIUM,
            due_date: date | str | None = None,
            assignee: str | None = None,
    ) -> Task: ...

    def update_task(self, task_id: str, changes: Mapping[str, Any]) -> Task | None: ...
    def delete_task(self, task_id: str) -> bool: ...

    # Table queries
    def search_tasks(self, query: str) -> list[Task]: ...
    def filter_tasks(
            self,
            *,
            status: TaskStatus | str | None = None,
            priority: TaskPriority | str | None = None,
    ) -> list[Task]: ...
