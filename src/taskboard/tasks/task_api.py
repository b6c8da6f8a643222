# src/taskboard/tasks/task_api.py

from __future__ import annotations

import logging

from ..core.ports import TaskRepo
from .task_models import Task, TaskPriority, TaskStatus

logger = logging.getLogger(__name__)

COPY_SUFFIX = " (Copy)"


def _blank_to_none(value: str | None) -> str | None:
    if value is None:
        return None
    value = str(value).strip()
    return value or None


def find_tasks(
    repo: TaskRepo,
    *,
    search: str | None = None,
    status: TaskStatus | str | None = None,
    priority: TaskPriority | str | None = None,
) -> list[Task]:
    """
    Query used by the task table.

    Search text and status/priority criteria are ANDed: a task must match the
    search and every supplied criterion. Ordering is always newest first.

    The search text is matched as given, surrounding whitespace included; only
    None or "" leaves it out. Blank status/priority values count as "not supplied".
    """
    if search == "":
        search = None
    status = _blank_to_none(status)
    priority = _blank_to_none(priority)

    if search is None and status is None and priority is None:
        return repo.list_tasks()

    if search is None:
        return repo.filter_tasks(status=status, priority=priority)

    found = repo.search_tasks(search)
    if status is None and priority is None:
        return found

    # Both lists come back newest first; intersect by id and keep search order.
    allowed = {t.id for t in repo.filter_tasks(status=status, priority=priority)}
    return [t for t in found if t.id in allowed]


def duplicate_task(repo: TaskRepo, task_id: str) -> Task | None:
    """
    Create a copy of an existing task.

    The copy gets a " (Copy)" title suffix and starts over as pending; every
    other user-editable field is carried across. Returns None if the source
    task does not exist.
    """
    source = repo.get_task(task_id)
    if source is None:
        return None

    copy = repo.add_task(
        title=f"{source.title}{COPY_SUFFIX}",
        description=source.description,
        status=TaskStatus.PENDING,
        priority=source.priority,
        due_date=source.due_date,
        assignee=source.assignee,
    )
    logger.info("Task duplicated source=%s copy=%s", source.id, copy.id)
    return copy
