# src/taskboard/tasks/task_models.py

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from enum import StrEnum
from typing import Any, Final


class TaskStatus(StrEnum):
    """Task lifecycle status. Values are the exact strings used on the wire."""

    PENDING = "pending"
    IN_PROGRESS = "in-progress"
    COMPLETED = "completed"

    @classmethod
    def parse(cls, raw: TaskStatus | str) -> TaskStatus:
        try:
            return cls(str(raw).strip())
        except ValueError:
            allowed = ", ".join(s.value for s in cls)
            raise ValueError(f"invalid status {raw!r} (expected one of: {allowed})") from None


class TaskPriority(StrEnum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"

    @classmethod
    def parse(cls, raw: TaskPriority | str) -> TaskPriority:
        try:
            return cls(str(raw).strip())
        except ValueError:
            allowed = ", ".join(p.value for p in cls)
            raise ValueError(f"invalid priority {raw!r} (expected one of: {allowed})") from None


# Fields a partial update may touch. id/created_at/updated_at are owned by the store.
UPDATABLE_FIELDS: Final = frozenset(
    {"title", "description", "status", "priority", "due_date", "assignee"}
)

WIRE_FIELD_NAMES: Final = {
    "id": "id",
    "title": "title",
    "description": "description",
    "status": "status",
    "priority": "priority",
    "due_date": "dueDate",
    "assignee": "assignee",
    "created_at": "createdAt",
    "updated_at": "updatedAt",
}


def coerce_title(raw: Any) -> str:
    if raw is None or not str(raw).strip():
        raise ValueError("title is required")
    return str(raw).strip()


def coerce_optional_text(raw: Any) -> str | None:
    """Blank strings collapse to None (cleared form fields arrive as "")."""
    if raw is None:
        return None
    text = str(raw).strip()
    return text or None


def coerce_due_date(raw: Any) -> date | None:
    """
    Accept a date, a datetime (date part kept), an ISO date/datetime string,
    or blank/None.
    """
    if raw is None:
        return None
    if isinstance(raw, datetime):
        return raw.date()
    if isinstance(raw, date):
        return raw
    if isinstance(raw, str):
        text = raw.strip()
        if not text:
            return None
        try:
            return date.fromisoformat(text)
        except ValueError:
            pass
        try:
            return datetime.fromisoformat(text.replace("Z", "+00:00")).date()
        except ValueError:
            raise ValueError(f"invalid due date {raw!r} (use YYYY-MM-DD)") from None
    raise ValueError(f"invalid due date {raw!r} (use YYYY-MM-DD)")


def _iso_ts(ts: datetime) -> str:
    return ts.isoformat()


def _parse_ts(raw: str) -> datetime:
    return datetime.fromisoformat(str(raw).replace("Z", "+00:00"))


@dataclass(frozen=True, slots=True)
class Task:
    id: str
    title: str
    description: str | None
    status: TaskStatus
    priority: TaskPriority
    due_date: date | None
    assignee: str | None
    created_at: datetime
    updated_at: datetime

    def to_dict(self) -> dict[str, Any]:
        """JSON-ready wire representation (camelCase keys, ISO-8601 timestamps)."""
        return {
            "id": str(self.id),
            "title": self.title,
            "description": self.description,
            "status": self.status.value,
            "priority": self.priority.value,
            "dueDate": self.due_date.isoformat() if self.due_date else None,
            "assignee": self.assignee,
            "createdAt": _iso_ts(self.created_at),
            "updatedAt": _iso_ts(self.updated_at),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Task:
        return cls(
            id=str(data["id"]),
            title=coerce_title(data.get("title")),
            description=coerce_optional_text(data.get("description")),
            status=TaskStatus.parse(data.get("status") or TaskStatus.PENDING),
            priority=TaskPriority.parse(data.get("priority") or TaskPriority.MEDIUM),
            due_date=coerce_due_date(data.get("dueDate")),
            assignee=coerce_optional_text(data.get("assignee")),
            created_at=_parse_ts(data["createdAt"]),
            updated_at=_parse_ts(data["updatedAt"]),
        )
