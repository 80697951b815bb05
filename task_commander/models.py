"""Task records as served by the task store."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from typing import Any


class TaskPriority(enum.Enum):
    """Priority levels known to the task store."""

    LOW = "Low"
    NORMAL = "Normal"
    HIGH = "High"


class TaskStatus(enum.Enum):
    """Workflow states known to the task store."""

    PENDING = "Pending"
    IN_PROGRESS = "In Progress"
    COMPLETED = "Completed"


class ViewFilter(enum.Enum):
    """Top-level task views applied before tag and query filtering."""

    TODAY = "today"
    UPCOMING = "upcoming"
    COMPLETED = "completed"
    ALL = "all"


# Fields a task may be created or updated with
EDITABLE_FIELDS: frozenset[str] = frozenset(
    {"title", "description", "due_date", "priority", "status", "tags"}
)


@dataclass
class Task:
    """A single task record.

    ``priority`` and ``status`` are kept as the strings the store sent so that
    records with values outside :class:`TaskPriority` / :class:`TaskStatus`
    still load and remain searchable.
    """

    task_id: str
    title: str = ""
    description: str = ""
    due_date: str | None = None
    priority: str = TaskPriority.NORMAL.value
    status: str = TaskStatus.PENDING.value
    tags: list[str] = field(default_factory=list)
    created_at: str = ""
    updated_at: str = ""
    id: str | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Task:
        """Build a task from the store's camelCase JSON record."""
        store_id = data.get("id")
        return cls(
            task_id=str(data.get("taskId") or ""),
            title=data.get("title") or "",
            description=data.get("description") or "",
            due_date=data.get("dueDate") or None,
            priority=data.get("priority") or TaskPriority.NORMAL.value,
            status=data.get("status") or TaskStatus.PENDING.value,
            tags=[str(t) for t in data.get("tags") or []],
            created_at=data.get("createdAt") or "",
            updated_at=data.get("updatedAt") or "",
            id=str(store_id) if store_id is not None else None,
        )

    def to_dict(self) -> dict[str, Any]:
        """Serialize to the store's camelCase JSON record."""
        data: dict[str, Any] = {
            "taskId": self.task_id,
            "title": self.title,
            "description": self.description,
            "dueDate": self.due_date,
            "priority": self.priority,
            "status": self.status,
            "tags": list(self.tags),
            "createdAt": self.created_at,
            "updatedAt": self.updated_at,
        }
        if self.id is not None:
            data["id"] = self.id
        return data
