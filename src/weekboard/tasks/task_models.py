# src/weekboard/tasks/task_models.py

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Any


@dataclass(slots=True)
class Task:
    id: int
    text: str
    completed: bool
    created_at: datetime

    def to_record(self) -> dict[str, Any]:
        """Wire shape used by the persisted store (camelCase key kept for createdAt)."""
        return {
            "id": self.id,
            "text": self.text,
            "completed": self.completed,
            "createdAt": self.created_at.isoformat(),
        }

    @classmethod
    def from_record(cls, raw: Any) -> Task:
        """
        Build a Task from a decoded record.

        Raises ValueError on anything that does not look like a task record.
        """
        if not isinstance(raw, dict):
            raise ValueError(f"task record must be an object, got {type(raw).__name__}")

        tid = raw.get("id")
        # bool is an int subclass; reject it explicitly.
        if not isinstance(tid, int) or isinstance(tid, bool):
            raise ValueError(f"invalid task id: {tid!r}")

        text = raw.get("text")
        if not isinstance(text, str) or not text.strip():
            raise ValueError(f"invalid task text for id={tid}")

        completed = raw.get("completed", False)
        if not isinstance(completed, bool):
            raise ValueError(f"invalid completed flag for id={tid}")

        created_raw = raw.get("createdAt")
        if not isinstance(created_raw, str):
            raise ValueError(f"missing createdAt for id={tid}")
        created_at = datetime.fromisoformat(created_raw)
        if created_at.tzinfo is not None:
            # Browser-written records end in "Z"; week math runs on naive local time.
            created_at = created_at.astimezone().replace(tzinfo=None)

        return cls(id=tid, text=text, completed=completed, created_at=created_at)


@dataclass(slots=True, frozen=True)
class EditSession:
    """The single task currently being edited plus its draft text."""

    task_id: int
    draft: str
