"""Task record model shared by the Streamlit client and the backend."""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum
from typing import Any, Dict, Optional, Union


class Priority(IntEnum):
    """Ordered priority scale; a higher value means a higher priority."""

    LOW = 0
    MEDIUM = 1
    HIGH = 2

    @property
    def label(self) -> str:
        return self.name.capitalize()


PriorityLike = Union[Priority, int, str]


def parse_priority(value: PriorityLike) -> Priority:
    """Coerce a Priority, an int or a numeric string into a Priority.

    Raises ValueError for anything outside the three defined levels.
    """
    if isinstance(value, Priority):
        return value
    if isinstance(value, bool):
        raise ValueError(f"Invalid priority: {value!r}")
    if isinstance(value, str):
        raw = value.strip()
        if raw.upper() in Priority.__members__:
            return Priority[raw.upper()]
        try:
            value = int(raw)
        except ValueError:
            raise ValueError(f"Invalid priority: {value!r}") from None
    try:
        return Priority(value)
    except ValueError:
        raise ValueError(f"Invalid priority: {value!r}") from None


@dataclass(frozen=True)
class Task:
    id: int
    title: str
    description: Optional[str] = None
    completed: bool = False
    priority: Priority = Priority.LOW

    @classmethod
    def from_dict(cls, payload: Dict[str, Any]) -> "Task":
        return cls(
            id=int(payload["id"]),
            title=str(payload["title"]),
            description=payload.get("description"),
            completed=bool(payload.get("completed", False)),
            priority=parse_priority(payload.get("priority", Priority.LOW)),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "title": self.title,
            "description": self.description,
            "completed": self.completed,
            "priority": int(self.priority),
        }
