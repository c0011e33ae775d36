"""Task and User records for the todo-flow storage engine.

Records are frozen so every copy handed out by the store is a snapshot:
callers can keep, filter, or sort them without touching stored state.
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Optional


TEXT_MAX_LENGTH = 500

TASK_FIELDS = ("text", "completed", "priority", "category")


class TaskPriority(str, Enum):
    """Priority levels, lowest to highest."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


@dataclass(frozen=True, slots=True)
class User:
    """An account record. The password is stored exactly as given."""

    id: str
    username: str
    password: str

    def to_dict(self) -> Dict[str, Any]:
        """Public form; never includes the password."""
        return {"id": self.id, "username": self.username}


@dataclass(frozen=True, slots=True)
class Task:
    """A to-do record."""

    id: str
    text: str
    completed: bool = False
    priority: str = TaskPriority.MEDIUM.value
    category: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        """Convert to the API response shape."""
        return {
            "id": self.id,
            "text": self.text,
            "completed": self.completed,
            "priority": self.priority,
            "category": self.category,
        }


def validate_text(text: Any) -> str:
    """Return ``text`` unchanged if it satisfies the task text constraint.

    Raises:
        ValueError: if text is not a string, is blank after trimming,
            or is longer than TEXT_MAX_LENGTH.
    """
    if not isinstance(text, str) or not text.strip():
        raise ValueError("text is required")
    if len(text) > TEXT_MAX_LENGTH:
        raise ValueError(f"text must be at most {TEXT_MAX_LENGTH} characters")
    return text


def validate_priority(priority: Any) -> str:
    """Normalize a priority (enum member or raw string) to its string value."""
    try:
        return TaskPriority(priority).value
    except ValueError:
        allowed = ", ".join(p.value for p in TaskPriority)
        raise ValueError(f"priority must be one of: {allowed}") from None


def validate_task_fields(
    *,
    text: Any,
    completed: Any,
    priority: Any,
    category: Any,
) -> Dict[str, Any]:
    """Check a full set of task fields and return them normalized."""
    if not isinstance(completed, bool):
        raise ValueError("completed must be a boolean")
    if category is not None and not isinstance(category, str):
        raise ValueError("category must be a string or None")
    return {
        "text": validate_text(text),
        "completed": completed,
        "priority": validate_priority(priority),
        "category": category,
    }
