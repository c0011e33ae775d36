"""Task store package - authoritative in-memory storage."""
from __future__ import annotations

from .store import TaskStore, UsernameTakenError

__all__ = [
    "TaskStore",
    "UsernameTakenError",
]
