"""todo-flow: task storage engine with filter/sort queries."""

from .models import TEXT_MAX_LENGTH, Task, TaskPriority, User
from .query import ALL_CATEGORIES, TaskCounts, TaskQuery, apply_query
from .task_store import TaskStore, UsernameTakenError

__all__ = [
    "ALL_CATEGORIES",
    "TEXT_MAX_LENGTH",
    "Task",
    "TaskCounts",
    "TaskPriority",
    "TaskQuery",
    "TaskStore",
    "User",
    "UsernameTakenError",
    "apply_query",
]
