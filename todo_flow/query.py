"""Filtering and ordering of task snapshots.

Every function here is pure: it takes a sequence of tasks (usually from
``TaskStore.get_all_tasks``) and returns a new list.
"""
from __future__ import annotations

import unicodedata
from dataclasses import dataclass
from typing import Iterable, List, Literal, Optional, Sequence, Tuple

from .models import Task, TaskPriority


StatusFilter = Literal["all", "active", "completed"]
SortOrder = Literal["newest", "oldest", "priority", "alphabetical"]

STATUS_FILTERS = ("all", "active", "completed")
SORT_ORDERS = ("newest", "oldest", "priority", "alphabetical")

# "No category filter". Distinct from "", which matches a literal empty category.
ALL_CATEGORIES = None

PRIORITY_RANK = {
    TaskPriority.HIGH.value: 0,
    TaskPriority.MEDIUM.value: 1,
    TaskPriority.LOW.value: 2,
}


@dataclass(slots=True)
class TaskQuery:
    """Filter and sort criteria for a task listing."""

    status: StatusFilter = "all"
    search: str = ""
    category: Optional[str] = ALL_CATEGORIES
    sort: SortOrder = "newest"


@dataclass(slots=True)
class TaskCounts:
    """Totals shown next to a task listing."""

    total: int
    active: int
    completed: int


def filter_tasks(tasks: Iterable[Task], query: TaskQuery) -> List[Task]:
    """Apply status, search and category filters (all must match)."""
    if query.status not in STATUS_FILTERS:
        raise ValueError(f"Unknown status filter: {query.status}")

    result = list(tasks)

    if query.status == "active":
        result = [t for t in result if not t.completed]
    elif query.status == "completed":
        result = [t for t in result if t.completed]

    if query.search.strip():
        needle = query.search.lower()
        result = [
            t for t in result
            if needle in t.text.lower()
            or (t.category is not None and needle in t.category.lower())
        ]

    if query.category is not ALL_CATEGORIES:
        result = [t for t in result if t.category == query.category]

    return result


def _alphabetical_key(task: Task) -> Tuple[str, str]:
    """Collation key independent of the process locale.

    Accents are compared only after the base letters, so "Éclair" sorts
    with the e's and not after "z".
    """
    folded = task.text.casefold()
    base = "".join(
        ch for ch in unicodedata.normalize("NFKD", folded) if not unicodedata.combining(ch)
    )
    return base, folded


def sort_tasks(tasks: Sequence[Task], order: SortOrder) -> List[Task]:
    """Return tasks in the requested order.

    Ties keep the input order. "newest" and "oldest" rely on the input being
    in insertion order; there is no stored creation time.
    """
    if order == "oldest":
        return list(tasks)
    if order == "newest":
        return list(reversed(tasks))
    if order == "priority":
        return sorted(tasks, key=lambda t: PRIORITY_RANK[t.priority])
    if order == "alphabetical":
        return sorted(tasks, key=_alphabetical_key)
    raise ValueError(f"Unknown sort order: {order}")


def apply_query(tasks: Iterable[Task], query: TaskQuery) -> List[Task]:
    """Filter then sort."""
    return sort_tasks(filter_tasks(tasks, query), query.sort)


def count_tasks_by_status(tasks: Iterable[Task]) -> TaskCounts:
    """Count total, active and completed tasks."""
    tasks = list(tasks)
    completed = sum(1 for t in tasks if t.completed)
    return TaskCounts(total=len(tasks), active=len(tasks) - completed, completed=completed)


def group_by_completion(tasks: Iterable[Task]) -> Tuple[List[Task], List[Task]]:
    """Split into (active, completed), each keeping the input order."""
    active: List[Task] = []
    completed: List[Task] = []
    for task in tasks:
        (completed if task.completed else active).append(task)
    return active, completed
