"""In-memory Task Store for todo-flow.

This module holds the authoritative collections of Users and Tasks. All
access goes through a ``TaskStore`` instance; there is no module-level
state, so a persistent backend can replace it without touching callers.

Architecture:
- Tasks: dict keyed by id, insertion ordered (used as the recency proxy)
- Users: dict keyed by id
- One re-entrant lock per collection; every public method runs its whole
  read-modify-write step under the lock

Reads hand out frozen records and fresh lists, never the internal
containers themselves.
"""
from __future__ import annotations

import logging
import threading
import uuid
from dataclasses import replace
from typing import Any, Dict, List, Mapping, Optional

from ..models import (
    TASK_FIELDS,
    Task,
    TaskPriority,
    User,
    validate_task_fields,
)

logger = logging.getLogger(__name__)


class UsernameTakenError(ValueError):
    """Raised by create_user when uniqueness enforcement is enabled."""

    def __init__(self, username: str) -> None:
        super().__init__(f"username already exists: {username}")
        self.username = username


class TaskStore:
    """Encapsulated store owning all Users and Tasks.

    Args:
        enforce_unique_usernames: Reject duplicate usernames in
            ``create_user``. Off by default, where duplicates are accepted
            and only logged.
    """

    def __init__(self, *, enforce_unique_usernames: bool = False) -> None:
        self._users: Dict[str, User] = {}
        self._tasks: Dict[str, Task] = {}
        self._users_lock = threading.RLock()
        self._tasks_lock = threading.RLock()
        self.enforce_unique_usernames = enforce_unique_usernames

    # =========================================================================
    # Users
    # =========================================================================

    def get_user(self, user_id: str) -> Optional[User]:
        with self._users_lock:
            return self._users.get(user_id)

    def get_user_by_username(self, username: str) -> Optional[User]:
        """Return the first user whose username equals ``username``."""
        with self._users_lock:
            return next(
                (user for user in self._users.values() if user.username == username),
                None,
            )

    def create_user(self, username: str, password: str) -> User:
        """Create a user with a fresh id.

        Raises:
            UsernameTakenError: if enforcement is on and the username exists.
        """
        with self._users_lock:
            if self.get_user_by_username(username) is not None:
                if self.enforce_unique_usernames:
                    raise UsernameTakenError(username)
                logger.warning("Duplicate username accepted: %s", username)

            user = User(id=str(uuid.uuid4()), username=username, password=password)
            self._users[user.id] = user
            logger.debug("User created id=%s", user.id)
            return user

    # =========================================================================
    # Tasks
    # =========================================================================

    def count_tasks(self) -> int:
        with self._tasks_lock:
            return len(self._tasks)

    def get_all_tasks(self) -> List[Task]:
        """Snapshot of all tasks in insertion order."""
        with self._tasks_lock:
            return list(self._tasks.values())

    def get_task(self, task_id: str) -> Optional[Task]:
        with self._tasks_lock:
            return self._tasks.get(task_id)

    def create_task(
        self,
        text: str,
        *,
        completed: bool = False,
        priority: str = TaskPriority.MEDIUM.value,
        category: Optional[str] = None,
    ) -> Task:
        """Create a new task.

        Args:
            text: Task text, non-empty after trimming, at most 500 characters
            completed: Initial completion flag
            priority: "low", "medium" or "high"
            category: Optional category label

        Returns:
            The created Task

        Raises:
            ValueError: if a field violates the task constraints
        """
        fields = validate_task_fields(
            text=text, completed=completed, priority=priority, category=category
        )
        task = Task(id=str(uuid.uuid4()), **fields)

        with self._tasks_lock:
            self._tasks[task.id] = task

        logger.debug("Task created id=%s priority=%s", task.id, task.priority)
        return task

    def create_task_from_dict(self, fields: Mapping[str, Any]) -> Task:
        """Create a task from a payload mapping; ``id`` and unknown keys are ignored.

        A key explicitly set to None falls back to its default, except
        ``category`` where None already is the default.
        """
        kwargs = {
            key: fields[key]
            for key in TASK_FIELDS
            if key in fields and fields[key] is not None
        }
        if "text" not in kwargs:
            raise ValueError("text is required")
        return self.create_task(**kwargs)

    def update_task(self, task_id: str, updates: Mapping[str, Any]) -> Optional[Task]:
        """Shallow-merge ``updates`` into a stored task.

        Args:
            task_id: The task ID
            updates: Fields to overwrite. ``id`` and non-task keys are ignored.

        Returns:
            Updated Task if found, None otherwise
        """
        changes = {key: value for key, value in updates.items() if key in TASK_FIELDS}
        ignored = set(updates) - set(changes)
        if ignored:
            logger.debug("Ignoring non-updatable keys %s for task %s", sorted(ignored), task_id)

        with self._tasks_lock:
            task = self._tasks.get(task_id)
            if task is None:
                return None

            merged = replace(task, **changes)
            merged = replace(
                merged,
                **validate_task_fields(
                    text=merged.text,
                    completed=merged.completed,
                    priority=merged.priority,
                    category=merged.category,
                ),
            )

            # Assigning to an existing key keeps its insertion position.
            self._tasks[task_id] = merged
            return merged

    def delete_task(self, task_id: str) -> bool:
        """Delete a task.

        Returns:
            True if deleted, False if not found
        """
        with self._tasks_lock:
            removed = self._tasks.pop(task_id, None)

        if removed is None:
            return False
        logger.debug("Task deleted id=%s", task_id)
        return True

    def get_categories(self) -> List[str]:
        """Distinct non-null categories across all tasks, sorted ascending."""
        with self._tasks_lock:
            categories = {t.category for t in self._tasks.values() if t.category is not None}
        return sorted(categories)

    def clear(self) -> None:
        """Drop every task and user."""
        with self._users_lock, self._tasks_lock:
            self._users.clear()
            self._tasks.clear()
