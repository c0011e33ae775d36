"""Tests for the in-memory TaskStore.

This module tests:
- Task CRUD (create, read, partial update, delete)
- Default application and field constraints
- Category derivation
- User lookup and the username uniqueness switch
"""
from __future__ import annotations

import threading

import pytest

from todo_flow.models import TEXT_MAX_LENGTH, Task, TaskPriority
from todo_flow.task_store import TaskStore, UsernameTakenError


# =============================================================================
# Task Creation
# =============================================================================

class TestCreateTask:
    def test_defaults_applied(self, store):
        task = store.create_task("Buy milk")

        assert task.text == "Buy milk"
        assert task.completed is False
        assert task.priority == "medium"
        assert task.category is None
        assert task.id

    def test_round_trip(self, store):
        created = store.create_task("Write report", priority="high", category="Work")

        assert store.get_task(created.id) == created

    def test_ids_are_unique(self, store):
        ids = {store.create_task(f"Task {i}").id for i in range(50)}
        assert len(ids) == 50

    def test_priority_enum_normalized(self, store):
        task = store.create_task("Enum priority", priority=TaskPriority.HIGH)
        assert task.priority == "high"

    def test_create_from_dict_ignores_id(self, store):
        task = store.create_task_from_dict({"id": "chosen", "text": "Payload", "completed": True})

        assert task.id != "chosen"
        assert task.completed is True
        assert task.priority == "medium"

    def test_create_from_dict_requires_text(self, store):
        with pytest.raises(ValueError):
            store.create_task_from_dict({"priority": "low"})

    @pytest.mark.parametrize("text", ["", "   ", "x" * (TEXT_MAX_LENGTH + 1)])
    def test_rejects_invalid_text(self, store, text):
        with pytest.raises(ValueError):
            store.create_task(text)
        assert store.count_tasks() == 0

    def test_accepts_max_length_text(self, store):
        task = store.create_task("x" * TEXT_MAX_LENGTH)
        assert len(task.text) == TEXT_MAX_LENGTH

    def test_rejects_unknown_priority(self, store):
        with pytest.raises(ValueError):
            store.create_task("Task", priority="urgent")


# =============================================================================
# Reads
# =============================================================================

class TestReads:
    def test_get_missing_task_returns_none(self, store):
        assert store.get_task("missing") is None

    def test_get_all_tasks_insertion_order(self, store):
        a = store.create_task("A")
        b = store.create_task("B")
        c = store.create_task("C")

        assert [t.id for t in store.get_all_tasks()] == [a.id, b.id, c.id]

    def test_snapshot_is_detached(self, store):
        store.create_task("A")
        snapshot = store.get_all_tasks()
        snapshot.clear()

        assert store.count_tasks() == 1

    def test_records_are_immutable(self, store):
        task = store.create_task("A")
        with pytest.raises(AttributeError):
            task.text = "changed"  # type: ignore[misc]
        assert store.get_task(task.id).text == "A"


# =============================================================================
# Partial Update
# =============================================================================

class TestUpdateTask:
    def test_missing_task_returns_none(self, store):
        assert store.update_task("missing", {"completed": True}) is None

    def test_changes_only_present_keys(self, store):
        task = store.create_task("Call Bob", priority="low", category="Home")

        updated = store.update_task(task.id, {"completed": True})

        assert updated == Task(
            id=task.id, text="Call Bob", completed=True, priority="low", category="Home"
        )
        assert store.get_task(task.id) == updated

    @pytest.mark.parametrize(
        "updates",
        [
            {"text": "New text"},
            {"priority": "high"},
            {"category": "Errands"},
            {"category": None},
            {"completed": True, "priority": "low"},
        ],
    )
    def test_merge_invariant(self, store, updates):
        original = store.create_task("Original", priority="medium", category="Work")

        updated = store.update_task(original.id, updates)

        before = original.to_dict()
        after = updated.to_dict()
        for key in before:
            if key in updates:
                assert after[key] == updates[key]
            else:
                assert after[key] == before[key]

    def test_id_is_never_changed(self, store):
        task = store.create_task("Keep id")

        updated = store.update_task(task.id, {"id": "other", "text": "Renamed"})

        assert updated.id == task.id
        assert store.get_task("other") is None

    def test_unknown_keys_ignored(self, store):
        task = store.create_task("Keep fields")
        assert store.update_task(task.id, {"colour": "red"}) == task

    def test_keeps_position(self, store):
        a = store.create_task("A")
        b = store.create_task("B")
        store.update_task(a.id, {"text": "A2"})

        assert [t.id for t in store.get_all_tasks()] == [a.id, b.id]

    def test_invalid_update_leaves_task_untouched(self, store):
        task = store.create_task("Valid")

        with pytest.raises(ValueError):
            store.update_task(task.id, {"text": "   "})

        assert store.get_task(task.id) == task


# =============================================================================
# Delete
# =============================================================================

class TestDeleteTask:
    def test_delete_existing(self, store):
        task = store.create_task("Delete me")

        assert store.delete_task(task.id) is True
        assert store.get_task(task.id) is None

    def test_second_delete_returns_false(self, store):
        task = store.create_task("Delete me")
        store.delete_task(task.id)

        assert store.delete_task(task.id) is False

    def test_delete_unknown_returns_false(self, store):
        assert store.delete_task("never-existed") is False


# =============================================================================
# Categories
# =============================================================================

class TestCategories:
    def test_distinct_sorted_non_null(self, store):
        for category in ["Work", "home", "Work", None]:
            store.create_task("Task", category=category)

        assert store.get_categories() == ["Work", "home"]

    def test_recomputed_after_changes(self, store):
        task = store.create_task("Task", category="Errands")
        assert store.get_categories() == ["Errands"]

        store.update_task(task.id, {"category": None})
        assert store.get_categories() == []

    def test_empty_store(self, store):
        assert store.get_categories() == []


# =============================================================================
# Users
# =============================================================================

class TestUsers:
    def test_create_and_lookup(self, store):
        user = store.create_user("alice", "secret")

        assert store.get_user(user.id) == user
        assert store.get_user_by_username("alice") == user
        assert user.password == "secret"

    def test_lookup_missing(self, store):
        assert store.get_user("missing") is None
        assert store.get_user_by_username("nobody") is None

    def test_public_dict_hides_password(self, store):
        user = store.create_user("alice", "secret")
        assert user.to_dict() == {"id": user.id, "username": "alice"}

    def test_duplicate_username_accepted_by_default(self, store):
        first = store.create_user("alice", "one")
        second = store.create_user("alice", "two")

        assert first.id != second.id
        assert store.get_user_by_username("alice") == first

    def test_duplicate_username_rejected_when_enforced(self):
        store = TaskStore(enforce_unique_usernames=True)
        store.create_user("alice", "one")

        with pytest.raises(UsernameTakenError):
            store.create_user("alice", "two")


# =============================================================================
# Concurrency
# =============================================================================

def test_concurrent_creates_are_all_stored(store):
    def worker(n: int) -> None:
        for i in range(50):
            store.create_task(f"Worker {n} task {i}")

    threads = [threading.Thread(target=worker, args=(n,)) for n in range(8)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    assert store.count_tasks() == 400


def test_clear_empties_store(store):
    store.create_task("A")
    user = store.create_user("bob", "pw")
    store.clear()

    assert store.get_all_tasks() == []
    assert store.get_user(user.id) is None
