"""Tasks Router - task CRUD, listing queries and categories.

Handles:
- Task listing with optional status/search/category/sort query
- Task CRUD against the application's TaskStore
- Category listing and status counts

Absent tasks come back from the store as None/False; this module turns
them into 404 responses.
"""
from __future__ import annotations

import logging
from typing import List, Literal, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, Response, status

from api.dependencies import get_store, serialize_task
from api.models import TaskCreateRequest, TaskUpdateRequest
from todo_flow.query import TaskQuery, apply_query, count_tasks_by_status
from todo_flow.task_store import TaskStore

logger = logging.getLogger(__name__)

# Main tasks router (mounted at /api/tasks)
router = APIRouter()

# Categories router (mounted at /api/categories)
categories_router = APIRouter()


TASK_NOT_FOUND = "Task not found"


# =============================================================================
# Listing
# =============================================================================

@router.get("")
def list_tasks(
    status_filter: Optional[Literal["all", "active", "completed"]] = Query(
        None, alias="status", description="Completion state filter"
    ),
    search: Optional[str] = Query(None, description="Case-insensitive text/category match"),
    category: Optional[str] = Query(None, description="Exact category match"),
    sort: Optional[Literal["newest", "oldest", "priority", "alphabetical"]] = Query(
        None, description="Ordering of the result"
    ),
    store: TaskStore = Depends(get_store),
) -> List[dict]:
    """List tasks.

    Without query parameters the full snapshot is returned in insertion
    order. Any parameter switches to the query layer; ``sort`` then
    defaults to "oldest" so unsorted results keep insertion order.
    """
    tasks = store.get_all_tasks()

    if any(param is not None for param in (status_filter, search, category, sort)):
        query = TaskQuery(
            status=status_filter or "all",
            search=search or "",
            category=category,
            sort=sort or "oldest",
        )
        tasks = apply_query(tasks, query)

    return [serialize_task(t) for t in tasks]


@router.get("/stats")
def task_stats(store: TaskStore = Depends(get_store)) -> dict:
    """Total, active and completed task counts."""
    counts = count_tasks_by_status(store.get_all_tasks())
    return {
        "total": counts.total,
        "active": counts.active,
        "completed": counts.completed,
    }


@categories_router.get("")
def list_categories(store: TaskStore = Depends(get_store)) -> List[str]:
    """Distinct categories in ascending order."""
    return store.get_categories()


# =============================================================================
# Task CRUD
# =============================================================================

@router.get("/{task_id}")
def get_task(task_id: str, store: TaskStore = Depends(get_store)) -> dict:
    task = store.get_task(task_id)
    if task is None:
        raise HTTPException(status_code=404, detail=TASK_NOT_FOUND)
    return serialize_task(task)


@router.post("", status_code=status.HTTP_201_CREATED)
def create_task(
    request: TaskCreateRequest,
    store: TaskStore = Depends(get_store),
) -> dict:
    """Create a new task."""
    task = store.create_task(**request.to_fields())
    logger.info("Created task %s", task.id)
    return serialize_task(task)


@router.patch("/{task_id}")
def update_task(
    task_id: str,
    request: TaskUpdateRequest,
    store: TaskStore = Depends(get_store),
) -> dict:
    """Apply a partial update; fields missing from the body are unchanged."""
    task = store.update_task(task_id, request.to_updates())
    if task is None:
        raise HTTPException(status_code=404, detail=TASK_NOT_FOUND)
    return serialize_task(task)


@router.delete("/{task_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_task(task_id: str, store: TaskStore = Depends(get_store)) -> Response:
    if not store.delete_task(task_id):
        raise HTTPException(status_code=404, detail=TASK_NOT_FOUND)
    logger.info("Deleted task %s", task_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
