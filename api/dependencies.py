"""Shared dependencies and helper functions for API routers.

Usage in routers:
    from api.dependencies import get_store, serialize_task
"""
from __future__ import annotations

from typing import Any, Dict

from fastapi import Request

from todo_flow.config import Settings
from todo_flow.models import Task
from todo_flow.task_store import TaskStore


# =============================================================================
# Configuration Constants
# =============================================================================

ALLOWED_ORIGINS = [
    "http://localhost:5173",
    "http://127.0.0.1:5173",
    "http://localhost:5000",
    "http://127.0.0.1:5000",
]


# =============================================================================
# Request-scoped Dependencies
# =============================================================================

def get_store(request: Request) -> TaskStore:
    """Return the TaskStore owned by the running application."""
    return request.app.state.store


def get_settings(request: Request) -> Settings:
    """Return the Settings the application was built with."""
    return request.app.state.settings


# =============================================================================
# Serialization Helpers
# =============================================================================

def serialize_task(task: Task) -> Dict[str, Any]:
    """Serialize a Task to API response format."""
    return task.to_dict()
