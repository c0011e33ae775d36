"""Request models for the task API.

These pydantic models are the validation gate: a payload that fails them
never reaches the store. Unknown keys (including ``id``) are dropped.

Usage in routers:
    from api.models import TaskCreateRequest, TaskUpdateRequest
"""
from __future__ import annotations

from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field, StrictBool, field_validator

from todo_flow.models import TEXT_MAX_LENGTH, TaskPriority


def _check_text(value: str) -> str:
    if not value.strip():
        raise ValueError("Task text is required")
    return value


# =============================================================================
# Task Models
# =============================================================================

class TaskCreateRequest(BaseModel):
    """Request body for creating a task."""
    model_config = ConfigDict(extra="ignore")

    text: str = Field(..., max_length=TEXT_MAX_LENGTH)
    completed: StrictBool = False
    priority: TaskPriority = TaskPriority.MEDIUM
    category: Optional[str] = None

    @field_validator("text")
    @classmethod
    def _text_not_blank(cls, value: str) -> str:
        return _check_text(value)

    def to_fields(self) -> Dict[str, Any]:
        return self.model_dump(mode="json")


class TaskUpdateRequest(BaseModel):
    """Request body for a partial task update.

    Only keys present in the payload are applied. ``category`` may be
    set to null to clear it; the other fields may not be null.
    """
    model_config = ConfigDict(extra="ignore")

    text: Optional[str] = Field(None, max_length=TEXT_MAX_LENGTH)
    completed: Optional[StrictBool] = None
    priority: Optional[TaskPriority] = None
    category: Optional[str] = None

    @field_validator("text", "completed", "priority", mode="before")
    @classmethod
    def _not_null(cls, value: Any) -> Any:
        if value is None:
            raise ValueError("Field may not be null")
        return value

    @field_validator("text")
    @classmethod
    def _text_not_blank(cls, value: str) -> str:
        return _check_text(value)

    def to_updates(self) -> Dict[str, Any]:
        """Fields explicitly present in the request body."""
        return self.model_dump(mode="json", exclude_unset=True)
