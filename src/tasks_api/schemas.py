from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


def _clean_title(value: str) -> str:
    s = value.strip()
    if not s:
        raise ValueError("title must not be empty")
    return s


# PUBLIC_INTERFACE
class TaskStatus(str, Enum):
    """Values accepted by the `status` list filter."""

    completed = "completed"
    active = "active"

    @property
    def completed_flag(self) -> bool:
        return self is TaskStatus.completed


# PUBLIC_INTERFACE
class TaskCreate(BaseModel):
    """
    Schema for creating a new Task.
    """

    model_config = ConfigDict(json_schema_extra={"example": {"title": "Buy milk"}})

    title: str = Field(..., description="Short title for the task", min_length=1)

    @field_validator("title")
    @classmethod
    def validate_title(cls, v: str) -> str:
        """
        Strip whitespace and reject blank titles.
        """
        return _clean_title(v)


# PUBLIC_INTERFACE
class TaskUpdate(BaseModel):
    """
    Schema for updating an existing Task.

    Only the mutable fields exist on this type; anything else in the payload
    (id, createdAt, ...) is ignored, so an update can never rewrite identity
    or creation time.
    """

    model_config = ConfigDict(
        extra="ignore",
        json_schema_extra={"example": {"title": "Buy oat milk", "completed": True}},
    )

    title: Optional[str] = Field(default=None, description="Short title for the task", min_length=1)
    completed: Optional[bool] = Field(default=None, description="Completion status flag")

    @field_validator("title")
    @classmethod
    def validate_title(cls, v: Optional[str]) -> Optional[str]:
        """
        If title is provided, strip whitespace and reject blank titles.
        """
        if v is None:
            return v
        return _clean_title(v)


# PUBLIC_INTERFACE
class TaskOut(BaseModel):
    """
    Schema returned by the API for a Task.
    """

    model_config = ConfigDict(
        populate_by_name=True,
        json_schema_extra={
            "example": {
                "id": "1735689600000",
                "title": "Buy milk",
                "completed": False,
                "createdAt": "2025-01-01T00:00:00Z",
            }
        },
    )

    id: str = Field(..., description="Unique identifier of the task")
    title: str = Field(..., description="Short title for the task")
    completed: bool = Field(..., description="Completion status flag")
    created_at: datetime = Field(..., alias="createdAt", description="Creation timestamp (UTC)")


# PUBLIC_INTERFACE
class DeleteConfirmation(BaseModel):
    """
    Body returned after a successful delete.
    """

    message: str = Field("Task deleted successfully", description="Human readable confirmation")
    id: str = Field(..., description="Identifier of the deleted task")
