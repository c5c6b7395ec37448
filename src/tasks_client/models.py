from __future__ import annotations

from datetime import datetime
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


# PUBLIC_INTERFACE
class Task(BaseModel):
    """
    Client-side copy of a task, in the API's wire shape.

    Placeholder tasks created before the server answers carry an id that
    starts with TEMP_ID_PREFIX.
    """

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    id: str
    title: str
    completed: bool = False
    created_at: datetime = Field(..., alias="createdAt")

    @property
    def is_placeholder(self) -> bool:
        return self.id.startswith(TEMP_ID_PREFIX)

    def to_wire(self) -> dict:
        return self.model_dump(mode="json", by_alias=True)


TEMP_ID_PREFIX = "temp-"


# PUBLIC_INTERFACE
class TaskFilter(str, Enum):
    """The three views of the task list."""

    all = "all"
    active = "active"
    completed = "completed"

    def matches(self, task: Task) -> bool:
        if self is TaskFilter.active:
            return not task.completed
        if self is TaskFilter.completed:
            return task.completed
        return True
