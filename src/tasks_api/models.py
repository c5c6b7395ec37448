from __future__ import annotations

from datetime import datetime
from typing import TypedDict


# PUBLIC_INTERFACE
class TaskEntity(TypedDict):
    """
    A lightweight domain model representing a Task held by the in-memory store.

    Fields:
    - id: Unique string identifier, time-based, assigned on creation
    - title: Non-empty title (trimmed on input via schemas)
    - completed: Boolean completion flag
    - created_at: UTC creation timestamp (datetime), never changed after creation
    """

    id: str
    title: str
    completed: bool
    created_at: datetime
