from __future__ import annotations

from typing import Optional


class TaskClientError(Exception):
    """Base class for task client errors."""


class NetworkFailure(TaskClientError):
    """
    A request was rejected or the server was unreachable.

    `status_code` is None when no HTTP response was received at all.
    """

    def __init__(self, message: str, status_code: Optional[int] = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class TaskNotFound(NetworkFailure):
    """The server answered 404 for the requested task id."""

    def __init__(self, task_id: str) -> None:
        super().__init__(f"Task not found: {task_id}", status_code=404)
        self.task_id = task_id


class ParseFailure(TaskClientError):
    """Cached task data could not be decoded."""


class ActionAlreadyResolved(TaskClientError):
    """A pending action was committed or rolled back twice."""
