from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

import httpx
from pydantic import ValidationError

from .errors import NetworkFailure, TaskNotFound
from .models import Task, TaskFilter

logger = logging.getLogger(__name__)


class TasksAPI:
    """
    Thin HTTP transport for the task API.

    `http` must have its base_url pointing at the API root (".../api"). Every
    failure, whether a transport error or a non-2xx answer, surfaces as
    NetworkFailure so callers have one thing to roll back on.
    """

    def __init__(self, http: httpx.Client) -> None:
        self._http = http

    @classmethod
    def connect(cls, base_url: str, timeout: float = 10.0) -> "TasksAPI":
        return cls(httpx.Client(base_url=base_url, timeout=timeout))

    def close(self) -> None:
        self._http.close()

    def _request(self, method: str, path: str, task_id: Optional[str] = None, **kwargs: Any) -> Any:
        try:
            response = self._http.request(method, path, **kwargs)
        except httpx.HTTPError as exc:
            logger.warning("%s %s failed: %s", method, path, exc)
            raise NetworkFailure(f"{method} {path} failed: {exc}") from exc

        if response.status_code == 404 and task_id is not None:
            raise TaskNotFound(task_id)
        if response.is_error:
            logger.warning("%s %s answered HTTP %s", method, path, response.status_code)
            raise NetworkFailure(
                f"HTTP error! Status: {response.status_code}", status_code=response.status_code
            )
        try:
            return response.json()
        except ValueError as exc:
            raise NetworkFailure(f"{method} {path} returned a non-JSON body") from exc

    def _task(self, data: Any) -> Task:
        try:
            return Task.model_validate(data)
        except ValidationError as exc:
            raise NetworkFailure(f"unexpected task payload: {exc}") from exc

    def list_tasks(self, status: Optional[TaskFilter] = None) -> List[Task]:
        params: Dict[str, str] = {}
        if status is not None and status is not TaskFilter.all:
            params["status"] = status.value
        data = self._request("GET", "/tasks", params=params)
        if not isinstance(data, list):
            raise NetworkFailure("task list response is not an array")
        return [self._task(item) for item in data]

    def create_task(self, title: str) -> Task:
        return self._task(self._request("POST", "/tasks", json={"title": title}))

    def update_task(
        self, task_id: str, *, title: Optional[str] = None, completed: Optional[bool] = None
    ) -> Task:
        body: Dict[str, Any] = {}
        if title is not None:
            body["title"] = title
        if completed is not None:
            body["completed"] = completed
        return self._task(self._request("PUT", f"/tasks/{task_id}", task_id=task_id, json=body))

    def delete_task(self, task_id: str) -> None:
        self._request("DELETE", f"/tasks/{task_id}", task_id=task_id)
