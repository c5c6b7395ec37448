from __future__ import annotations

import logging
from typing import Callable, List, Optional

from .api import TasksAPI
from .cache import LocalCache
from .errors import NetworkFailure
from .models import Task, TaskFilter
from .settings import ClientSettings, get_client_settings
from .state import PendingAction, TaskMirror, TaskStats

logger = logging.getLogger(__name__)

FETCH_ERROR = "Failed to fetch tasks. Using local storage data."


def _clean_title(title: str) -> str:
    s = title.strip()
    if not s:
        raise ValueError("title must not be empty")
    return s


class TaskClient:
    """
    Drives the task mirror against the API.

    Every mutating call runs the same cycle: apply the change to the mirror
    right away, send the request, then either commit the server's answer or
    refetch the whole list and roll back. Calls are not coordinated with each
    other; the response that resolves last wins.
    """

    def __init__(self, api: TasksAPI, cache: Optional[LocalCache] = None) -> None:
        self.api = api
        self.cache = cache
        self.mirror = TaskMirror()
        self.error: Optional[str] = None
        if cache is not None:
            self.mirror.add_listener(cache.save)

    @classmethod
    def from_settings(cls, settings: Optional[ClientSettings] = None) -> "TaskClient":
        s = settings or get_client_settings()
        return cls(TasksAPI.connect(s.api_url, timeout=s.timeout), LocalCache(s.cache_path))

    def close(self) -> None:
        self.api.close()

    def __enter__(self) -> "TaskClient":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    # ---- views ----

    @property
    def tasks(self) -> List[Task]:
        return self.mirror.tasks

    def visible(self, task_filter: TaskFilter = TaskFilter.all) -> List[Task]:
        return self.mirror.visible(task_filter)

    def stats(self) -> TaskStats:
        return self.mirror.stats()

    # ---- loading ----

    def start(self) -> bool:
        """Show cached tasks, then replace them with the server's list."""
        if self.cache is not None:
            cached = self.cache.load()
            if cached is not None:
                logger.info("Loaded %d tasks from %s", len(cached), self.cache.path)
                self.mirror.seed(cached)
        return self.refresh()

    def _fetch(self) -> Optional[List[Task]]:
        try:
            tasks = self.api.list_tasks()
        except NetworkFailure as exc:
            logger.error("Error fetching tasks: %s", exc)
            self.error = FETCH_ERROR
            return None
        self.error = None
        return tasks

    def refresh(self) -> bool:
        """Fetch the full list; on failure the mirror is left as it is."""
        tasks = self._fetch()
        if tasks is None:
            return False
        logger.debug("Fetched %d tasks", len(tasks))
        self.mirror.replace_all(tasks)
        return True

    # ---- actions ----

    def _run(self, action: PendingAction, call: Callable[[], Optional[Task]]) -> PendingAction:
        try:
            result = call()
        except NetworkFailure as exc:
            logger.error("Error during %s of task %s: %s", action.kind.value, action.task_id, exc)
            self.mirror.rollback(action, self._fetch())
            return action
        self.mirror.commit(action, result)
        return action

    def add_task(self, title: str) -> PendingAction:
        clean = _clean_title(title)
        action = self.mirror.begin_create(clean)
        return self._run(action, lambda: self.api.create_task(clean))

    def toggle_complete(self, task_id: str) -> Optional[PendingAction]:
        action = self.mirror.begin_toggle(task_id)
        if action is None:
            return None
        return self._run(action, lambda: self.api.update_task(task_id, **action.changes))

    def update_task(
        self, task_id: str, *, title: Optional[str] = None, completed: Optional[bool] = None
    ) -> Optional[PendingAction]:
        if title is not None:
            title = _clean_title(title)
        action = self.mirror.begin_update(task_id, title=title, completed=completed)
        if action is None:
            return None
        return self._run(action, lambda: self.api.update_task(task_id, **action.changes))

    def delete_task(self, task_id: str) -> Optional[PendingAction]:
        action = self.mirror.begin_delete(task_id)
        if action is None:
            return None
        return self._run(action, lambda: self.api.delete_task(task_id))
