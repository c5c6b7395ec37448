from __future__ import annotations

import logging
import time
from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime, timezone
from functools import lru_cache
from threading import RLock
from typing import List, Optional

from .models import TaskEntity
from .schemas import TaskCreate, TaskUpdate
from .settings import get_settings

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ListQuery:
    """
    Query parameters for listing tasks.
    """
    completed: Optional[bool] = None


# PUBLIC_INTERFACE
class TaskRepository(ABC):
    """Abstract repository contract for task storage backends."""

    @abstractmethod
    def create(self, data: TaskCreate) -> TaskEntity:
        """Create, append and return a new TaskEntity."""

    @abstractmethod
    def get(self, task_id: str) -> Optional[TaskEntity]:
        """Return a TaskEntity by id, or None if not found."""

    @abstractmethod
    def update(self, task_id: str, data: TaskUpdate) -> Optional[TaskEntity]:
        """Update mutable fields of an existing TaskEntity. Return updated entity or None if not found."""

    @abstractmethod
    def delete(self, task_id: str) -> bool:
        """Delete a TaskEntity by id. Return True if deleted, False if not found."""

    @abstractmethod
    def list(self, query: Optional[ListQuery] = None) -> List[TaskEntity]:
        """
        Return every TaskEntity matching the query, in insertion order.
        - Filter by completed
        """

    @abstractmethod
    def clear(self) -> None:
        """Remove every TaskEntity."""


class InMemoryTaskRepository(TaskRepository):
    """
    Thread-safe in-memory repository; the only storage backend.

    Every operation runs under one re-entrant lock, so writes never interleave.
    """

    def __init__(self) -> None:
        self._lock = RLock()
        self._items: List[TaskEntity] = []
        self._last_id = 0

    def _now(self) -> datetime:
        return datetime.now(timezone.utc)

    def _allocate_id(self) -> str:
        # Millisecond clock, bumped so ids stay strictly increasing
        with self._lock:
            candidate = max(int(time.time() * 1000), self._last_id + 1)
            while self._index_of(str(candidate)) is not None:
                candidate += 1
            self._last_id = candidate
            return str(candidate)

    def _index_of(self, task_id: str) -> Optional[int]:
        for i, item in enumerate(self._items):
            if item["id"] == task_id:
                return i
        return None

    def add(self, entity: TaskEntity) -> TaskEntity:
        """Append a fully formed entity (used for seeding); ids must stay unique."""
        with self._lock:
            if self._index_of(entity["id"]) is not None:
                raise ValueError(f"duplicate task id: {entity['id']}")
            self._items.append(entity.copy())
            return entity.copy()

    def create(self, data: TaskCreate) -> TaskEntity:
        with self._lock:
            entity: TaskEntity = {
                "id": self._allocate_id(),
                "title": data.title,
                "completed": False,
                "created_at": self._now(),
            }
            self._items.append(entity)
        logger.info("Created task id=%s title=%r", entity["id"], entity["title"])
        return entity.copy()

    def get(self, task_id: str) -> Optional[TaskEntity]:
        with self._lock:
            i = self._index_of(task_id)
            return None if i is None else self._items[i].copy()

    def update(self, task_id: str, data: TaskUpdate) -> Optional[TaskEntity]:
        with self._lock:
            i = self._index_of(task_id)
            if i is None:
                logger.warning("Update of unknown task id=%s", task_id)
                return None

            # Update only provided fields
            updated = self._items[i].copy()
            if data.title is not None:
                updated["title"] = data.title
            if data.completed is not None:
                updated["completed"] = data.completed

            self._items[i] = updated
        logger.info("Updated task id=%s title=%r completed=%s", task_id, updated["title"], updated["completed"])
        return updated.copy()

    def delete(self, task_id: str) -> bool:
        with self._lock:
            i = self._index_of(task_id)
            if i is None:
                logger.warning("Delete of unknown task id=%s", task_id)
                return False
            deleted = self._items.pop(i)
        logger.info("Deleted task id=%s title=%r", task_id, deleted["title"])
        return True

    def list(self, query: Optional[ListQuery] = None) -> List[TaskEntity]:
        q = query or ListQuery()
        with self._lock:
            items = self._items
            if q.completed is not None:
                items = [t for t in items if t["completed"] == q.completed]
            # Return copies to avoid external mutation
            return [t.copy() for t in items]

    def clear(self) -> None:
        with self._lock:
            self._items.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._items)


def seed_sample_tasks(repo: InMemoryTaskRepository) -> None:
    """Populate an empty store with the two sample tasks."""
    now = datetime.now(timezone.utc)
    repo.add({"id": "1", "title": "Read the FastAPI tutorial", "completed": False, "created_at": now})
    repo.add({"id": "2", "title": "Build a task manager", "completed": True, "created_at": now})
    logger.info("Seeded %d sample tasks", len(repo))


# PUBLIC_INTERFACE
@lru_cache(maxsize=1)
def get_repository() -> TaskRepository:
    """
    Return the process-wide task store.

    The store lives as long as the process; it is created on first use and
    seeded with sample tasks when SEED_SAMPLE_TASKS is enabled.
    """
    repo = InMemoryTaskRepository()
    if get_settings().seed_sample_tasks:
        seed_sample_tasks(repo)
    return repo
