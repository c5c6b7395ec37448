from __future__ import annotations

import logging
import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Callable, Dict, List, NamedTuple, Optional

from .errors import ActionAlreadyResolved
from .models import TEMP_ID_PREFIX, Task, TaskFilter

logger = logging.getLogger(__name__)

Listener = Callable[[List[Task]], None]


class ActionKind(str, Enum):
    CREATE = "create"
    UPDATE = "update"
    TOGGLE = "toggle"
    DELETE = "delete"


class ActionState(str, Enum):
    """PENDING moves exactly once, to COMMITTED or ROLLED_BACK."""

    PENDING = "pending"
    COMMITTED = "committed"
    ROLLED_BACK = "rolled_back"


@dataclass
class PendingAction:
    """
    One user action travelling through optimistic apply, network call and
    reconciliation.

    - task_id: the placeholder id for creates, the real id otherwise
    - optimistic: the record shown locally while pending (None for deletes)
    - changes: fields sent to the server for updates/toggles
    - result: the authoritative record once committed
    """

    kind: ActionKind
    task_id: str
    optimistic: Optional[Task] = None
    changes: Dict[str, Any] = field(default_factory=dict)
    state: ActionState = ActionState.PENDING
    result: Optional[Task] = None

    @property
    def is_pending(self) -> bool:
        return self.state is ActionState.PENDING


class TaskStats(NamedTuple):
    total: int
    active: int
    completed: int


def _replace(tasks: List[Task], task_id: str, record: Task) -> List[Task]:
    return [record if t.id == task_id else t for t in tasks]


class TaskMirror:
    """
    Local mirror of the server's task list.

    Two lists are kept: `tasks`, what the user sees (optimistic changes
    included), and `confirmed`, the last known server state. Fetches and
    commits advance `confirmed`; rollbacks fall back to it when the server
    cannot be reached.
    """

    def __init__(self) -> None:
        self._tasks: List[Task] = []
        self._confirmed: List[Task] = []
        self._listeners: List[Listener] = []

    # ---- views ----

    @property
    def tasks(self) -> List[Task]:
        return list(self._tasks)

    @property
    def confirmed(self) -> List[Task]:
        return list(self._confirmed)

    def find(self, task_id: str) -> Optional[Task]:
        for t in self._tasks:
            if t.id == task_id:
                return t
        return None

    def visible(self, task_filter: TaskFilter = TaskFilter.all) -> List[Task]:
        return [t for t in self._tasks if task_filter.matches(t)]

    def stats(self) -> TaskStats:
        total = len(self._tasks)
        completed = sum(1 for t in self._tasks if t.completed)
        return TaskStats(total=total, active=total - completed, completed=completed)

    # ---- change notification ----

    def add_listener(self, listener: Listener) -> None:
        self._listeners.append(listener)

    def _set(self, tasks: List[Task]) -> None:
        self._tasks = tasks
        for listener in self._listeners:
            listener(list(tasks))

    # ---- authoritative state ----

    def seed(self, tasks: List[Task]) -> None:
        """
        Start from cached data until the first fetch arrives.

        The cache holds what the user saw, so placeholders of creates that
        never completed are shown but not taken as server state.
        """
        self._confirmed = [t for t in tasks if not t.is_placeholder]
        self._set(list(tasks))

    def replace_all(self, tasks: List[Task]) -> None:
        self._confirmed = list(tasks)
        self._set(list(tasks))

    # ---- optimistic apply ----

    def begin_create(self, title: str) -> PendingAction:
        placeholder = Task(
            id=f"{TEMP_ID_PREFIX}{uuid.uuid4().hex}",
            title=title,
            completed=False,
            created_at=datetime.now(timezone.utc),
        )
        self._set(self._tasks + [placeholder])
        return PendingAction(ActionKind.CREATE, placeholder.id, optimistic=placeholder, changes={"title": title})

    def begin_update(
        self,
        task_id: str,
        *,
        title: Optional[str] = None,
        completed: Optional[bool] = None,
        kind: ActionKind = ActionKind.UPDATE,
    ) -> Optional[PendingAction]:
        current = self.find(task_id)
        if current is None:
            return None
        changes: Dict[str, Any] = {}
        if title is not None:
            changes["title"] = title
        if completed is not None:
            changes["completed"] = completed
        optimistic = current.model_copy(update=changes)
        self._set(_replace(self._tasks, task_id, optimistic))
        return PendingAction(kind, task_id, optimistic=optimistic, changes=changes)

    def begin_toggle(self, task_id: str) -> Optional[PendingAction]:
        current = self.find(task_id)
        if current is None:
            return None
        return self.begin_update(task_id, completed=not current.completed, kind=ActionKind.TOGGLE)

    def begin_delete(self, task_id: str) -> Optional[PendingAction]:
        if self.find(task_id) is None:
            return None
        self._set([t for t in self._tasks if t.id != task_id])
        return PendingAction(ActionKind.DELETE, task_id)

    # ---- resolution ----

    def _check_pending(self, action: PendingAction) -> None:
        if not action.is_pending:
            raise ActionAlreadyResolved(f"{action.kind.value} {action.task_id} is already {action.state.value}")

    def commit(self, action: PendingAction, server_task: Optional[Task] = None) -> None:
        """
        Reconcile a successful round trip.

        The entry holding action.task_id is replaced by the server's record.
        An updated entry that disappeared in the meantime is not brought back;
        a created task is always shown once the server has it.
        """
        self._check_pending(action)

        if action.kind is ActionKind.DELETE:
            self._confirmed = [t for t in self._confirmed if t.id != action.task_id]
        else:
            if server_task is None:
                raise ValueError(f"{action.kind.value} commit needs the server's record")
            if action.kind is ActionKind.CREATE:
                self._confirmed = [t for t in self._confirmed if t.id != server_task.id] + [server_task]
            else:
                self._confirmed = _replace(self._confirmed, action.task_id, server_task)

            if action.kind is ActionKind.CREATE and self.find(action.task_id) is None:
                # Placeholder was dropped by another rollback; the task still exists
                self._set([t for t in self._tasks if t.id != server_task.id] + [server_task])
            else:
                self._set(_replace(self._tasks, action.task_id, server_task))

        action.result = server_task
        action.state = ActionState.COMMITTED
        logger.debug("Committed %s %s", action.kind.value, action.task_id)

    def rollback(self, action: PendingAction, server_tasks: Optional[List[Task]] = None) -> None:
        """
        Discard optimistic state after a failed round trip.

        server_tasks is the refetched list; None means the refetch failed too
        and the mirror returns to the last known server state.
        """
        self._check_pending(action)
        if server_tasks is not None:
            self.replace_all(server_tasks)
        else:
            self._set(list(self._confirmed))
        action.state = ActionState.ROLLED_BACK
        logger.debug("Rolled back %s %s", action.kind.value, action.task_id)
