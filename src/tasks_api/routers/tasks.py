from __future__ import annotations

from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status

from ..repositories import ListQuery, TaskRepository, get_repository
from ..schemas import DeleteConfirmation, TaskCreate, TaskOut, TaskStatus, TaskUpdate

router = APIRouter(
    prefix="/api/tasks",
    tags=["tasks"],
)

NOT_FOUND_DETAIL = "Task not found"


def _get_repo(repo: TaskRepository = Depends(get_repository)) -> TaskRepository:
    """
    Dependency wrapper for repository to keep signatures clean.
    """
    return repo


def _not_found() -> HTTPException:
    return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=NOT_FOUND_DETAIL)


# PUBLIC_INTERFACE
@router.get(
    "",
    response_model=List[TaskOut],
    summary="List Tasks",
    description=(
        "List every task in insertion order.\n\n"
        "Query parameters:\n"
        "- status: 'completed' or 'active'\n"
        "- completed: filter by completion flag (true/false)\n\n"
        "Both filters may be given only when they agree."
    ),
    responses={
        200: {"description": "List retrieved successfully"},
        400: {"description": "Conflicting filters"},
    },
)
def list_tasks(
    status_filter: Optional[TaskStatus] = Query(
        None, alias="status", description="Filter by status: completed or active"
    ),
    completed: Optional[bool] = Query(None, description="Filter by completion status"),
    repo: TaskRepository = Depends(_get_repo),
) -> List[TaskOut]:
    """
    List tasks, optionally filtered by completion.
    """
    wanted = completed
    if status_filter is not None:
        if completed is not None and completed != status_filter.completed_flag:
            raise HTTPException(status_code=400, detail="status and completed filters disagree")
        wanted = status_filter.completed_flag

    items = repo.list(ListQuery(completed=wanted))
    return [TaskOut(**it) for it in items]  # type: ignore[arg-type]


# PUBLIC_INTERFACE
@router.post(
    "",
    response_model=TaskOut,
    status_code=status.HTTP_201_CREATED,
    summary="Create Task",
    description="Create a new task and return the created resource.",
    responses={
        201: {"description": "Task created successfully"},
        422: {"description": "Validation error"},
    },
)
def create_task(payload: TaskCreate, repo: TaskRepository = Depends(_get_repo)) -> TaskOut:
    """
    Create a new Task. The server assigns id and createdAt.
    """
    created = repo.create(payload)
    return TaskOut(**created)  # type: ignore[arg-type]


# PUBLIC_INTERFACE
@router.get(
    "/{task_id}",
    response_model=TaskOut,
    summary="Get Task",
    description="Get a single task by ID.",
    responses={
        200: {"description": "Task found"},
        404: {"description": "Task not found"},
    },
)
def get_task(task_id: str, repo: TaskRepository = Depends(_get_repo)) -> TaskOut:
    """
    Retrieve a single Task by its ID.
    """
    item = repo.get(task_id)
    if item is None:
        raise _not_found()
    return TaskOut(**item)  # type: ignore[arg-type]


# PUBLIC_INTERFACE
@router.put(
    "/{task_id}",
    response_model=TaskOut,
    summary="Update Task",
    description=(
        "Update the mutable fields (title, completed) of a task. Fields omitted keep their "
        "current value; id and createdAt in the body are ignored."
    ),
    responses={
        200: {"description": "Task updated"},
        404: {"description": "Task not found"},
    },
)
def update_task(task_id: str, payload: TaskUpdate, repo: TaskRepository = Depends(_get_repo)) -> TaskOut:
    """
    Partial update of a Task.
    """
    updated = repo.update(task_id, payload)
    if updated is None:
        raise _not_found()
    return TaskOut(**updated)  # type: ignore[arg-type]


# PUBLIC_INTERFACE
@router.delete(
    "/{task_id}",
    response_model=DeleteConfirmation,
    summary="Delete Task",
    description="Delete a task by ID.",
    responses={
        200: {"description": "Task deleted"},
        404: {"description": "Task not found"},
    },
)
def delete_task(task_id: str, repo: TaskRepository = Depends(_get_repo)) -> DeleteConfirmation:
    """
    Delete a Task. Returns a confirmation on success, 404 if not found.
    """
    if not repo.delete(task_id):
        raise _not_found()
    return DeleteConfirmation(id=task_id)
