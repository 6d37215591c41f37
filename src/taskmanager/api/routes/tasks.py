"""Task routes."""
from typing import Annotated

from fastapi import APIRouter, Path, status

from taskmanager.api.deps import CurrentUser, TaskServiceDep
from taskmanager.api.responses import envelope_response, no_content_response
from taskmanager.core.auth import ensure_user_access
from taskmanager.schemas.task import TaskCreate, TaskUpdate

router = APIRouter(prefix="/users/{user_id}/tasks", tags=["tasks"])

# Task IDs are 64-bit integers in the database
TaskId = Annotated[int, Path(ge=-(2**63), le=2**63 - 1)]


@router.get("")
def list_tasks(user_id: int, current_user: CurrentUser, task_service: TaskServiceDep):
    """
    List all tasks of the authenticated user.

    Args:
        user_id: Owning user ID, must be the caller's own
        current_user: Authenticated user
        task_service: Task service

    Returns:
        List of tasks
    """
    ensure_user_access(current_user, user_id)
    return envelope_response(task_service.get_all_tasks_for_user(user_id))


@router.post("", status_code=status.HTTP_201_CREATED)
def create_task(
    user_id: int,
    task_data: TaskCreate,
    current_user: CurrentUser,
    task_service: TaskServiceDep,
):
    """
    Create a new task.

    Args:
        user_id: Owning user ID, must be the caller's own
        task_data: Task name and description
        current_user: Authenticated user
        task_service: Task service

    Returns:
        Created task
    """
    ensure_user_access(current_user, user_id)
    task = task_service.create_task(user_id, task_data.name, task_data.description)
    return envelope_response(task, status.HTTP_201_CREATED)


@router.get("/{task_id}")
def get_task(
    user_id: int,
    task_id: TaskId,
    current_user: CurrentUser,
    task_service: TaskServiceDep,
):
    """
    Get a specific task.

    Raises:
        TaskNotFoundError: If the task does not exist or belongs to someone else
    """
    ensure_user_access(current_user, user_id)
    return envelope_response(task_service.get_task_by_user_id_and_task_id(user_id, task_id))


@router.put("/{task_id}")
def update_task(
    user_id: int,
    task_id: TaskId,
    task_data: TaskUpdate,
    current_user: CurrentUser,
    task_service: TaskServiceDep,
):
    """Update a task's name and description."""
    ensure_user_access(current_user, user_id)
    task = task_service.update_task(user_id, task_id, task_data.name, task_data.description)
    return envelope_response(task)


@router.delete("/{task_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_task(
    user_id: int,
    task_id: TaskId,
    current_user: CurrentUser,
    task_service: TaskServiceDep,
):
    """Delete a task."""
    ensure_user_access(current_user, user_id)
    task_service.delete_task(user_id, task_id)
    return no_content_response()
