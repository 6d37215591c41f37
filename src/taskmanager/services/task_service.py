"""Task service: CRUD on tasks, always scoped to the owning user."""

import logging

from sqlalchemy.exc import IntegrityError

from taskmanager.core.exceptions import (
    IllegalArgumentError,
    TaskAlreadyExistsError,
    TaskNotFoundError,
)
from taskmanager.models import Task, User
from taskmanager.repositories import TaskRepository, UserRepository
from taskmanager.schemas.task import TaskDetails
from taskmanager.services.user_service import USER_NOT_FOUND, is_blank

logger = logging.getLogger(__name__)

TASK_NOT_FOUND = "Task not found"


def to_task_details(task: Task) -> TaskDetails:
    return TaskDetails.model_validate(task)


def task_exists_message(name: str) -> str:
    return f"Task with the name '{name}' already exists for the user"


class TaskService:
    """Ownership-scoped task operations."""

    def __init__(self, task_repository: TaskRepository, user_repository: UserRepository):
        self.tasks = task_repository
        self.users = user_repository

    def create_task(
        self, user_id: int, name: str | None, description: str | None
    ) -> TaskDetails:
        """
        Create a new task for a user.

        Args:
            user_id: Owning user ID
            name: Task name, unique among the user's tasks
            description: Task description

        Returns:
            Created task

        Raises:
            IllegalArgumentError: If name or description is blank, or the user does not exist
            TaskAlreadyExistsError: If the user already has a task with this name
        """
        if is_blank(name):
            raise IllegalArgumentError("Task name cannot be null or empty")
        if is_blank(description):
            raise IllegalArgumentError("Task description cannot be null or empty")

        user = self._get_user(user_id)
        self._ensure_unique_name(user, name)

        task = Task(name=name, description=description, user_id=user.user_id)
        try:
            task = self.tasks.save(task)
        except IntegrityError as e:
            # The unique constraint caught a concurrent create with the same name
            raise TaskAlreadyExistsError(task_exists_message(name)) from e

        logger.info(f"Task created with ID: {task.task_id} for user ID: {user_id}")
        return to_task_details(task)

    def update_task(
        self,
        user_id: int,
        task_id: int,
        name: str | None,
        description: str | None,
    ) -> TaskDetails:
        """
        Overwrite a task's name and description.

        Renaming onto another of the user's task names is rejected.

        Raises:
            IllegalArgumentError: If name or description is blank, or the user does not exist
            TaskNotFoundError: If the task does not exist or belongs to another user
            TaskAlreadyExistsError: If the new name is taken by another of the user's tasks
        """
        if is_blank(name):
            raise IllegalArgumentError("Task name cannot be null or empty")
        if is_blank(description):
            raise IllegalArgumentError("Task description cannot be null or empty")

        user = self._get_user(user_id)
        task = self._get_task(user, task_id)

        if name != task.name:
            self._ensure_unique_name(user, name)

        task.name = name
        task.description = description
        try:
            task = self.tasks.save(task)
        except IntegrityError as e:
            raise TaskAlreadyExistsError(task_exists_message(name)) from e

        logger.info(f"Task with ID: {task_id} updated for user ID: {user_id}")
        return to_task_details(task)

    def delete_task(self, user_id: int, task_id: int) -> None:
        """
        Delete one of the user's tasks.

        Raises:
            IllegalArgumentError: If the user does not exist
            TaskNotFoundError: If the task does not exist or belongs to another user
        """
        user = self._get_user(user_id)
        task = self._get_task(user, task_id)
        self.tasks.delete(task)
        logger.info(f"Task with ID: {task_id} deleted for user ID: {user_id}")

    def get_all_tasks_for_user(self, user_id: int) -> list[TaskDetails]:
        """
        List all of the user's tasks in insertion order.

        Raises:
            IllegalArgumentError: If the user does not exist
        """
        user = self._get_user(user_id)
        tasks = [to_task_details(task) for task in self.tasks.list_for_user(user.user_id)]
        logger.info(f"Found {len(tasks)} tasks for user ID: {user_id}")
        return tasks

    def get_task_by_user_id_and_task_id(self, user_id: int, task_id: int) -> TaskDetails:
        """
        Get one of the user's tasks.

        Raises:
            IllegalArgumentError: If the user does not exist
            TaskNotFoundError: If the task does not exist or belongs to another user
        """
        user = self._get_user(user_id)
        return to_task_details(self._get_task(user, task_id))

    def _get_user(self, user_id: int) -> User:
        user = self.users.get_by_id(user_id)
        if user is None:
            logger.warning(f"User not found with ID: {user_id}")
            raise IllegalArgumentError(USER_NOT_FOUND)
        return user

    def _get_task(self, user: User, task_id: int) -> Task:
        task = self.tasks.get_for_user(user.user_id, task_id)
        if task is None:
            logger.warning(f"Task with ID: {task_id} not found for user ID: {user.user_id}")
            raise TaskNotFoundError(TASK_NOT_FOUND)
        return task

    def _ensure_unique_name(self, user: User, name: str) -> None:
        if self.tasks.get_by_name_for_user(user.user_id, name) is not None:
            logger.warning(f"Task '{name}' already exists for user ID: {user.user_id}")
            raise TaskAlreadyExistsError(task_exists_message(name))
