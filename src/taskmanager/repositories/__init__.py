"""Persistence for users and tasks."""
from taskmanager.repositories.task_repository import TaskRepository
from taskmanager.repositories.user_repository import UserRepository

__all__ = [
    "UserRepository",
    "TaskRepository",
]
