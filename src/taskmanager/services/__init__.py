"""Service layer."""
from taskmanager.services.auth_service import AuthenticationService
from taskmanager.services.task_service import TaskService
from taskmanager.services.user_service import UserService

__all__ = [
    "AuthenticationService",
    "UserService",
    "TaskService",
]
