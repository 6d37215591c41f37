"""FastAPI dependencies for authentication, services and database."""

from functools import lru_cache
from typing import Annotated

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from taskmanager.config import Settings, get_settings
from taskmanager.core.auth import Authenticator
from taskmanager.core.security import PasswordHasher
from taskmanager.core.tokens import TokenService
from taskmanager.database import get_db
from taskmanager.models import User
from taskmanager.repositories import TaskRepository, UserRepository
from taskmanager.services import AuthenticationService, TaskService, UserService

# HTTP Bearer token authentication; missing tokens are reported by the Authenticator
bearer_scheme = HTTPBearer(auto_error=False)

DatabaseSession = Annotated[Session, Depends(get_db)]
AppSettings = Annotated[Settings, Depends(get_settings)]


@lru_cache
def _password_hasher(rounds: int) -> PasswordHasher:
    return PasswordHasher(rounds=rounds)


def get_password_hasher(settings: AppSettings) -> PasswordHasher:
    """Password hasher for the configured work factor."""
    return _password_hasher(settings.bcrypt_rounds)


def get_token_service(settings: AppSettings) -> TokenService:
    """Token service signing with the configured secret."""
    return TokenService.from_settings(settings)


def get_user_repository(db: DatabaseSession) -> UserRepository:
    return UserRepository(db)


def get_task_repository(db: DatabaseSession) -> TaskRepository:
    return TaskRepository(db)


Hasher = Annotated[PasswordHasher, Depends(get_password_hasher)]
Tokens = Annotated[TokenService, Depends(get_token_service)]
Users = Annotated[UserRepository, Depends(get_user_repository)]
Tasks = Annotated[TaskRepository, Depends(get_task_repository)]


def get_user_service(users: Users, hasher: Hasher, settings: AppSettings) -> UserService:
    return UserService(users, hasher, password_min_length=settings.password_min_length)


def get_authentication_service(
    user_service: Annotated[UserService, Depends(get_user_service)],
    users: Users,
    hasher: Hasher,
    tokens: Tokens,
) -> AuthenticationService:
    return AuthenticationService(user_service, users, hasher, tokens)


def get_task_service(tasks: Tasks, users: Users) -> TaskService:
    return TaskService(tasks, users)


def get_current_user(
    token: Annotated[HTTPAuthorizationCredentials | None, Depends(bearer_scheme)],
    tokens: Tokens,
    users: Users,
) -> User:
    """
    Resolve the authenticated user from the Bearer token.

    Args:
        token: Bearer token from Authorization header
        tokens: Token service
        users: User repository

    Returns:
        Authenticated user

    Raises:
        InsufficientAuthenticationError: If the token is missing, invalid or expired
        AuthenticationCredentialsNotFoundError: If the token's user no longer exists
    """
    authenticator = Authenticator(tokens, users)
    return authenticator.authenticate(token.credentials if token else None)


# Type aliases for cleaner dependency injection
CurrentUser = Annotated[User, Depends(get_current_user)]
AuthServiceDep = Annotated[AuthenticationService, Depends(get_authentication_service)]
UserServiceDep = Annotated[UserService, Depends(get_user_service)]
TaskServiceDep = Annotated[TaskService, Depends(get_task_service)]
