"""Application error taxonomy.

Every error raised by the service layer is a ``TaskManagerError`` subclass.
Each class carries the ``kind`` reported to clients and the HTTP status the
API layer answers with, so handlers never need to inspect messages.
"""

from fastapi import status

__all__ = [
    "TaskManagerError",
    "InvalidEmailFormatError",
    "InvalidPasswordError",
    "InvalidPasswordHashError",
    "InvalidJwtTokenError",
    "IllegalArgumentError",
    "EmailAlreadyExistsError",
    "TaskAlreadyExistsError",
    "TaskNotFoundError",
    "AccessDeniedError",
    "AuthenticationCredentialsNotFoundError",
    "InsufficientAuthenticationError",
]


class TaskManagerError(Exception):
    """Base class for all application errors."""

    kind: str = "TaskManagerError"
    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message: str = "Unexpected error"

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message
        super().__init__(self.message)

    def __str__(self) -> str:
        return self.message

    @property
    def detail(self) -> str:
        """Client-facing error string, ``"<kind>: <message>"``."""
        return f"{self.kind}: {self.message}"


# Bad requests


class InvalidEmailFormatError(TaskManagerError):
    kind = "InvalidEmailFormat"
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Invalid email format"


class InvalidPasswordError(TaskManagerError):
    kind = "InvalidPassword"
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Invalid credentials"


class InvalidJwtTokenError(TaskManagerError):
    kind = "InvalidJwtToken"
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Invalid JWT token"


class IllegalArgumentError(TaskManagerError):
    kind = "IllegalArgument"
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Illegal argument"


# Conflicts


class EmailAlreadyExistsError(TaskManagerError):
    kind = "EmailAlreadyExists"
    status_code = status.HTTP_409_CONFLICT
    default_message = "Email is already in use"


class TaskAlreadyExistsError(TaskManagerError):
    kind = "TaskAlreadyExists"
    status_code = status.HTTP_409_CONFLICT
    default_message = "Task already exists"


# Lookups and access


class TaskNotFoundError(TaskManagerError):
    kind = "TaskNotFound"
    status_code = status.HTTP_404_NOT_FOUND
    default_message = "Task not found"


class AccessDeniedError(TaskManagerError):
    kind = "AccessDenied"
    status_code = status.HTTP_403_FORBIDDEN
    default_message = "User is not authorized to perform this action"


class AuthenticationCredentialsNotFoundError(TaskManagerError):
    kind = "AuthenticationCredentialsNotFound"
    status_code = status.HTTP_401_UNAUTHORIZED
    default_message = "User for the provided token was not found"


class InsufficientAuthenticationError(TaskManagerError):
    kind = "InsufficientAuthentication"
    status_code = status.HTTP_401_UNAUTHORIZED
    default_message = "Full authentication is required to access this resource"


# Internal


class InvalidPasswordHashError(TaskManagerError):
    """Stored password hash is not a hash the hasher can identify."""

    kind = "InvalidPasswordHash"
    default_message = "Password hash is malformed"
