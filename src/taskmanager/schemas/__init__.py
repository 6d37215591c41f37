"""Pydantic schemas for request/response validation."""
from taskmanager.schemas.response import ResponseEnvelope
from taskmanager.schemas.task import TaskCreate, TaskDetails, TaskUpdate
from taskmanager.schemas.user import (
    PasswordUpdate,
    UserCreate,
    UserDelete,
    UserDetails,
    UserLogin,
)

__all__ = [
    # User schemas
    "UserCreate",
    "UserLogin",
    "UserDetails",
    "PasswordUpdate",
    "UserDelete",
    # Task schemas
    "TaskCreate",
    "TaskUpdate",
    "TaskDetails",
    # Envelope
    "ResponseEnvelope",
]
