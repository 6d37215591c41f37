"""User account routes."""
from fastapi import APIRouter, status

from taskmanager.api.deps import CurrentUser, UserServiceDep
from taskmanager.api.responses import envelope_response, no_content_response
from taskmanager.core.auth import ensure_user_access
from taskmanager.schemas.user import PasswordUpdate, UserDelete

router = APIRouter(prefix="/users", tags=["users"])


@router.get("/{user_id}")
def get_user(user_id: int, current_user: CurrentUser, user_service: UserServiceDep):
    """
    Get the authenticated user's details.

    Args:
        user_id: User ID, must be the caller's own
        current_user: Authenticated user
        user_service: User service

    Returns:
        User details
    """
    ensure_user_access(current_user, user_id)
    return envelope_response(user_service.get(user_id))


@router.put("/{user_id}/password")
def update_password(
    user_id: int,
    password_data: PasswordUpdate,
    current_user: CurrentUser,
    user_service: UserServiceDep,
):
    """
    Change the authenticated user's password.

    Args:
        user_id: User ID, must be the caller's own
        password_data: Current password and the new password twice
        current_user: Authenticated user
        user_service: User service

    Returns:
        Updated user details
    """
    ensure_user_access(current_user, user_id)
    user = user_service.update_password(
        user_id,
        password_data.current_password,
        password_data.new_password,
        password_data.new_password_confirmation,
    )
    return envelope_response(user)


@router.post("/{user_id}/delete", status_code=status.HTTP_204_NO_CONTENT)
def delete_user(
    user_id: int,
    deletion_data: UserDelete,
    current_user: CurrentUser,
    user_service: UserServiceDep,
):
    """
    Delete the authenticated user's account and all of their tasks.

    Args:
        user_id: User ID, must be the caller's own
        deletion_data: Email and current password
        current_user: Authenticated user
        user_service: User service
    """
    ensure_user_access(current_user, user_id)
    user_service.delete(user_id, deletion_data.email, deletion_data.current_password)
    return no_content_response()
