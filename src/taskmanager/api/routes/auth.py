"""Authentication routes."""
from fastapi import APIRouter, status

from taskmanager.api.deps import AuthServiceDep
from taskmanager.api.responses import envelope_response
from taskmanager.schemas.user import UserCreate, UserLogin

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post("/register", status_code=status.HTTP_201_CREATED)
def register(user_data: UserCreate, auth_service: AuthServiceDep):
    """
    Register a new user.

    Args:
        user_data: Email, password and password confirmation
        auth_service: Authentication service

    Returns:
        Created user with a JWT
    """
    user = auth_service.register_user(
        user_data.email, user_data.password, user_data.password_confirmation
    )
    return envelope_response(user, status.HTTP_201_CREATED)


@router.post("/login")
def login(credentials: UserLogin, auth_service: AuthServiceDep):
    """
    Login and get a JWT.

    Args:
        credentials: Login credentials
        auth_service: Authentication service

    Returns:
        User with a JWT
    """
    user = auth_service.login_user(credentials.email, credentials.password)
    return envelope_response(user, status.HTTP_200_OK)
