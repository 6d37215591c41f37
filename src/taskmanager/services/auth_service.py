"""Registration and login."""

import logging

from taskmanager.core.exceptions import (
    IllegalArgumentError,
    InvalidPasswordError,
    InvalidPasswordHashError,
)
from taskmanager.core.security import PasswordHasher
from taskmanager.core.tokens import TokenService
from taskmanager.repositories import UserRepository
from taskmanager.schemas.user import UserDetails
from taskmanager.services.user_service import (
    USER_NOT_FOUND,
    UserService,
    require_fields,
    to_user_details,
)

logger = logging.getLogger(__name__)


class AuthenticationService:
    """Issues tokens to users who register or present valid credentials."""

    def __init__(
        self,
        user_service: UserService,
        user_repository: UserRepository,
        password_hasher: PasswordHasher,
        token_service: TokenService,
    ):
        self.user_service = user_service
        self.users = user_repository
        self.hasher = password_hasher
        self.tokens = token_service

    def login_user(self, email: str | None, password: str | None) -> UserDetails:
        """
        Authenticate a user by email and password.

        An unknown email is reported as an illegal argument rather than a
        distinct "not found" kind.

        Returns:
            User details including a freshly issued token

        Raises:
            IllegalArgumentError: If a field is blank or no user has this email
            InvalidPasswordError: If the password does not match
        """
        require_fields("Login", email=email, password=password)

        user = self.users.get_by_email(email)
        if user is None:
            logger.warning("Login attempt for unknown email")
            raise IllegalArgumentError(USER_NOT_FOUND)

        try:
            password_ok = self.hasher.matches(password, user.password_hash)
        except InvalidPasswordHashError as e:
            logger.error(f"Stored password hash is unusable for user ID: {user.user_id}")
            raise InvalidPasswordError("Invalid credentials") from e

        if not password_ok:
            logger.warning(f"Invalid password for user ID: {user.user_id}")
            raise InvalidPasswordError("Invalid credentials")

        token = self.tokens.generate_token(user.email)
        logger.info(f"User logged in with ID: {user.user_id}")
        return to_user_details(user, jwt_token=token)

    def register_user(
        self,
        email: str | None,
        password: str | None,
        password_confirmation: str | None,
    ) -> UserDetails:
        """
        Register a new user and log them in.

        Validation and persistence are delegated to ``UserService.create``;
        nothing is stored when validation fails.

        Returns:
            Created user details including a token
        """
        created = self.user_service.create(email, password, password_confirmation)
        token = self.tokens.generate_token(created.email)
        logger.info(f"User registered with ID: {created.user_id}")
        return created.model_copy(update={"jwt_token": token})
