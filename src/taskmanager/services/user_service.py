"""User account service: creation, lookup, password change and deletion."""

import logging
import re

from sqlalchemy.exc import IntegrityError

from taskmanager.core.exceptions import (
    EmailAlreadyExistsError,
    IllegalArgumentError,
    InvalidEmailFormatError,
    InvalidPasswordError,
    InvalidPasswordHashError,
)
from taskmanager.core.security import PasswordHasher
from taskmanager.models import User
from taskmanager.repositories import UserRepository
from taskmanager.schemas.user import UserDetails

logger = logging.getLogger(__name__)

EMAIL_PATTERN = re.compile(r"^[\w\-.]+@([\w-]+\.)[\w-]{2,4}$", re.ASCII)
USER_NOT_FOUND = "User not found"
DEFAULT_PASSWORD_MIN_LENGTH = 6


def is_blank(value: str | None) -> bool:
    return value is None or not value.strip()


def require_fields(context: str, **fields: str | None) -> None:
    """
    Reject missing or blank request fields.

    Raises:
        IllegalArgumentError: Naming the first blank field
    """
    for name, value in fields.items():
        if is_blank(value):
            logger.warning(f"{context} {name} is null or empty")
            raise IllegalArgumentError(f"{context} {name} is null or empty")


def validate_email_format(email: str | None) -> None:
    """Raise InvalidEmailFormatError unless the email matches the accepted pattern."""
    if email is None or not EMAIL_PATTERN.fullmatch(email):
        logger.warning("Invalid email format")
        raise InvalidEmailFormatError("Invalid email format")


def validate_passwords(
    password: str | None,
    password_confirmation: str | None,
    min_length: int = DEFAULT_PASSWORD_MIN_LENGTH,
) -> None:
    """Raise InvalidPasswordError for blank, mismatched or too short passwords."""
    if is_blank(password) or is_blank(password_confirmation):
        raise InvalidPasswordError("Passwords can't have empty value")
    if password != password_confirmation:
        raise InvalidPasswordError("Passwords do not match")
    if len(password) < min_length:
        raise InvalidPasswordError(f"Password must be at least {min_length} characters")


def to_user_details(user: User, jwt_token: str | None = None) -> UserDetails:
    return UserDetails(user_id=user.user_id, email=user.email, jwt_token=jwt_token)


class UserService:
    """Account self-service on top of the user store."""

    def __init__(
        self,
        user_repository: UserRepository,
        password_hasher: PasswordHasher,
        password_min_length: int = DEFAULT_PASSWORD_MIN_LENGTH,
    ):
        self.users = user_repository
        self.hasher = password_hasher
        self.password_min_length = password_min_length

    def create(
        self,
        email: str | None,
        password: str | None,
        password_confirmation: str | None,
    ) -> UserDetails:
        """
        Create a new user.

        Args:
            email: Email address, used as the login and token subject
            password: Plaintext password
            password_confirmation: Must equal ``password``

        Returns:
            Created user details (without a token)

        Raises:
            InvalidEmailFormatError: If the email is malformed
            InvalidPasswordError: If the passwords are blank, differ or are too short
            EmailAlreadyExistsError: If the email is already registered
        """
        validate_email_format(email)
        validate_passwords(password, password_confirmation, self.password_min_length)

        if self.users.exists_by_email(email):
            logger.warning(f"Email already exists: {email}")
            raise EmailAlreadyExistsError("Email is already in use")

        user = User(email=email, password_hash=self.hasher.encode(password))
        try:
            user = self.users.save(user)
        except IntegrityError as e:
            # Lost a race with a concurrent registration of the same email
            raise EmailAlreadyExistsError("Email is already in use") from e

        logger.info(f"User created with ID: {user.user_id}")
        return to_user_details(user)

    def get(self, user_id: int) -> UserDetails:
        """
        Get user details by ID.

        Raises:
            IllegalArgumentError: If the user does not exist
        """
        return to_user_details(self._get_user(user_id))

    def update_password(
        self,
        user_id: int,
        current_password: str | None,
        new_password: str | None,
        new_password_confirmation: str | None,
    ) -> UserDetails:
        """
        Replace the user's password after verifying the current one.

        Raises:
            IllegalArgumentError: If a field is blank or the user does not exist
            InvalidPasswordError: If the current password is wrong, the new password
                equals the current one, or the new passwords are invalid
        """
        require_fields(
            "Password update",
            currentPassword=current_password,
            newPassword=new_password,
            newPasswordConfirmation=new_password_confirmation,
        )
        user = self._get_user(user_id)

        if not self._password_matches(current_password, user):
            logger.warning(f"Current password is incorrect for user ID: {user_id}")
            raise InvalidPasswordError("Current password is incorrect")

        if new_password == current_password:
            logger.warning(f"New password equals the current one for user ID: {user_id}")
            raise InvalidPasswordError("New password cannot be the same as the current password")

        validate_passwords(new_password, new_password_confirmation, self.password_min_length)

        user.password_hash = self.hasher.encode(new_password)
        user = self.users.save(user)

        logger.info(f"Password updated for user ID: {user_id}")
        return to_user_details(user)

    def delete(self, user_id: int, email: str | None, current_password: str | None) -> None:
        """
        Delete the user and, through cascade, all of their tasks.

        Raises:
            IllegalArgumentError: If a field is blank or the user does not exist
            InvalidPasswordError: If the password is wrong
        """
        require_fields("User deletion", email=email, currentPassword=current_password)
        user = self._get_user(user_id)

        if not self._password_matches(current_password, user):
            logger.warning(f"Invalid current password for user ID: {user_id}")
            raise InvalidPasswordError("Invalid current password")

        self.users.delete(user)
        logger.info(f"User deleted with ID: {user_id}")

    def _get_user(self, user_id: int) -> User:
        user = self.users.get_by_id(user_id)
        if user is None:
            logger.warning(f"User not found with ID: {user_id}")
            raise IllegalArgumentError(USER_NOT_FOUND)
        return user

    def _password_matches(self, raw_password: str, user: User) -> bool:
        try:
            return self.hasher.matches(raw_password, user.password_hash)
        except InvalidPasswordHashError as e:
            logger.error(f"Stored password hash is unusable for user ID: {user.user_id}")
            raise InvalidPasswordError("Matcher failed matching process") from e
