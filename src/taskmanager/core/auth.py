"""Per-request authentication and user-scope checks."""

import logging

from taskmanager.core.exceptions import (
    AccessDeniedError,
    AuthenticationCredentialsNotFoundError,
    InsufficientAuthenticationError,
    InvalidJwtTokenError,
)
from taskmanager.core.tokens import TokenService
from taskmanager.models import User
from taskmanager.repositories import UserRepository

logger = logging.getLogger(__name__)


class Authenticator:
    """
    Resolves a bearer token to the user it was issued to.

    Only reads from the token service and the user store; nothing is cached
    between requests.
    """

    def __init__(self, token_service: TokenService, user_repository: UserRepository):
        self.tokens = token_service
        self.users = user_repository

    def extract_subject(self, token: str) -> str:
        """Read the token subject without checking expiry; empty on failure."""
        try:
            return self.tokens.extract_claims(token).sub or ""
        except InvalidJwtTokenError as e:
            logger.warning(f"Failed to extract subject from token: {e}")
            return ""

    def authenticate(self, token: str | None) -> User:
        """
        Authenticate a request from its bearer token.

        Args:
            token: Raw token from the ``Authorization: Bearer`` header, if any

        Returns:
            The user the token was issued to

        Raises:
            InsufficientAuthenticationError: If the token is missing, invalid or expired
            AuthenticationCredentialsNotFoundError: If the token is valid but its user is gone
        """
        if not token:
            logger.debug("Authorization header is missing or does not contain a bearer token")
            raise InsufficientAuthenticationError()

        email = self.extract_subject(token)
        if not self.tokens.validate_token(token, email):
            logger.warning("Rejected invalid or expired token")
            raise InsufficientAuthenticationError()

        user = self.users.get_by_email(email)
        if user is None:
            logger.warning("No user found for token subject")
            raise AuthenticationCredentialsNotFoundError()

        logger.debug(f"Authenticated user ID: {user.user_id}")
        return user


def ensure_user_access(current_user: User, user_id: int) -> None:
    """
    Check that the authenticated user is acting on their own resources.

    Raises:
        AccessDeniedError: If ``user_id`` is not the authenticated user's ID
    """
    if current_user is None or current_user.user_id != user_id:
        logger.warning(f"User is not allowed to act on resources of user ID: {user_id}")
        raise AccessDeniedError()
