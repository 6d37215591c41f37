"""JWT issuance and validation.

Tokens are HS256-signed with a process-wide secret and bind the user's email
as subject. Claims extraction checks the signature but not the expiry, so
callers can read the subject of an expired token; expiry is a separate check.
"""

import logging
from collections.abc import Callable
from datetime import UTC, datetime, timedelta
from typing import Any

import jwt
from pydantic import BaseModel

from taskmanager.config import Settings
from taskmanager.core.exceptions import InvalidJwtTokenError

logger = logging.getLogger(__name__)

DEFAULT_EXPIRE_MINUTES = 15

Clock = Callable[[], datetime]


def utc_now() -> datetime:
    return datetime.now(UTC)


class TokenClaims(BaseModel):
    """Decoded JWT payload."""

    sub: str | None = None
    iat: int | None = None
    exp: int | None = None


class TokenService:
    """Issues and validates signed, time-limited session tokens."""

    def __init__(
        self,
        secret: str,
        algorithm: str = "HS256",
        expire_minutes: int = DEFAULT_EXPIRE_MINUTES,
        clock: Clock = utc_now,
    ):
        self._secret = secret
        self.algorithm = algorithm
        self.expire_minutes = expire_minutes
        self._clock = clock

    @classmethod
    def from_settings(cls, settings: Settings, clock: Clock = utc_now) -> "TokenService":
        """Build a token service from application settings."""
        return cls(
            secret=settings.jwt_secret,
            algorithm=settings.jwt_algorithm,
            expire_minutes=settings.jwt_expire_minutes,
            clock=clock,
        )

    def generate_token(self, subject_email: str) -> str:
        """
        Create a signed token for the given subject.

        Args:
            subject_email: Email of the user the token is issued to

        Returns:
            Encoded JWT

        Raises:
            InvalidJwtTokenError: If the subject is empty or encoding fails
        """
        if not subject_email:
            raise InvalidJwtTokenError("Token subject cannot be empty")

        now = self._clock()
        payload: dict[str, Any] = {
            "sub": subject_email,
            "iat": int(now.timestamp()),
            "exp": int((now + timedelta(minutes=self.expire_minutes)).timestamp()),
        }
        try:
            token = jwt.encode(payload, self._secret, algorithm=self.algorithm)
        except (jwt.PyJWTError, TypeError, ValueError) as e:
            logger.error(f"Failed to encode token: {e}")
            raise InvalidJwtTokenError(f"Failed to encode token: {e}") from e

        logger.debug("Token generated")
        return token

    def extract_claims(self, token: str) -> TokenClaims:
        """
        Verify the token signature and return its claims.

        Expired tokens are not rejected here; see ``is_expired``.

        Raises:
            InvalidJwtTokenError: If the signature is invalid or the token is malformed
        """
        try:
            payload = jwt.decode(
                token,
                self._secret,
                algorithms=[self.algorithm],
                options={
                    "verify_exp": False,
                    "verify_iat": False,
                    "verify_nbf": False,
                    "verify_sub": False,
                },
            )
        except jwt.PyJWTError as e:
            logger.debug(f"Failed to extract token claims: {e}")
            raise InvalidJwtTokenError(str(e)) from e

        if not isinstance(payload, dict):
            raise InvalidJwtTokenError("Token payload is not an object")
        try:
            return TokenClaims.model_validate(payload)
        except ValueError as e:
            raise InvalidJwtTokenError("Token claims have an unexpected shape") from e

    def is_expired(self, claims: TokenClaims) -> bool:
        """Return True if the expiry is missing or not in the future."""
        if claims.exp is None:
            logger.warning("Token expiration date is missing")
            return True
        return claims.exp <= int(self._clock().timestamp())

    def validate_token(self, token: str, expected_subject: str) -> bool:
        """
        Check that a token is well signed, unexpired and bound to a subject.

        Never raises; every failure is reported as False.
        """
        if not token or not expected_subject:
            return False

        try:
            claims = self.extract_claims(token)
        except InvalidJwtTokenError:
            return False

        if claims.sub != expected_subject:
            logger.debug("Token subject mismatch")
            return False

        if self.is_expired(claims):
            logger.debug("Token is expired")
            return False

        return True
