"""Password hashing and verification."""

from passlib.context import CryptContext
from passlib.exc import PasswordValueError

from taskmanager.config import Settings
from taskmanager.core.exceptions import InvalidPasswordError, InvalidPasswordHashError

DEFAULT_BCRYPT_ROUNDS = 12


class PasswordHasher:
    """One-way salted password hashing backed by bcrypt."""

    def __init__(self, rounds: int = DEFAULT_BCRYPT_ROUNDS):
        self.rounds = rounds
        # Password hashing context using bcrypt
        self._context = CryptContext(
            schemes=["bcrypt"],
            deprecated="auto",
            bcrypt__rounds=rounds,
        )

    @classmethod
    def from_settings(cls, settings: Settings) -> "PasswordHasher":
        """Build a hasher using the configured work factor."""
        return cls(rounds=settings.bcrypt_rounds)

    def encode(self, raw_password: str) -> str:
        """
        Hash a password using bcrypt.

        Raises:
            InvalidPasswordError: If bcrypt cannot hash the password, e.g. it contains NUL
        """
        try:
            return self._context.hash(raw_password)
        except PasswordValueError as e:
            raise InvalidPasswordError(f"Password is not acceptable: {e}") from e

    def matches(self, raw_password: str, password_hash: str) -> bool:
        """
        Verify a password against its hash.

        Returns:
            True if ``password_hash`` was produced from ``raw_password``,
            False for a valid hash of a different password.

        Raises:
            InvalidPasswordError: If bcrypt rejects ``raw_password`` itself.
            InvalidPasswordHashError: If ``password_hash`` is not a recognised hash.
        """
        # PasswordValueError subclasses ValueError, so it is checked first
        try:
            return self._context.verify(raw_password, password_hash)
        except PasswordValueError as e:
            raise InvalidPasswordError(f"Password is not acceptable: {e}") from e
        except (ValueError, TypeError) as e:
            raise InvalidPasswordHashError(str(e)) from e
