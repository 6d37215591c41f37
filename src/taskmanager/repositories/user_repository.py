"""User persistence."""

import logging

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from taskmanager.models import User

logger = logging.getLogger(__name__)


class UserRepository:
    """Reads and writes user rows through a SQLAlchemy session."""

    def __init__(self, db: Session):
        self.db = db

    def get_by_id(self, user_id: int) -> User | None:
        """
        Get a user by ID.

        Args:
            user_id: User ID

        Returns:
            User if found, None otherwise
        """
        stmt = select(User).where(User.user_id == user_id)
        return self.db.execute(stmt).scalar_one_or_none()

    def get_by_email(self, email: str) -> User | None:
        """
        Get a user by email.

        Args:
            email: Email address

        Returns:
            User if found, None otherwise
        """
        stmt = select(User).where(User.email == email)
        return self.db.execute(stmt).scalar_one_or_none()

    def exists_by_email(self, email: str) -> bool:
        """Check whether a user with this email is already stored."""
        stmt = select(User.user_id).where(User.email == email)
        return self.db.execute(stmt).first() is not None

    def save(self, user: User) -> User:
        """
        Insert or update a user in a single commit.

        Raises:
            IntegrityError: If a unique constraint is violated; the session is rolled back
        """
        self.db.add(user)
        try:
            self.db.commit()
        except IntegrityError:
            self.db.rollback()
            logger.warning("Integrity error while saving user")
            raise
        self.db.refresh(user)
        return user

    def delete(self, user: User) -> None:
        """Delete a user; owned tasks are removed with it."""
        self.db.delete(user)
        self.db.commit()
