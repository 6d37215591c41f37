"""Task persistence.

Every single-task lookup filters by task id and owner id in one query, so a
task owned by somebody else is indistinguishable from a missing one.
"""

import logging

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from taskmanager.models import Task

logger = logging.getLogger(__name__)


class TaskRepository:
    """Reads and writes task rows through a SQLAlchemy session."""

    def __init__(self, db: Session):
        self.db = db

    def get_for_user(self, user_id: int, task_id: int) -> Task | None:
        """
        Get a task by ID, scoped to its owner.

        Args:
            user_id: Owning user ID
            task_id: Task ID

        Returns:
            Task if it exists and belongs to the user, None otherwise
        """
        stmt = select(Task).where(Task.task_id == task_id, Task.user_id == user_id)
        return self.db.execute(stmt).scalar_one_or_none()

    def get_by_name_for_user(self, user_id: int, name: str) -> Task | None:
        """Get the user's task with the given name, if any."""
        stmt = select(Task).where(Task.user_id == user_id, Task.name == name)
        return self.db.execute(stmt).scalar_one_or_none()

    def list_for_user(self, user_id: int) -> list[Task]:
        """List all tasks owned by a user in insertion order."""
        stmt = select(Task).where(Task.user_id == user_id).order_by(Task.task_id)
        return list(self.db.execute(stmt).scalars().all())

    def save(self, task: Task) -> Task:
        """
        Insert or update a task in a single commit.

        Raises:
            IntegrityError: If a unique constraint is violated; the session is rolled back
        """
        self.db.add(task)
        try:
            self.db.commit()
        except IntegrityError:
            self.db.rollback()
            logger.warning("Integrity error while saving task")
            raise
        self.db.refresh(task)
        return task

    def delete(self, task: Task) -> None:
        """Delete a task."""
        self.db.delete(task)
        self.db.commit()
