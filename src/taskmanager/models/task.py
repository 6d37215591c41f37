"""Task model."""
from sqlalchemy import ForeignKey, String, Text, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from taskmanager.database import Base


class Task(Base):
    """Task owned by exactly one user."""

    __tablename__ = "tasks"

    task_id: Mapped[int] = mapped_column(primary_key=True, index=True)
    user_id: Mapped[int] = mapped_column(
        ForeignKey("users.user_id", ondelete="CASCADE"), nullable=False, index=True
    )
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False)

    # Constraints
    __table_args__ = (
        # Task names are unique per owner, not globally
        UniqueConstraint("name", "user_id", name="uq_tasks_name_user_id"),
    )

    # Relationships
    owner: Mapped["User"] = relationship("User", back_populates="tasks")

    def __repr__(self) -> str:
        return f"<Task(task_id={self.task_id}, name={self.name[:30]}, user_id={self.user_id})>"
