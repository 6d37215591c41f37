"""Task Pydantic schemas."""
from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class TaskCreate(BaseModel):
    """Schema for creating a task."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    name: str | None = Field(None, description="Task name, unique per user")
    description: str | None = Field(None, description="Task description")


class TaskUpdate(TaskCreate):
    """Schema for updating a task."""

    pass


class TaskDetails(BaseModel):
    """Outward view of a task."""

    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, from_attributes=True
    )

    task_id: int
    name: str
    description: str
    user_id: int
