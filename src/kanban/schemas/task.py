"""Task Pydantic schemas."""
from datetime import datetime

from pydantic import BaseModel, Field

from kanban.models import TaskPriority


class TaskCreate(BaseModel):
    """Schema for creating a task. The task is appended to the column."""

    title: str = Field(..., min_length=1, max_length=200, description="Task title")
    description: str | None = Field(None, max_length=10000, description="Task description")
    priority: TaskPriority = Field(default=TaskPriority.MEDIUM, description="Task priority")
    assignee_id: int | None = Field(None, description="User ID to assign")


class TaskUpdate(BaseModel):
    """Schema for updating a task. Send ``assignee_id: null`` to unassign."""

    title: str | None = Field(None, min_length=1, max_length=200)
    description: str | None = Field(None, max_length=10000)
    priority: TaskPriority | None = None
    assignee_id: int | None = None


class TaskMove(BaseModel):
    """Schema for moving a task to a column at a given position."""

    column_id: int = Field(..., description="Target column ID")
    position: float = Field(
        ..., allow_inf_nan=False, description="New position within the target column"
    )


class TaskResponse(BaseModel):
    """Schema for task response."""

    id: int
    column_id: int
    title: str
    description: str
    priority: TaskPriority
    position: float
    assignee_id: int | None
    inserted_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


class TaskListResponse(BaseModel):
    """Schema for task list response."""

    data: list[TaskResponse]
