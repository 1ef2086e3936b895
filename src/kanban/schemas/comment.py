"""Comment Pydantic schemas."""
from datetime import datetime

from pydantic import BaseModel, Field


class CommentCreate(BaseModel):
    """Schema for creating a comment."""

    content: str = Field(..., min_length=1, max_length=10000)


class CommentUpdate(CommentCreate):
    """Schema for editing a comment."""

    pass


class CommentResponse(BaseModel):
    """Schema for comment response."""

    id: int
    task_id: int
    author_id: int
    content: str
    inserted_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


class CommentListResponse(BaseModel):
    """Schema for comment list response."""

    data: list[CommentResponse]
