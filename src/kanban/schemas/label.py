"""Label Pydantic schemas."""
from datetime import datetime

from pydantic import BaseModel, Field


class LabelCreate(BaseModel):
    """Schema for creating a label."""

    name: str = Field(..., min_length=1, max_length=100, description="Label name")
    color: str | None = Field(
        None, pattern=r"^#[0-9a-fA-F]{6}$", description="Hex color, e.g. #ef4444"
    )


class LabelAttach(BaseModel):
    """Schema for attaching a label to a task."""

    label_id: int


class LabelResponse(BaseModel):
    """Schema for label response."""

    id: int
    project_id: int
    name: str
    color: str
    inserted_at: datetime

    model_config = {"from_attributes": True}


class LabelListResponse(BaseModel):
    """Schema for label list response."""

    data: list[LabelResponse]
