"""Project Pydantic schemas."""
from datetime import datetime

from pydantic import BaseModel, Field


class ProjectBase(BaseModel):
    """Base project schema."""

    name: str = Field(..., min_length=1, max_length=200, description="Project name")
    description: str | None = Field(None, max_length=2000, description="Project description")


class ProjectCreate(ProjectBase):
    """Schema for creating a project."""

    pass


class ProjectUpdate(BaseModel):
    """Schema for updating a project."""

    name: str | None = Field(None, min_length=1, max_length=200)
    description: str | None = Field(None, max_length=2000)


class ProjectResponse(BaseModel):
    """Schema for project response."""

    id: int
    name: str
    description: str
    owner_id: int
    inserted_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


class ProjectListResponse(BaseModel):
    """Schema for project list response."""

    data: list[ProjectResponse]
