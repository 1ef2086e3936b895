"""Board and column Pydantic schemas."""
from datetime import datetime

from pydantic import BaseModel, Field


class BoardCreate(BaseModel):
    """Schema for creating a board."""

    name: str = Field(..., min_length=1, max_length=200, description="Board name")


class BoardUpdate(BaseModel):
    """Schema for updating a board."""

    name: str | None = Field(None, min_length=1, max_length=200)


class BoardResponse(BaseModel):
    """Schema for board response."""

    id: int
    project_id: int
    name: str
    inserted_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


class BoardListResponse(BaseModel):
    """Schema for board list response."""

    data: list[BoardResponse]


class ColumnCreate(BaseModel):
    """Schema for creating a column. The column is appended to the board."""

    name: str = Field(..., min_length=1, max_length=100, description="Column name")


class ColumnUpdate(BaseModel):
    """Schema for renaming and/or repositioning a column."""

    name: str | None = Field(None, min_length=1, max_length=100)
    position: float | None = Field(
        None, allow_inf_nan=False, description="New position within the board"
    )


class ColumnResponse(BaseModel):
    """Schema for column response."""

    id: int
    board_id: int
    name: str
    position: float
    inserted_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


class ColumnListResponse(BaseModel):
    """Schema for column list response."""

    data: list[ColumnResponse]
