"""User and authentication Pydantic schemas."""
from datetime import datetime

from pydantic import BaseModel, Field


class UserCreate(BaseModel):
    """Schema for registering a user."""

    email: str = Field(..., max_length=320, description="Email address")
    name: str = Field(..., max_length=100, description="Display name")
    password: str = Field(..., max_length=72, description="Password")


class UserLogin(BaseModel):
    """Schema for user login."""

    email: str = Field(..., description="Email address")
    password: str = Field(..., description="Password")


class UserUpdate(BaseModel):
    """Schema for updating the current user's profile."""

    name: str | None = Field(None, max_length=100)


class UserResponse(BaseModel):
    """Schema for user response. Never carries the password hash."""

    id: int
    email: str
    name: str = Field(validation_alias="display_name")
    role: str
    inserted_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True, "populate_by_name": True}


class RefreshRequest(BaseModel):
    """Schema carrying a raw refresh secret (refresh and logout)."""

    refresh_token: str = Field(..., min_length=1)


class TokenPairResponse(BaseModel):
    """Schema for an issued access token and refresh secret."""

    access_token: str
    refresh_token: str
    token_type: str = "bearer"

    model_config = {"from_attributes": True}


class AuthResponse(BaseModel):
    """Schema for login and refresh responses."""

    user: UserResponse
    tokens: TokenPairResponse
