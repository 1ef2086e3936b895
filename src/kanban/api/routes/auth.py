"""Authentication and profile routes."""
from fastapi import APIRouter, status

from kanban.api.deps import AppSettings, Codec, CurrentScope, DatabaseSession
from kanban.core import auth as auth_core
from kanban.schemas.user import (
    AuthResponse,
    RefreshRequest,
    TokenPairResponse,
    UserCreate,
    UserLogin,
    UserResponse,
    UserUpdate,
)

router = APIRouter(tags=["auth"])


@router.post("/auth/register", response_model=UserResponse, status_code=status.HTTP_201_CREATED)
def register(user_data: UserCreate, db: DatabaseSession, settings: AppSettings):
    """
    Register a new user.

    Args:
        user_data: User registration data
        db: Database session
        settings: Application settings

    Returns:
        Created user

    Raises:
        ValidationError: If a field is missing or the password is too short
        ConflictError: If the email is already registered
    """
    return auth_core.register_user(
        db, settings, user_data.email, user_data.name, user_data.password
    )


@router.post("/auth/login", response_model=AuthResponse)
def login(credentials: UserLogin, db: DatabaseSession, codec: Codec, settings: AppSettings):
    """
    Login and get an access token plus a refresh secret.

    Raises:
        InvalidCredentialsError: If the email or password is wrong
    """
    user, tokens = auth_core.login(db, codec, settings, credentials.email, credentials.password)
    return AuthResponse(
        user=UserResponse.model_validate(user),
        tokens=TokenPairResponse.model_validate(tokens),
    )


@router.post("/auth/refresh", response_model=AuthResponse)
def refresh(body: RefreshRequest, db: DatabaseSession, codec: Codec, settings: AppSettings):
    """
    Exchange a refresh secret for a new token pair. The old secret stops working.

    Raises:
        UnauthorizedError: If the secret is unknown, used or expired
    """
    user, tokens = auth_core.refresh_tokens(db, codec, settings, body.refresh_token)
    return AuthResponse(
        user=UserResponse.model_validate(user),
        tokens=TokenPairResponse.model_validate(tokens),
    )


@router.post("/auth/logout", status_code=status.HTTP_204_NO_CONTENT)
def logout(body: RefreshRequest, db: DatabaseSession):
    """Revoke a refresh secret. Always succeeds."""
    auth_core.logout(db, body.refresh_token)


@router.get("/me", response_model=UserResponse)
def get_current_user(scope: CurrentScope, db: DatabaseSession):
    """Get the current authenticated user."""
    return auth_core.get_user_by_id(db, scope.user_id)


@router.patch("/me", response_model=UserResponse)
def update_current_user(user_data: UserUpdate, scope: CurrentScope, db: DatabaseSession):
    """Update the current user's display name."""
    return auth_core.update_profile(db, scope.user_id, user_data.name)
