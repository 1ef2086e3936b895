"""FastAPI dependencies for authentication and database."""

import logging
from datetime import timedelta
from functools import lru_cache
from typing import Annotated

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from kanban.config import Settings, get_settings
from kanban.core.auth import validate_access_token
from kanban.core.errors import UnauthorizedError
from kanban.core.scope import Scope
from kanban.core.security import TokenCodec
from kanban.database import get_db

logger = logging.getLogger(__name__)

# HTTP Bearer token authentication
bearer_scheme = HTTPBearer(auto_error=False)


@lru_cache
def _build_codec(secret_key: str, algorithm: str, ttl_minutes: int) -> TokenCodec:
    return TokenCodec(
        secret_key=secret_key,
        algorithm=algorithm,
        access_token_ttl=timedelta(minutes=ttl_minutes),
    )


def get_token_codec(settings: Annotated[Settings, Depends(get_settings)]) -> TokenCodec:
    """Get the token codec for the active settings (one instance per key)."""
    return _build_codec(
        settings.secret_key, settings.algorithm, settings.access_token_expire_minutes
    )


def get_current_scope(
    token: Annotated[HTTPAuthorizationCredentials | None, Depends(bearer_scheme)],
    codec: Annotated[TokenCodec, Depends(get_token_codec)],
) -> Scope:
    """
    Get the caller's scope from the Bearer access token.

    Only the token is checked; the user row is not loaded.

    Args:
        token: Bearer token from Authorization header
        codec: Token codec

    Returns:
        Scope of the authenticated user

    Raises:
        UnauthorizedError: If the header is missing or the token is invalid
    """
    if not token:
        logger.debug("Rejected request without bearer token")
        raise UnauthorizedError("missing bearer token")

    try:
        claims = validate_access_token(codec, token.credentials)
    except UnauthorizedError:
        logger.debug("Rejected request with invalid bearer token")
        raise

    return Scope.from_claims(claims)


# Type aliases for cleaner dependency injection
CurrentScope = Annotated[Scope, Depends(get_current_scope)]
DatabaseSession = Annotated[Session, Depends(get_db)]
AppSettings = Annotated[Settings, Depends(get_settings)]
Codec = Annotated[TokenCodec, Depends(get_token_codec)]
