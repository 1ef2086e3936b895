"""Authentication: registration, login, refresh rotation, logout and token validation."""
import logging
from dataclasses import dataclass
from datetime import UTC, datetime, timedelta

from sqlalchemy import delete, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from kanban.config import Settings
from kanban.core.errors import (
    ConflictError,
    InvalidCredentialsError,
    NotFoundError,
    UnauthorizedError,
    ValidationError,
)
from kanban.core.security import (
    DEFAULT_BCRYPT_ROUNDS,
    AccessClaims,
    TokenCodec,
    dummy_verify_password,
    generate_refresh_secret,
    hash_password,
    hash_refresh_secret,
    verify_password,
)
from kanban.models import DEFAULT_ROLE, RefreshToken, User
from kanban.telemetry import get_tracer, set_span_attributes

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TokenPair:
    """Access token plus the raw refresh secret handed to the client."""

    access_token: str
    refresh_token: str
    token_type: str = "bearer"


def register_user(
    db: Session, settings: Settings, email: str, display_name: str, password: str
) -> User:
    """
    Create a new user.

    Args:
        db: Database session
        settings: Application settings
        email: Email address (unique, case-insensitive)
        display_name: Display name
        password: Plaintext password

    Returns:
        Created user

    Raises:
        ValidationError: If a field is empty or the password is too short
        ConflictError: If the email is already registered
    """
    email = (email or "").strip()
    display_name = (display_name or "").strip()
    if not email or not display_name or not password:
        raise ValidationError("email, name, and password are required")
    if len(password) < settings.password_min_length:
        raise ValidationError(
            f"password must be at least {settings.password_min_length} characters"
        )

    user = User(
        email=email,
        display_name=display_name,
        hashed_password=hash_password(password, rounds=settings.bcrypt_rounds),
        role=DEFAULT_ROLE,
    )
    db.add(user)
    # Uniqueness is enforced by the store, not by a racy pre-check
    try:
        db.commit()
    except IntegrityError as e:
        db.rollback()
        raise ConflictError("email already registered") from e
    db.refresh(user)

    logger.info(f"Registered user {user.id}")
    return user


def authenticate_user(
    db: Session, email: str, password: str, rounds: int = DEFAULT_BCRYPT_ROUNDS
) -> User:
    """
    Authenticate a user by email and password.

    ``rounds`` is the configured bcrypt cost, used for the unknown-email path.

    Raises:
        InvalidCredentialsError: For an unknown email or a wrong password alike
    """
    stmt = select(User).where(User.email == (email or "").strip())
    user = db.execute(stmt).scalar_one_or_none()

    if user is None:
        # Spend the same bcrypt time as a real check
        dummy_verify_password(rounds)
        raise InvalidCredentialsError()
    if not verify_password(password or "", user.hashed_password):
        raise InvalidCredentialsError()

    return user


def generate_token_pair(
    db: Session, codec: TokenCodec, settings: Settings, user: User
) -> TokenPair:
    """
    Issue a fresh access token and refresh secret for a user.

    Only the hash of the refresh secret is stored; the raw value goes back to
    the caller and nowhere else.
    """
    now = datetime.now(UTC)
    access_token = codec.encode(user, now=now)

    raw_refresh = generate_refresh_secret(settings.refresh_token_bytes)
    db.add(
        RefreshToken(
            user_id=user.id,
            token_hash=hash_refresh_secret(raw_refresh),
            expires_at=now + timedelta(days=settings.refresh_token_expire_days),
            inserted_at=now,
        )
    )
    db.commit()

    return TokenPair(access_token=access_token, refresh_token=raw_refresh)


def login(
    db: Session, codec: TokenCodec, settings: Settings, email: str, password: str
) -> tuple[User, TokenPair]:
    """
    Authenticate and issue a token pair.

    Raises:
        InvalidCredentialsError: If the credentials do not match
    """
    with get_tracer().start_as_current_span("auth.login") as span:
        try:
            user = authenticate_user(db, email, password, rounds=settings.bcrypt_rounds)
        except InvalidCredentialsError:
            logger.info("Login failed")
            raise

        set_span_attributes(span, **{"user.id": user.id})
        tokens = generate_token_pair(db, codec, settings, user)
        logger.info(f"User {user.id} logged in")
        return user, tokens


def _consume_refresh_token(db: Session, token_hash: str) -> bool:
    """Delete the row for ``token_hash`` in one statement; True if this call deleted it."""
    result = db.execute(
        delete(RefreshToken)
        .where(RefreshToken.token_hash == token_hash)
        .execution_options(synchronize_session=False)
    )
    db.commit()
    return result.rowcount == 1


def refresh_tokens(
    db: Session, codec: TokenCodec, settings: Settings, raw_secret: str
) -> tuple[User, TokenPair]:
    """
    Redeem a refresh secret for a brand-new token pair (rotation).

    A secret works exactly once. The consuming DELETE is a single statement
    and its row count decides the winner when two requests race on the same
    secret.

    Raises:
        UnauthorizedError: If the secret is unknown, already used, expired,
            or its user no longer exists
    """
    with get_tracer().start_as_current_span("auth.refresh") as span:
        token_hash = hash_refresh_secret(raw_secret or "")

        stmt = select(RefreshToken).where(RefreshToken.token_hash == token_hash)
        stored = db.execute(stmt).scalar_one_or_none()
        if stored is None:
            logger.warning("Refresh rejected: unknown or already used secret")
            raise UnauthorizedError("refresh token is no longer valid")

        user_id = stored.user_id
        expired = datetime.now(UTC) > stored.expires_at
        db.expunge(stored)

        if expired:
            _consume_refresh_token(db, token_hash)
            logger.info(f"Refresh rejected: expired secret for user {user_id}")
            raise UnauthorizedError("refresh token expired")

        if not _consume_refresh_token(db, token_hash):
            logger.warning(f"Refresh rejected: secret for user {user_id} redeemed concurrently")
            raise UnauthorizedError("refresh token is no longer valid")

        user = db.get(User, user_id)
        if user is None:
            raise UnauthorizedError("refresh token is no longer valid")

        set_span_attributes(span, **{"user.id": user.id})
        tokens = generate_token_pair(db, codec, settings, user)
        logger.info(f"Rotated refresh token for user {user.id}")
        return user, tokens


def logout(db: Session, raw_secret: str) -> None:
    """Forget a refresh secret. Succeeds whether or not it was known."""
    if _consume_refresh_token(db, hash_refresh_secret(raw_secret or "")):
        logger.info("Refresh token revoked on logout")


def validate_access_token(codec: TokenCodec, token: str) -> AccessClaims:
    """
    Verify an access token.

    Purely cryptographic plus expiry: no store lookup, so a logged-out user
    keeps access until the token expires.

    Raises:
        UnauthorizedError: If the token is invalid or expired
    """
    with get_tracer().start_as_current_span("auth.validate_access_token") as span:
        claims = codec.decode(token)
        set_span_attributes(span, **{"user.id": claims.user_id})
        return claims


def purge_expired_refresh_tokens(db: Session, now: datetime | None = None) -> int:
    """
    Delete every expired refresh token.

    Returns:
        Number of rows removed
    """
    cutoff = now or datetime.now(UTC)
    result = db.execute(
        delete(RefreshToken)
        .where(RefreshToken.expires_at < cutoff)
        .execution_options(synchronize_session=False)
    )
    db.commit()
    logger.info(f"Purged {result.rowcount} expired refresh tokens")
    return result.rowcount


def get_user_by_id(db: Session, user_id: int) -> User:
    """
    Get a user by ID.

    Raises:
        NotFoundError: If the user does not exist
    """
    user = db.get(User, user_id)
    if user is None:
        raise NotFoundError("User", user_id)
    return user


def update_profile(db: Session, user_id: int, display_name: str | None) -> User:
    """
    Update the caller's display name.

    Raises:
        ValidationError: If the new name is blank
        NotFoundError: If the user does not exist
    """
    user = get_user_by_id(db, user_id)

    if display_name is not None:
        if not display_name.strip():
            raise ValidationError("name cannot be empty")
        user.display_name = display_name.strip()
        user.updated_at = datetime.now(UTC)
        db.commit()
        db.refresh(user)

    return user
