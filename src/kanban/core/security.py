"""Security utilities: password hashing, refresh secrets and access-token signing."""

import hashlib
import secrets
from dataclasses import dataclass
from datetime import UTC, datetime, timedelta
from functools import lru_cache
from typing import Any

from jose import JWTError, jwt
from passlib.context import CryptContext

from kanban.config import Settings
from kanban.core.errors import UnauthorizedError

DEFAULT_BCRYPT_ROUNDS = 12
HMAC_ALGORITHMS = frozenset({"HS256", "HS384", "HS512"})


@lru_cache
def get_password_context(rounds: int = DEFAULT_BCRYPT_ROUNDS) -> CryptContext:
    """Password hashing context using bcrypt with the given work factor."""
    return CryptContext(schemes=["bcrypt"], deprecated="auto", bcrypt__rounds=rounds)


def hash_password(password: str, rounds: int = DEFAULT_BCRYPT_ROUNDS) -> str:
    """Hash a password using bcrypt (random salt per call)."""
    return get_password_context(rounds).hash(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify a password against its hash."""
    return get_password_context().verify(plain_password, hashed_password)


def dummy_verify_password(rounds: int = DEFAULT_BCRYPT_ROUNDS) -> None:
    """Burn one verification's worth of time at the given cost when there is no hash to check."""
    get_password_context(rounds).dummy_verify()


def generate_refresh_secret(num_bytes: int = 32) -> str:
    """Generate a random refresh secret, hex encoded (``num_bytes * 8`` bits)."""
    return secrets.token_hex(num_bytes)


def hash_refresh_secret(secret: str) -> str:
    """
    Hash a refresh secret using SHA256.

    Deterministic so it can serve as a lookup key; the input is already a
    256-bit random value, so a slow hash would add nothing.
    """
    return hashlib.sha256(secret.encode("utf-8")).hexdigest()


@dataclass(frozen=True)
class AccessClaims:
    """Verified contents of an access token."""

    user_id: int
    email: str
    role: str
    issued_at: datetime
    expires_at: datetime
    subject: str


@dataclass(frozen=True)
class TokenCodec:
    """
    Signs and verifies access tokens with a single shared HMAC key.

    Built once at startup from settings and never mutated; the verifier only
    accepts the algorithm the codec was configured with.
    """

    secret_key: str
    algorithm: str = "HS256"
    access_token_ttl: timedelta = timedelta(minutes=15)

    def __post_init__(self) -> None:
        if not self.secret_key:
            raise ValueError("Token signing key must not be empty")
        if self.algorithm not in HMAC_ALGORITHMS:
            raise ValueError(f"Unsupported token algorithm: {self.algorithm}")

    @classmethod
    def from_settings(cls, settings: Settings) -> "TokenCodec":
        return cls(
            secret_key=settings.secret_key,
            algorithm=settings.algorithm,
            access_token_ttl=timedelta(minutes=settings.access_token_expire_minutes),
        )

    def encode(self, user: Any, now: datetime | None = None) -> str:
        """
        Issue an access token for a user.

        Args:
            user: Object exposing ``id``, ``email`` and ``role``
            now: Issue instant (defaults to the current time)

        Returns:
            Compact signed JWT
        """
        issued_at = now or datetime.now(UTC)
        payload = {
            "user_id": user.id,
            "email": user.email,
            "role": user.role,
            "iat": int(issued_at.timestamp()),
            "exp": int((issued_at + self.access_token_ttl).timestamp()),
            "sub": str(user.id),
        }
        return jwt.encode(payload, self.secret_key, algorithm=self.algorithm)

    def decode(self, token: str) -> AccessClaims:
        """
        Verify an access token and return its claims.

        Raises:
            UnauthorizedError: On a bad signature, malformed token, unexpected
                algorithm, expiry or missing claims
        """
        try:
            payload = jwt.decode(
                token,
                self.secret_key,
                algorithms=[self.algorithm],
                options={"require_exp": True, "require_iat": True, "require_sub": True},
            )
        except JWTError as e:
            raise UnauthorizedError("invalid or expired token") from e

        try:
            return AccessClaims(
                user_id=int(payload["user_id"]),
                email=str(payload["email"]),
                role=str(payload["role"]),
                issued_at=datetime.fromtimestamp(payload["iat"], tz=UTC),
                expires_at=datetime.fromtimestamp(payload["exp"], tz=UTC),
                subject=str(payload["sub"]),
            )
        except (KeyError, TypeError, ValueError) as e:
            raise UnauthorizedError("invalid or expired token") from e
