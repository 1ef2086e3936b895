"""Unit tests for access token signing and verification."""
import base64
import json
from datetime import UTC, datetime, timedelta
from types import SimpleNamespace

import pytest
from jose import jwt

from kanban.core.errors import UnauthorizedError
from kanban.core.security import TokenCodec

SECRET = "test-secret-key-minimum-32-characters-long"


@pytest.fixture
def user():
    return SimpleNamespace(id=7, email="a@x.com", role="member")


def _b64(data: dict) -> str:
    raw = json.dumps(data, separators=(",", ":")).encode()
    return base64.urlsafe_b64encode(raw).rstrip(b"=").decode()


def test_round_trip(user):
    codec = TokenCodec(secret_key=SECRET)
    claims = codec.decode(codec.encode(user))

    assert claims.user_id == 7
    assert claims.email == "a@x.com"
    assert claims.role == "member"
    assert claims.subject == "7"
    assert claims.expires_at - claims.issued_at == timedelta(minutes=15)


def test_expiry_uses_configured_ttl(user):
    codec = TokenCodec(secret_key=SECRET, access_token_ttl=timedelta(minutes=5))
    now = datetime.now(UTC).replace(microsecond=0)
    claims = codec.decode(codec.encode(user, now=now))

    assert claims.issued_at == now
    assert claims.expires_at == now + timedelta(minutes=5)


def test_from_settings(test_settings):
    codec = TokenCodec.from_settings(test_settings)
    assert codec.secret_key == test_settings.secret_key
    assert codec.algorithm == "HS256"
    assert codec.access_token_ttl == timedelta(minutes=test_settings.access_token_expire_minutes)


def test_rejects_other_key(user):
    token = TokenCodec(secret_key="another-secret-key-that-is-long-enough!").encode(user)

    with pytest.raises(UnauthorizedError):
        TokenCodec(secret_key=SECRET).decode(token)


def test_rejects_altered_payload(user):
    codec = TokenCodec(secret_key=SECRET)
    header, _, signature = codec.encode(user).split(".")
    now = int(datetime.now(UTC).timestamp())
    forged = _b64(
        {"user_id": 1, "email": "a@x.com", "role": "admin", "iat": now, "exp": now + 900, "sub": "1"}
    )

    with pytest.raises(UnauthorizedError):
        codec.decode(f"{header}.{forged}.{signature}")


def test_rejects_expired(user):
    codec = TokenCodec(secret_key=SECRET)
    token = codec.encode(user, now=datetime.now(UTC) - timedelta(hours=1))

    with pytest.raises(UnauthorizedError):
        codec.decode(token)


def test_rejects_other_algorithm(user):
    token = TokenCodec(secret_key=SECRET, algorithm="HS512").encode(user)

    with pytest.raises(UnauthorizedError):
        TokenCodec(secret_key=SECRET, algorithm="HS256").decode(token)


def test_rejects_unsigned_token():
    now = int(datetime.now(UTC).timestamp())
    token = ".".join(
        [
            _b64({"alg": "none", "typ": "JWT"}),
            _b64({"user_id": 7, "email": "a@x.com", "role": "member", "iat": now, "exp": now + 900, "sub": "7"}),
            "",
        ]
    )

    with pytest.raises(UnauthorizedError):
        TokenCodec(secret_key=SECRET).decode(token)


def test_rejects_missing_claims():
    now = int(datetime.now(UTC).timestamp())
    token = jwt.encode({"iat": now, "exp": now + 900, "sub": "7"}, SECRET, algorithm="HS256")

    with pytest.raises(UnauthorizedError):
        TokenCodec(secret_key=SECRET).decode(token)


@pytest.mark.parametrize("token", ["", "not-a-token", "a.b.c"])
def test_rejects_garbage(token):
    with pytest.raises(UnauthorizedError):
        TokenCodec(secret_key=SECRET).decode(token)


def test_empty_key_is_rejected():
    with pytest.raises(ValueError):
        TokenCodec(secret_key="")


def test_non_hmac_algorithm_is_rejected():
    with pytest.raises(ValueError):
        TokenCodec(secret_key=SECRET, algorithm="RS256")
