"""Unit tests for security utilities."""
import hashlib

from kanban.core.security import (
    generate_refresh_secret,
    hash_password,
    hash_refresh_secret,
    verify_password,
)


def test_hash_password():
    """Test password hashing."""
    password = "MySecurePassword123!"
    hashed = hash_password(password, rounds=4)
    assert hashed != password
    assert hashed.startswith("$2b$04$")


def test_hash_password_is_salted():
    """The same password hashes differently each time."""
    assert hash_password("password123", rounds=4) != hash_password("password123", rounds=4)


def test_verify_password():
    """Test password verification."""
    password = "MySecurePassword123!"
    hashed = hash_password(password, rounds=4)
    assert verify_password(password, hashed)
    assert not verify_password("WrongPassword", hashed)


def test_generate_refresh_secret():
    """Test refresh secret generation."""
    secret1 = generate_refresh_secret()
    secret2 = generate_refresh_secret()
    assert len(secret1) == 64  # 32 bytes, hex encoded
    assert secret1 != secret2
    int(secret1, 16)


def test_generate_refresh_secret_length():
    assert len(generate_refresh_secret(48)) == 96


def test_hash_refresh_secret():
    """Refresh secrets hash deterministically to SHA256 hex."""
    secret = generate_refresh_secret()
    digest = hash_refresh_secret(secret)

    assert digest == hashlib.sha256(secret.encode()).hexdigest()
    assert digest == hash_refresh_secret(secret)
    assert digest != secret
    assert len(digest) == 64
