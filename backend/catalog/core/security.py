"""Security utilities for password and token hashing."""

import base64
import hashlib
import secrets

import bcrypt

from catalog.core.config import get_settings

TOKEN_PLAINTEXT_LENGTH = 26


def verify_password(plain_password: str, hashed_password: bytes) -> bool:
    """Check a password against its hash using bcrypt."""
    try:
        return bcrypt.checkpw(plain_password.encode(), hashed_password)
    except (ValueError, TypeError):  # guard against malformed hashes
        return False


def get_password_hash(password: str) -> bytes:
    """Hash a password for storage using bcrypt."""
    rounds = get_settings().bcrypt_rounds
    return bcrypt.hashpw(password.encode(), bcrypt.gensalt(rounds=rounds))


def generate_token_plaintext() -> str:
    """Return 16 random bytes as unpadded base32 (26 characters)."""
    raw = secrets.token_bytes(16)
    return base64.b32encode(raw).decode("ascii").rstrip("=")


def hash_token(plaintext: str) -> bytes:
    """Return the SHA-256 digest stored in place of a token plaintext."""
    return hashlib.sha256(plaintext.encode("utf-8")).digest()
