"""Password hashing with PBKDF2-HMAC-SHA256.

Stored format: ``pbkdf2_sha256$<iterations>$<salt_hex>$<hash_hex>``.
"""

from __future__ import annotations

import hashlib
import hmac
import secrets

from app.config import settings

_ALGORITHM = "pbkdf2_sha256"


def _derive(password: str, salt: bytes, iterations: int) -> bytes:
    return hashlib.pbkdf2_hmac("sha256", password.encode("utf-8"), salt, iterations)


def hash_password(password: str, *, iterations: int | None = None) -> str:
    rounds = iterations or settings.password_hash_iterations
    salt = secrets.token_bytes(16)
    digest = _derive(password, salt, rounds)
    return f"{_ALGORITHM}${rounds}${salt.hex()}${digest.hex()}"


def verify_password(password: str, stored: str) -> bool:
    """Check a plaintext password against a stored hash in constant time."""
    try:
        algorithm, rounds_raw, salt_hex, hash_hex = stored.split("$", 3)
        rounds = int(rounds_raw)
        salt = bytes.fromhex(salt_hex)
        expected = bytes.fromhex(hash_hex)
    except ValueError:
        return False

    if algorithm != _ALGORITHM:
        return False
    return hmac.compare_digest(_derive(password, salt, rounds), expected)
