"""Signed bearer tokens for user authentication.

Token format: ``<b64url(payload)>.<b64url(hmac_sha256(secret, payload))>`` where
payload is ``v1:<user_id>:<role>:<expires_at>``.
"""

from __future__ import annotations

import base64
import hashlib
import hmac
import time
from dataclasses import dataclass

_TOKEN_VERSION = "v1"


@dataclass(frozen=True)
class TokenClaims:
    user_id: str
    role: str
    expires_at: int


def _b64url_encode(raw: bytes) -> str:
    return base64.urlsafe_b64encode(raw).decode("utf-8").rstrip("=")


def _b64url_decode(raw: str) -> bytes:
    padding = "=" * (-len(raw) % 4)
    return base64.urlsafe_b64decode(raw + padding)


def _sign(secret: str, payload: bytes) -> bytes:
    return hmac.new(secret.encode("utf-8"), payload, hashlib.sha256).digest()


def issue_access_token(
    *,
    secret: str,
    user_id: str,
    role: str,
    ttl_seconds: int = 3600,
    now: int | None = None,
) -> str:
    """Issue a signed token bound to a user and role, expiring after ttl_seconds."""
    issued_at = int(now if now is not None else time.time())
    expires_at = issued_at + max(1, ttl_seconds)
    payload = f"{_TOKEN_VERSION}:{user_id}:{role}:{expires_at}".encode("utf-8")
    return f"{_b64url_encode(payload)}.{_b64url_encode(_sign(secret, payload))}"


def verify_access_token(*, token: str, secret: str, now: int | None = None) -> TokenClaims | None:
    """Verify token integrity and expiration. Returns None when invalid."""
    if "." not in token:
        return None

    payload_b64, sig_b64 = token.split(".", 1)
    try:
        payload = _b64url_decode(payload_b64)
        signature = _b64url_decode(sig_b64)
    except (ValueError, TypeError):
        return None

    if not hmac.compare_digest(signature, _sign(secret, payload)):
        return None

    try:
        version, user_id, role, expires_at_raw = payload.decode("utf-8").split(":", 3)
        expires_at = int(expires_at_raw)
    except ValueError:
        return None

    if version != _TOKEN_VERSION or not user_id:
        return None

    current = int(now if now is not None else time.time())
    if current > expires_at:
        return None
    return TokenClaims(user_id=user_id, role=role, expires_at=expires_at)
