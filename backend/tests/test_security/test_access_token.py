"""Tests for signed access tokens."""

from app.security.access_token import issue_access_token, verify_access_token

SECRET = "unit-secret"


def test_round_trip_claims():
    token = issue_access_token(secret=SECRET, user_id="user-1", role="admin", ttl_seconds=3600, now=100)
    claims = verify_access_token(token=token, secret=SECRET, now=200)
    assert claims is not None
    assert claims.user_id == "user-1"
    assert claims.role == "admin"
    assert claims.expires_at == 3700


def test_expires_after_ttl():
    token = issue_access_token(secret=SECRET, user_id="u", role="agent", ttl_seconds=3600, now=0)
    assert verify_access_token(token=token, secret=SECRET, now=3600) is not None
    assert verify_access_token(token=token, secret=SECRET, now=3601) is None


def test_wrong_secret():
    token = issue_access_token(secret=SECRET, user_id="u", role="agent")
    assert verify_access_token(token=token, secret="other") is None


def test_tampered_payload():
    token = issue_access_token(secret=SECRET, user_id="u", role="agent", now=0)
    forged = issue_access_token(secret=SECRET, user_id="u", role="admin", now=0)
    tampered = forged.split(".")[0] + "." + token.split(".")[1]
    assert verify_access_token(token=tampered, secret=SECRET, now=0) is None


def test_malformed_tokens():
    for token in ["", "no-dot", "a.b", "!!!.???", "...."]:
        assert verify_access_token(token=token, secret=SECRET) is None

