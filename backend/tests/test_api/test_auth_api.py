"""Tests for /api/auth endpoints."""

from unittest.mock import patch

import pytest
from conftest import auth_header


def test_register_admin_returns_token(client):
    resp = client.post("/api/auth/register-admin", json={
        "name": "Root", "email": "root@example.com", "password": "pw",
    })
    assert resp.status_code == 201
    data = resp.json()
    assert data["role"] == "admin"
    assert data["email"] == "root@example.com"
    assert data["token"]
    assert data["expires_in_seconds"] == 3600
    assert "password" not in data and "password_hash" not in data


def test_register_admin_duplicate_email(client, admin_token):
    resp = client.post("/api/auth/register-admin", json={
        "name": "Again", "email": "admin@example.com", "password": "pw",
    })
    assert resp.status_code == 400
    assert resp.json()["detail"] == "User already exists"


def test_register_admin_missing_fields(client):
    resp = client.post("/api/auth/register-admin", json={"email": "x@example.com"})
    assert resp.status_code == 400


def test_register_admin_disabled(client):
    with patch("app.api.v1.auth.settings") as mock_settings:
        mock_settings.allow_admin_registration = False
        resp = client.post("/api/auth/register-admin", json={
            "name": "Root", "email": "root@example.com", "password": "pw",
        })
    assert resp.status_code == 403


def test_login_success(client, admin_token):
    resp = client.post("/api/auth/login", json={"email": "admin@example.com", "password": "admin-pass"})
    assert resp.status_code == 200
    data = resp.json()
    assert set(data) >= {"id", "name", "email", "role", "token"}
    assert data["role"] == "admin"


def test_login_email_case_insensitive(client, admin_token):
    resp = client.post("/api/auth/login", json={"email": "ADMIN@example.com", "password": "admin-pass"})
    assert resp.status_code == 200


def test_login_wrong_password(client, admin_token):
    resp = client.post("/api/auth/login", json={"email": "admin@example.com", "password": "nope"})
    assert resp.status_code == 401
    assert resp.json()["detail"] == "Invalid email or password"


@pytest.mark.parametrize("body", [{"email": "admin@example.com"}, {"password": "pw"}, {"email": "", "password": ""}])
def test_login_missing_fields(client, body):
    resp = client.post("/api/auth/login", json=body)
    assert resp.status_code == 400
    assert resp.json()["detail"] == "Please provide email and password."


def test_login_unknown_email(client):
    resp = client.post("/api/auth/login", json={"email": "ghost@example.com", "password": "pw"})
    assert resp.status_code == 401


def test_me_returns_profile(client, admin_token):
    resp = client.get("/api/auth/me", headers=auth_header(admin_token))
    assert resp.status_code == 200
    assert resp.json()["email"] == "admin@example.com"


def test_me_requires_token(client):
    assert client.get("/api/auth/me").status_code == 401
