"""Shared test fixtures for TaskDesk backend tests."""

import io
import os
import sys

import pytest

# Ensure backend is on the path
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))
os.environ.setdefault("DATABASE_URL", "sqlite:///test.db")
os.environ.setdefault("SECRET_KEY", "test-secret-key")
os.environ.setdefault("PASSWORD_HASH_ITERATIONS", "1000")

from fastapi.testclient import TestClient
from openpyxl import Workbook
from sqlmodel import Session, SQLModel

from app.db.database import create_db_and_tables, engine
from app.main import app

CSV_TYPE = "text/csv"
XLSX_TYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"


@pytest.fixture(autouse=True)
def fresh_db():
    """Drop and recreate all tables so each test starts empty."""
    create_db_and_tables()
    SQLModel.metadata.drop_all(engine)
    SQLModel.metadata.create_all(engine)
    yield


@pytest.fixture
def session():
    with Session(engine) as s:
        yield s


@pytest.fixture
def client():
    return TestClient(app)


def auth_header(token: str) -> dict:
    return {"Authorization": f"Bearer {token}"}


def xlsx_bytes(rows: list[list]) -> bytes:
    """Build an in-memory workbook whose first sheet holds the given rows."""
    wb = Workbook()
    ws = wb.active
    for row in rows:
        ws.append(row)
    buf = io.BytesIO()
    wb.save(buf)
    return buf.getvalue()


@pytest.fixture
def admin_token(client):
    resp = client.post("/api/auth/register-admin", json={
        "name": "Admin",
        "email": "admin@example.com",
        "password": "admin-pass",
    })
    assert resp.status_code == 201
    return resp.json()["token"]


@pytest.fixture
def make_agent(client, admin_token):
    """Factory: create an agent via the API and return (agent_json, token)."""

    def _make(name: str, email: str | None = None, password: str = "agent-pass"):
        email = email or f"{name.lower()}@example.com"
        resp = client.post(
            "/api/agents",
            json={"name": name, "email": email, "mobile": "+15550000", "password": password},
            headers=auth_header(admin_token),
        )
        assert resp.status_code == 201, resp.text
        login = client.post("/api/auth/login", json={"email": email, "password": password})
        assert login.status_code == 200
        return resp.json(), login.json()["token"]

    return _make


@pytest.fixture
def upload(client, admin_token):
    """Upload CSV text (or raw bytes with a content type) as the admin."""

    def _upload(content, content_type: str = CSV_TYPE, filename: str = "contacts.csv", token: str | None = None):
        data = content.encode("utf-8") if isinstance(content, str) else content
        return client.post(
            "/api/lists/upload",
            files={"file": (filename, data, content_type)},
            headers=auth_header(token or admin_token),
        )

    return _upload
