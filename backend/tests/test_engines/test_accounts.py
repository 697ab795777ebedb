"""Tests for AccountStore."""

from __future__ import annotations

from app.engines.accounts import AccountStore
from app.models.user import Role


def test_create_normalizes_email_and_hashes_password(session):
    accounts = AccountStore(session)
    user = accounts.create(name=" Ann ", email=" Ann@Example.COM ", password="secret", role=Role.AGENT)
    assert user.email == "ann@example.com"
    assert user.name == "Ann"
    assert user.password_hash != "secret"
    assert user.password_hash.startswith("pbkdf2_sha256$")


def test_authenticate(session):
    accounts = AccountStore(session)
    accounts.create(name="Ann", email="ann@example.com", password="secret", role=Role.ADMIN)
    assert accounts.authenticate("ANN@example.com", "secret") is not None
    assert accounts.authenticate("ann@example.com", "wrong") is None
    assert accounts.authenticate("nobody@example.com", "secret") is None


def test_list_agents_excludes_admins_and_keeps_creation_order(session):
    accounts = AccountStore(session)
    accounts.create(name="Boss", email="boss@example.com", password="pw", role=Role.ADMIN)
    a = accounts.create(name="A", email="a@example.com", password="pw", role=Role.AGENT)
    b = accounts.create(name="B", email="b@example.com", password="pw", role=Role.AGENT)
    assert [u.id for u in accounts.list_agents()] == [a.id, b.id]


def test_get_agent_ignores_admins(session):
    accounts = AccountStore(session)
    admin = accounts.create(name="Boss", email="boss@example.com", password="pw", role=Role.ADMIN)
    assert accounts.get(admin.id) is not None
    assert accounts.get_agent(admin.id) is None


def test_update_skips_empty_values_and_rehashes_password(session):
    accounts = AccountStore(session)
    agent = accounts.create(name="A", email="a@example.com", password="old", role=Role.AGENT, mobile="1")
    old_hash = agent.password_hash
    accounts.update(agent, name="", mobile="2", password="new")
    assert agent.name == "A"
    assert agent.mobile == "2"
    assert agent.password_hash != old_hash
    assert accounts.authenticate("a@example.com", "new") is not None


def test_email_taken_excludes_self(session):
    accounts = AccountStore(session)
    agent = accounts.create(name="A", email="a@example.com", password="pw", role=Role.AGENT)
    assert accounts.email_taken("a@example.com")
    assert not accounts.email_taken("a@example.com", exclude_id=agent.id)
