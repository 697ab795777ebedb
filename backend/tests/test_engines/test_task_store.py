"""Tests for TaskStore batch replacement and queries."""

from __future__ import annotations

from sqlmodel import select

from app.engines.accounts import AccountStore
from app.engines.distributor import TaskAssignment
from app.engines.task_store import TaskStore
from app.models.task import Task, TaskStatus, UploadBatch
from app.models.user import Role


def _assignments(names: list[str], agents: list[str]) -> list[TaskAssignment]:
    return [
        TaskAssignment(position=i, first_name=n, phone=f"0{i}", notes="", assigned_to=agents[i % len(agents)])
        for i, n in enumerate(names)
    ]


def test_replace_all_creates_batch(session):
    store = TaskStore(session)
    batch = store.replace_all(_assignments(["a", "b", "c"], ["u1", "u2"]), filename="f.csv", file_format="csv")
    assert batch.sequence == 1
    assert batch.row_count == 3
    assert batch.agent_count == 2
    assert store.current_batch().id == batch.id
    tasks = session.exec(select(Task)).all()
    assert len(tasks) == 3
    assert all(t.status is TaskStatus.PENDING for t in tasks)


def test_replace_all_discards_previous_batch(session):
    store = TaskStore(session)
    first = store.replace_all(_assignments(["old1", "old2"], ["u1"]))
    second = store.replace_all(_assignments(["new1"], ["u1"]))

    assert second.sequence == first.sequence + 1
    assert [b.id for b in session.exec(select(UploadBatch)).all()] == [second.id]
    assert [t.first_name for t in session.exec(select(Task)).all()] == ["new1"]


def test_list_for_assignee_in_row_order(session):
    store = TaskStore(session)
    store.replace_all(_assignments(["r0", "r1", "r2", "r3", "r4"], ["u1", "u2"]))
    assert [t.first_name for t in store.list_for_assignee("u1")] == ["r0", "r2", "r4"]
    assert [t.first_name for t in store.list_for_assignee("u2")] == ["r1", "r3"]
    assert store.list_for_assignee("nobody") == []


def test_queries_before_any_upload(session):
    store = TaskStore(session)
    assert store.current_batch() is None
    assert store.list_with_assignees() == []
    assert store.list_for_assignee("u1") == []


def test_list_with_assignees_tolerates_deleted_agent(session):
    accounts = AccountStore(session)
    kept = accounts.create(name="Kept", email="kept@example.com", password="pw", role=Role.AGENT)
    gone = accounts.create(name="Gone", email="gone@example.com", password="pw", role=Role.AGENT)

    store = TaskStore(session)
    store.replace_all(_assignments(["a", "b"], [kept.id, gone.id]))
    accounts.delete(gone)

    pairs = store.list_with_assignees()
    assert [(t.first_name, u.name if u else None) for t, u in pairs] == [("a", "Kept"), ("b", None)]
    assert store.count_for_assignee(gone.id) == 1


def test_save_persists_status(session):
    store = TaskStore(session)
    store.replace_all(_assignments(["a"], ["u1"]))
    task = store.list_for_assignee("u1")[0]
    task.status = TaskStatus.COMPLETED
    store.save(task)
    assert store.get(task.id).status is TaskStatus.COMPLETED
