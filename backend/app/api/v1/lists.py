"""Contact list upload, distribution, and task status endpoints.

POST /api/lists/upload            — admin: upload CSV/XLS/XLSX, replace all tasks
GET  /api/lists/distributed       — admin: current tasks with assignee name/email
GET  /api/lists/my-tasks          — agent: tasks assigned to the caller
PUT  /api/lists/tasks/{id}/status — admin or assigned agent: set task status
"""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Any

from fastapi import APIRouter, Body, Depends, File, UploadFile
from pydantic import BaseModel
from sqlmodel import Session

from app.api.deps import get_principal, require_admin, require_agent, require_distributor
from app.config import settings
from app.db.database import get_session
from app.engines.accounts import AccountStore
from app.engines.distributor import assignment_counts, distribute
from app.engines.record_parser import format_for_content_type, parse_upload
from app.engines.status_updater import apply_status, parse_status
from app.engines.task_store import TaskStore
from app.errors import NotFoundError, TaskDeskError, ValidationError
from app.models.task import Task, TaskStatus
from app.models.user import Principal, User

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/lists", tags=["lists"])


# === Response Models ===


class AssigneeSummary(BaseModel):
    id: str
    name: str
    email: str


class TaskResponse(BaseModel):
    id: str
    batch_id: str
    first_name: str
    phone: str
    notes: str
    assigned_to: str
    status: TaskStatus
    created_at: datetime
    updated_at: datetime


class DistributedTaskResponse(TaskResponse):
    assigned_to: AssigneeSummary | None  # type: ignore[assignment]


class UploadResponse(BaseModel):
    message: str
    batch_id: str
    task_count: int
    agent_count: int
    distribution: dict[str, int]


class StatusUpdateResponse(BaseModel):
    message: str
    task: TaskResponse


def _to_response(task: Task) -> TaskResponse:
    return TaskResponse(
        id=task.id,
        batch_id=task.batch_id,
        first_name=task.first_name,
        phone=task.phone,
        notes=task.notes,
        assigned_to=task.assigned_to,
        status=task.status,
        created_at=task.created_at,
        updated_at=task.updated_at,
    )


def _to_distributed(task: Task, assignee: User | None) -> DistributedTaskResponse:
    return DistributedTaskResponse(
        id=task.id,
        batch_id=task.batch_id,
        first_name=task.first_name,
        phone=task.phone,
        notes=task.notes,
        assigned_to=(
            AssigneeSummary(id=assignee.id, name=assignee.name, email=assignee.email)
            if assignee is not None else None
        ),
        status=task.status,
        created_at=task.created_at,
        updated_at=task.updated_at,
    )


# === Endpoints ===


@router.post("/upload", response_model=UploadResponse)
async def upload_list(
    file: UploadFile | None = File(default=None),
    uploader: Principal = Depends(require_distributor),
    session: Session = Depends(get_session),
) -> UploadResponse:
    """Parse an uploaded contact list and distribute it round-robin across all agents."""
    if file is None:
        raise ValidationError("No file uploaded.")

    try:
        fmt = format_for_content_type(file.content_type)

        content = await file.read(settings.max_upload_bytes + 1)
        if len(content) > settings.max_upload_bytes:
            raise ValidationError(
                f"File too large. Maximum size is {settings.max_upload_bytes // (1024 * 1024)}MB."
            )

        records = parse_upload(content, fmt)

        agents = AccountStore(session).list_agents()
        assignments = distribute(records, [a.id for a in agents])
    except TaskDeskError as e:
        logger.warning("Upload of %r by %s rejected: %s", file.filename, uploader.user_id, e.message)
        raise
    finally:
        await file.close()

    batch = TaskStore(session).replace_all(
        assignments,
        filename=file.filename or "",
        file_format=fmt.value,
        uploaded_by=uploader.user_id,
    )
    logger.info(
        "Upload %r (%s) by %s: %d tasks across %d agents, batch %s",
        file.filename, fmt.value, uploader.user_id, len(assignments), len(agents), batch.id,
    )
    return UploadResponse(
        message="File uploaded and tasks distributed successfully!",
        batch_id=batch.id,
        task_count=len(assignments),
        agent_count=len(agents),
        distribution=assignment_counts(assignments),
    )


@router.get("/distributed", response_model=list[DistributedTaskResponse])
async def list_distributed(
    _: Principal = Depends(require_admin),
    session: Session = Depends(get_session),
) -> list[DistributedTaskResponse]:
    """All tasks of the current upload with assignee details attached."""
    return [_to_distributed(t, u) for t, u in TaskStore(session).list_with_assignees()]


@router.get("/my-tasks", response_model=list[TaskResponse])
async def list_my_tasks(
    agent: Principal = Depends(require_agent),
    session: Session = Depends(get_session),
) -> list[TaskResponse]:
    return [_to_response(t) for t in TaskStore(session).list_for_assignee(agent.user_id)]


@router.put("/tasks/{task_id}/status", response_model=StatusUpdateResponse)
async def update_task_status(
    task_id: str,
    body: dict[str, Any] | None = Body(default=None),
    principal: Principal = Depends(get_principal),
    session: Session = Depends(get_session),
) -> StatusUpdateResponse:
    """Set a task's status. Admins may update any task; agents only their own."""
    requested = parse_status((body or {}).get("status"))

    store = TaskStore(session)
    task = store.get(task_id)
    if task is None:
        raise NotFoundError("Task not found.")

    previous = apply_status(task, requested, principal)
    task = store.save(task)
    logger.info(
        "Task %s status %s -> %s by %s (%s)",
        task.id, previous.value, task.status.value, principal.user_id, principal.role.value,
    )
    return StatusUpdateResponse(message="Task status updated successfully", task=_to_response(task))
