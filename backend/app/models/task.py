"""Task and UploadBatch models."""

from __future__ import annotations

from datetime import datetime, timezone
from enum import Enum
from uuid import uuid4

from sqlmodel import Field as SQLField
from sqlmodel import SQLModel


class TaskStatus(str, Enum):
    PENDING = "pending"
    IN_PROGRESS = "in-progress"
    COMPLETED = "completed"


class UploadBatch(SQLModel, table=True):
    """One accepted upload. The most recent batch is the current task set."""

    __tablename__ = "upload_batch"

    id: str = SQLField(default_factory=lambda: str(uuid4()), primary_key=True)
    sequence: int = SQLField(default=0, index=True)  # Monotonic per upload
    filename: str = ""
    file_format: str = ""  # "csv" | "spreadsheet"
    row_count: int = 0
    agent_count: int = 0
    uploaded_by: str | None = None  # Admin user ID
    created_at: datetime = SQLField(default_factory=lambda: datetime.now(timezone.utc), index=True)


class Task(SQLModel, table=True):
    """A distributed contact record assigned to one agent."""

    __tablename__ = "task"

    id: str = SQLField(default_factory=lambda: str(uuid4()), primary_key=True)
    batch_id: str = SQLField(foreign_key="upload_batch.id", index=True)
    position: int = 0  # Row order within the batch
    first_name: str
    phone: str  # Text, keeps leading zeros
    notes: str = ""
    assigned_to: str = SQLField(index=True)  # User ID; not cascaded on agent delete
    status: TaskStatus = SQLField(default=TaskStatus.PENDING)
    created_at: datetime = SQLField(default_factory=lambda: datetime.now(timezone.utc))
    updated_at: datetime = SQLField(default_factory=lambda: datetime.now(timezone.utc))
