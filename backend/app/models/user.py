"""User models.

Includes: Role (closed enumeration with capability checks), User (SQL table),
Principal (authenticated caller, carried on request.state).
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone
from enum import Enum
from uuid import uuid4

from sqlmodel import Field as SQLField
from sqlmodel import SQLModel


class Role(str, Enum):
    """User role. Admins manage agents and distribute lists; agents work tasks."""

    ADMIN = "admin"
    AGENT = "agent"

    @property
    def can_manage_agents(self) -> bool:
        return self is Role.ADMIN

    @property
    def can_distribute(self) -> bool:
        return self is Role.ADMIN

    @property
    def can_update_any_task(self) -> bool:
        return self is Role.ADMIN

    @property
    def receives_tasks(self) -> bool:
        return self is Role.AGENT


class User(SQLModel, table=True):
    """An admin or agent account."""

    __tablename__ = "user"

    id: str = SQLField(default_factory=lambda: str(uuid4()), primary_key=True)
    name: str
    email: str = SQLField(index=True, unique=True)
    mobile: str = ""
    password_hash: str
    role: Role = SQLField(default=Role.AGENT, index=True)
    created_at: datetime = SQLField(default_factory=lambda: datetime.now(timezone.utc))
    updated_at: datetime = SQLField(default_factory=lambda: datetime.now(timezone.utc))


@dataclass(frozen=True)
class Principal:
    """The authenticated caller of a request."""

    user_id: str
    role: Role
