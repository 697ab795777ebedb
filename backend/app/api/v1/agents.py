"""Agent account management (admin only).

GET    /api/agents      — list agents (password fields excluded)
POST   /api/agents      — create an agent
PUT    /api/agents/{id} — partial profile update
DELETE /api/agents/{id} — remove an agent; their tasks are left in place
"""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends
from pydantic import BaseModel, Field
from sqlmodel import Session

from app.api.deps import require_admin
from app.db.database import get_session
from app.engines.accounts import AccountStore
from app.engines.task_store import TaskStore
from app.errors import NotFoundError, ValidationError
from app.models.user import Principal, Role, User

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/agents", tags=["agents"])


# === Request / Response Models ===


class CreateAgentRequest(BaseModel):
    name: str | None = Field(default=None, max_length=200)
    email: str | None = Field(default=None, max_length=320)
    mobile: str | None = Field(default=None, max_length=32)
    password: str | None = None


class UpdateAgentRequest(BaseModel):
    """All fields optional; empty values leave the field unchanged."""

    name: str | None = Field(default=None, max_length=200)
    email: str | None = Field(default=None, max_length=320)
    mobile: str | None = Field(default=None, max_length=32)
    password: str | None = None


class AgentResponse(BaseModel):
    id: str
    name: str
    email: str
    mobile: str
    role: Role


def _to_response(agent: User) -> AgentResponse:
    return AgentResponse(
        id=agent.id,
        name=agent.name,
        email=agent.email,
        mobile=agent.mobile,
        role=agent.role,
    )


# === Endpoints ===


@router.get("", response_model=list[AgentResponse])
async def list_agents(
    _: Principal = Depends(require_admin),
    session: Session = Depends(get_session),
) -> list[AgentResponse]:
    return [_to_response(a) for a in AccountStore(session).list_agents()]


@router.post("", response_model=AgentResponse, status_code=201)
async def create_agent(
    req: CreateAgentRequest,
    admin: Principal = Depends(require_admin),
    session: Session = Depends(get_session),
) -> AgentResponse:
    """Create a new agent account."""
    if not req.name or not req.email or not req.mobile or not req.password:
        raise ValidationError("Please enter all required fields")

    accounts = AccountStore(session)
    if accounts.email_taken(req.email):
        raise ValidationError("Agent with this email already exists")

    agent = accounts.create(
        name=req.name,
        email=req.email,
        mobile=req.mobile,
        password=req.password,
        role=Role.AGENT,
    )
    logger.info("Admin %s created agent %s", admin.user_id, agent.id)
    return _to_response(agent)


@router.put("/{agent_id}", response_model=AgentResponse)
async def update_agent(
    agent_id: str,
    req: UpdateAgentRequest,
    admin: Principal = Depends(require_admin),
    session: Session = Depends(get_session),
) -> AgentResponse:
    """Update an agent's name, email, mobile or password."""
    accounts = AccountStore(session)
    agent = accounts.get_agent(agent_id)
    if agent is None:
        raise NotFoundError("Agent not found")

    if req.email and accounts.email_taken(req.email, exclude_id=agent.id):
        raise ValidationError("Agent with this email already exists")

    agent = accounts.update(agent, **req.model_dump(exclude_unset=True))
    logger.info("Admin %s updated agent %s", admin.user_id, agent.id)
    return _to_response(agent)


@router.delete("/{agent_id}")
async def delete_agent(
    agent_id: str,
    admin: Principal = Depends(require_admin),
    session: Session = Depends(get_session),
) -> dict:
    """Delete an agent. Tasks assigned to them are not reassigned or removed."""
    accounts = AccountStore(session)
    agent = accounts.get_agent(agent_id)
    if agent is None:
        raise NotFoundError("Agent not found")

    orphaned = TaskStore(session).count_for_assignee(agent.id)
    accounts.delete(agent)
    if orphaned:
        logger.warning("Agent %s deleted by %s with %d assigned tasks left orphaned", agent_id, admin.user_id, orphaned)
    else:
        logger.info("Agent %s deleted by %s", agent_id, admin.user_id)
    return {"message": "Agent removed"}
