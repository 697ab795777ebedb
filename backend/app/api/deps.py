"""Route dependencies: the authenticated caller and role guards."""

from __future__ import annotations

from fastapi import Depends, Request
from sqlmodel import Session

from app.db.database import get_session
from app.engines.accounts import AccountStore
from app.errors import AuthenticationError, ForbiddenError
from app.models.user import Principal, User


def get_current_user(request: Request, session: Session = Depends(get_session)) -> User:
    """The user behind the token verified by BearerAuthMiddleware."""
    principal: Principal | None = getattr(request.state, "principal", None)
    if principal is None:
        raise AuthenticationError("Not authorized, no token.")

    user = AccountStore(session).get(principal.user_id)
    if user is None:
        raise AuthenticationError("Not authorized, user no longer exists.")
    return user


def get_principal(user: User = Depends(get_current_user)) -> Principal:
    # Role is read from the table so role changes apply before the token expires
    return Principal(user_id=user.id, role=user.role)


def require_admin(principal: Principal = Depends(get_principal)) -> Principal:
    if not principal.role.can_manage_agents:
        raise ForbiddenError("Not authorized as an admin.")
    return principal


def require_distributor(principal: Principal = Depends(get_principal)) -> Principal:
    if not principal.role.can_distribute:
        raise ForbiddenError("Not authorized to distribute lists.")
    return principal


def require_agent(principal: Principal = Depends(get_principal)) -> Principal:
    if not principal.role.receives_tasks:
        raise ForbiddenError("Access denied. Only agents can view their tasks.")
    return principal
