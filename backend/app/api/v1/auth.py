"""Authentication endpoints.

POST /api/auth/login          — exchange email + password for a bearer token
POST /api/auth/register-admin — create an admin account (first-time setup)
GET  /api/auth/me             — profile of the authenticated caller
"""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends
from pydantic import BaseModel, Field
from sqlmodel import Session

from app.api.deps import get_current_user
from app.config import settings
from app.db.database import get_session
from app.engines.accounts import AccountStore
from app.errors import AuthenticationError, ForbiddenError, ValidationError
from app.models.user import Role, User
from app.security.access_token import issue_access_token

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/auth", tags=["auth"])


# === Request / Response Models ===


class LoginRequest(BaseModel):
    email: str | None = None
    password: str | None = None


class RegisterAdminRequest(BaseModel):
    name: str | None = Field(default=None, max_length=200)
    email: str | None = Field(default=None, max_length=320)
    password: str | None = None


class UserResponse(BaseModel):
    id: str
    name: str
    email: str
    mobile: str = ""
    role: Role


class AuthResponse(UserResponse):
    token: str
    expires_in_seconds: int


def _auth_response(user: User) -> AuthResponse:
    token = issue_access_token(
        secret=settings.secret_key,
        user_id=user.id,
        role=user.role.value,
        ttl_seconds=settings.access_token_ttl_seconds,
    )
    return AuthResponse(
        id=user.id,
        name=user.name,
        email=user.email,
        mobile=user.mobile,
        role=user.role,
        token=token,
        expires_in_seconds=settings.access_token_ttl_seconds,
    )


# === Endpoints ===


@router.post("/login", response_model=AuthResponse)
async def login(req: LoginRequest, session: Session = Depends(get_session)) -> AuthResponse:
    """Authenticate with email and password."""
    if not req.email or not req.password:
        raise ValidationError("Please provide email and password.")

    user = AccountStore(session).authenticate(req.email, req.password)
    if user is None:
        logger.warning("Failed login for %s", req.email)
        raise AuthenticationError("Invalid email or password")

    logger.info("User %s logged in as %s", user.id, user.role.value)
    return _auth_response(user)


@router.post("/register-admin", response_model=AuthResponse, status_code=201)
async def register_admin(req: RegisterAdminRequest, session: Session = Depends(get_session)) -> AuthResponse:
    """Create an admin account and return it with a token."""
    if not settings.allow_admin_registration:
        raise ForbiddenError("Admin registration is disabled.")
    if not req.name or not req.email or not req.password:
        raise ValidationError("Please enter all required fields")

    accounts = AccountStore(session)
    if accounts.email_taken(req.email):
        raise ValidationError("User already exists")

    user = accounts.create(name=req.name, email=req.email, password=req.password, role=Role.ADMIN)
    logger.info("Registered admin %s", user.id)
    return _auth_response(user)


@router.get("/me", response_model=UserResponse)
async def me(user: User = Depends(get_current_user)) -> UserResponse:
    return UserResponse(id=user.id, name=user.name, email=user.email, mobile=user.mobile, role=user.role)
