"""Bearer token authentication middleware.

Every request outside the exempt paths must carry ``Authorization: Bearer <token>``
where the token was issued by /api/auth/login or /api/auth/register-admin.
The verified caller is stored on ``request.state.principal``; role checks
happen in the route dependencies (app.api.deps).

Exempt paths: /, /health, /docs, /openapi.json, /redoc, /api/auth/login,
/api/auth/register-admin
"""

from __future__ import annotations

import logging

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import JSONResponse

from app.config import settings
from app.models.user import Principal, Role
from app.security.access_token import verify_access_token

logger = logging.getLogger(__name__)

# Paths that don't require authentication
_EXEMPT_PATHS = frozenset({
    "/",
    "/health",
    "/docs",
    "/openapi.json",
    "/redoc",
    "/api/auth/login",
    "/api/auth/register-admin",
})


class BearerAuthMiddleware(BaseHTTPMiddleware):
    """Validates the signed bearer token and attaches the caller's Principal."""

    async def dispatch(self, request: Request, call_next):
        if request.method == "OPTIONS" or request.url.path in _EXEMPT_PATHS:
            return await call_next(request)

        token = self._extract_token(request)
        if token is None:
            return JSONResponse(
                status_code=401,
                content={"detail": "Not authorized, no token. Use Authorization: Bearer <token>"},
            )

        principal = self._authenticate(token)
        if principal is None:
            logger.warning(
                "Rejected bearer token from %s on %s",
                request.client.host if request.client else "unknown",
                request.url.path,
            )
            return JSONResponse(
                status_code=401,
                content={"detail": "Not authorized, token failed or expired."},
            )

        request.state.principal = principal
        return await call_next(request)

    @staticmethod
    def _extract_token(request: Request) -> str | None:
        auth_header = request.headers.get("Authorization", "")
        if auth_header.startswith("Bearer ") and auth_header[7:].strip():
            return auth_header[7:].strip()
        return None

    @staticmethod
    def _authenticate(token: str) -> Principal | None:
        claims = verify_access_token(token=token, secret=settings.secret_key)
        if claims is None:
            return None
        try:
            role = Role(claims.role)
        except ValueError:
            return None
        return Principal(user_id=claims.user_id, role=role)
