"""Health check endpoint — database connectivity and configuration warnings."""

from __future__ import annotations

from datetime import datetime, timezone

from fastapi import APIRouter
from pydantic import BaseModel

from app.config import DEV_SECRET_KEY, settings

router = APIRouter()

VERSION = "1.0.0"


class HealthStatus(BaseModel):
    status: str  # "healthy" | "degraded" | "unhealthy"
    version: str
    checks: dict[str, dict]
    timestamp: datetime


@router.get("/health", response_model=HealthStatus)
async def health_check() -> HealthStatus:
    checks: dict[str, dict] = {}
    overall_healthy = True
    has_warning = False

    # 1. Database
    try:
        from sqlalchemy import text

        from app.db.database import engine
        with engine.connect() as conn:
            conn.execute(text("SELECT 1")).fetchone()
            checks["database"] = {"status": "ok", "detail": engine.dialect.name}
    except Exception as e:
        checks["database"] = {"status": "error", "detail": str(e)[:200]}
        overall_healthy = False

    # 2. Token signing key
    if settings.secret_key == DEV_SECRET_KEY:
        checks["secret_key"] = {"status": "warning", "detail": "SECRET_KEY not set (using development key)"}
        has_warning = True
    else:
        checks["secret_key"] = {"status": "ok", "detail": "configured"}

    # 3. Admin self-registration (informational)
    checks["admin_registration"] = {
        "status": "ok" if settings.allow_admin_registration else "disabled",
        "detail": "POST /api/auth/register-admin"
        + ("" if settings.allow_admin_registration else " — set ALLOW_ADMIN_REGISTRATION=true to enable"),
    }

    if overall_healthy:
        status = "degraded" if has_warning else "healthy"
    else:
        status = "unhealthy"

    return HealthStatus(
        status=status,
        version=VERSION,
        checks=checks,
        timestamp=datetime.now(timezone.utc),
    )
