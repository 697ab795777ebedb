"""TaskDesk FastAPI Application.

Entry point for the backend server.
"""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, HTTPException, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from app.api.health import VERSION
from app.api.health import router as health_router
from app.api.v1.agents import router as agents_router
from app.api.v1.auth import router as auth_router
from app.api.v1.lists import router as lists_router
from app.config import DEV_SECRET_KEY, settings
from app.db.database import create_db_and_tables
from app.errors import TaskDeskError
from app.middleware.auth import BearerAuthMiddleware

logger = logging.getLogger(__name__)


def configure_logging() -> None:
    logging.basicConfig(
        level=getattr(logging, settings.log_level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application startup and shutdown."""
    configure_logging()
    create_db_and_tables()
    if settings.secret_key == DEV_SECRET_KEY:
        logger.warning("SECRET_KEY is not set; access tokens are signed with the development key.")
    if settings.allow_admin_registration:
        logger.info("Admin self-registration is open (ALLOW_ADMIN_REGISTRATION=false to close it).")
    yield


app = FastAPI(
    title="TaskDesk",
    description="Contact list upload and round-robin task distribution for agents",
    version=VERSION,
    lifespan=lifespan,
)

# Middleware (order matters: last added = outermost)
app.add_middleware(BearerAuthMiddleware)
app.add_middleware(
    CORSMiddleware,
    allow_origins=[o.strip() for o in settings.cors_origins.split(",") if o.strip()],
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
    allow_headers=["Authorization", "Content-Type"],
)


@app.exception_handler(TaskDeskError)
async def taskdesk_error_handler(request: Request, exc: TaskDeskError):
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.message})


# Global exception handler — prevent internal details from leaking
@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception):
    if isinstance(exc, HTTPException):
        raise exc
    logger.error("Unhandled exception on %s %s: %s", request.method, request.url.path, exc, exc_info=True)
    return JSONResponse(
        status_code=500,
        content={"detail": "Internal server error."},
    )


# Routes
app.include_router(health_router)
app.include_router(auth_router)
app.include_router(agents_router)
app.include_router(lists_router)


@app.get("/")
async def root():
    return {"name": "TaskDesk", "version": VERSION, "status": "running"}
