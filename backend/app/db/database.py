"""Database setup — SQLite with WAL mode via SQLModel/SQLAlchemy.

What goes where:
- user:          admins and agents (identity + role)
- upload_batch:  one row per accepted spreadsheet upload
- task:          distributed contact records, tagged with their batch
"""

from __future__ import annotations

import os

from sqlalchemy import event
from sqlalchemy.engine import Engine
from sqlmodel import Session, SQLModel, create_engine

from app.config import settings


def get_database_url() -> str:
    """Get database URL, ensuring the data directory exists."""
    url = settings.database_url
    if url.startswith("sqlite:///"):
        db_path = url.replace("sqlite:///", "")
        db_dir = os.path.dirname(db_path)
        if db_dir:
            os.makedirs(db_dir, exist_ok=True)
    return url


@event.listens_for(Engine, "connect")
def set_sqlite_pragmas(dbapi_connection, connection_record):
    """Enable WAL mode for SQLite connections."""
    if not get_database_url().startswith("sqlite"):
        return
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA journal_mode=WAL")
    cursor.execute("PRAGMA synchronous=NORMAL")  # Safe with WAL
    cursor.execute("PRAGMA busy_timeout=5000")    # 5s wait on lock
    cursor.close()


_connect_args = {"check_same_thread": False} if get_database_url().startswith("sqlite") else {}

engine = create_engine(
    get_database_url(),
    echo=False,
    connect_args=_connect_args,
)


def create_db_and_tables():
    """Create all tables defined by SQLModel metadata."""
    # Table classes must be imported before metadata.create_all
    from app.models.task import Task, UploadBatch  # noqa: F401
    from app.models.user import User  # noqa: F401

    SQLModel.metadata.create_all(engine)


def get_session():
    """Dependency for FastAPI endpoints."""
    with Session(engine) as session:
        yield session
