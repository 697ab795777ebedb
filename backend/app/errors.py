"""Error taxonomy for TaskDesk.

Each error carries the HTTP status it maps to; ``app.main`` registers a single
exception handler that renders any ``TaskDeskError`` as ``{"detail": message}``.
"""

from __future__ import annotations


class TaskDeskError(Exception):
    """Base exception for TaskDesk."""

    status_code: int = 500

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class ValidationError(TaskDeskError):
    """Missing or malformed request fields."""

    status_code = 400


class ParseError(TaskDeskError):
    """Uploaded file could not be decoded or lacks required columns."""

    status_code = 400


class EmptyInputError(TaskDeskError):
    """Uploaded file contains no data rows."""

    status_code = 400


class UnsupportedFileTypeError(TaskDeskError):
    """Uploaded file is not CSV, XLS or XLSX."""

    status_code = 400


class NoAgentsError(TaskDeskError):
    """No agents exist to receive distributed tasks."""

    status_code = 400


class InvalidStatusError(TaskDeskError):
    """Requested task status is absent or not a recognized value."""

    status_code = 400


class AuthenticationError(TaskDeskError):
    """Bad credentials or missing/expired bearer token."""

    status_code = 401


class ForbiddenError(TaskDeskError):
    """Caller's role or identity does not permit the operation."""

    status_code = 403


class NotFoundError(TaskDeskError):
    status_code = 404
