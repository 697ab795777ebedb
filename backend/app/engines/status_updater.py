"""Status Updater — validate and apply task status transitions.

Any status may move to any other status; the only checks are that the target
is a recognized value and that the caller may touch the task (admins: any task,
agents: only tasks assigned to them).
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any

from app.errors import ForbiddenError, InvalidStatusError
from app.models.task import Task, TaskStatus
from app.models.user import Principal

_VALID_LABELS = ", ".join(s.value for s in TaskStatus)


def parse_status(value: Any) -> TaskStatus:
    """Coerce a requested status label to TaskStatus.

    Raises:
        InvalidStatusError: If the value is absent or not a recognized label.
    """
    if isinstance(value, str) and value:
        try:
            return TaskStatus(value)
        except ValueError:
            pass
    raise InvalidStatusError(f"Invalid or missing status. Must be one of: {_VALID_LABELS}.")


def can_update(task: Task, principal: Principal) -> bool:
    if principal.role.can_update_any_task:
        return True
    return principal.role.receives_tasks and task.assigned_to == principal.user_id


def apply_status(task: Task, requested: TaskStatus, principal: Principal) -> TaskStatus:
    """Overwrite task.status after the authorization check. Returns the previous status.

    Raises:
        ForbiddenError: If the caller is not an admin and not the task's assignee.
    """
    if not can_update(task, principal):
        raise ForbiddenError("Not authorized to update this task.")

    previous = task.status
    task.status = requested
    task.updated_at = datetime.now(timezone.utc)
    return previous
