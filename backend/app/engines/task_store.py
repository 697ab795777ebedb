"""Task Store — persistence for distributed tasks.

Every upload creates a new UploadBatch. Tasks carry their batch id and the
current task set is the batch with the highest sequence, so an upload swaps the
whole set in one transaction instead of a delete-then-insert window.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Sequence

from sqlalchemy import delete, func
from sqlmodel import Session, select

from app.engines.distributor import TaskAssignment
from app.models.task import Task, UploadBatch
from app.models.user import User

logger = logging.getLogger(__name__)

# Serializes uploads within the process so batch sequences never collide
_upload_lock = threading.Lock()


class TaskStore:
    """Queries and bulk replacement of the current task set."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def replace_all(
        self,
        assignments: Sequence[TaskAssignment],
        *,
        filename: str = "",
        file_format: str = "",
        uploaded_by: str | None = None,
    ) -> UploadBatch:
        """Make the given assignments the entire task set. Prior batches are deleted."""
        with _upload_lock:
            last_sequence = self.session.exec(select(func.max(UploadBatch.sequence))).one()
            batch = UploadBatch(
                sequence=(last_sequence or 0) + 1,
                filename=filename,
                file_format=file_format,
                row_count=len(assignments),
                agent_count=len({a.assigned_to for a in assignments}),
                uploaded_by=uploaded_by,
            )
            self.session.add(batch)
            self.session.flush()

            self.session.add_all(
                Task(
                    batch_id=batch.id,
                    position=a.position,
                    first_name=a.first_name,
                    phone=a.phone,
                    notes=a.notes,
                    assigned_to=a.assigned_to,
                )
                for a in assignments
            )

            self.session.execute(delete(Task).where(Task.batch_id != batch.id))  # type: ignore[arg-type]
            self.session.execute(delete(UploadBatch).where(UploadBatch.id != batch.id))  # type: ignore[arg-type]

            self.session.commit()
            self.session.refresh(batch)

        logger.info("Batch %s (#%d) replaced task set with %d tasks", batch.id, batch.sequence, batch.row_count)
        return batch

    def current_batch(self) -> UploadBatch | None:
        statement = select(UploadBatch).order_by(UploadBatch.sequence.desc()).limit(1)  # type: ignore[union-attr]
        return self.session.exec(statement).first()

    def _current_tasks(self):
        batch = self.current_batch()
        if batch is None:
            return None
        return select(Task).where(Task.batch_id == batch.id).order_by(Task.position)

    def list_for_assignee(self, user_id: str) -> list[Task]:
        """Tasks of the current batch assigned to user_id, in upload row order."""
        statement = self._current_tasks()
        if statement is None:
            return []
        return list(self.session.exec(statement.where(Task.assigned_to == user_id)).all())

    def list_with_assignees(self) -> list[tuple[Task, User | None]]:
        """All tasks of the current batch with their assignee (None if the agent was deleted)."""
        statement = self._current_tasks()
        if statement is None:
            return []
        tasks = self.session.exec(statement).all()
        assignee_ids = {t.assigned_to for t in tasks}
        users: dict[str, User] = {}
        if assignee_ids:
            for user in self.session.exec(select(User).where(User.id.in_(assignee_ids))).all():  # type: ignore[union-attr]
                users[user.id] = user
        return [(t, users.get(t.assigned_to)) for t in tasks]

    def count_for_assignee(self, user_id: str) -> int:
        statement = select(func.count()).select_from(Task).where(Task.assigned_to == user_id)
        return self.session.exec(statement).one()

    def get(self, task_id: str) -> Task | None:
        return self.session.get(Task, task_id)

    def save(self, task: Task) -> Task:
        self.session.add(task)
        self.session.commit()
        self.session.refresh(task)
        return task
