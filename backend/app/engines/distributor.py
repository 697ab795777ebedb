"""Distributor — round-robin assignment of contact records to agents.

Row i goes to agents[i mod N], so every agent receives floor(M/N) or
ceil(M/N) rows and the mapping is reproducible for a given agent order
and row order.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

from app.engines.record_parser import ContactRecord
from app.errors import NoAgentsError


@dataclass(frozen=True)
class TaskAssignment:
    """A task-creation request produced by distribution."""

    position: int
    first_name: str
    phone: str
    notes: str
    assigned_to: str


def distribute(records: Sequence[ContactRecord], agent_ids: Sequence[str]) -> list[TaskAssignment]:
    """Assign records to agents in cyclic order.

    Raises:
        NoAgentsError: If agent_ids is empty.
    """
    if not agent_ids:
        raise NoAgentsError("No agents available to distribute tasks.")

    assignments: list[TaskAssignment] = []
    cursor = 0
    for position, record in enumerate(records):
        assignments.append(
            TaskAssignment(
                position=position,
                first_name=record.first_name,
                phone=str(record.phone),
                notes=record.notes or "",
                assigned_to=agent_ids[cursor],
            )
        )
        cursor = (cursor + 1) % len(agent_ids)
    return assignments


def assignment_counts(assignments: Sequence[TaskAssignment]) -> dict[str, int]:
    """Number of assignments per agent ID, in first-seen order."""
    counts: dict[str, int] = {}
    for a in assignments:
        counts[a.assigned_to] = counts.get(a.assigned_to, 0) + 1
    return counts
