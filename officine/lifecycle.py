"""Inspection status transition table.

By default status changes are unconditional overwrites. When
``settings.lifecycle.enforce_transitions`` is on, the dispatcher checks
every change against TRANSITIONS and rejects the others.
"""

from __future__ import annotations

import logging

from officine.errors import InvalidTransition
from officine.models.enums import InspectionStatus

logger = logging.getLogger(__name__)

# Transition map: {current_status: {allowed next statuses}}
TRANSITIONS: dict[InspectionStatus, frozenset[InspectionStatus]] = {
    InspectionStatus.DRAFT: frozenset({
        InspectionStatus.IN_PROGRESS,
        InspectionStatus.COMPLETED,
        InspectionStatus.ARCHIVED,
    }),
    InspectionStatus.IN_PROGRESS: frozenset({
        InspectionStatus.DRAFT,
        InspectionStatus.COMPLETED,
        InspectionStatus.ARCHIVED,
    }),
    InspectionStatus.COMPLETED: frozenset({
        InspectionStatus.IN_PROGRESS,
        InspectionStatus.VALIDATED,
        InspectionStatus.ARCHIVED,
    }),
    InspectionStatus.VALIDATED: frozenset({
        InspectionStatus.ARCHIVED,
    }),
    InspectionStatus.ARCHIVED: frozenset(),
}

# Display / sort order of statuses
STATUS_ORDER: dict[str, int] = {
    InspectionStatus.DRAFT.value: 1,
    InspectionStatus.IN_PROGRESS.value: 2,
    InspectionStatus.COMPLETED.value: 3,
    InspectionStatus.VALIDATED.value: 4,
    InspectionStatus.ARCHIVED.value: 5,
}


def allowed_next(status: str) -> frozenset[InspectionStatus]:
    """Statuses reachable from ``status``. Unknown statuses reach nothing."""
    try:
        return TRANSITIONS[InspectionStatus(status)]
    except ValueError:
        return frozenset()


def can_transition(from_status: str, to_status: str) -> bool:
    """Check a move against the table. Re-setting the same status is always allowed."""
    if from_status == to_status:
        return True
    return to_status in {s.value for s in allowed_next(from_status)}


def check_transition(from_status: str, to_status: str) -> None:
    """Raise InvalidTransition unless the table allows the move."""
    if not can_transition(from_status, to_status):
        logger.warning("Rejected status transition: %s -> %s", from_status, to_status)
        raise InvalidTransition(from_status, to_status)


def is_terminal(status: str) -> bool:
    return len(allowed_next(status)) == 0
