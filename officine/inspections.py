"""Inspection lifecycle — async wrappers over the dispatcher plus pure list helpers.

The wrappers take the caller's SessionInfo (or None outside a session) and
pass its user along as the acting identity. The filter / sort helpers work
on already-fetched lists and always return new lists.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from datetime import UTC, datetime
from typing import Any

from officine.dispatcher import Dispatcher
from officine.kpi import read_field
from officine.lifecycle import STATUS_ORDER
from officine.schemas.commands import (
    CreateInspection,
    DeleteInspection,
    GetInspection,
    GetResponses,
    ListInspections,
    SaveResponse,
    SetInspectionStatus,
    UpdateInspectionMeta,
)
from officine.schemas.inspections import CreateInspectionRequest, Inspection, InspectionFilter, Response
from officine.schemas.users import SessionInfo, UserView

logger = logging.getLogger(__name__)


def _actor(session: SessionInfo | None) -> UserView | None:
    return session.user if session is not None else None


# ── Commands ─────────────────────────────────────────────────────────


async def create_inspection(
    dispatcher: Dispatcher,
    req: CreateInspectionRequest,
    session: SessionInfo | None = None,
) -> str:
    """Create a draft inspection and return its id."""
    return dispatcher.execute(CreateInspection(req=req, actor=_actor(session)))


async def list_inspections(
    dispatcher: Dispatcher,
    session: SessionInfo | None = None,
    inspection_filter: InspectionFilter | None = None,
) -> list[Inspection]:
    """Inspections matching the filter, most recently updated first."""
    f = inspection_filter or InspectionFilter()
    return dispatcher.execute(ListInspections(my_only=f.mine_only, status=f.status, actor=_actor(session)))


async def get_inspection(dispatcher: Dispatcher, inspection_id: str) -> Inspection | None:
    return dispatcher.execute(GetInspection(inspection_id=inspection_id))


async def get_responses(dispatcher: Dispatcher, inspection_id: str) -> list[Response]:
    return dispatcher.execute(GetResponses(inspection_id=inspection_id))


async def save_response(
    dispatcher: Dispatcher,
    inspection_id: str,
    criterion_id: int,
    conforme: bool | None,
    observation: str = "",
    session: SessionInfo | None = None,
) -> None:
    """Record the answer to one criterion; a draft inspection moves to in_progress."""
    dispatcher.execute(SaveResponse(
        inspection_id=inspection_id,
        criterion_id=criterion_id,
        conforme=conforme,
        observation=observation,
        actor=_actor(session),
    ))


async def update_inspection_meta(
    dispatcher: Dispatcher,
    inspection_id: str,
    req: CreateInspectionRequest,
    session: SessionInfo | None = None,
) -> None:
    dispatcher.execute(UpdateInspectionMeta(inspection_id=inspection_id, req=req, actor=_actor(session)))


async def set_status(
    dispatcher: Dispatcher,
    inspection_id: str,
    status: str,
    session: SessionInfo | None = None,
) -> None:
    """Change the status. Moving to validated stamps the validator."""
    dispatcher.execute(SetInspectionStatus(inspection_id=inspection_id, status=status, actor=_actor(session)))


async def delete_inspection(dispatcher: Dispatcher, inspection_id: str) -> None:
    """Remove the inspection and all of its responses. Not reversible."""
    dispatcher.execute(DeleteInspection(inspection_id=inspection_id))


# ── Pure helpers ─────────────────────────────────────────────────────


def filter_by_status(inspections: Iterable[Any], status: str | None) -> list[Any]:
    items = list(inspections)
    if not status:
        return items
    return [i for i in items if read_field(i, "status") == status]


def filter_by_grid(inspections: Iterable[Any], grid_id: str | None) -> list[Any]:
    items = list(inspections)
    if not grid_id:
        return items
    return [i for i in items if read_field(i, "grid_id") == grid_id]


def filter_by_establishment(inspections: Iterable[Any], search: str | None) -> list[Any]:
    """Case-insensitive substring match on the establishment name."""
    items = list(inspections)
    if not search:
        return items
    term = search.casefold()
    return [i for i in items if term in (read_field(i, "establishment") or "").casefold()]


def _date_key(inspection: Any) -> datetime:
    raw = read_field(inspection, "date_inspection") or read_field(inspection, "created_at")
    try:
        parsed = datetime.fromisoformat(raw)
    except (TypeError, ValueError):
        return datetime.min
    # Compare everything as naive UTC; plain dates carry no offset
    if parsed.tzinfo is not None:
        parsed = parsed.astimezone(UTC).replace(tzinfo=None)
    return parsed


def sort_by_date(inspections: Iterable[Any], ascending: bool = False) -> list[Any]:
    """Sort by inspection date, falling back to creation time. Newest first by default."""
    return sorted(inspections, key=_date_key, reverse=not ascending)


def sort_by_status(inspections: Iterable[Any]) -> list[Any]:
    """draft < in_progress < completed < validated < archived; unknown statuses first."""
    return sorted(inspections, key=lambda i: STATUS_ORDER.get(read_field(i, "status"), 0))
