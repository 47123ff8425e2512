"""Audit log schemas.

Entries are immutable once created and kept newest-first by the store.
"""

from __future__ import annotations

from pydantic import BaseModel, Field


class AuditLogEntry(BaseModel):
    """One line of the audit trail."""

    id: int
    timestamp: str
    user_id: str | None = None
    username: str | None = None
    action: str
    entity_type: str | None = None
    entity_id: str | None = None
    details: str | None = None

    model_config = {"frozen": True}


class AuditFilter(BaseModel):
    """Exact-match filters, inclusive timestamp bounds and pagination."""

    user_id: str | None = None
    action: str | None = None
    entity_type: str | None = None
    entity_id: str | None = None
    from_date: str | None = None
    to_date: str | None = None
    limit: int = Field(default=100, ge=0)
    offset: int = Field(default=0, ge=0)
