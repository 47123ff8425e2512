"""Audit trail queries — filter and paginate entries already held by the store.

Entries are expected newest-first (the order the store keeps them in);
the order is preserved.
"""

from __future__ import annotations

from collections.abc import Iterable

from officine.schemas.audit import AuditFilter, AuditLogEntry


def _matches(entry: AuditLogEntry, f: AuditFilter) -> bool:
    if f.user_id is not None and entry.user_id != f.user_id:
        return False
    if f.action is not None and entry.action != f.action:
        return False
    if f.entity_type is not None and entry.entity_type != f.entity_type:
        return False
    if f.entity_id is not None and entry.entity_id != f.entity_id:
        return False
    # Timestamps are fixed-width, so string comparison is chronological
    if f.from_date is not None and entry.timestamp < f.from_date:
        return False
    if f.to_date is not None and entry.timestamp > f.to_date:
        return False
    return True


def query_audit(entries: Iterable[AuditLogEntry], audit_filter: AuditFilter | None = None) -> list[AuditLogEntry]:
    """Return the matching entries, paginated by ``limit`` / ``offset``."""
    f = audit_filter or AuditFilter()
    matched = [e for e in entries if _matches(e, f)]
    return matched[f.offset:f.offset + f.limit]


def count_audit(entries: Iterable[AuditLogEntry], audit_filter: AuditFilter | None = None) -> int:
    """Count matching entries, ignoring pagination."""
    f = audit_filter or AuditFilter()
    return sum(1 for e in entries if _matches(e, f))
