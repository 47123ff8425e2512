"""Domain enums for inspection records.

Import enums from here rather than from the submodule.
"""

from __future__ import annotations

from officine.models.enums import (
    AuditAction,
    EntityType,
    InspectionStatus,
    InspectionType,
    Role,
    status_action,
)

__all__ = [
    "AuditAction",
    "EntityType",
    "InspectionStatus",
    "InspectionType",
    "Role",
    "status_action",
]
