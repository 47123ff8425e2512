"""Domain enums used across the store, schemas and exports.

All enums use the str mixin so values serialize to plain JSON strings.
"""

from __future__ import annotations

from enum import Enum


class Role(str, Enum):
    """User role — drives permission predicates."""

    ADMIN = "admin"
    LEAD_INSPECTOR = "lead_inspector"
    INSPECTOR = "inspector"
    VIEWER = "viewer"


class InspectionStatus(str, Enum):
    """Inspection lifecycle status."""

    DRAFT = "draft"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"
    VALIDATED = "validated"
    ARCHIVED = "archived"


class InspectionType(str, Enum):
    """Reason the inspection was carried out."""

    INITIALE = "initiale"
    SUIVI = "suivi"
    PLAINTE = "plainte"
    REGULIERE = "régulière"


class AuditAction(str, Enum):
    """Action codes written to the audit log.

    Status changes use a dynamic code, see ``status_action``.
    """

    LOGIN = "LOGIN"
    LOGOUT = "LOGOUT"
    CREATE_USER = "CREATE_USER"
    UPDATE_USER = "UPDATE_USER"
    CHANGE_PASSWORD = "CHANGE_PASSWORD"
    DEACTIVATE_USER = "DEACTIVATE_USER"
    CREATE_INSPECTION = "CREATE_INSPECTION"
    SAVE_RESPONSE = "SAVE_RESPONSE"
    UPDATE_META = "UPDATE_META"


class EntityType(str, Enum):
    """Entity kinds referenced by audit entries."""

    SESSION = "session"
    USER = "user"
    INSPECTION = "inspection"
    RESPONSE = "response"


def status_action(status: str) -> str:
    """Audit action code for a status change, e.g. ``SET_STATUS_VALIDATED``."""
    return f"SET_STATUS_{status.upper()}"
