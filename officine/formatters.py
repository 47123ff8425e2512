"""French display labels for roles and statuses.

Used by the CSV export and by any front-end rendering the records.
"""

from __future__ import annotations

_ROLE_LABELS = {
    "admin": "Admin",
    "lead_inspector": "Inspecteur en chef",
    "inspector": "Inspecteur",
    "viewer": "Lecteur",
}

_STATUS_LABELS = {
    "draft": "Brouillon",
    "in_progress": "En cours",
    "completed": "Terminée",
    "validated": "Validée",
    "archived": "Archivée",
}

_STATUS_COLORS = {
    "draft": "#A0A0A0",
    "in_progress": "#FF9500",
    "completed": "#34C759",
    "validated": "#007AFF",
    "archived": "#8E8E93",
}


def _key(value: object) -> str:
    return str(getattr(value, "value", value))


def role_label(role: object) -> str:
    """admin -> "Admin"; unknown roles are returned unchanged."""
    key = _key(role)
    return _ROLE_LABELS.get(key, key)


def status_label(status: object) -> str:
    """in_progress -> "En cours"; unknown statuses are returned unchanged."""
    key = _key(status)
    return _STATUS_LABELS.get(key, key)


def status_color(status: object) -> str:
    """Hex accent color for a status, black when unknown."""
    return _STATUS_COLORS.get(_key(status), "#000000")
