"""Field validators for user and inspection input.

Validators never raise: they return a ValidationResult carrying either the
cleaned value or a French error message ready to show next to the field.
"""

from __future__ import annotations

import re
from datetime import date, datetime
from typing import Any

from officine.models.enums import InspectionStatus, InspectionType, Role
from officine.schemas.validation import ValidationResult

_USERNAME_RE = re.compile(r"^[a-zA-Z0-9._-]+$")
_EMAIL_RE = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")

OBSERVATION_MAX_LENGTH = 1000


def _ok(value: Any = None) -> ValidationResult:
    return ValidationResult(valid=True, value=value)


def _fail(error: str) -> ValidationResult:
    return ValidationResult(valid=False, error=error)


def validate_username(username: Any) -> ValidationResult:
    if not username or not isinstance(username, str):
        return _fail("Nom d'utilisateur requis")
    trimmed = username.strip()
    if len(trimmed) < 3:
        return _fail("Nom d'utilisateur minimum 3 caractères")
    if len(trimmed) > 50:
        return _fail("Nom d'utilisateur maximum 50 caractères")
    if not _USERNAME_RE.match(trimmed):
        return _fail("Caractères non autorisés")
    return _ok(trimmed)


def validate_password(password: Any) -> ValidationResult:
    if not password or not isinstance(password, str):
        return _fail("Mot de passe requis")
    if len(password) < 6:
        return _fail("Mot de passe minimum 6 caractères")
    if len(password) > 100:
        return _fail("Mot de passe trop long")
    return _ok(password)


def validate_email(email: Any) -> ValidationResult:
    if not email or not isinstance(email, str):
        return _fail("Email requis")
    if not _EMAIL_RE.match(email):
        return _fail("Email invalide")
    return _ok(email)


def validate_role(role: Any) -> ValidationResult:
    if role not in {r.value for r in Role}:
        return _fail("Rôle invalide")
    return _ok(role)


def validate_inspection_status(status: Any) -> ValidationResult:
    if status not in {s.value for s in InspectionStatus}:
        return _fail("Statut invalide")
    return _ok(status)


def validate_establishment(establishment: Any) -> ValidationResult:
    if not establishment or not isinstance(establishment, str):
        return _fail("Établissement requis")
    trimmed = establishment.strip()
    if len(trimmed) < 2:
        return _fail("Établissement minimum 2 caractères")
    if len(trimmed) > 200:
        return _fail("Établissement trop long")
    return _ok(trimmed)


def validate_date_inspection(value: Any) -> ValidationResult:
    """Accepts a date, a datetime or an ISO 8601 string."""
    if not value:
        return _fail("Date inspection requise")
    if isinstance(value, (date, datetime)):
        return _ok(value)
    if not isinstance(value, str):
        return _fail("Date invalide")
    try:
        datetime.fromisoformat(value)
    except ValueError:
        return _fail("Date invalide")
    return _ok(value)


def validate_inspection_type(inspection_type: Any) -> ValidationResult:
    if inspection_type not in {t.value for t in InspectionType}:
        return _fail("Type d'inspection invalide")
    return _ok(inspection_type)


def validate_criterion_response(criterion_id: Any, conforme: Any, observation: Any) -> ValidationResult:
    # bool is an int subclass; a bare True is not a criterion id
    if isinstance(criterion_id, bool) or not isinstance(criterion_id, (int, str)):
        return _fail("Criterion ID invalide")
    if conforme is not None and conforme is not True and conforme is not False:
        return _fail("Réponse invalide (true/false/null)")
    if observation and not isinstance(observation, str):
        return _fail("Observation doit être une chaîne")
    if observation and len(observation) > OBSERVATION_MAX_LENGTH:
        return _fail("Observation trop longue")
    return _ok({"criterion_id": criterion_id, "conforme": conforme, "observation": observation})


def validate_inspection_create(req: Any) -> ValidationResult:
    """Check every field of a creation request and collect all failures."""
    get = req.get if isinstance(req, dict) else lambda name: getattr(req, name, None)
    errors: list[str] = []

    if not get("grid_id"):
        errors.append("Grille requise")

    for result in (
        validate_establishment(get("establishment")),
        validate_date_inspection(get("date_inspection")),
        validate_inspection_type(get("inspection_type")),
    ):
        if not result.valid:
            errors.append(result.error)

    inspectors = get("inspectors")
    if not inspectors or not isinstance(inspectors, (list, tuple)):
        errors.append("Au moins un inspecteur requis")

    if errors:
        return ValidationResult(valid=False, errors=errors)
    return ValidationResult(valid=True)
