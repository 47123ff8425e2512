"""Domain errors raised by the store, the dispatcher and the wrappers.

Every error carries a stable ``kind`` (used by the HTTP transport to pick a
status code) and a French message suitable for end users.
"""

from __future__ import annotations

from typing import Any


class DomainError(Exception):
    """Base class for every error the core raises."""

    kind = "domain_error"
    default_message = "Erreur"

    def __init__(self, message: str | None = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)


class MissingField(DomainError):
    """A required input is absent or empty."""

    kind = "missing_field"
    default_message = "Champ requis"

    def __init__(self, field: str, message: str | None = None) -> None:
        self.field = field
        super().__init__(message or f"Champ requis : {field}")


class InvalidCredentials(DomainError):
    kind = "invalid_credentials"
    default_message = "Identifiants incorrects"


class InvalidSession(DomainError):
    kind = "invalid_session"
    default_message = "Session invalide"


class NotFound(DomainError):
    kind = "not_found"
    default_message = "Introuvable"


class PermissionDenied(DomainError):
    kind = "permission_denied"
    default_message = "Accès refusé"

    def __init__(self, roles: list[str] | None = None) -> None:
        self.roles = roles or []
        message = self.default_message
        if self.roles:
            message = f"Accès refusé. Rôle requis : {' ou '.join(self.roles)}"
        super().__init__(message)


class DuplicateUsername(DomainError):
    kind = "duplicate_username"
    default_message = "Nom d'utilisateur déjà utilisé"


class InvalidTransition(DomainError):
    """Status change not allowed by the transition table."""

    kind = "invalid_transition"

    def __init__(self, from_status: str, to_status: str) -> None:
        self.from_status = from_status
        self.to_status = to_status
        super().__init__(f"Transition invalide : {from_status} -> {to_status}")


class UnknownCommand(DomainError):
    kind = "unknown_command"

    def __init__(self, command: str) -> None:
        self.command = command
        super().__init__(f"Commande inconnue : {command}")


class ValidationError(DomainError):
    """Argument bundle failed field-level validation."""

    kind = "validation_error"
    default_message = "Données invalides"

    def __init__(self, errors: list[Any] | None = None, message: str | None = None) -> None:
        self.errors = errors or []
        super().__init__(message)
