"""Authentication wrappers and role predicates.

The async wrappers check their required inputs, then go through the
dispatcher. Role predicates are pure and never touch the store.

Usage:
    session = await login(dispatcher, "admin", "admin123")
    user = await validate_session(dispatcher, session.token)
    if can_validate_inspections(user.role):
        ...
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from typing import Any

from officine.dispatcher import Dispatcher
from officine.errors import MissingField, PermissionDenied
from officine.models.enums import InspectionStatus, Role
from officine.schemas.commands import Login, Logout, ValidateSession
from officine.schemas.users import SessionInfo, UserView

logger = logging.getLogger(__name__)

ADMIN_ROLES = frozenset({Role.ADMIN.value})
ELEVATED_ROLES = frozenset({Role.ADMIN.value, Role.LEAD_INSPECTOR.value})
CREATOR_ROLES = frozenset({Role.ADMIN.value, Role.LEAD_INSPECTOR.value, Role.INSPECTOR.value})

# Commands callable without a session
PUBLIC_COMMANDS = frozenset({
    "list_grids",
    "get_grid",
    "get_sections",
    "cmd_login",
    "cmd_logout",
    "cmd_validate_session",
})

# Commands restricted to some roles; any other non-public command needs a valid session only
COMMAND_ROLES: dict[str, frozenset[str]] = {
    "cmd_list_users": ELEVATED_ROLES,
    "cmd_create_user": ADMIN_ROLES,
    "cmd_update_user": ADMIN_ROLES,
    "cmd_change_password": ADMIN_ROLES,
    "cmd_delete_user": ADMIN_ROLES,
    "cmd_delete_inspection": ELEVATED_ROLES,
    "cmd_query_audit": ELEVATED_ROLES,
    "cmd_count_audit": ELEVATED_ROLES,
}


def required_roles(command: str, args: Mapping[str, Any] | None = None) -> frozenset[str] | None:
    """Roles allowed to run ``command`` with ``args``, or None when any session will do.

    Setting an inspection to ``validated`` is reserved to elevated roles.
    """
    if command == "cmd_set_inspection_status" and (args or {}).get("status") == InspectionStatus.VALIDATED.value:
        return ELEVATED_ROLES
    return COMMAND_ROLES.get(command)


async def login(dispatcher: Dispatcher, username: str | None, password: str | None) -> SessionInfo:
    """Open a session.

    Raises:
        MissingField: username blank or password empty.
        InvalidCredentials: no active user with exactly these credentials.
    """
    if not username or not username.strip():
        raise MissingField("username", "Nom d'utilisateur requis")
    if not password:
        raise MissingField("password", "Mot de passe requis")
    return dispatcher.execute(Login(username=username, password=password))


async def logout(dispatcher: Dispatcher, token: str | None) -> None:
    """Close a session. Unknown tokens are ignored by the store."""
    if not token:
        raise MissingField("token", "Token requis")
    dispatcher.execute(Logout(token=token))


async def validate_session(dispatcher: Dispatcher, token: str | None) -> UserView:
    """Resolve a token to its user.

    Raises:
        MissingField: no token given.
        InvalidSession: token unbound, or its user is missing or inactive.
    """
    if not token:
        raise MissingField("token", "Token requis")
    return dispatcher.execute(ValidateSession(token=token))


async def require_role(dispatcher: Dispatcher, token: str | None, roles: Iterable[str]) -> UserView:
    """Validate the session, then check the user's role is one of ``roles``."""
    allowed = sorted(str(getattr(r, "value", r)) for r in roles)
    user = await validate_session(dispatcher, token)
    if user.role not in allowed:
        logger.warning("Access denied for '%s' (role=%s, required=%s)", user.username, user.role, allowed)
        raise PermissionDenied(allowed)
    return user


def _role_value(role: object) -> str:
    return str(getattr(role, "value", role))


def is_admin_like(role: object) -> bool:
    return _role_value(role) in ELEVATED_ROLES


def can_manage_users(role: object) -> bool:
    return _role_value(role) in ELEVATED_ROLES


def can_validate_inspections(role: object) -> bool:
    return _role_value(role) in ELEVATED_ROLES


def can_create_inspections(role: object) -> bool:
    return _role_value(role) in CREATOR_ROLES
