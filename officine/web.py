"""HTTP transport for the command surface — FastAPI router.

Exposes every dispatcher command as ``POST /api/invoke/{command}`` with the
argument mapping as JSON body. Apart from the grid catalog and the session
commands, every call needs the ``X-Session-Token`` header: the session's
user becomes the acting identity and must hold the roles listed in
``officine.auth.COMMAND_ROLES``. An ``actor`` sent in the body is ignored.
"""

from __future__ import annotations

import logging
from typing import Any

from fastapi import APIRouter, Body, Depends, Request
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse

from officine.auth import PUBLIC_COMMANDS, require_role, required_roles, validate_session
from officine.config import settings
from officine.dispatcher import Dispatcher
from officine.errors import DomainError, InvalidSession, UnknownCommand
from officine.schemas.commands import COMMAND_NAMES
from officine.schemas.users import UserView

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["commands"])

ERROR_STATUS: dict[str, int] = {
    "missing_field": 422,
    "validation_error": 422,
    "invalid_credentials": 401,
    "invalid_session": 401,
    "permission_denied": 403,
    "not_found": 404,
    "unknown_command": 404,
    "invalid_transition": 409,
    "duplicate_username": 409,
}


def get_dispatcher(request: Request) -> Dispatcher:
    return request.app.state.dispatcher


async def get_session_token(request: Request) -> str | None:
    """FastAPI dependency — the session token from the configured header, if any."""
    return request.headers.get(settings.server.session_header) or None


async def domain_error_handler(request: Request, exc: DomainError) -> JSONResponse:
    """Map a DomainError to ``{"error": kind, "detail": message}``."""
    status_code = ERROR_STATUS.get(exc.kind, 400)
    logger.info("%s %s -> %d %s", request.method, request.url.path, status_code, exc.kind)
    return JSONResponse(status_code=status_code, content={"error": exc.kind, "detail": exc.message})


async def authorize(dispatcher: Dispatcher, command: str, args: dict[str, Any], token: str | None) -> UserView:
    """Resolve the acting user for a protected command.

    Raises:
        InvalidSession: no token, or a token not bound to an active user.
        PermissionDenied: the user's role may not run this command.
    """
    if not token:
        raise InvalidSession()
    roles = required_roles(command, args)
    if roles is None:
        return await validate_session(dispatcher, token)
    return await require_role(dispatcher, token, roles)


@router.get("/health")
async def health() -> dict[str, str]:
    return {"status": "ok"}


@router.post("/invoke/{command}")
async def invoke(
    command: str,
    body: dict[str, Any] | None = Body(default=None),  # noqa: B008
    dispatcher: Dispatcher = Depends(get_dispatcher),  # noqa: B008
    token: str | None = Depends(get_session_token),  # noqa: B008
) -> dict[str, Any]:
    if command not in COMMAND_NAMES:
        raise UnknownCommand(command)

    args = {key: value for key, value in (body or {}).items() if key != "actor"}
    if command not in PUBLIC_COMMANDS:
        actor = await authorize(dispatcher, command, args, token)
        args["actor"] = actor.model_dump()

    result = dispatcher.dispatch(command, args)
    return {"result": jsonable_encoder(result)}
