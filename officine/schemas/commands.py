"""Typed command model — one variant per command of the command surface.

Each variant carries its own argument record and a ``command`` literal used
as the discriminator. Argument keys are accepted in snake_case or in the
camelCase spelling used by the desktop front-end (``inspectionId``).

Usage:
    from officine.schemas.commands import parse_command

    command = parse_command("cmd_get_inspection", {"inspectionId": "..."})
"""

from __future__ import annotations

from typing import Annotated, Any, Literal, Union, get_args

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter
from pydantic import ValidationError as PydanticValidationError
from pydantic.alias_generators import to_camel

from officine.errors import MissingField, UnknownCommand, ValidationError
from officine.models.enums import InspectionStatus
from officine.schemas.audit import AuditFilter
from officine.schemas.inspections import CreateInspectionRequest
from officine.schemas.users import CreateUserRequest, UpdateUserRequest, UserView


class _Command(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
        use_enum_values=True,
    )


# ── Grids ────────────────────────────────────────────────────────────


class ListGrids(_Command):
    command: Literal["list_grids"] = "list_grids"


class GetGrid(_Command):
    command: Literal["get_grid"] = "get_grid"
    grid_id: str


class GetSections(_Command):
    command: Literal["get_sections"] = "get_sections"
    grid_id: str


# ── Auth ─────────────────────────────────────────────────────────────


class Login(_Command):
    command: Literal["cmd_login"] = "cmd_login"
    username: str
    password: str


class Logout(_Command):
    command: Literal["cmd_logout"] = "cmd_logout"
    token: str


class ValidateSession(_Command):
    command: Literal["cmd_validate_session"] = "cmd_validate_session"
    token: str


# ── Users ────────────────────────────────────────────────────────────


class ListUsers(_Command):
    command: Literal["cmd_list_users"] = "cmd_list_users"


class CreateUser(_Command):
    command: Literal["cmd_create_user"] = "cmd_create_user"
    req: CreateUserRequest
    actor: UserView | None = None


class UpdateUser(_Command):
    command: Literal["cmd_update_user"] = "cmd_update_user"
    user_id: str
    req: UpdateUserRequest
    actor: UserView | None = None


class ChangePassword(_Command):
    command: Literal["cmd_change_password"] = "cmd_change_password"
    user_id: str
    new_password: str
    actor: UserView | None = None


class DeleteUser(_Command):
    command: Literal["cmd_delete_user"] = "cmd_delete_user"
    user_id: str
    actor: UserView | None = None


# ── Inspections ──────────────────────────────────────────────────────


class CreateInspection(_Command):
    command: Literal["cmd_create_inspection"] = "cmd_create_inspection"
    req: CreateInspectionRequest
    actor: UserView | None = None


class ListInspections(_Command):
    command: Literal["cmd_list_inspections"] = "cmd_list_inspections"
    my_only: bool = False
    status: InspectionStatus | None = None
    actor: UserView | None = None


class GetInspection(_Command):
    command: Literal["cmd_get_inspection"] = "cmd_get_inspection"
    inspection_id: str


class GetResponses(_Command):
    command: Literal["cmd_get_responses"] = "cmd_get_responses"
    inspection_id: str


class SaveResponse(_Command):
    command: Literal["cmd_save_response"] = "cmd_save_response"
    inspection_id: str
    criterion_id: int
    conforme: bool | None = None
    observation: str = ""
    actor: UserView | None = None


class UpdateInspectionMeta(_Command):
    command: Literal["cmd_update_inspection_meta"] = "cmd_update_inspection_meta"
    inspection_id: str
    req: CreateInspectionRequest
    actor: UserView | None = None


class SetInspectionStatus(_Command):
    command: Literal["cmd_set_inspection_status"] = "cmd_set_inspection_status"
    inspection_id: str
    status: InspectionStatus
    actor: UserView | None = None


class DeleteInspection(_Command):
    command: Literal["cmd_delete_inspection"] = "cmd_delete_inspection"
    inspection_id: str


# ── Audit ────────────────────────────────────────────────────────────


class QueryAudit(_Command):
    command: Literal["cmd_query_audit"] = "cmd_query_audit"
    filter: AuditFilter = Field(default_factory=AuditFilter)


class CountAudit(_Command):
    command: Literal["cmd_count_audit"] = "cmd_count_audit"
    filter: AuditFilter = Field(default_factory=AuditFilter)


Command = Annotated[
    Union[
        ListGrids,
        GetGrid,
        GetSections,
        Login,
        Logout,
        ValidateSession,
        ListUsers,
        CreateUser,
        UpdateUser,
        ChangePassword,
        DeleteUser,
        CreateInspection,
        ListInspections,
        GetInspection,
        GetResponses,
        SaveResponse,
        UpdateInspectionMeta,
        SetInspectionStatus,
        DeleteInspection,
        QueryAudit,
        CountAudit,
    ],
    Field(discriminator="command"),
]

COMMAND_NAMES: frozenset[str] = frozenset(
    variant.model_fields["command"].default for variant in get_args(get_args(Command)[0])
)

_command_adapter: TypeAdapter[Any] = TypeAdapter(Command)


def parse_command(name: str, args: dict[str, Any] | None = None) -> Any:
    """Build the typed command variant for ``name`` from an argument mapping.

    Raises:
        UnknownCommand: ``name`` is not part of the command surface.
        MissingField: a required argument is absent.
        ValidationError: an argument has the wrong type or value.
    """
    if name not in COMMAND_NAMES:
        raise UnknownCommand(name)

    payload = dict(args or {})
    payload["command"] = name
    try:
        return _command_adapter.validate_python(payload)
    except PydanticValidationError as exc:
        errors = exc.errors(include_url=False)
        for err in errors:
            if err["type"] == "missing":
                # loc is (variant tag, field, ...) for discriminated unions
                field = ".".join(str(part) for part in err["loc"][1:]) or name
                raise MissingField(field) from exc
        raise ValidationError(
            [f"{'.'.join(str(p) for p in e['loc'][1:])}: {e['msg']}" for e in errors],
        ) from exc
