"""Command dispatcher — the single entry point into the store.

Every command is a typed variant of ``officine.schemas.commands.Command``;
``execute`` matches it exhaustively and mutates or reads the Store it was
built with. ``dispatch`` accepts the wire shape (command name + argument
mapping) used by remote callers and the HTTP transport.

Usage:
    store = Store()
    dispatcher = Dispatcher(store)
    session = dispatcher.execute(Login(username="admin", password="admin123"))
    dispatcher.dispatch("cmd_list_inspections", {"myOnly": True, "actor": session.user})

Each command runs to completion before the next one starts; nothing here
suspends mid-mutation, so no locking is needed.
"""

from __future__ import annotations

import logging
from typing import Any, assert_never

from officine import lifecycle
from officine.audit import count_audit, query_audit
from officine.config import settings
from officine.errors import DuplicateUsername, InvalidCredentials, InvalidSession
from officine.grids import all_grids, find_grid, summarize
from officine.kpi import progress_from_responses
from officine.models.enums import AuditAction, EntityType, InspectionStatus, Role, status_action
from officine.schemas.commands import (
    ChangePassword,
    Command,
    CountAudit,
    CreateInspection,
    CreateUser,
    DeleteInspection,
    DeleteUser,
    GetGrid,
    GetInspection,
    GetResponses,
    GetSections,
    ListGrids,
    ListInspections,
    ListUsers,
    Login,
    Logout,
    QueryAudit,
    SaveResponse,
    SetInspectionStatus,
    UpdateInspectionMeta,
    UpdateUser,
    ValidateSession,
    parse_command,
)
from officine.schemas.inspections import Inspection, Progress, Response
from officine.schemas.users import SessionInfo, User, UserView
from officine.store import Store, new_id, now

logger = logging.getLogger(__name__)


def _actor_fields(actor: UserView | None) -> tuple[str | None, str | None]:
    """(id, username) of the acting user, or (None, None) without a session context."""
    if actor is None:
        return None, None
    return actor.id, actor.username


class Dispatcher:
    """Runs commands against one Store."""

    def __init__(self, store: Store, enforce_transitions: bool | None = None) -> None:
        self.store = store
        self._enforce_transitions = enforce_transitions

    @property
    def enforce_transitions(self) -> bool:
        if self._enforce_transitions is None:
            return settings.lifecycle.enforce_transitions
        return self._enforce_transitions

    def dispatch(self, name: str, args: dict[str, Any] | None = None) -> Any:
        """Parse ``name`` + ``args`` into a typed command and execute it.

        Raises:
            UnknownCommand: ``name`` is not a known command.
            MissingField / ValidationError: malformed arguments.
        """
        return self.execute(parse_command(name, args))

    def execute(self, command: Command) -> Any:
        self.store.seed()
        logger.debug("Executing %s", command.command)

        match command:
            # Grids
            case ListGrids():
                return [summarize(g) for g in all_grids()]
            case GetGrid(grid_id=grid_id):
                return find_grid(grid_id)
            case GetSections(grid_id=grid_id):
                grid = find_grid(grid_id)
                return list(grid.sections) if grid else []

            # Auth
            case Login():
                return self._login(command)
            case Logout(token=token):
                return self._logout(token)
            case ValidateSession(token=token):
                return self._validate_session(token)

            # Users
            case ListUsers():
                return [u.view() for u in self.store.users if u.active]
            case CreateUser():
                return self._create_user(command)
            case UpdateUser():
                return self._update_user(command)
            case ChangePassword():
                return self._change_password(command)
            case DeleteUser():
                return self._delete_user(command)

            # Inspections
            case CreateInspection():
                return self._create_inspection(command)
            case ListInspections():
                return self._list_inspections(command)
            case GetInspection(inspection_id=inspection_id):
                insp = self.store.find_inspection(inspection_id)
                return insp.model_copy(deep=True) if insp else None
            case GetResponses(inspection_id=inspection_id):
                responses = self.store.responses.get(inspection_id, {})
                return [r.model_copy() for _, r in sorted(responses.items())]
            case SaveResponse():
                return self._save_response(command)
            case UpdateInspectionMeta():
                return self._update_inspection_meta(command)
            case SetInspectionStatus():
                return self._set_status(command)
            case DeleteInspection(inspection_id=inspection_id):
                return self._delete_inspection(inspection_id)

            # Audit
            case QueryAudit(filter=audit_filter):
                return query_audit(self.store.audit, audit_filter)
            case CountAudit(filter=audit_filter):
                return count_audit(self.store.audit, audit_filter)

            case _:
                assert_never(command)

    # ── Auth ─────────────────────────────────────────────────────────

    def _login(self, cmd: Login) -> SessionInfo:
        user = next(
            (
                u for u in self.store.users
                if u.username == cmd.username and u.password == cmd.password and u.active
            ),
            None,
        )
        if user is None:
            logger.info("Rejected login for '%s'", cmd.username)
            raise InvalidCredentials()

        token = new_id()
        self.store.sessions[token] = user.id
        self.store.add_audit_log(user.id, user.username, AuditAction.LOGIN.value, EntityType.SESSION.value, token, "")
        logger.info("User '%s' logged in", user.username)
        return SessionInfo(token=token, user=user.view())

    def _logout(self, token: str) -> None:
        user_id = self.store.sessions.pop(token, None)
        if user_id is None:
            return None
        user = self.store.find_user(user_id)
        if user is not None:
            self.store.add_audit_log(
                user.id, user.username, AuditAction.LOGOUT.value, EntityType.SESSION.value, token, "",
            )
        return None

    def _validate_session(self, token: str) -> UserView:
        user_id = self.store.sessions.get(token)
        if user_id is None:
            raise InvalidSession()
        user = self.store.find_user(user_id)
        if user is None or not user.active:
            raise InvalidSession()
        return user.view()

    # ── Users ────────────────────────────────────────────────────────

    def _create_user(self, cmd: CreateUser) -> UserView:
        req = cmd.req
        if self.store.find_user_by_username(req.username) is not None:
            raise DuplicateUsername()

        ts = now()
        user = User(
            id=new_id(),
            username=req.username,
            full_name=req.full_name,
            role=req.role,
            password=req.password,
            active=True,
            created_at=ts,
            updated_at=ts,
        )
        self.store.users.append(user)
        actor_id, actor_name = _actor_fields(cmd.actor)
        self.store.add_audit_log(
            actor_id, actor_name, AuditAction.CREATE_USER.value, EntityType.USER.value, user.id,
            f"{user.username} ({user.role})",
        )
        return user.view()

    def _update_user(self, cmd: UpdateUser) -> None:
        user = self.store.find_user(cmd.user_id)
        if user is None:
            return None

        # Blank name or role means "unchanged"; active is applied whenever given
        changes = {
            field: value for field, value in cmd.req.model_dump(exclude_none=True).items()
            if value or field == "active"
        }
        for field, value in changes.items():
            setattr(user, field, value)
        user.updated_at = now()
        if changes.get("active") is False:
            self.store.drop_sessions_of(user.id)

        actor_id, actor_name = _actor_fields(cmd.actor)
        self.store.add_audit_log(
            actor_id, actor_name, AuditAction.UPDATE_USER.value, EntityType.USER.value, user.id,
            ", ".join(sorted(changes)),
        )
        return None

    def _change_password(self, cmd: ChangePassword) -> None:
        user = self.store.find_user(cmd.user_id)
        if user is None:
            return None
        user.password = cmd.new_password
        user.updated_at = now()
        actor_id, actor_name = _actor_fields(cmd.actor)
        self.store.add_audit_log(
            actor_id, actor_name, AuditAction.CHANGE_PASSWORD.value, EntityType.USER.value, user.id, "",
        )
        return None

    def _delete_user(self, cmd: DeleteUser) -> None:
        user = self.store.find_user(cmd.user_id)
        if user is None:
            return None
        # Soft delete: the record stays, sessions go
        user.active = False
        user.updated_at = now()
        dropped = self.store.drop_sessions_of(user.id)
        actor_id, actor_name = _actor_fields(cmd.actor)
        self.store.add_audit_log(
            actor_id, actor_name, AuditAction.DEACTIVATE_USER.value, EntityType.USER.value, user.id, "",
        )
        logger.info("Deactivated user '%s' (%d session(s) dropped)", user.username, dropped)
        return None

    # ── Inspections ──────────────────────────────────────────────────

    def _create_inspection(self, cmd: CreateInspection) -> str:
        req = cmd.req
        ts = now()
        inspection = Inspection(
            id=new_id(),
            grid_id=req.grid_id,
            status=InspectionStatus.DRAFT,
            date_inspection=req.date_inspection,
            establishment=req.establishment,
            inspection_type=req.inspection_type,
            inspectors=list(req.inspectors),
            created_by=cmd.actor.id if cmd.actor else None,
            created_by_name=cmd.actor.full_name if cmd.actor else None,
            created_at=ts,
            updated_at=ts,
            progress=Progress(),
        )
        self.store.inspections.append(inspection)
        self.store.responses[inspection.id] = {}

        actor_id, actor_name = _actor_fields(cmd.actor)
        self.store.add_audit_log(
            actor_id, actor_name, AuditAction.CREATE_INSPECTION.value,
            EntityType.INSPECTION.value, inspection.id, req.establishment,
        )
        logger.info("Created inspection %s (%s, grid=%s)", inspection.id, req.establishment, req.grid_id)
        return inspection.id

    def _list_inspections(self, cmd: ListInspections) -> list[Inspection]:
        actor_id = cmd.actor.id if cmd.actor else None
        # Inspectors only ever see their own inspections
        own_only = cmd.my_only or (cmd.actor is not None and cmd.actor.role == Role.INSPECTOR.value)
        selected = [
            i for i in self.store.inspections
            if not (own_only and (actor_id is None or i.created_by != actor_id))
            and not (cmd.status and i.status != cmd.status)
        ]
        selected.sort(key=lambda i: i.updated_at, reverse=True)
        return [i.model_copy(deep=True) for i in selected]

    def _save_response(self, cmd: SaveResponse) -> None:
        responses = self.store.responses.setdefault(cmd.inspection_id, {})
        responses[cmd.criterion_id] = Response(
            criterion_id=cmd.criterion_id,
            conforme=cmd.conforme,
            observation=cmd.observation,
            updated_by=cmd.actor.id if cmd.actor else None,
            updated_at=now(),
        )

        insp = self.store.find_inspection(cmd.inspection_id)
        if insp is not None:
            if insp.status == InspectionStatus.DRAFT.value:
                insp.status = InspectionStatus.IN_PROGRESS.value
            insp.updated_at = now()
            insp.progress = progress_from_responses(responses.values())

        actor_id, actor_name = _actor_fields(cmd.actor)
        answer = "null" if cmd.conforme is None else str(cmd.conforme).lower()
        self.store.add_audit_log(
            actor_id, actor_name, AuditAction.SAVE_RESPONSE.value, EntityType.RESPONSE.value,
            f"{cmd.inspection_id}:{cmd.criterion_id}",
            f"conforme={answer}, observation={'oui' if cmd.observation else 'non'}",
        )
        return None

    def _update_inspection_meta(self, cmd: UpdateInspectionMeta) -> None:
        insp = self.store.find_inspection(cmd.inspection_id)
        if insp is None:
            return None
        req = cmd.req
        insp.grid_id = req.grid_id
        insp.date_inspection = req.date_inspection
        insp.establishment = req.establishment
        insp.inspection_type = req.inspection_type
        insp.inspectors = list(req.inspectors)
        insp.updated_at = now()

        actor_id, actor_name = _actor_fields(cmd.actor)
        self.store.add_audit_log(
            actor_id, actor_name, AuditAction.UPDATE_META.value, EntityType.INSPECTION.value, insp.id, "",
        )
        return None

    def _set_status(self, cmd: SetInspectionStatus) -> None:
        insp = self.store.find_inspection(cmd.inspection_id)
        if insp is not None:
            if self.enforce_transitions:
                lifecycle.check_transition(insp.status, cmd.status)
            old_status = insp.status
            insp.status = cmd.status
            insp.updated_at = now()
            if cmd.status == InspectionStatus.VALIDATED.value:
                insp.validated_by = cmd.actor.id if cmd.actor else None
                insp.validated_by_name = cmd.actor.full_name if cmd.actor else None
                insp.validated_at = now()
            logger.info("Inspection %s status: %s -> %s", insp.id, old_status, cmd.status)

        actor_id, actor_name = _actor_fields(cmd.actor)
        self.store.add_audit_log(
            actor_id, actor_name, status_action(cmd.status), EntityType.INSPECTION.value, cmd.inspection_id, "",
        )
        return None

    def _delete_inspection(self, inspection_id: str) -> None:
        # Hard delete; auditing it is the caller's business
        self.store.inspections = [i for i in self.store.inspections if i.id != inspection_id]
        self.store.responses.pop(inspection_id, None)
        logger.info("Deleted inspection %s", inspection_id)
        return None
