"""In-memory store — the fallback backend behind the command dispatcher.

Holds users, inspections, per-inspection responses, the audit trail and the
active sessions. A store is an explicit object: construct it empty, seed it,
serve commands through a Dispatcher, then discard it. Tests build one per
case, so no state is shared between them.

Deletion policies differ: users are soft-deleted (``active`` is
cleared, the record stays so audit entries keep resolving) while
inspections are hard-deleted together with their responses.
"""

from __future__ import annotations

import logging
import uuid
from datetime import datetime

from officine.config import settings
from officine.models.enums import Role
from officine.schemas.audit import AuditLogEntry
from officine.schemas.inspections import Inspection, Response
from officine.schemas.users import User

logger = logging.getLogger(__name__)

TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"


def now() -> str:
    """Current local time as ``YYYY-MM-DD HH:MM:SS``.

    Fixed width and zero padded, so string order is chronological order.
    """
    return datetime.now().strftime(TIMESTAMP_FORMAT)


def new_id() -> str:
    return str(uuid.uuid4())


class Store:
    """Process-local collections of every entity the core manages."""

    def __init__(self) -> None:
        self.users: list[User] = []
        self.inspections: list[Inspection] = []
        self.responses: dict[str, dict[int, Response]] = {}
        self.audit: list[AuditLogEntry] = []
        self.sessions: dict[str, str] = {}
        self._audit_seq = 0

    # ── Lifecycle ────────────────────────────────────────────────────

    def seed(self) -> None:
        """Create the bootstrap administrator when the store has no users.

        Idempotent: once any user exists this is a no-op.
        """
        if self.users:
            return
        ts = now()
        admin = User(
            id=new_id(),
            username=settings.store.seed_username,
            full_name=settings.store.seed_full_name,
            role=Role.ADMIN,
            active=True,
            password=settings.store.seed_password,
            created_at=ts,
            updated_at=ts,
        )
        self.users.append(admin)
        logger.info("Seeded bootstrap administrator '%s'", admin.username)

    def reset(self) -> None:
        """Drop every collection, back to a freshly constructed store."""
        self.users.clear()
        self.inspections.clear()
        self.responses.clear()
        self.audit.clear()
        self.sessions.clear()
        self._audit_seq = 0
        logger.debug("Store reset")

    # ── Audit ────────────────────────────────────────────────────────

    def add_audit_log(
        self,
        user_id: str | None,
        username: str | None,
        action: str,
        entity_type: str | None,
        entity_id: str | None,
        details: str | None = "",
    ) -> AuditLogEntry:
        """Prepend an audit entry. Sequence ids only ever grow."""
        self._audit_seq += 1
        entry = AuditLogEntry(
            id=self._audit_seq,
            timestamp=now(),
            user_id=user_id,
            username=username,
            action=action,
            entity_type=entity_type,
            entity_id=entity_id,
            details=details,
        )
        self.audit.insert(0, entry)
        logger.debug("Audit %s on %s %s (user=%s)", action, entity_type, entity_id, username)
        return entry

    # ── Lookups ──────────────────────────────────────────────────────

    def find_user(self, user_id: str) -> User | None:
        return next((u for u in self.users if u.id == user_id), None)

    def find_user_by_username(self, username: str) -> User | None:
        return next((u for u in self.users if u.username == username), None)

    def find_inspection(self, inspection_id: str) -> Inspection | None:
        return next((i for i in self.inspections if i.id == inspection_id), None)

    def drop_sessions_of(self, user_id: str) -> int:
        """Remove every session bound to ``user_id``. Returns how many were removed."""
        tokens = [tok for tok, uid in self.sessions.items() if uid == user_id]
        for tok in tokens:
            del self.sessions[tok]
        return len(tokens)
