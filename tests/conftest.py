"""Shared fixtures: every test gets its own Store, never a shared one."""

from __future__ import annotations

import itertools

import pytest

from officine.dispatcher import Dispatcher
from officine.schemas.commands import CreateUser, Login
from officine.schemas.inspections import CreateInspectionRequest
from officine.schemas.users import CreateUserRequest, SessionInfo
from officine.store import Store


@pytest.fixture()
def store() -> Store:
    s = Store()
    s.seed()
    return s


@pytest.fixture()
def dispatcher(store: Store) -> Dispatcher:
    return Dispatcher(store, enforce_transitions=False)


@pytest.fixture()
def admin_session(dispatcher: Dispatcher) -> SessionInfo:
    return dispatcher.execute(Login(username="admin", password="admin123"))


@pytest.fixture()
def make_user(dispatcher: Dispatcher):
    """Factory creating a user and returning an open session for it."""
    def _make(username: str = "inspecteur1", role: str = "inspector", password: str = "secret1") -> SessionInfo:
        dispatcher.execute(CreateUser(req=CreateUserRequest(
            username=username,
            full_name=f"Nom {username}",
            role=role,
            password=password,
        )))
        return dispatcher.execute(Login(username=username, password=password))
    return _make


@pytest.fixture()
def inspection_request() -> CreateInspectionRequest:
    return CreateInspectionRequest(
        grid_id="officine",
        date_inspection="2024-01-15",
        establishment="Pharmacie du Centre",
        inspection_type="initiale",
        inspectors=["Awa Diallo", "Koffi Mensah"],
    )


@pytest.fixture()
def clock(monkeypatch):
    """Make dispatcher timestamps strictly increasing, one second per call."""
    ticks = itertools.count()

    def _now() -> str:
        n = next(ticks)
        return f"2024-01-15 10:{n // 60:02d}:{n % 60:02d}"

    monkeypatch.setattr("officine.dispatcher.now", _now)
    return _now
