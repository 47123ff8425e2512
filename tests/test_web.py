"""Tests for the HTTP transport.

Covers:
- Health endpoint
- Command invocation with JSON arguments
- DomainError to HTTP status mapping
- Session header as the only source of the acting user
- Per-command role checks (401 without session, 403 for the wrong role)
"""

from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from officine.main import create_app
from officine.store import Store

_INSPECTION = {
    "grid_id": "officine",
    "date_inspection": "2024-01-15",
    "establishment": "Pharmacie du Centre",
    "inspection_type": "initiale",
    "inspectors": ["Awa Diallo"],
}


@pytest.fixture()
def client():
    with TestClient(create_app(Store())) as c:
        yield c


def _login(client: TestClient, username: str = "admin", password: str = "admin123") -> dict[str, str]:
    resp = client.post("/api/invoke/cmd_login", json={"username": username, "password": password})
    assert resp.status_code == 200
    return {"X-Session-Token": resp.json()["result"]["token"]}


def _user(client: TestClient, admin: dict[str, str], username: str, role: str) -> dict[str, str]:
    """Create a user as admin and return a session header for it."""
    payload = {"req": {"username": username, "full_name": f"Nom {username}", "role": role, "password": "secret1"}}
    resp = client.post("/api/invoke/cmd_create_user", json=payload, headers=admin)
    assert resp.status_code == 200
    return _login(client, username, "secret1")


def _create_inspection(client: TestClient, headers: dict[str, str]) -> str:
    resp = client.post("/api/invoke/cmd_create_inspection", json={"req": _INSPECTION}, headers=headers)
    assert resp.status_code == 200
    return resp.json()["result"]


class TestHealth:
    def test_health(self, client: TestClient) -> None:
        resp = client.get("/api/health")
        assert resp.status_code == 200
        assert resp.json() == {"status": "ok"}


class TestInvoke:
    def test_login(self, client: TestClient) -> None:
        resp = client.post("/api/invoke/cmd_login", json={"username": "admin", "password": "admin123"})
        body = resp.json()["result"]
        assert body["user"]["username"] == "admin"
        assert "password" not in body["user"]

    def test_grids_are_public(self, client: TestClient) -> None:
        resp = client.post("/api/invoke/list_grids")
        assert resp.status_code == 200
        assert [g["id"] for g in resp.json()["result"]] == ["officine", "grossiste"]

    def test_null_result(self, client: TestClient) -> None:
        resp = client.post("/api/invoke/cmd_get_inspection", json={"inspectionId": "missing"}, headers=_login(client))
        assert resp.status_code == 200
        assert resp.json() == {"result": None}

    def test_session_header_sets_actor(self, client: TestClient) -> None:
        headers = _login(client)
        inspection_id = _create_inspection(client, headers)

        resp = client.post("/api/invoke/cmd_list_inspections", json={"myOnly": True}, headers=headers)
        listed = resp.json()["result"]
        assert [i["id"] for i in listed] == [inspection_id]
        assert listed[0]["created_by_name"] == "Administrateur"

    def test_body_actor_is_ignored(self, client: TestClient) -> None:
        headers = _login(client)
        inspection_id = _create_inspection(client, headers)
        forged = {
            "id": "ghost-id", "username": "ghost", "full_name": "Ghost", "role": "admin",
            "created_at": "2024-01-01 00:00:00", "updated_at": "2024-01-01 00:00:00",
        }
        resp = client.post(
            "/api/invoke/cmd_set_inspection_status",
            json={"inspectionId": inspection_id, "status": "validated", "actor": forged},
            headers=headers,
        )
        assert resp.status_code == 200

        resp = client.post("/api/invoke/cmd_query_audit", json={"filter": {"limit": 1}}, headers=headers)
        [entry] = resp.json()["result"]
        assert entry["action"] == "SET_STATUS_VALIDATED"
        assert entry["username"] == "admin"

    def test_inspector_sees_only_own_inspections(self, client: TestClient) -> None:
        admin = _login(client)
        inspector = _user(client, admin, "inspecteur1", "inspector")
        lead = _user(client, admin, "chef1", "lead_inspector")
        _create_inspection(client, admin)
        own = _create_inspection(client, inspector)

        resp = client.post("/api/invoke/cmd_list_inspections", json={"myOnly": False}, headers=inspector)
        assert [i["id"] for i in resp.json()["result"]] == [own]

        resp = client.post("/api/invoke/cmd_list_inspections", json={}, headers=lead)
        assert len(resp.json()["result"]) == 2


class TestAuthorization:
    @pytest.mark.parametrize(
        ("command", "payload"),
        [
            ("cmd_create_user", {"req": {"username": "x1", "full_name": "X", "role": "admin", "password": "secret1"}}),
            ("cmd_list_users", {}),
            ("cmd_create_inspection", {"req": _INSPECTION}),
            ("cmd_set_inspection_status", {"inspectionId": "x", "status": "validated"}),
            ("cmd_query_audit", {}),
        ],
    )
    def test_session_required(self, client: TestClient, command: str, payload: dict) -> None:
        resp = client.post(f"/api/invoke/{command}", json=payload)
        assert resp.status_code == 401
        assert resp.json()["error"] == "invalid_session"

    def test_anonymous_cannot_create_admin(self, client: TestClient) -> None:
        payload = {"req": {"username": "intrus", "full_name": "Intrus", "role": "admin", "password": "secret1"}}
        client.post("/api/invoke/cmd_create_user", json=payload)
        resp = client.post("/api/invoke/cmd_login", json={"username": "intrus", "password": "secret1"})
        assert resp.status_code == 401

    @pytest.mark.parametrize(
        ("role", "command", "payload"),
        [
            ("inspector", "cmd_list_users", {}),
            ("lead_inspector", "cmd_delete_user", {"userId": "x"}),
            ("lead_inspector", "cmd_change_password", {"userId": "x", "newPassword": "secret2"}),
            ("inspector", "cmd_delete_inspection", {"inspectionId": "x"}),
            ("inspector", "cmd_set_inspection_status", {"inspectionId": "x", "status": "validated"}),
            ("viewer", "cmd_count_audit", {}),
        ],
    )
    def test_role_required(self, client: TestClient, role: str, command: str, payload: dict) -> None:
        headers = _user(client, _login(client), "u1", role)
        resp = client.post(f"/api/invoke/{command}", json=payload, headers=headers)
        assert resp.status_code == 403
        assert resp.json()["error"] == "permission_denied"

    def test_inspector_may_complete(self, client: TestClient) -> None:
        inspector = _user(client, _login(client), "u1", "inspector")
        inspection_id = _create_inspection(client, inspector)
        resp = client.post(
            "/api/invoke/cmd_set_inspection_status",
            json={"inspectionId": inspection_id, "status": "completed"},
            headers=inspector,
        )
        assert resp.status_code == 200

    def test_lead_may_validate(self, client: TestClient) -> None:
        lead = _user(client, _login(client), "chef1", "lead_inspector")
        inspection_id = _create_inspection(client, lead)
        resp = client.post(
            "/api/invoke/cmd_set_inspection_status",
            json={"inspectionId": inspection_id, "status": "validated"},
            headers=lead,
        )
        assert resp.status_code == 200

    def test_bad_session_header(self, client: TestClient) -> None:
        resp = client.post("/api/invoke/cmd_list_users", headers={"X-Session-Token": "bogus"})
        assert resp.status_code == 401


class TestErrors:
    @pytest.mark.parametrize(
        ("command", "payload", "status", "kind"),
        [
            ("cmd_nope", {}, 404, "unknown_command"),
            ("cmd_login", {"username": "admin"}, 422, "missing_field"),
            ("cmd_login", {"username": "admin", "password": "bad"}, 401, "invalid_credentials"),
            ("cmd_validate_session", {"token": "bogus"}, 401, "invalid_session"),
        ],
    )
    def test_mapping(self, client: TestClient, command: str, payload: dict, status: int, kind: str) -> None:
        resp = client.post(f"/api/invoke/{command}", json=payload)
        assert resp.status_code == status
        assert resp.json()["error"] == kind
        assert resp.json()["detail"]

    def test_validation_error(self, client: TestClient) -> None:
        resp = client.post(
            "/api/invoke/cmd_set_inspection_status",
            json={"inspectionId": "x", "status": "lost"},
            headers=_login(client),
        )
        assert resp.status_code == 422
        assert resp.json()["error"] == "validation_error"

    def test_duplicate_username(self, client: TestClient) -> None:
        admin = _login(client)
        payload = {"req": {"username": "awa", "full_name": "Awa Diallo", "role": "inspector", "password": "secret1"}}
        assert client.post("/api/invoke/cmd_create_user", json=payload, headers=admin).status_code == 200
        resp = client.post("/api/invoke/cmd_create_user", json=payload, headers=admin)
        assert resp.status_code == 409
        assert resp.json()["error"] == "duplicate_username"
