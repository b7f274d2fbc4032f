"""
Name: Task Route Tests

Responsibilities:
  - End-to-end CRUD flow over the HTTP surface
  - Owner scoping (foreign task behaves exactly like a missing one)
  - Auth Gate / Role Gate responses (401 / 403)
  - Storage failures surface as 500 "Internal Server Error"
"""

from datetime import datetime, timedelta, timezone
from unittest.mock import Mock

import pytest
from fastapi.testclient import TestClient

from taskboard.crosscutting.exceptions import DatabaseError
from taskboard.identity.auth_users import AuthSettings, create_access_token
from taskboard.identity.users import Principal, UserRole

pytestmark = pytest.mark.unit


def _h(token: str) -> dict:
    return {"Authorization": token}


# =============================================================================
# CRUD
# =============================================================================


def test_end_to_end_task_lifecycle(client, register_user):
    alice = register_user("alice", "pw123", "user")
    bob = register_user("bob", "pw456", "user")
    t1, t2 = alice["token"], bob["token"]

    created = client.post("/tasks", json={"title": "buy milk"}, headers=_h(t1))
    assert created.status_code == 201
    assert created.json() == {
        "taskId": 1,
        "title": "buy milk",
        "description": None,
        "userId": alice["userId"],
    }

    fetched = client.get("/tasks/1", headers=_h(t1))
    assert fetched.status_code == 200
    assert fetched.json() == {
        "id": 1,
        "title": "buy milk",
        "description": None,
        "userId": alice["userId"],
    }

    foreign = client.get("/tasks/1", headers=_h(t2))
    assert foreign.status_code == 404
    assert foreign.json() == {"error": "Task not found"}

    updated = client.put("/tasks/1", json={"title": "buy bread"}, headers=_h(t1))
    assert updated.status_code == 200
    assert updated.json()["taskId"] == 1
    assert updated.json()["title"] == "buy bread"

    deleted = client.delete("/tasks/1", headers=_h(t1))
    assert deleted.status_code == 200
    assert deleted.json() == {"message": "Task deleted successfully"}

    gone = client.get("/tasks/1", headers=_h(t1))
    assert gone.status_code == 404


def test_create_without_body_stores_nulls(client, register_user):
    token = register_user("alice")["token"]

    response = client.post("/tasks", headers=_h(token))

    assert response.status_code == 201
    assert response.json()["title"] is None
    assert response.json()["description"] is None


def test_non_string_fields_are_stored_as_text(client, register_user):
    token = register_user("alice")["token"]

    created = client.post(
        "/tasks", json={"title": 5, "description": True}, headers=_h(token)
    )
    assert created.status_code == 201
    assert created.json()["title"] == "5"
    assert created.json()["description"] == "true"

    updated = client.put(
        "/tasks/1", json={"title": 7.5, "description": ["a", 1]}, headers=_h(token)
    )
    assert updated.status_code == 200
    assert updated.json()["title"] == "7.5"
    assert updated.json()["description"] == '["a", 1]'

    fetched = client.get("/tasks/1", headers=_h(token))
    assert fetched.json()["title"] == "7.5"


def test_malformed_json_body_is_validation_error(client, register_user):
    token = register_user("alice")["token"]

    response = client.post(
        "/tasks",
        content=b'{"title": ',
        headers={**_h(token), "Content-Type": "application/json"},
    )

    assert response.status_code == 422
    assert response.json() == {"error": "Invalid JSON body"}


def test_list_returns_only_own_tasks_in_id_order(client, register_user):
    alice = register_user("alice")["token"]
    bob = register_user("bob")["token"]
    client.post("/tasks", json={"title": "a1"}, headers=_h(alice))
    client.post("/tasks", json={"title": "b1"}, headers=_h(bob))
    client.post("/tasks", json={"title": "a2"}, headers=_h(alice))

    response = client.get("/tasks", headers=_h(alice))

    assert response.status_code == 200
    assert [t["title"] for t in response.json()] == ["a1", "a2"]
    assert [t["id"] for t in response.json()] == [1, 3]


def test_list_empty_for_new_user(client, register_user):
    token = register_user("alice")["token"]

    response = client.get("/tasks", headers=_h(token))

    assert response.status_code == 200
    assert response.json() == []


def test_foreign_update_and_delete_look_like_missing(client, register_user):
    alice = register_user("alice")["token"]
    bob = register_user("bob")["token"]
    client.post("/tasks", json={"title": "mine"}, headers=_h(alice))

    update = client.put("/tasks/1", json={"title": "hijack"}, headers=_h(bob))
    delete = client.delete("/tasks/1", headers=_h(bob))

    assert update.status_code == 404
    assert delete.status_code == 404
    assert client.get("/tasks/1", headers=_h(alice)).json()["title"] == "mine"


def test_delete_twice_is_not_found_after_first(client, register_user):
    token = register_user("alice")["token"]
    client.post("/tasks", json={"title": "x"}, headers=_h(token))

    assert client.delete("/tasks/1", headers=_h(token)).status_code == 200
    second = client.delete("/tasks/1", headers=_h(token))

    assert second.status_code == 404
    assert second.json() == {"error": "Task not found"}


def test_update_nonexistent_task_is_not_found(client, register_user):
    token = register_user("alice")["token"]

    response = client.put("/tasks/42", json={"title": "x"}, headers=_h(token))

    assert response.status_code == 404
    assert client.get("/tasks", headers=_h(token)).json() == []


def test_update_replaces_both_fields(client, register_user):
    token = register_user("alice")["token"]
    client.post(
        "/tasks", json={"title": "t", "description": "d"}, headers=_h(token)
    )

    response = client.put("/tasks/1", json={"title": "t2"}, headers=_h(token))

    assert response.json()["description"] is None
    assert client.get("/tasks/1", headers=_h(token)).json()["description"] is None


def test_non_integer_task_id_is_validation_error(client, register_user):
    token = register_user("alice")["token"]

    response = client.get("/tasks/abc", headers=_h(token))

    assert response.status_code == 422


# =============================================================================
# Admin listing
# =============================================================================


def test_list_all_requires_admin_role(client, register_user):
    user = register_user("alice", role="user")["token"]

    response = client.get("/tasks/all", headers=_h(user))

    assert response.status_code == 403
    assert response.json() == {"error": "Unauthorized"}


def test_list_all_returns_every_task_for_admin(client, register_user):
    alice = register_user("alice")["token"]
    bob = register_user("bob")["token"]
    root = register_user("root", role="admin")["token"]
    client.post("/tasks", json={"title": "a"}, headers=_h(alice))
    client.post("/tasks", json={"title": "b"}, headers=_h(bob))

    response = client.get("/tasks/all", headers=_h(root))

    assert response.status_code == 200
    assert [t["title"] for t in response.json()] == ["a", "b"]


def test_list_all_without_token_is_unauthenticated(client):
    response = client.get("/tasks/all")

    assert response.status_code == 401


# =============================================================================
# Auth Gate
# =============================================================================


def test_missing_token_is_rejected(client):
    response = client.get("/tasks")

    assert response.status_code == 401
    assert response.json() == {"error": "Access denied. No token provided."}


def test_tampered_token_is_rejected(client, register_user):
    token = register_user("alice")["token"]

    response = client.get("/tasks", headers=_h(token + "x"))

    assert response.status_code == 401
    assert response.json() == {"error": "Access denied. Invalid token."}


def test_token_signed_with_other_secret_is_rejected(client):
    foreign = AuthSettings(secret_key="another-secret-value-0123456789abcdef", jwt_ttl_hours=1)
    token = create_access_token(
        Principal(user_id=1, username="alice", role=UserRole.ADMIN), foreign
    )

    response = client.get("/tasks/all", headers=_h(token))

    assert response.status_code == 401
    assert response.json() == {"error": "Access denied. Invalid token."}


def test_expired_token_is_rejected(client, settings):
    auth = AuthSettings(secret_key=settings.secret_key, jwt_ttl_hours=24)
    issued = datetime.now(timezone.utc) - timedelta(hours=25)
    token = create_access_token(
        Principal(user_id=1, username="alice", role=UserRole.USER), auth, now=issued
    )

    response = client.get("/tasks", headers=_h(token))

    assert response.status_code == 401
    assert response.json() == {"error": "Access denied. Invalid token."}


def test_bearer_prefix_is_accepted(client, register_user):
    token = register_user("alice")["token"]

    response = client.get("/tasks", headers={"Authorization": f"Bearer {token}"})

    assert response.status_code == 200


@pytest.mark.parametrize("header", ["Bearer", "Bearer ", "  "])
def test_header_without_usable_token_is_invalid_token(client, header):
    response = client.get("/tasks", headers={"Authorization": header})

    assert response.status_code == 401
    assert response.json() == {"error": "Access denied. Invalid token."}


# =============================================================================
# Failures / plumbing
# =============================================================================


def test_storage_failure_is_internal_error(app, client, register_user):
    token = register_user("alice")["token"]
    repo = Mock()
    repo.list_tasks_by_owner.side_effect = DatabaseError("connection refused")
    app.state.container.task_repository = repo

    response = client.get("/tasks", headers=_h(token))

    assert response.status_code == 500
    assert response.json() == {"error": "Internal Server Error"}
    assert "connection refused" not in response.text


def test_unexpected_exception_is_generic_internal_error(app):
    repo = Mock()
    repo.create_task.side_effect = RuntimeError("boom")
    with TestClient(app, raise_server_exceptions=False) as client:
        token = client.post(
            "/register", json={"username": "alice", "password": "pw"}
        ).json()["token"]
        app.state.container.task_repository = repo

        response = client.post(
            "/tasks",
            json={"title": "x"},
            headers={**_h(token), "X-Request-Id": "req-boom"},
        )

    assert response.status_code == 500
    assert response.json() == {"error": "Internal Server Error"}
    assert response.headers["X-Request-Id"] == "req-boom"


def test_healthz_reports_storage_status(client):
    response = client.get("/healthz", headers={"X-Request-Id": "req-123"})

    assert response.status_code == 200
    assert response.json() == {"ok": True, "db": "connected", "request_id": "req-123"}
    assert response.headers["X-Request-Id"] == "req-123"


def test_healthz_reports_disconnected_storage(app, client):
    repo = Mock()
    repo.ping.return_value = False
    app.state.container.task_repository = repo

    response = client.get("/healthz")

    assert response.json()["ok"] is False
    assert response.json()["db"] == "disconnected"


def test_unknown_route_uses_error_shape(client):
    response = client.get("/nope")

    assert response.status_code == 404
    assert response.json() == {"error": "Not Found"}
