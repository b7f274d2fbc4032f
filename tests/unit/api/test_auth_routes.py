"""
Name: Register / Login Route Tests

Responsibilities:
  - Validate register -> login happy path (token decodes to same identity)
  - Ensure bad credentials are indistinguishable (401 "Invalid credentials")
  - Verify input validation (422) and duplicate usernames (409)
"""

import pytest

from taskboard.identity.auth_users import auth_settings_from, decode_access_token

pytestmark = pytest.mark.unit


def test_register_returns_identity_and_token(client, settings):
    response = client.post(
        "/register",
        json={"username": "alice", "password": "pw123", "role": "user"},
    )

    assert response.status_code == 201
    body = response.json()
    assert body["userId"] == 1
    assert body["username"] == "alice"
    assert body["role"] == "user"
    principal = decode_access_token(body["token"], auth_settings_from(settings))
    assert principal.user_id == 1
    assert principal.role.value == "user"


def test_register_defaults_role_to_user(client):
    response = client.post("/register", json={"username": "carol", "password": "pw"})

    assert response.status_code == 201
    assert response.json()["role"] == "user"


def test_register_then_login_yields_same_identity(client, register_user, settings):
    registered = register_user("alice", "pw123", "admin")

    response = client.post("/login", json={"username": "alice", "password": "pw123"})

    assert response.status_code == 200
    body = response.json()
    assert body["userId"] == registered["userId"]
    assert body["role"] == "admin"
    principal = decode_access_token(body["token"], auth_settings_from(settings))
    assert principal.user_id == registered["userId"]
    assert principal.username == "alice"


def test_login_wrong_password_and_unknown_user_are_identical(client, register_user):
    register_user("alice", "pw123")

    wrong_password = client.post(
        "/login", json={"username": "alice", "password": "nope"}
    )
    unknown_user = client.post(
        "/login", json={"username": "ghost", "password": "pw123"}
    )

    assert wrong_password.status_code == 401
    assert unknown_user.status_code == 401
    assert wrong_password.json() == {"error": "Invalid credentials"}
    assert unknown_user.json() == wrong_password.json()


def test_register_duplicate_username_conflicts(client, register_user):
    register_user("alice")

    response = client.post(
        "/register", json={"username": "alice", "password": "other"}
    )

    assert response.status_code == 409
    assert response.json() == {"error": "Username already exists"}


@pytest.mark.parametrize(
    "payload",
    [
        {"password": "pw"},
        {"username": "alice"},
        {"username": "", "password": "pw"},
        {"username": "alice", "password": "pw", "role": "superuser"},
    ],
)
def test_register_rejects_invalid_payload(client, payload):
    response = client.post("/register", json=payload)

    assert response.status_code == 422
    assert "error" in response.json()


def test_login_missing_fields_is_validation_error(client):
    response = client.post("/login", json={"username": "alice"})

    assert response.status_code == 422
    assert response.json()["error"].startswith("password")


@pytest.mark.parametrize(
    "payload",
    [
        {"username": "alice", "password": ""},
        {"username": "", "password": "pw123"},
    ],
)
def test_login_with_empty_credentials_is_unauthorized(client, register_user, payload):
    register_user("alice", "pw123")

    response = client.post("/login", json=payload)

    assert response.status_code == 401
    assert response.json() == {"error": "Invalid credentials"}


def test_password_is_never_echoed(client):
    response = client.post(
        "/register", json={"username": "alice", "password": "super-secret"}
    )

    assert "super-secret" not in response.text
    assert "password" not in response.json()
