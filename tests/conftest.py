"""
Name: Pytest Configuration and Shared Fixtures

Responsibilities:
  - Configure test environment (no .env, APP_ENV=test)
  - Build isolated apps backed by in-memory repositories
  - Provide helpers to register users and build auth headers

Collaborators:
  - pytest: Test framework
  - fastapi.testclient: in-process HTTP client
  - taskboard.api.main.create_app: app factory

Notes:
  - Every `client` fixture gets its own app and its own repositories
"""

import os
from typing import Callable

import pytest

from taskboard.crosscutting import config as app_config

app_config.Settings.model_config["env_file"] = None
os.environ.setdefault("APP_ENV", "test")

from fastapi.testclient import TestClient  # noqa: E402

from taskboard.api.main import create_app  # noqa: E402
from taskboard.crosscutting.config import Settings  # noqa: E402
from taskboard.identity.users import Principal, UserRole  # noqa: E402

TEST_SECRET = "test-secret-key-with-enough-length-000"


def pytest_configure(config) -> None:
    config.addinivalue_line(
        "markers", "unit: Unit tests (fast, no external dependencies)"
    )


@pytest.fixture
def settings() -> Settings:
    return Settings(
        secret_key=TEST_SECRET,
        jwt_ttl_hours=24,
        database_url="",
        app_env="test",
        log_json=True,
    )


@pytest.fixture
def app(settings: Settings):
    return create_app(settings)


@pytest.fixture
def client(app):
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def register_user(client: TestClient) -> Callable[..., dict]:
    """Registra un usuario vía API y devuelve el body (userId, role, token)."""

    def _register(username: str, password: str = "pw123", role: str = "user") -> dict:
        response = client.post(
            "/register",
            json={"username": username, "password": password, "role": role},
        )
        assert response.status_code == 201, response.text
        return response.json()

    return _register


@pytest.fixture
def alice() -> Principal:
    return Principal(user_id=1, username="alice", role=UserRole.USER)


@pytest.fixture
def bob() -> Principal:
    return Principal(user_id=2, username="bob", role=UserRole.USER)


@pytest.fixture
def admin() -> Principal:
    return Principal(user_id=99, username="root", role=UserRole.ADMIN)
