"""
Name: Settings Tests

Responsibilities:
  - Defaults (port 3000, 24h tokens, in-memory storage)
  - Validation of numeric ranges
  - Production guardrails (strong secret, DATABASE_URL required)
"""

import pytest
from pydantic import ValidationError

from taskboard.crosscutting.config import Settings

pytestmark = pytest.mark.unit


def test_defaults(monkeypatch):
    for var in ("SECRET_KEY", "DATABASE_URL", "PORT", "JWT_TTL_HOURS"):
        monkeypatch.delenv(var, raising=False)

    settings = Settings(app_env="development")

    assert settings.port == 3000
    assert settings.jwt_ttl_hours == 24
    assert settings.uses_database() is False
    assert settings.is_production() is False


def test_reads_environment(monkeypatch):
    monkeypatch.setenv("PORT", "8080")
    monkeypatch.setenv("DATABASE_URL", "postgresql://u:p@db/tasks")

    settings = Settings(app_env="development")

    assert settings.port == 8080
    assert settings.uses_database() is True


@pytest.mark.parametrize(
    "overrides",
    [
        {"jwt_ttl_hours": 0},
        {"port": 70000},
        {"db_pool_min_size": 5, "db_pool_max_size": 2},
    ],
)
def test_invalid_values_rejected(overrides):
    with pytest.raises(ValidationError):
        Settings(app_env="development", **overrides)


def test_production_rejects_default_secret():
    with pytest.raises(ValidationError):
        Settings(
            app_env="production",
            secret_key="dev-secret",
            database_url="postgresql://db/tasks",
        )


def test_production_rejects_short_secret():
    with pytest.raises(ValidationError):
        Settings(
            app_env="production",
            secret_key="short-but-custom",
            database_url="postgresql://db/tasks",
        )


def test_production_requires_database_url():
    with pytest.raises(ValidationError):
        Settings(app_env="production", secret_key="s" * 40, database_url="")


def test_production_ok():
    settings = Settings(
        app_env="production", secret_key="s" * 40, database_url="postgresql://db/t"
    )

    assert settings.is_production() is True
