"""
Name: Application Configuration (Settings)

Responsibilities:
  - Centralized, typed configuration using pydantic-settings
  - Validate environment variables at startup
  - Provide defaults that match the service's historical behavior
    (port 3000, 24h tokens, SECRET_KEY env var)

Collaborators:
  - api/main.py: create_app(settings) receives an explicit Settings instance
  - container.py: decides Postgres vs in-memory repositories
  - identity/auth_users.py: signing secret and token TTL

Constraints:
  - No business logic, pure configuration
  - The signing secret is read-only after startup

Notes:
  - Singleton via lru_cache for the default app; tests build their own
    Settings and pass them to create_app()
"""

from functools import lru_cache

from pydantic import field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

_INSECURE_SECRETS = {"dev-secret", "changeme", "change-me", "secret", "password"}


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    Attributes:
        secret_key: Secret for signing JWT access tokens (env SECRET_KEY)
        jwt_ttl_hours: Access token lifetime in hours (default: 24)
        database_url: PostgreSQL connection string; empty means in-memory storage
        db_pool_min_size: Minimum pooled connections (default: 1)
        db_pool_max_size: Maximum pooled connections (default: 10)
        db_statement_timeout_ms: Statement timeout per connection (default: 30s)
        app_env: Application environment (development/test/production)
        host: Bind address for the HTTP server
        port: Bind port for the HTTP server (default: 3000)
        log_level: Root log level (default: INFO)
        log_json: Emit JSON log lines (default: True)
    """

    # Security - JWT Auth
    secret_key: str = "dev-secret"
    jwt_ttl_hours: int = 24

    # Database
    database_url: str = ""
    db_pool_min_size: int = 1
    db_pool_max_size: int = 10
    db_statement_timeout_ms: int = 30000  # 30 seconds

    # Environment
    app_env: str = "development"

    # HTTP server
    host: str = "0.0.0.0"
    port: int = 3000

    # Logging
    log_level: str = "INFO"
    log_json: bool = True

    @field_validator("jwt_ttl_hours")
    @classmethod
    def jwt_ttl_must_be_positive(cls, v: int) -> int:
        if v <= 0:
            raise ValueError("jwt_ttl_hours must be greater than 0")
        return v

    @field_validator("port")
    @classmethod
    def port_must_be_valid(cls, v: int) -> int:
        if not 0 < v < 65536:
            raise ValueError("port must be between 1 and 65535")
        return v

    @model_validator(mode="after")
    def validate_pool_sizes(self):
        if self.db_pool_min_size < 0 or self.db_pool_max_size < 1:
            raise ValueError("db pool sizes must be positive")
        if self.db_pool_min_size > self.db_pool_max_size:
            raise ValueError(
                f"db_pool_min_size ({self.db_pool_min_size}) must be <= "
                f"db_pool_max_size ({self.db_pool_max_size})"
            )
        return self

    @model_validator(mode="after")
    def validate_security_requirements(self):
        if not self.is_production():
            return self

        secret = (self.secret_key or "").strip()
        if not secret or secret in _INSECURE_SECRETS:
            raise ValueError(
                "SECRET_KEY must be set to a strong, non-default value in production"
            )
        if len(secret) < 32:
            raise ValueError("SECRET_KEY must be at least 32 characters in production")
        if not self.database_url.strip():
            raise ValueError("DATABASE_URL is required in production")

        return self

    def is_production(self) -> bool:
        return self.app_env.strip().lower() == "production"

    def uses_database(self) -> bool:
        return bool(self.database_url.strip())

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",  # Ignore unknown env vars
    )


@lru_cache
def get_settings() -> Settings:
    """
    Get singleton Settings instance.

    Raises:
        ValidationError: If env vars are invalid
    """
    return Settings()
