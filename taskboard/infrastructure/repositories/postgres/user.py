"""
============================================================
TARJETA CRC: infrastructure/repositories/postgres/user.py
============================================================
Class: PostgresUserRepository

Responsibilities:
  - Cargar usuarios para login (por username).
  - Crear usuarios (registro).
  - Ejecutar SQL parametrizado contra la tabla `users` (contrato con migraciones).
  - Mapear filas crudas -> entidad `User` y validar `UserRole`.
  - Traducir la violación de unicidad de username a UsernameTakenError.

Collaborators:
  - psycopg_pool.ConnectionPool (pool de conexiones)
  - infrastructure.db.pool.get_pool (accesor del pool global)
  - identity.users.User / UserRole
  - crosscutting.exceptions.DatabaseError / UsernameTakenError

Constraints / Notes:
  - Repositorio puro: NO define reglas de negocio.
  - Retorna None cuando no existe el recurso (no exception por "not found").
  - SQL parametrizado siempre (nunca interpolar input de usuario).
============================================================
"""

from __future__ import annotations

from typing import Iterable, Optional

from psycopg import errors as pg_errors
from psycopg_pool import ConnectionPool

from ....crosscutting.exceptions import DatabaseError, UsernameTakenError
from ....crosscutting.logger import logger
from ....identity.users import User, UserRole

# R: Lista explícita de columnas para mantener el contrato estable con migraciones.
_USER_COLUMNS = "id, username, password, role"


class PostgresUserRepository:
    """R: Implementación PostgreSQL del repositorio de usuarios."""

    def __init__(self, pool: Optional[ConnectionPool] = None) -> None:
        # R: Pool inyectable para tests; si es None se usa el global.
        self._pool = pool

    def _get_pool(self) -> ConnectionPool:
        if self._pool is not None:
            return self._pool

        from ...db.pool import get_pool

        return get_pool()

    @staticmethod
    def _row_to_user(row: tuple) -> User:
        """
        Convierte una fila de `users` a `User`.

        Role casting es estricto: si el valor no matchea el enum -> DatabaseError.
        """
        try:
            role = UserRole(row[3])
        except ValueError as exc:
            raise DatabaseError(f"Invalid user role in database: {row[3]}") from exc

        return User(id=row[0], username=row[1], password_hash=row[2], role=role)

    def _fetchone(
        self,
        *,
        query: str,
        params: Iterable[object],
        log_msg: str,
        log_extra: dict[str, object],
    ) -> tuple | None:
        try:
            pool = self._get_pool()
            with pool.connection() as conn:
                return conn.execute(query, tuple(params)).fetchone()
        except Exception as exc:
            logger.exception(log_msg, extra={**log_extra, "error": str(exc)})
            raise DatabaseError(f"{log_msg}: {exc}") from exc

    def get_user_by_username(self, username: str) -> Optional[User]:
        row = self._fetchone(
            query=f"""
                SELECT {_USER_COLUMNS}
                FROM users
                WHERE username = %s
            """,
            params=(username,),
            log_msg="PostgresUserRepository: get_user_by_username failed",
            log_extra={"username": username},
        )
        return self._row_to_user(row) if row else None

    def create_user(
        self, *, username: str, password_hash: str, role: UserRole
    ) -> User:
        """
        Crea un usuario y devuelve el registro con su id asignado.

        Nota:
        - Si el username ya existe, Postgres lanza UniqueViolation por
          uq_users_username; se traduce a UsernameTakenError.
        """
        query = f"""
            INSERT INTO users (username, password, role)
            VALUES (%s, %s, %s)
            RETURNING {_USER_COLUMNS}
        """
        try:
            pool = self._get_pool()
            with pool.connection() as conn:
                row = conn.execute(
                    query, (username, password_hash, role.value)
                ).fetchone()
        except pg_errors.UniqueViolation as exc:
            logger.warning(
                "PostgresUserRepository: username duplicado",
                extra={"username": username},
            )
            raise UsernameTakenError(f"Username already exists: {username}") from exc
        except Exception as exc:
            logger.exception(
                "PostgresUserRepository: create_user failed",
                extra={"username": username, "role": role.value, "error": str(exc)},
            )
            raise DatabaseError(f"create_user failed: {exc}") from exc

        if not row:
            raise DatabaseError(
                "PostgresUserRepository: create_user failed (no row returned)"
            )

        return self._row_to_user(row)
