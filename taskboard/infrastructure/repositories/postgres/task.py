"""
============================================================
TARJETA CRC: infrastructure/repositories/postgres/task.py
============================================================
Class: PostgresTaskRepository

Responsibilities:
- Implementar acceso a datos de Tasks en PostgreSQL (SQL crudo).
- Toda operación sobre una tarea individual filtra por id Y "userId"
  en la misma sentencia (ownership-scoped query).
- UPDATE ... RETURNING devuelve la fila persistida en un solo round-trip.
- Listados con orden determinístico (id ASC).

Collaborators:
- domain.entities.Task
- crosscutting.exceptions.DatabaseError
- crosscutting.logger.logger
- psycopg_pool.ConnectionPool
- Tabla: tasks(id, title, description, "userId")

Constraints / Notes:
- Sin lógica de negocio aquí. Este repo solo "filtra" y "devuelve".
- Queries siempre parametrizadas.
- La columna "userId" es case-sensitive: va siempre entre comillas.
============================================================
"""

from __future__ import annotations

from typing import Iterable, Optional

from psycopg_pool import ConnectionPool

from ....crosscutting.exceptions import DatabaseError
from ....crosscutting.logger import logger
from ....domain.entities import Task


class PostgresTaskRepository:
    """R: Implementación PostgreSQL del repositorio de Tasks."""

    _SELECT_COLUMNS = 'id, title, description, "userId"'

    _ORDER_BY = "ORDER BY id ASC"

    def __init__(self, pool: Optional[ConnectionPool] = None):
        # R: Pool inyectable para tests; en producción se obtiene por factory global.
        self._pool = pool

    def _get_pool(self) -> ConnectionPool:
        if self._pool is not None:
            return self._pool

        from ...db.pool import get_pool

        return get_pool()

    # =========================================================
    # Mapping
    # =========================================================
    @staticmethod
    def _row_to_task(row: tuple) -> Task:
        task_id, title, description, owner_user_id = row
        return Task(
            id=task_id,
            title=title,
            description=description,
            owner_user_id=owner_user_id,
        )

    # =========================================================
    # Helpers de ejecución (DRY + errores consistentes)
    # =========================================================
    def _fetchall(
        self, *, query: str, params: Iterable[object], context_msg: str, extra: dict
    ) -> list[tuple]:
        try:
            pool = self._get_pool()
            with pool.connection() as conn:
                return conn.execute(query, tuple(params)).fetchall()
        except Exception as exc:
            logger.exception(context_msg, extra={**extra, "error": str(exc)})
            raise DatabaseError(f"{context_msg}: {exc}") from exc

    def _fetchone(
        self, *, query: str, params: Iterable[object], context_msg: str, extra: dict
    ) -> tuple | None:
        try:
            pool = self._get_pool()
            with pool.connection() as conn:
                return conn.execute(query, tuple(params)).fetchone()
        except Exception as exc:
            logger.exception(context_msg, extra={**extra, "error": str(exc)})
            raise DatabaseError(f"{context_msg}: {exc}") from exc

    # =========================================================
    # Public API
    # =========================================================
    def create_task(
        self, *, title: Optional[str], description: Optional[str], owner_user_id: int
    ) -> Task:
        row = self._fetchone(
            query=f"""
                INSERT INTO tasks (title, description, "userId")
                VALUES (%s, %s, %s)
                RETURNING {self._SELECT_COLUMNS}
            """,
            params=(title, description, owner_user_id),
            context_msg="PostgresTaskRepository: Failed to create task",
            extra={"owner_user_id": owner_user_id},
        )
        if not row:
            raise DatabaseError("PostgresTaskRepository: create_task returned no row")
        return self._row_to_task(row)

    def list_tasks_by_owner(self, owner_user_id: int) -> list[Task]:
        rows = self._fetchall(
            query=f"""
                SELECT {self._SELECT_COLUMNS}
                FROM tasks
                WHERE "userId" = %s
                {self._ORDER_BY}
            """,
            params=(owner_user_id,),
            context_msg="PostgresTaskRepository: Failed to list tasks",
            extra={"owner_user_id": owner_user_id},
        )
        return [self._row_to_task(r) for r in rows]

    def get_task_for_owner(self, task_id: int, owner_user_id: int) -> Optional[Task]:
        row = self._fetchone(
            query=f"""
                SELECT {self._SELECT_COLUMNS}
                FROM tasks
                WHERE id = %s AND "userId" = %s
            """,
            params=(task_id, owner_user_id),
            context_msg="PostgresTaskRepository: Failed to get task",
            extra={"task_id": task_id, "owner_user_id": owner_user_id},
        )
        return self._row_to_task(row) if row else None

    def update_task_for_owner(
        self,
        task_id: int,
        owner_user_id: int,
        *,
        title: Optional[str],
        description: Optional[str],
    ) -> Optional[Task]:
        """
        R: Actualiza title/description solo si la tarea es del owner.

        Contract:
        - Task  => fila tal como quedó persistida
        - None  => cero filas afectadas (no existe o es de otro usuario)
        """
        row = self._fetchone(
            query=f"""
                UPDATE tasks
                SET title = %s, description = %s
                WHERE id = %s AND "userId" = %s
                RETURNING {self._SELECT_COLUMNS}
            """,
            params=(title, description, task_id, owner_user_id),
            context_msg="PostgresTaskRepository: Failed to update task",
            extra={"task_id": task_id, "owner_user_id": owner_user_id},
        )
        return self._row_to_task(row) if row else None

    def delete_task_for_owner(self, task_id: int, owner_user_id: int) -> bool:
        try:
            pool = self._get_pool()
            with pool.connection() as conn:
                result = conn.execute(
                    'DELETE FROM tasks WHERE id = %s AND "userId" = %s',
                    (task_id, owner_user_id),
                )
            return bool(result.rowcount and result.rowcount > 0)
        except Exception as exc:
            logger.exception(
                "PostgresTaskRepository: Failed to delete task",
                extra={
                    "task_id": task_id,
                    "owner_user_id": owner_user_id,
                    "error": str(exc),
                },
            )
            raise DatabaseError(f"Failed to delete task: {exc}") from exc

    def list_all_tasks(self) -> list[Task]:
        rows = self._fetchall(
            query=f"""
                SELECT {self._SELECT_COLUMNS}
                FROM tasks
                {self._ORDER_BY}
            """,
            params=(),
            context_msg="PostgresTaskRepository: Failed to list all tasks",
            extra={},
        )
        return [self._row_to_task(r) for r in rows]

    def ping(self) -> bool:
        try:
            pool = self._get_pool()
            with pool.connection() as conn:
                conn.execute("SELECT 1").fetchone()
            return True
        except Exception as exc:
            logger.warning("PostgresTaskRepository: ping failed", extra={"error": str(exc)})
            return False
