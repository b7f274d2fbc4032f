"""
===============================================================================
TARJETA CRC: domain/repositories.py (Puertos de persistencia)
===============================================================================

Responsabilidades:
  - Definir los contratos (Protocol) que implementan los repositorios
    Postgres e in-memory.
  - Fijar la semántica "ownership-scoped": toda operación sobre una tarea
    individual filtra por id Y owner en la misma consulta.

Colaboradores:
  - infrastructure/repositories/postgres/*
  - infrastructure/repositories/in_memory/*
  - application/usecases/*
===============================================================================
"""

from __future__ import annotations

from typing import List, Optional, Protocol

from ..identity.users import User, UserRole
from .entities import Task


class UserRepository(Protocol):
    """
    R: Interface for user persistence.

    Implementations must provide:
      - Unique usernames (duplicate insert raises UsernameTakenError)
      - Lookup by username for login
    """

    def get_user_by_username(self, username: str) -> Optional[User]:
        """R: Return the user or None if it does not exist."""
        ...

    def create_user(
        self, *, username: str, password_hash: str, role: UserRole
    ) -> User:
        """
        R: Insert a new user and return it with its server-assigned id.

        Raises:
            UsernameTakenError: username already exists
            DatabaseError: any other storage failure
        """
        ...


class TaskRepository(Protocol):
    """
    R: Interface for task persistence.

    Every single-task operation is scoped by owner: a task owned by another
    user behaves exactly like a nonexistent one.
    """

    def create_task(
        self, *, title: Optional[str], description: Optional[str], owner_user_id: int
    ) -> Task:
        """R: Insert a task owned by owner_user_id."""
        ...

    def list_tasks_by_owner(self, owner_user_id: int) -> List[Task]:
        """R: All tasks owned by the user (ascending id)."""
        ...

    def get_task_for_owner(self, task_id: int, owner_user_id: int) -> Optional[Task]:
        """R: The task if it exists AND belongs to the owner, else None."""
        ...

    def update_task_for_owner(
        self,
        task_id: int,
        owner_user_id: int,
        *,
        title: Optional[str],
        description: Optional[str],
    ) -> Optional[Task]:
        """R: Persisted row after the update, or None if zero rows matched."""
        ...

    def delete_task_for_owner(self, task_id: int, owner_user_id: int) -> bool:
        """R: True if one row was deleted, False if zero rows matched."""
        ...

    def list_all_tasks(self) -> List[Task]:
        """R: Every task regardless of owner (admin listing)."""
        ...

    def ping(self) -> bool:
        """R: Storage health check."""
        ...
