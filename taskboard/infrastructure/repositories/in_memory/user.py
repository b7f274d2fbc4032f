"""
============================================================
TARJETA CRC: infrastructure/repositories/in_memory/user.py
============================================================
Class: InMemoryUserRepository

Responsibilities:
  - Almacenar usuarios en memoria (tests / local dev sin DATABASE_URL).
  - Replicar la semántica de Postgres: ids SERIAL y username UNIQUE.

Collaborators:
  - identity.users.User / UserRole
  - domain.repositories.UserRepository (contrato a implementar)
  - crosscutting.exceptions.UsernameTakenError

Constraints / Notes:
  - Thread-safe: acceso protegido por Lock.
============================================================
"""

from __future__ import annotations

from itertools import count
from threading import Lock
from typing import Dict, Optional

from ....crosscutting.exceptions import UsernameTakenError
from ....identity.users import User, UserRole


class InMemoryUserRepository:
    """Repositorio in-memory, thread-safe, para usuarios."""

    def __init__(self) -> None:
        self._lock = Lock()
        self._users: Dict[int, User] = {}
        self._ids = count(1)

    def get_user_by_username(self, username: str) -> Optional[User]:
        with self._lock:
            for user in self._users.values():
                if user.username == username:
                    return user
        return None

    def create_user(
        self, *, username: str, password_hash: str, role: UserRole
    ) -> User:
        with self._lock:
            if any(u.username == username for u in self._users.values()):
                raise UsernameTakenError(f"Username already exists: {username}")
            user = User(
                id=next(self._ids),
                username=username,
                password_hash=password_hash,
                role=role,
            )
            self._users[user.id] = user
            return user
