"""
============================================================
TARJETA CRC: infrastructure/repositories/in_memory/task.py
============================================================
Class: InMemoryTaskRepository

Responsibilities:
  - Almacenar tasks en memoria (tests / local dev sin DATABASE_URL).
  - Implementar la misma semántica ownership-scoped que Postgres.
  - Mantener ordering determinístico alineado con Postgres: ORDER BY id ASC.

Collaborators:
  - domain.entities.Task
  - domain.repositories.TaskRepository (contrato a implementar)

Constraints / Notes:
  - Thread-safe: acceso protegido por Lock.
  - Task es inmutable: update reemplaza la entidad completa.
============================================================
"""

from __future__ import annotations

from dataclasses import replace
from itertools import count
from threading import Lock
from typing import Dict, List, Optional

from ....domain.entities import Task


class InMemoryTaskRepository:
    """
    Repositorio in-memory, thread-safe, para Tasks.

    Modelo mental:
    - _tasks es la "tabla" en memoria (id -> Task).
    - Los ids se asignan como un SERIAL (1, 2, 3...) y nunca se reutilizan.
    """

    def __init__(self) -> None:
        self._lock = Lock()
        self._tasks: Dict[int, Task] = {}
        self._ids = count(1)

    def _owned(self, task_id: int, owner_user_id: int) -> Optional[Task]:
        task = self._tasks.get(task_id)
        if task is None or not task.is_owned_by(owner_user_id):
            return None
        return task

    def create_task(
        self, *, title: Optional[str], description: Optional[str], owner_user_id: int
    ) -> Task:
        with self._lock:
            task = Task(
                id=next(self._ids),
                title=title,
                description=description,
                owner_user_id=owner_user_id,
            )
            self._tasks[task.id] = task
            return task

    def list_tasks_by_owner(self, owner_user_id: int) -> List[Task]:
        with self._lock:
            return sorted(
                (t for t in self._tasks.values() if t.is_owned_by(owner_user_id)),
                key=lambda t: t.id,
            )

    def get_task_for_owner(self, task_id: int, owner_user_id: int) -> Optional[Task]:
        with self._lock:
            return self._owned(task_id, owner_user_id)

    def update_task_for_owner(
        self,
        task_id: int,
        owner_user_id: int,
        *,
        title: Optional[str],
        description: Optional[str],
    ) -> Optional[Task]:
        with self._lock:
            current = self._owned(task_id, owner_user_id)
            if current is None:
                return None
            updated = replace(current, title=title, description=description)
            self._tasks[task_id] = updated
            return updated

    def delete_task_for_owner(self, task_id: int, owner_user_id: int) -> bool:
        with self._lock:
            if self._owned(task_id, owner_user_id) is None:
                return False
            del self._tasks[task_id]
            return True

    def list_all_tasks(self) -> List[Task]:
        with self._lock:
            return sorted(self._tasks.values(), key=lambda t: t.id)

    def ping(self) -> bool:
        return True
