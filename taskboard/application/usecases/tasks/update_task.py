"""
===============================================================================
USE CASE: Update Task
===============================================================================

Business Goal:
    Reemplazar title/description de una tarea propia.

Reglas:
    - Ownership-scoped: cero filas afectadas => NOT_FOUND (y no se crea nada).
    - El resultado es la fila tal como quedó persistida (UPDATE ... RETURNING),
      no un eco de lo que mandó el cliente.
    - Last-writer-wins ante updates concurrentes (sin locking explícito).
===============================================================================
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ....crosscutting.logger import logger
from ....domain.repositories import TaskRepository
from ....identity.users import Principal
from .task_results import TaskResult, task_not_found


@dataclass(frozen=True)
class UpdateTaskInput:
    task_id: int
    actor: Principal
    title: Optional[str] = None
    description: Optional[str] = None


class UpdateTaskUseCase:
    def __init__(self, repository: TaskRepository) -> None:
        self._tasks = repository

    def execute(self, input_data: UpdateTaskInput) -> TaskResult:
        updated = self._tasks.update_task_for_owner(
            input_data.task_id,
            input_data.actor.user_id,
            title=input_data.title,
            description=input_data.description,
        )
        if updated is None:
            return TaskResult(error=task_not_found())

        logger.info("Task actualizada", extra={"task_id": updated.id})
        return TaskResult(task=updated)
