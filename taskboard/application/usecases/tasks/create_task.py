"""
===============================================================================
USE CASE: Create Task
===============================================================================

Business Goal:
    Crear una tarea privada para el usuario autenticado.

Reglas:
    - El owner es SIEMPRE el actor (no se acepta owner desde el cliente).
    - title/description se persisten tal cual (sin validar contenido,
      None incluido).

Outputs:
    - TaskResult con la tarea y su id asignado por el storage.
===============================================================================
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ....crosscutting.logger import logger
from ....domain.repositories import TaskRepository
from ....identity.users import Principal
from .task_results import TaskResult


@dataclass(frozen=True)
class CreateTaskInput:
    actor: Principal
    title: Optional[str] = None
    description: Optional[str] = None


class CreateTaskUseCase:
    def __init__(self, repository: TaskRepository) -> None:
        self._tasks = repository

    def execute(self, input_data: CreateTaskInput) -> TaskResult:
        task = self._tasks.create_task(
            title=input_data.title,
            description=input_data.description,
            owner_user_id=input_data.actor.user_id,
        )
        logger.info("Task creada", extra={"task_id": task.id})
        return TaskResult(task=task)
