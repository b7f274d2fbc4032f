"""
===============================================================================
USE CASE: Delete Task
===============================================================================

Business Goal:
    Borrar (hard delete) una tarea propia.

Reglas:
    - Ownership-scoped: cero filas afectadas => NOT_FOUND.
    - Borrar dos veces el mismo id => NOT_FOUND la segunda vez.
===============================================================================
"""

from __future__ import annotations

from ....crosscutting.logger import logger
from ....domain.repositories import TaskRepository
from ....identity.users import Principal
from .task_results import DeleteTaskResult, task_not_found


class DeleteTaskUseCase:
    def __init__(self, repository: TaskRepository) -> None:
        self._tasks = repository

    def execute(self, *, task_id: int, actor: Principal) -> DeleteTaskResult:
        deleted = self._tasks.delete_task_for_owner(task_id, actor.user_id)
        if not deleted:
            return DeleteTaskResult(error=task_not_found())

        logger.info("Task borrada", extra={"task_id": task_id})
        return DeleteTaskResult(deleted=True)
