"""
===============================================================================
USE CASE: Get Task
===============================================================================

Business Goal:
    Devolver una tarea del actor.

Why:
    La búsqueda filtra por id Y owner en un solo paso (ownership-scoped query):
    una tarea de otro usuario es indistinguible de una inexistente (NOT_FOUND).
===============================================================================
"""

from __future__ import annotations

from ....domain.repositories import TaskRepository
from ....identity.users import Principal
from .task_results import TaskResult, task_not_found


class GetTaskUseCase:
    def __init__(self, repository: TaskRepository) -> None:
        self._tasks = repository

    def execute(self, *, task_id: int, actor: Principal) -> TaskResult:
        task = self._tasks.get_task_for_owner(task_id, actor.user_id)
        if task is None:
            return TaskResult(error=task_not_found())
        return TaskResult(task=task)
