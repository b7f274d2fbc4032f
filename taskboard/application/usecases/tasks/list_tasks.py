"""
===============================================================================
USE CASES: List Tasks (propias) / List All Tasks (admin)
===============================================================================

ListTasksUseCase:
    - Devuelve todas las tareas del actor (orden del storage: id ASC).

ListAllTasksUseCase:
    - Devuelve todas las tareas de todos los usuarios.
    - Solo ADMIN. El Role Gate ya lo garantiza en HTTP; el use case lo vuelve
      a verificar porque también se invoca fuera de la API.
===============================================================================
"""

from __future__ import annotations

from ....domain.repositories import TaskRepository
from ....identity.users import Principal, UserRole
from .task_results import TaskError, TaskErrorCode, TaskListResult


class ListTasksUseCase:
    def __init__(self, repository: TaskRepository) -> None:
        self._tasks = repository

    def execute(self, *, actor: Principal) -> TaskListResult:
        return TaskListResult(tasks=self._tasks.list_tasks_by_owner(actor.user_id))


class ListAllTasksUseCase:
    def __init__(self, repository: TaskRepository) -> None:
        self._tasks = repository

    def execute(self, *, actor: Principal) -> TaskListResult:
        if actor.role != UserRole.ADMIN:
            return TaskListResult(
                error=TaskError(
                    code=TaskErrorCode.FORBIDDEN,
                    message="Unauthorized",
                )
            )
        return TaskListResult(tasks=self._tasks.list_all_tasks())
