from .create_task import CreateTaskInput, CreateTaskUseCase
from .delete_task import DeleteTaskUseCase
from .get_task import GetTaskUseCase
from .list_tasks import ListAllTasksUseCase, ListTasksUseCase
from .task_results import (
    DeleteTaskResult,
    TaskError,
    TaskErrorCode,
    TaskListResult,
    TaskResult,
)
from .update_task import UpdateTaskInput, UpdateTaskUseCase

__all__ = [
    "CreateTaskInput",
    "CreateTaskUseCase",
    "DeleteTaskResult",
    "DeleteTaskUseCase",
    "GetTaskUseCase",
    "ListAllTasksUseCase",
    "ListTasksUseCase",
    "TaskError",
    "TaskErrorCode",
    "TaskListResult",
    "TaskResult",
    "UpdateTaskInput",
    "UpdateTaskUseCase",
]
