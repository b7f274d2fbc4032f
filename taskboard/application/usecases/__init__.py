"""
Use Cases Layer (Business Operations)

Structure
---------
usecases/
├── identity/   # Registro y login (emisión de tokens)
└── tasks/      # CRUD de tareas ownership-scoped + listado admin

Usage
-----
    from taskboard.application.usecases.tasks import CreateTaskUseCase
    from taskboard.application.usecases import RegisterUserUseCase
"""

from .identity import (
    IdentityErrorCode,
    IdentityResult,
    LoginUserInput,
    LoginUserUseCase,
    RegisterUserInput,
    RegisterUserUseCase,
)
from .tasks import (
    CreateTaskInput,
    CreateTaskUseCase,
    DeleteTaskUseCase,
    GetTaskUseCase,
    ListAllTasksUseCase,
    ListTasksUseCase,
    TaskErrorCode,
    UpdateTaskInput,
    UpdateTaskUseCase,
)

__all__ = [
    "CreateTaskInput",
    "CreateTaskUseCase",
    "DeleteTaskUseCase",
    "GetTaskUseCase",
    "IdentityErrorCode",
    "IdentityResult",
    "ListAllTasksUseCase",
    "ListTasksUseCase",
    "LoginUserInput",
    "LoginUserUseCase",
    "RegisterUserInput",
    "RegisterUserUseCase",
    "TaskErrorCode",
    "UpdateTaskInput",
    "UpdateTaskUseCase",
]
