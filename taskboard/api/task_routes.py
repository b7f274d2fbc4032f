"""
===============================================================================
TARJETA CRC: taskboard/api/task_routes.py (CRUD de Tareas)
===============================================================================

Responsabilidades:
  - Exponer el CRUD de tareas bajo /tasks (siempre autenticado).
  - Exponer GET /tasks/all solo para admin.
  - Traducir resultados de casos de uso -> HTTP (error_mapping).

Reglas:
  - Toda operación queda acotada al dueño (principal.user_id).
  - Una tarea ajena responde igual que una inexistente: 404 "Task not found".
  - /tasks/all se declara antes que /tasks/{task_id} para no ser capturada
    por la ruta parametrizada.

Colaboradores:
  - identity.auth_users: require_user, require_role
  - application.usecases.tasks
  - interfaces.error_mapping: raise_task_error
===============================================================================
"""

from __future__ import annotations

import json
from typing import Annotated, Any, List, Optional

from fastapi import APIRouter, Depends
from pydantic import BaseModel, BeforeValidator, ConfigDict, Field

from ..application.usecases import (
    CreateTaskInput,
    CreateTaskUseCase,
    DeleteTaskUseCase,
    GetTaskUseCase,
    ListAllTasksUseCase,
    ListTasksUseCase,
    UpdateTaskInput,
    UpdateTaskUseCase,
)
from ..container import (
    get_create_task_use_case,
    get_delete_task_use_case,
    get_get_task_use_case,
    get_list_all_tasks_use_case,
    get_list_tasks_use_case,
    get_update_task_use_case,
)
from ..crosscutting.error_responses import OPENAPI_ERROR_RESPONSES
from ..domain.entities import Task
from ..identity.auth_users import require_role, require_user
from ..identity.users import Principal, UserRole
from ..interfaces.error_mapping import raise_task_error

router = APIRouter(
    prefix="/tasks", responses=OPENAPI_ERROR_RESPONSES, tags=["tasks"]
)

TASK_DELETED_MESSAGE = "Task deleted successfully"


# -----------------------------------------------------------------------------
# Modelos HTTP (DTOs)
# -----------------------------------------------------------------------------


def _as_text(value: Any) -> Optional[str]:
    """title/description se guardan tal cual: cualquier valor JSON no string
    se persiste como su texto JSON (5 -> "5", true -> "true")."""
    if value is None or isinstance(value, str):
        return value
    return json.dumps(value, ensure_ascii=False)


TaskText = Annotated[Optional[str], BeforeValidator(_as_text)]


class TaskWriteRequest(BaseModel):
    title: TaskText = None
    description: TaskText = None


class TaskResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: int
    title: Optional[str] = None
    description: Optional[str] = None
    user_id: int = Field(..., alias="userId")


class TaskWriteResponse(BaseModel):
    """Shape de create/update: la clave del id es taskId."""

    model_config = ConfigDict(populate_by_name=True)

    task_id: int = Field(..., alias="taskId")
    title: Optional[str] = None
    description: Optional[str] = None
    user_id: int = Field(..., alias="userId")


class MessageResponse(BaseModel):
    message: str


def _to_task_response(task: Task) -> TaskResponse:
    return TaskResponse(
        id=task.id,
        title=task.title,
        description=task.description,
        user_id=task.owner_user_id,
    )


def _to_write_response(task: Task) -> TaskWriteResponse:
    return TaskWriteResponse(
        task_id=task.id,
        title=task.title,
        description=task.description,
        user_id=task.owner_user_id,
    )


# -----------------------------------------------------------------------------
# Endpoints
# -----------------------------------------------------------------------------


@router.post("", response_model=TaskWriteResponse, status_code=201)
def create_task(
    req: Optional[TaskWriteRequest] = None,
    principal: Principal = Depends(require_user()),
    use_case: CreateTaskUseCase = Depends(get_create_task_use_case),
):
    req = req or TaskWriteRequest()
    result = use_case.execute(
        CreateTaskInput(
            actor=principal,
            title=req.title,
            description=req.description,
        )
    )
    if result.error:
        raise_task_error(result.error.code, result.error.message)
    return _to_write_response(result.task)


@router.get("", response_model=List[TaskResponse])
def list_tasks(
    principal: Principal = Depends(require_user()),
    use_case: ListTasksUseCase = Depends(get_list_tasks_use_case),
):
    """Tareas del usuario autenticado, ordenadas por id."""
    result = use_case.execute(actor=principal)
    if result.error:
        raise_task_error(result.error.code, result.error.message)
    return [_to_task_response(task) for task in result.tasks]


@router.get("/all", response_model=List[TaskResponse])
def list_all_tasks(
    principal: Principal = Depends(require_role(UserRole.ADMIN)),
    use_case: ListAllTasksUseCase = Depends(get_list_all_tasks_use_case),
):
    """Todas las tareas del sistema (solo admin)."""
    result = use_case.execute(actor=principal)
    if result.error:
        raise_task_error(result.error.code, result.error.message)
    return [_to_task_response(task) for task in result.tasks]


@router.get("/{task_id}", response_model=TaskResponse)
def get_task(
    task_id: int,
    principal: Principal = Depends(require_user()),
    use_case: GetTaskUseCase = Depends(get_get_task_use_case),
):
    result = use_case.execute(task_id=task_id, actor=principal)
    if result.error:
        raise_task_error(result.error.code, result.error.message)
    return _to_task_response(result.task)


@router.put("/{task_id}", response_model=TaskWriteResponse)
def update_task(
    task_id: int,
    req: Optional[TaskWriteRequest] = None,
    principal: Principal = Depends(require_user()),
    use_case: UpdateTaskUseCase = Depends(get_update_task_use_case),
):
    """Reemplaza title y description (campos ausentes quedan en null)."""
    req = req or TaskWriteRequest()
    result = use_case.execute(
        UpdateTaskInput(
            task_id=task_id,
            actor=principal,
            title=req.title,
            description=req.description,
        )
    )
    if result.error:
        raise_task_error(result.error.code, result.error.message)
    return _to_write_response(result.task)


@router.delete("/{task_id}", response_model=MessageResponse)
def delete_task(
    task_id: int,
    principal: Principal = Depends(require_user()),
    use_case: DeleteTaskUseCase = Depends(get_delete_task_use_case),
):
    result = use_case.execute(task_id=task_id, actor=principal)
    if result.error:
        raise_task_error(result.error.code, result.error.message)
    return MessageResponse(message=TASK_DELETED_MESSAGE)


__all__ = ["router"]
