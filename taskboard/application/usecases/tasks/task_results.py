"""
===============================================================================
TASK USE CASE RESULTS (Shared Result / Error Models)
===============================================================================

Business Goal:
    Proveer modelos compartidos de resultados y errores para los casos de uso
    de Tasks, con un contrato estable y explícito para:
      - autorización (rol)
      - recursos no encontrados (o no propios: indistinguibles)

Why (Context / Intención):
    - Los use cases devuelven resultados tipados en lugar de lanzar excepciones
      "hacia afuera", facilitando el mapeo a status codes y los tests.
    - Los errores de infraestructura (DatabaseError) NO se modelan acá: se
      propagan y los traduce el handler centralizado (500).

-------------------------------------------------------------------------------
CRC CARD (Class-Responsibility-Collaborator)
-------------------------------------------------------------------------------
Component:
    task_results models (module)

Responsibilities:
    - Definir TaskErrorCode (set acotado).
    - Representar TaskError (code + message).
    - Representar resultados: TaskResult, TaskListResult, DeleteTaskResult.

Collaborators:
    - domain.entities.Task
    - interfaces.error_mapping (TaskErrorCode -> HTTP)
===============================================================================
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import List

from ....domain.entities import Task


class TaskErrorCode(str, Enum):
    """
    Códigos:
      - FORBIDDEN: actor sin el rol requerido.
      - NOT_FOUND: tarea inexistente o de otro usuario.
    """

    FORBIDDEN = "FORBIDDEN"
    NOT_FOUND = "NOT_FOUND"


@dataclass(frozen=True)
class TaskError:
    code: TaskErrorCode
    message: str


@dataclass
class TaskResult:
    """
    Contrato:
      - error is None => task presente (éxito)
      - error != None => task None (fallo)
    """

    task: Task | None = None
    error: TaskError | None = None


@dataclass
class TaskListResult:
    tasks: List[Task] = field(default_factory=list)
    error: TaskError | None = None


@dataclass
class DeleteTaskResult:
    deleted: bool = False
    error: TaskError | None = None


TASK_NOT_FOUND_MESSAGE = "Task not found"


def task_not_found() -> TaskError:
    return TaskError(code=TaskErrorCode.NOT_FOUND, message=TASK_NOT_FOUND_MESSAGE)
