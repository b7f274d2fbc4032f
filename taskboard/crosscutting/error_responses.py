# taskboard/crosscutting/error_responses.py
"""
===============================================================================
MÓDULO: Respuestas de error estándar ({"error": message})
===============================================================================

Objetivo
--------
Uniformar TODOS los errores HTTP para que:
- El cliente siempre reciba el mismo shape: {"error": "<mensaje>"}
- El backend pueda correlacionar por request_id (header X-Request-Id)
- El mapeo status <-> categoría viva en un solo lugar

-------------------------------------------------------------------------------
CRC (Component Card)
-------------------------------------------------------------------------------
Componente:
  AppHTTPException + handler

Responsabilidades:
  - Definir catálogo de códigos de error (ErrorCode)
  - Construir payload de error (ErrorBody)
  - Proveer factories de errores frecuentes
  - Proveer handler (FastAPI) que serializa el payload

Colaboradores:
  - crosscutting/middleware.py (request_id)
  - api/exception_handlers.py (mapea errores internos)
  - interfaces/error_mapping.py (mapea errores de casos de uso)
===============================================================================
"""

from __future__ import annotations

from enum import Enum

from fastapi import HTTPException, Request
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from .logger import logger

# Mensajes públicos (contrato con clientes existentes).
MSG_NO_TOKEN = "Access denied. No token provided."
MSG_INVALID_TOKEN = "Access denied. Invalid token."
MSG_UNAUTHORIZED_ROLE = "Unauthorized"
MSG_TASK_NOT_FOUND = "Task not found"
MSG_INTERNAL_ERROR = "Internal Server Error"
MSG_INVALID_JSON = "Invalid JSON body"


class ErrorCode(str, Enum):
    # 4xx
    VALIDATION_ERROR = "VALIDATION_ERROR"
    UNAUTHORIZED = "UNAUTHORIZED"
    FORBIDDEN = "FORBIDDEN"
    NOT_FOUND = "NOT_FOUND"
    CONFLICT = "CONFLICT"

    # 5xx
    INTERNAL_ERROR = "INTERNAL_ERROR"


class ErrorBody(BaseModel):
    """Cuerpo de error devuelto por todos los endpoints."""

    error: str


OPENAPI_ERROR_RESPONSES = {
    "401": {"description": "Unauthorized", "model": ErrorBody},
    "403": {"description": "Forbidden", "model": ErrorBody},
    "404": {"description": "Not Found", "model": ErrorBody},
    "409": {"description": "Conflict", "model": ErrorBody},
    "422": {"description": "Validation Error", "model": ErrorBody},
    "500": {"description": "Internal Server Error", "model": ErrorBody},
}


class AppHTTPException(HTTPException):
    """
    ----------------------------------------------------------------------------
    CRC (Class Card)
    ----------------------------------------------------------------------------
    Clase:
      AppHTTPException

    Responsabilidades:
      - Adjuntar un ErrorCode estable
      - Transportar el mensaje público (detail)

    Colaboradores:
      - app_exception_handler()
    ----------------------------------------------------------------------------
    """

    def __init__(self, status_code: int, code: ErrorCode, detail: str):
        super().__init__(status_code=status_code, detail=detail)
        self.code = code


# ---------------------------------------------------------------------------
# Factories de error (helpers)
# ---------------------------------------------------------------------------
def validation_error(detail: str) -> AppHTTPException:
    return AppHTTPException(422, ErrorCode.VALIDATION_ERROR, detail)


def not_found(detail: str = MSG_TASK_NOT_FOUND) -> AppHTTPException:
    return AppHTTPException(404, ErrorCode.NOT_FOUND, detail)


def conflict(detail: str) -> AppHTTPException:
    return AppHTTPException(409, ErrorCode.CONFLICT, detail)


def unauthorized(detail: str = MSG_INVALID_TOKEN) -> AppHTTPException:
    return AppHTTPException(401, ErrorCode.UNAUTHORIZED, detail)


def forbidden(detail: str = MSG_UNAUTHORIZED_ROLE) -> AppHTTPException:
    return AppHTTPException(403, ErrorCode.FORBIDDEN, detail)


def internal_error(detail: str = MSG_INTERNAL_ERROR) -> AppHTTPException:
    return AppHTTPException(500, ErrorCode.INTERNAL_ERROR, detail)


def error_response(status_code: int, detail: str) -> JSONResponse:
    """Serializa un error con el shape estándar."""
    return JSONResponse(
        status_code=status_code,
        content=ErrorBody(error=detail).model_dump(),
    )


# ---------------------------------------------------------------------------
# Handlers FastAPI
# ---------------------------------------------------------------------------
async def app_exception_handler(
    request: Request, exc: AppHTTPException
) -> JSONResponse:
    """Handler para AppHTTPException: loguea y responde {"error": detail}."""
    log = logger.error if exc.status_code >= 500 else logger.warning
    log(
        "request rechazado",
        extra={"status_code": exc.status_code, "code": exc.code.value},
    )
    return error_response(exc.status_code, str(exc.detail))
