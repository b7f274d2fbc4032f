"""
===============================================================================
TARJETA CRC: taskboard/api/exception_handlers.py (Manejo Centralizado de Excepciones)
===============================================================================

Responsabilidades:
  - Traducir excepciones de la aplicación a respuestas {"error": message}.
  - Centralizar logging de errores con request_id + error_id.
  - Evitar filtrar detalles internos en errores no controlados.

Patrones aplicados:
  - Exception Mapping (Presentation Layer).
  - Fail-safe: cualquier excepción no tipada -> 500 "Internal Server Error".

Colaboradores:
  - crosscutting.error_responses: AppHTTPException, app_exception_handler
  - crosscutting.exceptions: TaskboardError y derivadas
===============================================================================
"""

from __future__ import annotations

from fastapi import Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from ..crosscutting.error_responses import (
    MSG_INTERNAL_ERROR,
    MSG_INVALID_JSON,
    AppHTTPException,
    app_exception_handler,
    error_response,
)
from ..crosscutting.exceptions import TaskboardError
from ..crosscutting.logger import logger
from ..crosscutting.middleware import REQUEST_ID_HEADER


def _request_id_from(request: Request) -> str | None:
    return getattr(getattr(request, "state", None), "request_id", None)


def _validation_message(exc: RequestValidationError) -> str:
    errors = exc.errors()
    if not errors:
        return "Invalid request"
    first = errors[0]
    if first.get("type") == "json_invalid":
        return MSG_INVALID_JSON
    loc = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
    msg = first.get("msg", "Invalid value")
    return f"{loc}: {msg}" if loc else msg


async def validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Falta de campos / tipos inválidos en el request -> 422."""
    message = _validation_message(exc)
    logger.warning(
        "Request inválido",
        extra={"request_id": _request_id_from(request), "detail": message},
    )
    return error_response(422, message)


async def http_exception_handler(
    request: Request, exc: StarletteHTTPException
) -> JSONResponse:
    """Errores HTTP de Starlette (404 de ruta, 405...) con el shape estándar."""
    logger.warning(
        "Error HTTP",
        extra={"status_code": exc.status_code, "detail": str(exc.detail)},
    )
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": str(exc.detail)},
        headers=getattr(exc, "headers", None),
    )


async def service_error_handler(request: Request, exc: TaskboardError) -> JSONResponse:
    """Errores tipados de infraestructura (DB, pool) -> 500 genérico."""
    logger.error(
        "Error de servicio",
        extra={
            "code": exc.error_code,
            "error_id": exc.error_id,
            "error_message": exc.message,
            "request_id": _request_id_from(request),
        },
    )
    return error_response(500, MSG_INTERNAL_ERROR)


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """
    Handler para excepciones no tipadas.

    - Log completo (stacktrace).
    - Respuesta genérica (no se filtran internos, tampoco en desarrollo).
    - Corre fuera de RequestContextMiddleware (ServerErrorMiddleware), así
      que el X-Request-Id se adjunta acá desde request.state.
    """
    request_id = _request_id_from(request)
    logger.error(
        "Excepción no controlada",
        exc_info=exc,
        extra={"request_id": request_id, "error": str(exc)},
    )
    response = error_response(500, MSG_INTERNAL_ERROR)
    if request_id:
        response.headers[REQUEST_ID_HEADER] = request_id
    return response


def register_exception_handlers(app) -> None:
    """
    Registra handlers en la app FastAPI.

    Importante:
      - AppHTTPException se registra aparte del HTTPException genérico.
      - Exception genérica se registra al final como fallback.
    """
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(AppHTTPException, app_exception_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(TaskboardError, service_error_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)


__all__ = ["register_exception_handlers"]
