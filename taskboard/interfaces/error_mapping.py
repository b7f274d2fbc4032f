"""
===============================================================================
TARJETA CRC: error_mapping.py (UseCase Error -> HTTP)
===============================================================================

Responsabilidades:
  - Traducir códigos de error de casos de uso a AppHTTPException.
  - Centralizar el mapeo para evitar duplicación en routers.
  - Mantener los use cases libres de HTTP.

Reglas:
  - Los use cases devuelven errores tipados (code + message).
  - La API traduce a {"error": message} (crosscutting.error_responses).

Colaboradores:
  - application.usecases (TaskErrorCode, IdentityErrorCode)
  - crosscutting.error_responses (factories)
===============================================================================
"""

from __future__ import annotations

from taskboard.application.usecases import IdentityErrorCode, TaskErrorCode
from taskboard.crosscutting.error_responses import (
    conflict,
    forbidden,
    internal_error,
    not_found,
    unauthorized,
    validation_error,
)


def raise_task_error(error_code: TaskErrorCode, message: str) -> None:
    """Traduce TaskErrorCode -> HTTP."""
    if error_code == TaskErrorCode.NOT_FOUND:
        raise not_found(message)
    if error_code == TaskErrorCode.FORBIDDEN:
        raise forbidden(message)
    # Fallback seguro: un código nuevo sin mapear es un bug del servidor.
    raise internal_error()


def raise_identity_error(error_code: IdentityErrorCode, message: str) -> None:
    """Traduce IdentityErrorCode -> HTTP."""
    if error_code == IdentityErrorCode.INVALID_CREDENTIALS:
        raise unauthorized(message)
    if error_code == IdentityErrorCode.CONFLICT:
        raise conflict(message)
    if error_code == IdentityErrorCode.VALIDATION_ERROR:
        raise validation_error(message)
    raise internal_error()
