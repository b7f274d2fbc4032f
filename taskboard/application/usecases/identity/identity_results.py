"""
===============================================================================
IDENTITY USE CASE RESULTS
===============================================================================

Responsibilities:
    - IdentityErrorCode: VALIDATION_ERROR, INVALID_CREDENTIALS, CONFLICT.
    - IdentityResult: usuario + token emitido (o error).

Notas:
    - Login no distingue "usuario inexistente" de "password incorrecto":
      ambos son INVALID_CREDENTIALS con el mismo mensaje.
===============================================================================
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from ....identity.users import User


class IdentityErrorCode(str, Enum):
    VALIDATION_ERROR = "VALIDATION_ERROR"
    INVALID_CREDENTIALS = "INVALID_CREDENTIALS"
    CONFLICT = "CONFLICT"


@dataclass(frozen=True)
class IdentityError:
    code: IdentityErrorCode
    message: str


@dataclass
class IdentityResult:
    user: User | None = None
    token: str | None = None
    error: IdentityError | None = None
