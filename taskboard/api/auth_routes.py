"""
===============================================================================
TARJETA CRC: taskboard/api/auth_routes.py (Registro y Login)
===============================================================================

Responsabilidades:
  - Exponer POST /register y POST /login.
  - Validar presencia de campos en el borde (DTOs pydantic).
  - Traducir IdentityResult -> HTTP (error_mapping).

Patrones aplicados:
  - Adapter / Presentation Layer: traduce HTTP <-> caso de uso.
  - Fail-safe security: si la autenticación falla, se deniega por defecto.

Colaboradores:
  - application.usecases.identity: RegisterUserUseCase, LoginUserUseCase
  - container: factories de casos de uso
  - interfaces.error_mapping: raise_identity_error
===============================================================================
"""

from __future__ import annotations

from fastapi import APIRouter, Depends
from pydantic import BaseModel, ConfigDict, Field

from ..application.usecases import (
    IdentityResult,
    LoginUserInput,
    LoginUserUseCase,
    RegisterUserInput,
    RegisterUserUseCase,
)
from ..container import get_login_user_use_case, get_register_user_use_case
from ..crosscutting.error_responses import OPENAPI_ERROR_RESPONSES
from ..identity.users import UserRole
from ..interfaces.error_mapping import raise_identity_error

router = APIRouter(responses=OPENAPI_ERROR_RESPONSES, tags=["auth"])


# -----------------------------------------------------------------------------
# Modelos HTTP (DTOs)
# -----------------------------------------------------------------------------


class RegisterRequest(BaseModel):
    username: str = Field(..., min_length=1)
    password: str = Field(..., min_length=1)
    role: UserRole = Field(default=UserRole.USER)


class LoginRequest(BaseModel):
    # Sin min_length: credenciales vacías son credenciales inválidas (401).
    username: str
    password: str


class IdentityResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    user_id: int = Field(..., alias="userId")
    username: str
    role: UserRole
    token: str


def _to_identity_response(result: IdentityResult) -> IdentityResponse:
    if result.error is not None:
        raise_identity_error(result.error.code, result.error.message)

    user = result.user
    return IdentityResponse(
        user_id=user.id,
        username=user.username,
        role=user.role,
        token=result.token,
    )


# -----------------------------------------------------------------------------
# Endpoints públicos
# -----------------------------------------------------------------------------


@router.post("/register", response_model=IdentityResponse, status_code=201)
def register(
    req: RegisterRequest,
    use_case: RegisterUserUseCase = Depends(get_register_user_use_case),
):
    """Registra un usuario y devuelve su identidad + token."""
    result = use_case.execute(
        RegisterUserInput(username=req.username, password=req.password, role=req.role)
    )
    return _to_identity_response(result)


@router.post("/login", response_model=IdentityResponse)
def login(
    req: LoginRequest,
    use_case: LoginUserUseCase = Depends(get_login_user_use_case),
):
    """Valida credenciales y devuelve identidad + token."""
    result = use_case.execute(
        LoginUserInput(username=req.username, password=req.password)
    )
    return _to_identity_response(result)


__all__ = ["router"]
