"""
===============================================================================
USE CASE: Login User
===============================================================================

Business Goal:
    Autenticar username + password y emitir un token de acceso.

Seguridad:
    - No diferenciamos "usuario no existe" vs "password incorrecto":
      ambos devuelven INVALID_CREDENTIALS con el mismo mensaje.
    - Nunca logueamos el password.
===============================================================================
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable

from ....crosscutting.logger import logger
from ....domain.repositories import UserRepository
from ....identity.users import User
from .identity_results import IdentityError, IdentityErrorCode, IdentityResult

INVALID_CREDENTIALS_MESSAGE = "Invalid credentials"


@dataclass(frozen=True)
class LoginUserInput:
    username: str
    password: str


class LoginUserUseCase:
    def __init__(
        self,
        repository: UserRepository,
        *,
        password_verifier: Callable[[str, str], bool],
        token_issuer: Callable[[User], str],
    ) -> None:
        self._users = repository
        self._verify_password = password_verifier
        self._issue_token = token_issuer

    def execute(self, input_data: LoginUserInput) -> IdentityResult:
        user = self._users.get_user_by_username(input_data.username)
        if user is None or not self._verify_password(
            input_data.password, user.password_hash
        ):
            logger.warning(
                "Auth falló: credenciales inválidas",
                extra={"username": input_data.username},
            )
            return self._invalid_credentials()

        token = self._issue_token(user)
        return IdentityResult(user=user, token=token)

    @staticmethod
    def _invalid_credentials() -> IdentityResult:
        return IdentityResult(
            error=IdentityError(
                code=IdentityErrorCode.INVALID_CREDENTIALS,
                message=INVALID_CREDENTIALS_MESSAGE,
            )
        )
