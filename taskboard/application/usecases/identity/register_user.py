"""
===============================================================================
USE CASE: Register User
===============================================================================

Business Goal:
    Registrar un usuario nuevo y devolverle un token de acceso.

Reglas:
    - username y password deben venir presentes (no vacíos).
    - El password se persiste hasheado (Argon2), nunca en claro.
    - username duplicado => CONFLICT (409 en HTTP).
    - Side effect: una fila nueva en users.

-------------------------------------------------------------------------------
CRC CARD
-------------------------------------------------------------------------------
Class:
    RegisterUserUseCase

Collaborators:
    - UserRepository: create_user(...)
    - password_hasher: Callable[[str], str]
    - token_issuer: Callable[[User], str]
===============================================================================
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable

from ....crosscutting.exceptions import UsernameTakenError
from ....crosscutting.logger import logger
from ....domain.repositories import UserRepository
from ....identity.users import User, UserRole
from .identity_results import IdentityError, IdentityErrorCode, IdentityResult

USERNAME_TAKEN_MESSAGE = "Username already exists"


@dataclass(frozen=True)
class RegisterUserInput:
    username: str
    password: str
    role: UserRole = UserRole.USER


class RegisterUserUseCase:
    def __init__(
        self,
        repository: UserRepository,
        *,
        password_hasher: Callable[[str], str],
        token_issuer: Callable[[User], str],
    ) -> None:
        self._users = repository
        self._hash_password = password_hasher
        self._issue_token = token_issuer

    def execute(self, input_data: RegisterUserInput) -> IdentityResult:
        if not input_data.username or not input_data.password:
            return IdentityResult(
                error=IdentityError(
                    code=IdentityErrorCode.VALIDATION_ERROR,
                    message="username and password are required",
                )
            )

        try:
            user = self._users.create_user(
                username=input_data.username,
                password_hash=self._hash_password(input_data.password),
                role=input_data.role,
            )
        except UsernameTakenError:
            return IdentityResult(
                error=IdentityError(
                    code=IdentityErrorCode.CONFLICT,
                    message=USERNAME_TAKEN_MESSAGE,
                )
            )

        token = self._issue_token(user)
        logger.info(
            "Usuario registrado",
            extra={"user_id": user.id, "role": user.role.value},
        )
        return IdentityResult(user=user, token=token)
