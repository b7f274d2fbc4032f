"""
===============================================================================
TARJETA CRC: identity/users.py
===============================================================================

Módulo:
    Modelos de Usuario (JWT)

Responsabilidades:
    - Definir el enum de roles de usuario para autenticación/autorización.
    - Definir el dataclass User utilizado por registro y login.
    - Definir Principal: la identidad decodificada del token.

Colaboradores:
    - identity/auth_users.py: usa User, UserRole y Principal para emitir/validar JWT.
    - infrastructure/repositories/*/user.py: mapean filas -> User.

Notas:
    - Este módulo NO contiene lógica de negocio: solo "shapes" de datos.
===============================================================================
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class UserRole(str, Enum):
    """Roles soportados para autenticación JWT."""

    USER = "user"
    ADMIN = "admin"


@dataclass(frozen=True, slots=True)
class User:
    """Registro de usuario (tabla users)."""

    id: int
    username: str
    password_hash: str
    role: UserRole


@dataclass(frozen=True, slots=True)
class Principal:
    """Identidad autenticada adjuntada al request por el Auth Gate."""

    user_id: int
    username: str
    role: UserRole
