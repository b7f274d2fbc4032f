"""
===============================================================================
TARJETA CRC: identity/auth_users.py
===============================================================================

Módulo:
    Autenticación de Usuarios (JWT) + Auth Gate

Responsabilidades:
    - Hashear/verificar passwords (Argon2).
    - Emitir JWT de acceso con expiración (24h por defecto).
    - Decodificar y validar JWT (firma, exp, claims mínimos).
    - Exponer dependencias FastAPI: require_user (Auth Gate) y
      require_role (Role Gate).
    - Extraer el token desde el header Authorization (token crudo o "Bearer <token>").

Colaboradores:
    - crosscutting.config.Settings: secreto y TTL (vía app.state.settings).
    - crosscutting.error_responses: unauthorized/forbidden estándar.
    - crosscutting.logger: logging estructurado.
    - identity.users: User / UserRole / Principal.

Decisiones de diseño:
    - El gate es stateless: la validez es criptográfica + temporal, sin
      consultar la base.
    - Cualquier falla del token (malformado, expirado, firma inválida, claims
      faltantes) colapsa en un único InvalidTokenError.
    - No loguear secretos ni tokens; solo info mínima y segura.
===============================================================================
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Callable

import jwt
from argon2 import PasswordHasher
from argon2.exceptions import InvalidHashError, VerificationError, VerifyMismatchError
from fastapi import Header, Request

from ..context import set_user_context
from ..crosscutting.config import Settings, get_settings
from ..crosscutting.error_responses import (
    MSG_INVALID_TOKEN,
    MSG_NO_TOKEN,
    MSG_UNAUTHORIZED_ROLE,
    forbidden,
    unauthorized,
)
from ..crosscutting.logger import logger
from .users import Principal, User, UserRole

# ---------------------------------------------------------------------------
# Constantes (evitan strings mágicos)
# ---------------------------------------------------------------------------

JWT_ALGORITHM: str = "HS256"

CLAIM_USER_ID: str = "userId"
CLAIM_USERNAME: str = "username"
CLAIM_ROLE: str = "role"
CLAIM_IAT: str = "iat"
CLAIM_EXP: str = "exp"

_BEARER_SCHEME: str = "bearer"

_password_hasher = PasswordHasher()


class InvalidTokenError(Exception):
    """El token no es válido (firma, expiración o claims)."""


# ---------------------------------------------------------------------------
# Contratos internos
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class AuthSettings:
    """Settings de auth (snapshot)."""

    secret_key: str
    jwt_ttl_hours: int


def auth_settings_from(settings: Settings) -> AuthSettings:
    return AuthSettings(
        secret_key=settings.secret_key, jwt_ttl_hours=settings.jwt_ttl_hours
    )


def get_auth_settings(request: Request | None = None) -> AuthSettings:
    """
    Snapshot de settings de auth.

    Prioridad: settings inyectados en la app (create_app) y, si no hay,
    el singleton de entorno.
    """
    app_settings = None
    if request is not None:
        app_settings = getattr(request.app.state, "settings", None)
    return auth_settings_from(app_settings or get_settings())


# ---------------------------------------------------------------------------
# Passwords (Argon2)
# ---------------------------------------------------------------------------


def hash_password(password: str) -> str:
    """Hashea un password usando Argon2 (salt aleatorio por hash)."""
    return _password_hasher.hash(password)


def verify_password(password: str, password_hash: str) -> bool:
    """Verifica password vs hash almacenado."""
    try:
        return _password_hasher.verify(password_hash, password)
    except (VerifyMismatchError, VerificationError, InvalidHashError):
        return False


# ---------------------------------------------------------------------------
# Tokens JWT (emitir / decodificar)
# ---------------------------------------------------------------------------


def create_access_token(
    user: User | Principal,
    settings: AuthSettings,
    *,
    now: datetime | None = None,
) -> str:
    """Crea un JWT de acceso firmado con claims {userId, username, role}."""
    issued_at = now or datetime.now(timezone.utc)
    ttl = timedelta(hours=settings.jwt_ttl_hours)
    user_id = user.id if isinstance(user, User) else user.user_id

    payload: dict[str, object] = {
        CLAIM_USER_ID: user_id,
        CLAIM_USERNAME: user.username,
        CLAIM_ROLE: user.role.value,
        CLAIM_IAT: int(issued_at.timestamp()),
        CLAIM_EXP: int((issued_at + ttl).timestamp()),
    }

    return jwt.encode(payload, settings.secret_key, algorithm=JWT_ALGORITHM)


def decode_access_token(token: str, settings: AuthSettings) -> Principal:
    """
    Decodifica y valida un JWT de acceso.

    Errores:
        - InvalidTokenError ante cualquier falla (no se distingue la causa).
    """
    try:
        payload = jwt.decode(
            token,
            settings.secret_key,
            algorithms=[JWT_ALGORITHM],
            options={"require": [CLAIM_EXP, CLAIM_IAT]},
        )
    except jwt.InvalidTokenError as exc:
        raise InvalidTokenError(type(exc).__name__) from exc

    user_id = payload.get(CLAIM_USER_ID)
    username = payload.get(CLAIM_USERNAME)
    role_value = payload.get(CLAIM_ROLE)

    if not isinstance(user_id, int) or isinstance(user_id, bool):
        raise InvalidTokenError("missing or invalid userId claim")
    if not isinstance(username, str) or not username:
        raise InvalidTokenError("missing or invalid username claim")

    try:
        role = UserRole(str(role_value))
    except ValueError as exc:
        raise InvalidTokenError("invalid role claim") from exc

    return Principal(user_id=user_id, username=username, role=role)


# ---------------------------------------------------------------------------
# Extracción de token (header)
# ---------------------------------------------------------------------------


def extract_token(authorization: str | None) -> str | None:
    """
    Extrae el token del header Authorization.

    Acepta el token crudo (contrato histórico) y también "Bearer <token>".
    """
    if not authorization:
        return None
    value = authorization.strip()
    scheme, _, rest = value.partition(" ")
    if scheme.lower() == _BEARER_SCHEME:
        value = rest.strip()
    return value or None


# ---------------------------------------------------------------------------
# Dependencias FastAPI
# ---------------------------------------------------------------------------


def authenticate_request(request: Request, authorization: str | None) -> Principal:
    """
    Auth Gate: unauthenticated -> authenticated | rejected.

    - Sin header (o vacío) -> 401 "Access denied. No token provided."
    - Header presente sin token utilizable ("Bearer", espacios) o token
      inválido/expirado -> 401 "Access denied. Invalid token."
    - OK -> Principal adjuntado en request.state.principal
    """
    if not authorization:
        raise unauthorized(MSG_NO_TOKEN)

    token = extract_token(authorization)
    if not token:
        raise unauthorized(MSG_INVALID_TOKEN)

    try:
        principal = decode_access_token(token, get_auth_settings(request))
    except InvalidTokenError as exc:
        logger.warning("Auth falló: token inválido", extra={"reason": str(exc)})
        raise unauthorized(MSG_INVALID_TOKEN) from exc

    request.state.principal = principal
    set_user_context(principal.user_id)
    return principal


def require_user() -> Callable:
    """Dependency FastAPI: requiere usuario autenticado por JWT."""

    async def dependency(
        request: Request,
        authorization: str | None = Header(None, alias="Authorization"),
    ) -> Principal:
        return authenticate_request(request, authorization)

    return dependency


def require_role(role: UserRole | str) -> Callable:
    """Dependency FastAPI: Auth Gate + un rol específico (403 si no coincide)."""
    required_role = UserRole(role)

    async def dependency(
        request: Request,
        authorization: str | None = Header(None, alias="Authorization"),
    ) -> Principal:
        principal = authenticate_request(request, authorization)
        if principal.role != required_role:
            logger.warning(
                "Authz falló: rol insuficiente",
                extra={
                    "required_role": required_role.value,
                    "role": principal.role.value,
                },
            )
            raise forbidden(MSG_UNAUTHORIZED_ROLE)
        return principal

    return dependency
