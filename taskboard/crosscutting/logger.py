# taskboard/crosscutting/logger.py
"""
===============================================================================
MÓDULO: Logging estructurado de Taskboard
===============================================================================

Cada línea de log es un objeto JSON con:
  - campos base (ts, level, logger, message, origen)
  - contexto del request en curso (request_id, method, path, user_id)
  - los `extra=` del call site, con passwords/tokens/secretos redactados

-------------------------------------------------------------------------------
CRC (Component Card)
-------------------------------------------------------------------------------
Componente:
  JSONFormatter + setup_logger()

Colaboradores:
  - taskboard/context.py (ContextVars)
  - crosscutting/config.py (LOG_LEVEL / LOG_JSON)
===============================================================================
"""

from __future__ import annotations

import json
import logging
import sys
import traceback
from datetime import datetime, timezone
from typing import Any, Iterator

REDACTED = "***REDACTADO***"
TRUNCATED = "***TRUNCADO***"

MAX_TEXT_LENGTH = 8_000
MAX_NESTING = 4

# Atributos que trae cualquier LogRecord; el resto vino por `extra=`.
_RECORD_ATTRS = frozenset(
    logging.LogRecord("", logging.INFO, "", 0, "", (), None).__dict__
) | {"message", "asctime", "taskName"}

_SENSITIVE_FIELDS = frozenset(
    {
        "password",
        "password_hash",
        "secret",
        "secret_key",
        "token",
        "access_token",
        "authorization",
        "credential",
    }
)

_PLAIN_FORMAT = "%(levelname)s %(name)s %(message)s"


def _is_sensitive(field: str | None) -> bool:
    return bool(field) and field.lower() in _SENSITIVE_FIELDS


def scrub(value: Any, field: str | None = None, _level: int = 0) -> Any:
    """Versión loggeable de `value`: sin secretos y con tamaño acotado."""
    if _is_sensitive(field):
        return REDACTED
    if _level > MAX_NESTING:
        return TRUNCATED

    if isinstance(value, str):
        if len(value) > MAX_TEXT_LENGTH:
            return value[:MAX_TEXT_LENGTH] + "…(truncado)"
        return value
    if isinstance(value, (bytes, bytearray)):
        return f"<bytes {len(value)}B>"
    if isinstance(value, dict):
        return {
            str(k): scrub(v, str(k), _level + 1) for k, v in value.items()
        }
    if isinstance(value, (list, tuple, set, frozenset)):
        return [scrub(item, field, _level + 1) for item in value]
    if value is None or isinstance(value, (bool, int, float)):
        return value
    return str(value)


def _extra_fields(record: logging.LogRecord) -> Iterator[tuple[str, Any]]:
    for field, value in vars(record).items():
        if field not in _RECORD_ATTRS:
            yield field, scrub(value, field)


class JSONFormatter(logging.Formatter):
    """
    ----------------------------------------------------------------------------
    CRC (Class Card)
    ----------------------------------------------------------------------------
    Clase:
      JSONFormatter

    Responsabilidades:
      - LogRecord -> una línea JSON
      - Mezclar el contexto del request activo
      - Serializar la excepción (tipo, mensaje, traceback) si la hay
    ----------------------------------------------------------------------------
    """

    def format(self, record: logging.LogRecord) -> str:
        from ..context import get_context_dict

        entry: dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(
                record.created, tz=timezone.utc
            ).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno,
            "pid": record.process,
        }
        entry.update(get_context_dict())
        entry.update(_extra_fields(record))

        if record.exc_info and record.exc_info[0] is not None:
            exc_type, exc, tb = record.exc_info
            entry["exception"] = {
                "type": exc_type.__name__,
                "message": str(exc),
                "stacktrace": traceback.format_exception(exc_type, exc, tb),
            }

        return json.dumps(entry, ensure_ascii=False, default=str, separators=(",", ":"))


def _settings_defaults() -> tuple[str, bool]:
    from pydantic import ValidationError

    from .config import get_settings

    # Config rota no debe impedir loguear el error de arranque.
    try:
        settings = get_settings()
    except ValidationError:
        return "INFO", True
    return settings.log_level, settings.log_json


def setup_logger(
    name: str = "taskboard", *, level: str | None = None, use_json: bool | None = None
) -> logging.Logger:
    """
    Configura (o reconfigura) el logger `name`.

    Lo que no se pase explícitamente sale de Settings. Llamarla de nuevo
    reemplaza el formatter; no agrega handlers duplicados.
    """
    if level is None or use_json is None:
        default_level, default_json = _settings_defaults()
        level = level or default_level
        use_json = default_json if use_json is None else use_json

    log = logging.getLogger(name)
    level_no = logging.getLevelName(level.upper())
    log.setLevel(level_no if isinstance(level_no, int) else logging.INFO)

    if not log.handlers:
        log.addHandler(logging.StreamHandler(sys.stdout))

    formatter = JSONFormatter() if use_json else logging.Formatter(_PLAIN_FORMAT)
    for handler in log.handlers:
        handler.setFormatter(formatter)
    return log


logger = setup_logger()
