"""
===============================================================================
TARJETA CRC: domain/entities.py
===============================================================================

Módulo:
    Entidades del Dominio (Task)

Responsabilidades:
    - Definir la estructura central del negocio (sin infraestructura).
    - Mantener tipos claros para casos de uso y repositorios.

Colaboradores:
    - domain.repositories: persisten/recuperan estas entidades.
    - application/usecases: construyen/consumen estas entidades.
    - api: serializa DTOs basados en estas entidades.

Principios:
    - Sin dependencias a DB/FastAPI.
===============================================================================
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class Task:
    """
    Tarea privada de un usuario.

    Invariantes:
      - owner_user_id referencia un usuario existente y no cambia.
      - title/description pueden ser None (no se valida contenido).
    """

    id: int
    title: Optional[str]
    description: Optional[str]
    owner_user_id: int

    def is_owned_by(self, user_id: int) -> bool:
        return self.owner_user_id == user_id
