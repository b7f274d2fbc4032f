"""Repositorios: implementaciones Postgres e in-memory de los puertos del dominio."""

from .in_memory import InMemoryTaskRepository, InMemoryUserRepository
from .postgres import PostgresTaskRepository, PostgresUserRepository

__all__ = [
    "InMemoryTaskRepository",
    "InMemoryUserRepository",
    "PostgresTaskRepository",
    "PostgresUserRepository",
]
