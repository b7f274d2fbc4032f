"""Domain layer: entidades y puertos de persistencia."""

from .entities import Task
from .repositories import TaskRepository, UserRepository

__all__ = ["Task", "TaskRepository", "UserRepository"]
