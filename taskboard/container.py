"""
===============================================================================
TARJETA CRC: taskboard/container.py (Composition Root / DI manual)
===============================================================================

Responsabilidades:
  - Componer dependencias (repositorios, casos de uso) siguiendo DIP.
  - Decidir Postgres vs in-memory según Settings (DATABASE_URL).
  - Exponer factories para FastAPI (Depends) que leen el container de la app.

Colaboradores:
  - taskboard.crosscutting.config.Settings
  - taskboard.domain.repositories.* (puertos)
  - taskboard.infrastructure.repositories.* (implementaciones)
  - taskboard.application.usecases.* (casos de uso)
  - taskboard.identity.auth_users (hash / verify / emisión de tokens)

Patrones aplicados:
  - Composition Root
  - Dependency Inversion (use cases dependen de puertos)

Notas:
  - Este archivo NO contiene lógica de negocio.
  - Un container por app: create_app(settings) lo guarda en app.state.container,
    así los tests arman apps aisladas sin estado global.
===============================================================================
"""

from __future__ import annotations

from dataclasses import dataclass, field

from fastapi import Request

from .application.usecases import (
    CreateTaskUseCase,
    DeleteTaskUseCase,
    GetTaskUseCase,
    ListAllTasksUseCase,
    ListTasksUseCase,
    LoginUserUseCase,
    RegisterUserUseCase,
    UpdateTaskUseCase,
)
from .crosscutting.config import Settings
from .domain.repositories import TaskRepository, UserRepository
from .identity.auth_users import (
    AuthSettings,
    auth_settings_from,
    create_access_token,
    hash_password,
    verify_password,
)
from .identity.users import User
from .infrastructure.repositories import (
    InMemoryTaskRepository,
    InMemoryUserRepository,
    PostgresTaskRepository,
    PostgresUserRepository,
)


@dataclass
class Container:
    """Dependencias de una instancia de la app."""

    settings: Settings
    user_repository: UserRepository
    task_repository: TaskRepository
    auth_settings: AuthSettings = field(init=False)

    def __post_init__(self) -> None:
        self.auth_settings = auth_settings_from(self.settings)

    def issue_token(self, user: User) -> str:
        return create_access_token(user, self.auth_settings)

    # =========================================================================
    # Use cases (baratos: se construyen por request)
    # =========================================================================
    def register_user_use_case(self) -> RegisterUserUseCase:
        return RegisterUserUseCase(
            self.user_repository,
            password_hasher=hash_password,
            token_issuer=self.issue_token,
        )

    def login_user_use_case(self) -> LoginUserUseCase:
        return LoginUserUseCase(
            self.user_repository,
            password_verifier=verify_password,
            token_issuer=self.issue_token,
        )

    def create_task_use_case(self) -> CreateTaskUseCase:
        return CreateTaskUseCase(self.task_repository)

    def list_tasks_use_case(self) -> ListTasksUseCase:
        return ListTasksUseCase(self.task_repository)

    def list_all_tasks_use_case(self) -> ListAllTasksUseCase:
        return ListAllTasksUseCase(self.task_repository)

    def get_task_use_case(self) -> GetTaskUseCase:
        return GetTaskUseCase(self.task_repository)

    def update_task_use_case(self) -> UpdateTaskUseCase:
        return UpdateTaskUseCase(self.task_repository)

    def delete_task_use_case(self) -> DeleteTaskUseCase:
        return DeleteTaskUseCase(self.task_repository)


def build_container(settings: Settings) -> Container:
    """
    Arma el container según Settings.

    Regla:
      - DATABASE_URL presente => Postgres (el pool lo abre el lifespan).
      - DATABASE_URL vacío    => in-memory (tests / demo local).
    """
    if settings.uses_database():
        return Container(
            settings=settings,
            user_repository=PostgresUserRepository(),
            task_repository=PostgresTaskRepository(),
        )
    return Container(
        settings=settings,
        user_repository=InMemoryUserRepository(),
        task_repository=InMemoryTaskRepository(),
    )


# =============================================================================
# Factories FastAPI (Depends)
# =============================================================================


def get_container(request: Request) -> Container:
    return request.app.state.container


def get_register_user_use_case(request: Request) -> RegisterUserUseCase:
    return get_container(request).register_user_use_case()


def get_login_user_use_case(request: Request) -> LoginUserUseCase:
    return get_container(request).login_user_use_case()


def get_create_task_use_case(request: Request) -> CreateTaskUseCase:
    return get_container(request).create_task_use_case()


def get_list_tasks_use_case(request: Request) -> ListTasksUseCase:
    return get_container(request).list_tasks_use_case()


def get_list_all_tasks_use_case(request: Request) -> ListAllTasksUseCase:
    return get_container(request).list_all_tasks_use_case()


def get_get_task_use_case(request: Request) -> GetTaskUseCase:
    return get_container(request).get_task_use_case()


def get_update_task_use_case(request: Request) -> UpdateTaskUseCase:
    return get_container(request).update_task_use_case()


def get_delete_task_use_case(request: Request) -> DeleteTaskUseCase:
    return get_container(request).delete_task_use_case()
