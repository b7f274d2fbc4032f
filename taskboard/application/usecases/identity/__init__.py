from .identity_results import IdentityError, IdentityErrorCode, IdentityResult
from .login_user import LoginUserInput, LoginUserUseCase
from .register_user import RegisterUserInput, RegisterUserUseCase

__all__ = [
    "IdentityError",
    "IdentityErrorCode",
    "IdentityResult",
    "LoginUserInput",
    "LoginUserUseCase",
    "RegisterUserInput",
    "RegisterUserUseCase",
]
