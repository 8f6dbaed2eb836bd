"""Auth use cases: registro, login, sesión actual, alta de admins y reset de contraseña."""

from .auth_results import AuthError, AuthErrorCode, AuthResult
from .create_admin import CreateAdminInput, CreateAdminUseCase
from .get_current_user import GetCurrentUserUseCase
from .login_user import LoginUserInput, LoginUserUseCase
from .password_reset import (
    PasswordResetResult,
    RequestPasswordResetUseCase,
    ResetPasswordUseCase,
    VerifyResetTokenUseCase,
)
from .register_user import RegisterUserInput, RegisterUserUseCase

__all__ = [
    "AuthError",
    "AuthErrorCode",
    "AuthResult",
    "CreateAdminInput",
    "CreateAdminUseCase",
    "GetCurrentUserUseCase",
    "LoginUserInput",
    "LoginUserUseCase",
    "PasswordResetResult",
    "RegisterUserInput",
    "RegisterUserUseCase",
    "RequestPasswordResetUseCase",
    "ResetPasswordUseCase",
    "VerifyResetTokenUseCase",
]
