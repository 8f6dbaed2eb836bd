"""User management use cases."""

from .delete_user import DeleteUserUseCase
from .get_user import GetUserUseCase
from .list_users import ListUsersUseCase
from .update_user_profile import UpdateUserProfileInput, UpdateUserProfileUseCase
from .user_results import (
    DeleteUserResult,
    UserError,
    UserErrorCode,
    UserListResult,
    UserResult,
)

__all__ = [
    "DeleteUserResult",
    "DeleteUserUseCase",
    "GetUserUseCase",
    "ListUsersUseCase",
    "UpdateUserProfileInput",
    "UpdateUserProfileUseCase",
    "UserError",
    "UserErrorCode",
    "UserListResult",
    "UserResult",
]
