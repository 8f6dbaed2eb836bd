"""
===============================================================================
USE CASE: List Users (admin)
===============================================================================

Notas:
    - La autorización (solo admin) se aplica en el borde HTTP con el guard.
    - Orden estable: created_at ASC.
===============================================================================
"""

from __future__ import annotations

from ....domain.repositories import UserRepository
from .user_results import UserListResult


class ListUsersUseCase:
    def __init__(self, *, user_repository: UserRepository) -> None:
        self._users = user_repository

    def execute(self) -> UserListResult:
        return UserListResult(users=self._users.list_users())
