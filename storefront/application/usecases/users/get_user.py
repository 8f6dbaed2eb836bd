"""
===============================================================================
USE CASE: Get User
===============================================================================

Business Goal:
    Devolver un usuario con sus flags de completitud recalculados.

Notas:
    - No dispara promoción: la lectura por id la puede hacer un admin sobre
      un tercero y no debe producir efectos laterales.
===============================================================================
"""

from __future__ import annotations

from uuid import UUID

from ....domain.profile import (
    DEFAULT_REQUIREMENTS,
    ProfileRequirements,
    evaluate_completeness,
)
from ....domain.repositories import UserRepository
from .user_results import UserError, UserErrorCode, UserResult

MSG_USER_NOT_FOUND = "User not found"


class GetUserUseCase:
    def __init__(
        self,
        *,
        user_repository: UserRepository,
        requirements: ProfileRequirements = DEFAULT_REQUIREMENTS,
    ) -> None:
        self._users = user_repository
        self._requirements = requirements

    def execute(self, user_id: UUID) -> UserResult:
        user = self._users.get_user(user_id)
        if user is None:
            return UserResult(
                error=UserError(
                    code=UserErrorCode.NOT_FOUND, message=MSG_USER_NOT_FOUND
                )
            )
        return UserResult(
            user=user, completeness=evaluate_completeness(user, self._requirements)
        )
