"""
===============================================================================
USE CASE: Get Current User
===============================================================================

Business Goal:
    Devolver el usuario autenticado con sus flags de completitud, aplicando
    la promoción guest -> user si el perfil ya está completo.

Notas:
    - Es un disparador de promoción: un usuario que completó el perfil por
      otra vía queda promovido en la próxima consulta de sesión.
    - UserNotFoundError (usuario borrado entre auth y lectura) se propaga y
      lo traduce el exception handler.
===============================================================================
"""

from __future__ import annotations

from uuid import UUID

from ...role_promotion import RolePromotionService
from .auth_results import AuthResult


class GetCurrentUserUseCase:
    def __init__(self, *, promotion_service: RolePromotionService) -> None:
        self._promotion = promotion_service

    def execute(self, user_id: UUID) -> AuthResult:
        outcome = self._promotion.maybe_promote(user_id)
        return AuthResult(
            user=outcome.user,
            completeness=outcome.completeness,
            promoted=outcome.promoted,
        )
