"""
===============================================================================
USE CASE: Update User Profile
===============================================================================

Business Goal:
    Actualizar datos personales y/o dirección de un usuario y, a continuación,
    evaluar la promoción guest -> user.

Why (Context / Intención):
    - Es el disparador más común de la promoción: el usuario completa el
      perfil y queda habilitado para comprar sin pedir token nuevo.
    - El rol y el email NO se actualizan por esta vía (se ignoran en silencio);
      el rol solo cambia por promoción o por alta de admin.
    - La dirección se mergea campo a campo con la existente.

-------------------------------------------------------------------------------
CRC CARD (Class-Responsibility-Collaborator)
-------------------------------------------------------------------------------
Class:
    UpdateUserProfileUseCase

Responsibilities:
    - Filtrar el payload a los campos de perfil permitidos.
    - Rechazar payloads vacíos y teléfonos inválidos.
    - Persistir el update parcial (single document).
    - Ejecutar RolePromotionService.maybe_promote con datos frescos.

Collaborators:
    - UserRepository
    - RolePromotionService
    - application.validators

Errors:
    - VALIDATION_ERROR: "No fields provided for update" / teléfono inválido
    - NOT_FOUND: "User not found"
    - UpdateFailedError (excepción) si la promoción no pudo persistirse
===============================================================================
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Mapping
from uuid import UUID

from ....crosscutting.logger import logger
from ....domain.repositories import UserRepository
from ...role_promotion import RolePromotionService
from ...validators import MSG_INVALID_PHONE, clean_text, is_valid_phone, merge_address
from .get_user import MSG_USER_NOT_FOUND
from .user_results import UserError, UserErrorCode, UserResult

MSG_NO_FIELDS = "No fields provided for update"

PROFILE_TEXT_FIELDS: tuple[str, ...] = (
    "first_name",
    "last_name",
    "identification_number",
    "birth_date",
    "activity_type",
    "activity_number",
    "phone",
)


@dataclass(frozen=True)
class UpdateUserProfileInput:
    """
    changes: payload ya parseado (solo claves enviadas por el cliente).
    Claves fuera de PROFILE_TEXT_FIELDS + "address" se ignoran.
    """

    user_id: UUID
    changes: Mapping[str, Any] = field(default_factory=dict)


class UpdateUserProfileUseCase:
    def __init__(
        self,
        *,
        user_repository: UserRepository,
        promotion_service: RolePromotionService,
    ) -> None:
        self._users = user_repository
        self._promotion = promotion_service

    def execute(self, input_data: UpdateUserProfileInput) -> UserResult:
        changes = input_data.changes or {}

        fields: Dict[str, Any] = {
            name: clean_text(changes[name])
            for name in PROFILE_TEXT_FIELDS
            if name in changes
        }
        address_changes = changes.get("address")
        has_address = isinstance(address_changes, Mapping) and bool(address_changes)

        if not fields and not has_address:
            return self._error(UserErrorCode.VALIDATION_ERROR, MSG_NO_FIELDS)

        phone = fields.get("phone")
        if phone is not None and not is_valid_phone(phone):
            return self._error(UserErrorCode.VALIDATION_ERROR, MSG_INVALID_PHONE)

        current = self._users.get_user(input_data.user_id)
        if current is None:
            return self._error(UserErrorCode.NOT_FOUND, MSG_USER_NOT_FOUND)

        if has_address:
            fields["address"] = merge_address(current.address, address_changes)

        updated = self._users.update_user_fields(current.id, fields)
        if updated is None:
            return self._error(UserErrorCode.NOT_FOUND, MSG_USER_NOT_FOUND)

        logger.info(
            "Perfil actualizado",
            extra={"user_id": str(current.id), "fields": sorted(fields)},
        )

        outcome = self._promotion.maybe_promote(current.id)
        return UserResult(
            user=outcome.user,
            completeness=outcome.completeness,
            promoted=outcome.promoted,
        )

    @staticmethod
    def _error(code: UserErrorCode, message: str) -> UserResult:
        return UserResult(error=UserError(code=code, message=message))
