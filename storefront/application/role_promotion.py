"""
===============================================================================
SERVICE: Role Promotion (guest -> user)
===============================================================================

Business Goal:
    Promover automáticamente a un usuario guest cuando completa datos
    personales y dirección. La transición es de una sola vía: nunca se
    degrada a guest y nunca se toca a un admin.

Why (Context / Intención):
    - La completitud se recalcula en cada disparo (login, current user,
      update de perfil); no hay flag "dirty" ni estado cacheado.
    - El servicio relee el usuario del store para decidir con datos frescos.

-------------------------------------------------------------------------------
CRC CARD (Class-Responsibility-Collaborator)
-------------------------------------------------------------------------------
Class:
    RolePromotionService

Responsibilities:
    - Cargar el usuario (UserNotFoundError si no existe).
    - Evaluar completitud con ProfileRequirements inyectados.
    - Si role == guest (exacto) y ambos grupos completos: persistir role=user.
    - Traducir fallas de escritura a UpdateFailedError.

Collaborators:
    - UserRepository.get_user / update_role
    - domain.profile.evaluate_completeness
    - crosscutting.logger

Concurrency:
    - read -> decide -> write sin aislamiento transaccional. Dos promociones
      concurrentes convergen al mismo estado; ante un update concurrente de
      otros campos gana el último escritor.
===============================================================================
"""

from __future__ import annotations

from dataclasses import dataclass
from uuid import UUID

from ..crosscutting.exceptions import (
    DatabaseError,
    UpdateFailedError,
    UserNotFoundError,
)
from ..crosscutting.logger import logger
from ..domain.profile import (
    DEFAULT_REQUIREMENTS,
    ProfileCompleteness,
    ProfileRequirements,
    evaluate_completeness,
)
from ..domain.repositories import UserRepository
from ..identity.users import User, UserRole


@dataclass(frozen=True)
class PromotionOutcome:
    promoted: bool
    personal_complete: bool
    address_complete: bool
    user: User

    @property
    def completeness(self) -> ProfileCompleteness:
        return ProfileCompleteness(
            personal_complete=self.personal_complete,
            address_complete=self.address_complete,
        )


class RolePromotionService:
    def __init__(
        self,
        user_repository: UserRepository,
        requirements: ProfileRequirements = DEFAULT_REQUIREMENTS,
    ) -> None:
        self._users = user_repository
        self._requirements = requirements

    @property
    def requirements(self) -> ProfileRequirements:
        return self._requirements

    def maybe_promote(self, user_id: UUID) -> PromotionOutcome:
        user = self._users.get_user(user_id)
        if user is None:
            raise UserNotFoundError(str(user_id))

        flags = evaluate_completeness(user, self._requirements)

        if not (user.role == UserRole.GUEST and flags.profile_complete):
            return PromotionOutcome(
                promoted=False,
                personal_complete=flags.personal_complete,
                address_complete=flags.address_complete,
                user=user,
            )

        try:
            updated = self._users.update_role(user.id, UserRole.USER)
        except DatabaseError as exc:
            logger.error(
                "Promoción de rol falló al persistir",
                extra={"user_id": str(user.id), "error_id": exc.error_id},
            )
            raise UpdateFailedError(
                "Failed to update user role", original_error=exc
            ) from exc

        if updated is None:
            # R: el usuario desapareció entre la lectura y la escritura.
            raise UpdateFailedError("Failed to update user role")

        logger.info(
            "Rol promovido guest -> user",
            extra={"user_id": str(user.id)},
        )
        return PromotionOutcome(
            promoted=True,
            personal_complete=flags.personal_complete,
            address_complete=flags.address_complete,
            user=updated,
        )
