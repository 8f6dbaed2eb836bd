"""
===============================================================================
TARJETA CRC — domain/profile.py
===============================================================================

Módulo:
    Evaluador de completitud de perfil

Responsabilidades:
    - Calcular personal_complete y address_complete a partir de un usuario.
    - Aceptar la entidad User o cualquier proyección (atributos o mapping).
    - Permitir parametrizar los campos requeridos (ProfileRequirements).

Colaboradores:
    - identity.users.User / Address (input típico)
    - application.role_promotion (consume el resultado)
    - interfaces/api (expone user_is_completed / address_is_completed)

Reglas:
    - Función pura: sin I/O, sin mutación, mismo input => mismo output.
    - Nunca lanza: campos ausentes o con forma rara cuentan como incompletos.
    - None, "" y strings solo con espacios cuentan como ausentes.
    - Dirección parcial = incompleta (no hay crédito parcial).
===============================================================================
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping

DEFAULT_PERSONAL_FIELDS: tuple[str, ...] = (
    "first_name",
    "last_name",
    "identification_number",
    "birth_date",
    "activity_type",
    "activity_number",
    "phone",
    "email",
)

DEFAULT_ADDRESS_FIELDS: tuple[str, ...] = (
    "street",
    "city",
    "state",
    "zip_code",
    "country",
)


@dataclass(frozen=True, slots=True)
class ProfileRequirements:
    """Campos que deben estar presentes para cada grupo."""

    personal_fields: tuple[str, ...] = DEFAULT_PERSONAL_FIELDS
    address_fields: tuple[str, ...] = DEFAULT_ADDRESS_FIELDS
    address_attribute: str = "address"


DEFAULT_REQUIREMENTS = ProfileRequirements()


@dataclass(frozen=True, slots=True)
class ProfileCompleteness:
    personal_complete: bool
    address_complete: bool

    @property
    def profile_complete(self) -> bool:
        return self.personal_complete and self.address_complete


def _read(source: Any, name: str) -> Any:
    # R: mappings (payloads/proyecciones) y objetos (entidades) por igual.
    if source is None:
        return None
    if isinstance(source, Mapping):
        return source.get(name)
    return getattr(source, name, None)


def _is_present(value: Any) -> bool:
    if value is None:
        return False
    if isinstance(value, str):
        return bool(value.strip())
    if isinstance(value, (list, tuple, set, dict)):
        return bool(value)
    return True


def is_personal_complete(
    user: Any, requirements: ProfileRequirements = DEFAULT_REQUIREMENTS
) -> bool:
    return all(_is_present(_read(user, f)) for f in requirements.personal_fields)


def is_address_complete(
    user: Any, requirements: ProfileRequirements = DEFAULT_REQUIREMENTS
) -> bool:
    address = _read(user, requirements.address_attribute)
    if address is None or isinstance(address, (str, bytes, int, float, bool)):
        return False
    return all(_is_present(_read(address, f)) for f in requirements.address_fields)


def evaluate_completeness(
    user: Any, requirements: ProfileRequirements = DEFAULT_REQUIREMENTS
) -> ProfileCompleteness:
    """Evalúa ambos grupos. Seguro de llamar cuantas veces se quiera."""
    return ProfileCompleteness(
        personal_complete=is_personal_complete(user, requirements),
        address_complete=is_address_complete(user, requirements),
    )
