"""
===============================================================================
TARJETA CRC — application/validators.py
===============================================================================

Módulo:
    Normalización y validación de inputs de perfil (sin I/O)

Responsabilidades:
    - Normalizar strings (trim; vacío => None) y emails (trim + lower).
    - Validar formato de email, teléfono y largo de password.
    - Construir Address a partir de payloads parciales (merge sobre la actual).

Colaboradores:
    - application.usecases.auth (registro / alta de admin / login)
    - application.usecases.users (update de perfil)
    - identity.users.Address
===============================================================================
"""

from __future__ import annotations

import re
from dataclasses import fields as dataclass_fields
from dataclasses import replace
from typing import Any, Mapping

from ..identity.users import Address

EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
PHONE_PATTERN = re.compile(r"^[\d\-()\s+]+$")
MIN_PASSWORD_LENGTH = 8

ADDRESS_FIELDS: tuple[str, ...] = tuple(f.name for f in dataclass_fields(Address))

MSG_INVALID_EMAIL = "Please use a valid email address"
MSG_INVALID_PHONE = "Please provide a valid phone number"
MSG_SHORT_PASSWORD = (
    f"Password must be at least {MIN_PASSWORD_LENGTH} characters long"
)
MSG_INCOMPLETE_ADDRESS = "All address fields are required if address is provided"


def clean_text(value: Any) -> str | None:
    """Trim; strings vacíos (o solo espacios) => None."""
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def normalize_email(value: Any) -> str | None:
    text = clean_text(value)
    return text.lower() if text else None


def is_valid_email(email: str | None) -> bool:
    return bool(email) and EMAIL_PATTERN.match(email) is not None


def is_valid_phone(phone: str | None) -> bool:
    return bool(phone) and PHONE_PATTERN.match(phone) is not None


def is_valid_password(password: str | None) -> bool:
    return bool(password) and len(password) >= MIN_PASSWORD_LENGTH


def address_from_mapping(data: Mapping[str, Any] | None) -> Address | None:
    if not data:
        return None
    values = {name: clean_text(data.get(name)) for name in ADDRESS_FIELDS}
    if not any(values.values()):
        return None
    return Address(**values)


def missing_address_fields(address: Address | None) -> list[str]:
    if address is None:
        return list(ADDRESS_FIELDS)
    return [name for name in ADDRESS_FIELDS if not getattr(address, name)]


def merge_address(current: Address | None, changes: Mapping[str, Any]) -> Address:
    """
    Aplica un payload parcial sobre la dirección actual.

    Solo se pisan las claves presentes; un valor vacío borra el campo.
    """
    base = current or Address()
    updates = {
        name: clean_text(changes[name]) for name in ADDRESS_FIELDS if name in changes
    }
    return replace(base, **updates)
