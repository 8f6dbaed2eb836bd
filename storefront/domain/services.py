"""
===============================================================================
TARJETA CRC — domain/services.py
===============================================================================

Módulo:
    Puertos de Servicios Externos (Protocols)

Responsabilidades:
    - Definir el contrato para avisar al usuario del flujo de reset de
      contraseña (link con token y confirmación).
    - Mantener el dominio independiente del canal (mail, cola, log).

Colaboradores:
    - infrastructure/services/*: implementaciones concretas.
    - application/usecases/auth/password_reset.py: consume este puerto.

Reglas:
    - SOLO interfaces: nada de implementación.
===============================================================================
"""

from __future__ import annotations

from typing import Protocol


class PasswordResetNotifier(Protocol):
    """Contrato para entregar el link de reset al usuario."""

    def send_reset_link(self, email: str, token: str, reset_url: str) -> None:
        ...

    def send_reset_confirmation(self, email: str) -> None:
        ...
