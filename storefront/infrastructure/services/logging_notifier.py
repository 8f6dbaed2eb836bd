"""
Name: Logging Password Reset Notifier

Qué es
------
Implementación de `PasswordResetNotifier` que solo escribe en el log.
Es el adapter por defecto: el envío real de mails queda fuera del backend.

CRC (Class-Responsibility-Collaboration)
----------------------------------------
Class: LoggingPasswordResetNotifier
Responsibilities:
  - Registrar el link de reset (para desarrollo / soporte)
  - Registrar la confirmación de cambio de contraseña
Collaborators:
  - domain.services.PasswordResetNotifier (contrato)
  - crosscutting.logger
Constraints:
  - Sin IO de red
  - El token en claro nunca se loguea suelto; solo dentro de reset_url y
    fuera de producción
"""

from __future__ import annotations

from ...crosscutting.logger import logger


class LoggingPasswordResetNotifier:
    def __init__(self, *, include_link: bool = True) -> None:
        self._include_link = include_link

    def send_reset_link(self, email: str, token: str, reset_url: str) -> None:
        extra = {"email": email}
        if self._include_link:
            extra["reset_url"] = reset_url
        logger.info("Link de reset de contraseña emitido", extra=extra)

    def send_reset_confirmation(self, email: str) -> None:
        logger.info("Contraseña restablecida", extra={"email": email})
