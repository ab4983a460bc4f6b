# -*- coding: utf-8 -*-
"""
backend/app/shared/integrations/email_sender.py

Factory unificado para EmailSender.
Soporta dos modos:
- console: stub que solo loguea (desarrollo/tests)
- api: envío via MailerSend (httpx)

Autor: Equipo Revenda
Actualizado: 2026-03-02
"""

from __future__ import annotations

import logging
from typing import Optional, Protocol, TYPE_CHECKING

from app.shared.utils.email_utils import mask_email

if TYPE_CHECKING:
    from app.shared.config.settings_base import BaseAppSettings

logger = logging.getLogger(__name__)


class IEmailSender(Protocol):
    """Protocolo para implementaciones de email sender."""
    async def send_welcome_email(self, to_email: str, full_name: Optional[str]) -> None: ...


class StubEmailSender:
    """Implementación que no envía correos; solo hace logging (modo console)."""

    async def send_welcome_email(self, to_email: str, full_name: Optional[str]) -> None:
        logger.info(
            "[CONSOLE EMAIL] Boas-vindas → %s | %s",
            mask_email(to_email),
            full_name or "-",
        )


class EmailSender:
    """
    Selección del email sender según settings.

    - Desarrollo/tests: EMAIL_MODE=console
    - Producción: EMAIL_MODE=api + MAILERSEND_API_KEY + MAILERSEND_FROM_EMAIL
    """

    @staticmethod
    def from_settings(settings: BaseAppSettings) -> IEmailSender:
        """
        Crea el email sender apropiado según settings (fuente de verdad).

        Raises:
            ValueError: si email_mode=api pero faltan credenciales
        """
        mode = (settings.email_mode or "console").strip().lower()

        logger.debug("[EmailSender] mode=%r", mode)

        if mode == "api":
            from app.shared.integrations.mailersend_email_sender import MailerSendEmailSender
            return MailerSendEmailSender.from_settings(settings)

        return StubEmailSender()


def get_email_sender() -> IEmailSender:
    """Atajo: EmailSender.from_settings() con la configuración global."""
    from app.shared.config import get_settings
    return EmailSender.from_settings(get_settings())


__all__ = ["IEmailSender", "StubEmailSender", "EmailSender", "get_email_sender"]
# Fin del archivo backend/app/shared/integrations/email_sender.py
