# -*- coding: utf-8 -*-
"""
backend/app/shared/integrations/mailersend_email_sender.py

Envío del correo de boas-vindas usando MailerSend API (httpx).

Autor: Equipo Revenda
Creado: 2026-03-02
"""

from __future__ import annotations

import logging
from typing import Optional, TYPE_CHECKING

import httpx

from app.shared.utils.email_utils import mask_email

if TYPE_CHECKING:
    from app.shared.config.settings_base import BaseAppSettings

logger = logging.getLogger(__name__)

# MailerSend API endpoint
MAILERSEND_API_URL = "https://api.mailersend.com/v1/email"


class MailerSendError(RuntimeError):
    """Fallo al entregar un correo a MailerSend."""


class MailerSendEmailSender:
    """Envío de correos usando MailerSend API."""

    def __init__(
        self,
        api_key: str,
        from_email: str,
        from_name: str = "Revenda",
        timeout: int = 30,
        frontend_url: Optional[str] = None,
    ):
        if not api_key:
            raise ValueError("MAILERSEND_API_KEY es requerido")
        if not from_email:
            raise ValueError("MAILERSEND_FROM_EMAIL es requerido")

        self.api_key = api_key
        self.from_email = from_email
        self.from_name = from_name
        self.timeout = timeout
        self.frontend_url = (frontend_url or "").strip().rstrip("/") or None

    @classmethod
    def from_settings(cls, settings: BaseAppSettings) -> "MailerSendEmailSender":
        api_key = ""
        if settings.mailersend_api_key:
            api_key = settings.mailersend_api_key.get_secret_value().strip()

        return cls(
            api_key=api_key,
            from_email=(settings.mailersend_from_email or "").strip(),
            from_name=(settings.mailersend_from_name or "Revenda").strip(),
            timeout=settings.email_timeout_sec or 30,
            frontend_url=settings.frontend_url,
        )

    def _build_welcome_body(self, full_name: Optional[str]) -> tuple[str, str]:
        user_name = full_name or "cliente"
        login_line = f"\nAcesse: {self.frontend_url}/login" if self.frontend_url else ""
        text = (
            f"Olá, {user_name}!\n\n"
            "Sua conta foi criada. Entre com a senha provisória informada pelo "
            "suporte e troque-a no primeiro acesso."
            f"{login_line}\n"
        )
        return f"<pre>{text}</pre>", text

    async def _send_email(
        self, to_email: str, subject: str, html_body: str, text_body: str
    ) -> str:
        """Envía email via MailerSend API. Retorna message_id."""
        payload = {
            "from": {"email": self.from_email, "name": self.from_name},
            "to": [{"email": to_email}],
            "subject": subject,
            "html": html_body,
            "text": text_body,
        }
        headers = {
            "Authorization": f"Bearer {self.api_key}",
            "Content-Type": "application/json",
        }

        async with httpx.AsyncClient(timeout=self.timeout) as client:
            try:
                response = await client.post(MAILERSEND_API_URL, json=payload, headers=headers)
            except httpx.TimeoutException as e:
                logger.error("[MailerSend] timeout: to=%s error=%s", mask_email(to_email), e)
                raise MailerSendError(f"MailerSend timeout: {e}") from e
            except httpx.RequestError as e:
                logger.error("[MailerSend] request error: to=%s error=%s", mask_email(to_email), e)
                raise MailerSendError(f"MailerSend request error: {e}") from e

        # MailerSend responde 202 Accepted
        if response.status_code == 202:
            message_id = response.headers.get("X-Message-Id", "accepted")
            logger.info("[MailerSend] sent ok: to=%s message_id=%s", mask_email(to_email), message_id)
            return message_id

        logger.error(
            "[MailerSend] send failed: to=%s status=%d body=%s",
            mask_email(to_email),
            response.status_code,
            response.text[:500],
        )
        raise MailerSendError(
            f"MailerSend API error: {response.status_code} - {response.text[:200]}"
        )

    async def send_welcome_email(self, to_email: str, full_name: Optional[str]) -> None:
        """Envía email de boas-vindas."""
        html, text = self._build_welcome_body(full_name)
        await self._send_email(to_email, "Bem-vindo à Revenda", html, text)


__all__ = ["MailerSendEmailSender", "MailerSendError"]
# Fin del archivo backend/app/shared/integrations/mailersend_email_sender.py
