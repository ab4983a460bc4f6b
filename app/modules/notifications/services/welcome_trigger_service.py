# -*- coding: utf-8 -*-
"""
backend/app/modules/notifications/services/welcome_trigger_service.py

Disparo del aviso de boas-vindas para usuarios creados vía webhook.

El disparo es "fire-and-forget": `spawn_welcome_trigger` crea una
asyncio.Task que no se espera; su fallo solo llega al log y nunca al
resultado del request que la originó.

Autor: Equipo Revenda
Fecha: 2026-03-02
"""

from __future__ import annotations

import asyncio
import logging
from typing import Optional, Protocol

from app.shared.integrations.email_sender import IEmailSender, get_email_sender
from app.shared.utils.async_job_registry import job_registry
from app.shared.utils.email_utils import mask_email

logger = logging.getLogger(__name__)


class IWelcomeTrigger(Protocol):
    """Protocolo del disparador (para typing e inyección en tests)."""

    async def execute(self, user_id: str, *, email: str, name: Optional[str]) -> bool:
        ...


class WelcomeTriggerService:
    """
    Envía la notificación de boas-vindas.

    Args:
        email_sender: Implementación de IEmailSender; por defecto la que
            indique EMAIL_MODE.
    """

    def __init__(self, email_sender: Optional[IEmailSender] = None) -> None:
        self._email_sender = email_sender

    @property
    def email_sender(self) -> IEmailSender:
        if self._email_sender is None:
            self._email_sender = get_email_sender()
        return self._email_sender

    async def execute(self, user_id: str, *, email: str, name: Optional[str]) -> bool:
        """
        Returns:
            True si se envió, False en caso de error (ya registrado en el log).
        """
        try:
            await self.email_sender.send_welcome_email(email, name)
            logger.info("welcome_trigger_sent user_id=%s email=%s", user_id, mask_email(email))
            return True
        except asyncio.CancelledError:
            raise
        except Exception as e:
            logger.error(
                "welcome_trigger_failed user_id=%s email=%s error=%s",
                user_id,
                mask_email(email),
                str(e)[:200],
            )
            return False


def spawn_welcome_trigger(
    trigger: IWelcomeTrigger,
    user_id: str,
    *,
    email: str,
    name: Optional[str],
) -> asyncio.Task:
    """
    Lanza el disparo sin esperarlo. La task queda en job_registry hasta
    terminar (o hasta la cancelación en shutdown).
    """

    async def _run() -> None:
        try:
            await trigger.execute(user_id, email=email, name=name)
        except asyncio.CancelledError:
            raise
        except Exception:
            logger.exception("welcome_trigger_crashed user_id=%s", user_id)

    return job_registry.spawn(f"welcome:{user_id}", _run())


__all__ = ["IWelcomeTrigger", "WelcomeTriggerService", "spawn_welcome_trigger"]
# Fin del archivo backend/app/modules/notifications/services/welcome_trigger_service.py
