# -*- coding: utf-8 -*-
"""
backend/app/modules/webhooks/services/delivery_log_service.py

Historial de entregas y ventana deslizante del modo prueba.

- record(): una fila por llamada entrante, en su propia transacción.
  Es best-effort: si falla, se revierte, se registra en el log del
  proceso y la respuesta original al llamador no cambia.
- record_test_delivery(): guarda lastTestPayload, expulsa las filas más
  antiguas hasta dejar sitio y anota la entrega con
  processed_in_test_mode=True.

Las cabeceras se sanean antes de persistir (sin authorization/cookie).

Autor: Equipo Revenda
Fecha: 2026-03-02
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Mapping, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.modules.webhooks.models import Webhook
from app.modules.webhooks.repositories import WebhookLogRepository, WebhookRepository

logger = logging.getLogger(__name__)

SENSITIVE_HEADERS = frozenset({"authorization", "cookie"})


def sanitize_headers_for_log(headers: Optional[Mapping[str, Any]]) -> Dict[str, str]:
    """Copia las cabeceras como texto omitiendo las sensibles (case-insensitive)."""
    sanitized: Dict[str, str] = {}
    for key, value in (headers or {}).items():
        if str(key).lower() in SENSITIVE_HEADERS:
            continue
        sanitized[str(key)] = value if isinstance(value, str) else ("" if value is None else str(value))
    return sanitized


@dataclass
class DeliveryContext:
    """Datos HTTP de la llamada entrante que se guardan con cada fila."""

    method: str = "POST"
    url: str = ""
    headers: Dict[str, Any] = field(default_factory=dict)


class DeliveryLogService:
    def __init__(
        self,
        log_repo: Optional[WebhookLogRepository] = None,
        webhook_repo: Optional[WebhookRepository] = None,
    ) -> None:
        self.log_repo = log_repo or WebhookLogRepository()
        self.webhook_repo = webhook_repo or WebhookRepository()

    async def _insert(
        self,
        session: AsyncSession,
        *,
        webhook_id,
        context: DeliveryContext,
        payload: Any,
        status_code: int,
        response: Optional[Any],
        error: Optional[str],
        processed_in_test_mode: bool,
    ) -> None:
        await self.log_repo.create(
            session,
            webhook_id=webhook_id,
            method=context.method,
            url=context.url,
            headers=sanitize_headers_for_log(context.headers),
            body=payload,
            response_status=status_code,
            response_body=response,
            error=error,
            processed_in_test_mode=processed_in_test_mode,
        )

    async def record(
        self,
        session: AsyncSession,
        *,
        webhook_id,
        context: DeliveryContext,
        payload: Any,
        status_code: int,
        response: Optional[Any] = None,
        error: Optional[str] = None,
        processed_in_test_mode: bool = False,
    ) -> bool:
        """
        Persiste la entrega y confirma. Nunca lanza.

        Returns:
            True si quedó guardada, False si falló (ya registrado en el log).
        """
        try:
            await self._insert(
                session,
                webhook_id=webhook_id,
                context=context,
                payload=payload,
                status_code=status_code,
                response=response,
                error=error,
                processed_in_test_mode=processed_in_test_mode,
            )
            await session.commit()
            return True
        except SQLAlchemyError:
            logger.exception(
                "webhook_log_write_failed webhook_id=%s status=%s",
                webhook_id,
                status_code,
            )
            await session.rollback()
            return False

    async def record_test_delivery(
        self,
        session: AsyncSession,
        *,
        webhook: Webhook,
        context: DeliveryContext,
        payload: Dict[str, Any],
        response: Dict[str, Any],
        window: int = 2,
    ) -> None:
        """
        Captura en modo prueba: actualiza lastTestPayload y mantiene como
        máximo `window` filas para el webhook (la nueva incluida).

        Todo va en una transacción; un fallo aquí se propaga al manejador
        como error interno.
        """
        await self.webhook_repo.store_test_payload(session, webhook, payload)

        existing = await self.log_repo.count_for_webhook(session, webhook.id)
        if existing >= window:
            evicted = await self.log_repo.delete_oldest(session, webhook.id, existing - window + 1)
            logger.debug("webhook_test_logs_evicted webhook_id=%s count=%s", webhook.id, evicted)

        await self._insert(
            session,
            webhook_id=webhook.id,
            context=context,
            payload=payload,
            status_code=200,
            response=response,
            error=None,
            processed_in_test_mode=True,
        )
        await session.commit()


__all__ = [
    "SENSITIVE_HEADERS",
    "sanitize_headers_for_log",
    "DeliveryContext",
    "DeliveryLogService",
]
# Fin del archivo backend/app/modules/webhooks/services/delivery_log_service.py
