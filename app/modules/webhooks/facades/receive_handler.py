# -*- coding: utf-8 -*-
"""
backend/app/modules/webhooks/facades/receive_handler.py

Orquestación de una entrega entrante:

    config (lectura fresca) -> modo prueba / gate activo -> mapeo ->
    máquina de estados -> commit -> log de entrega -> respuesta

Todos los caminos que conocen el webhook dejan una fila en el historial;
un fallo al leer la configuración también lo intenta si el id es un UUID.
Los errores de configuración y de entrada responden 4xx con su mensaje;
cualquier otra excepción responde 500 genérico y nunca sale del handler.

El reprocesamiento interno (is_reprocess=True) ignora el modo prueba y
el gate de activo, pero no la exigencia de reglas ni de email.

Autor: Equipo Revenda
Fecha: 2026-03-02
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Optional, Tuple

from sqlalchemy.ext.asyncio import AsyncSession

from app.modules.notifications.services import (
    IWelcomeTrigger,
    WelcomeTriggerService,
    spawn_welcome_trigger,
)
from app.modules.webhooks.enums import WebhookOutcome
from app.modules.webhooks.exceptions import (
    WebhookInactiveError,
    WebhookNotFoundError,
    WebhookProcessingError,
    WebhookWithoutMappingsError,
)
from app.modules.webhooks.facades.account_state_machine import AccountStateMachine
from app.modules.webhooks.repositories import WebhookRepository
from app.modules.webhooks.services.delivery_log_service import DeliveryContext, DeliveryLogService
from app.modules.webhooks.services.field_mapper import map_payload
from app.shared.config import settings
from app.shared.database.repository import parse_uuid

logger = logging.getLogger(__name__)

TEST_MODE_MESSAGE = "Webhook recebido em modo teste"
GENERIC_ERROR_MESSAGE = "Erro ao processar webhook"

HandlerResult = Tuple[int, Dict[str, Any]]


def error_body(message: str) -> Dict[str, Any]:
    return {"success": False, "error": {"message": message}}


class WebhookReceiveHandler:
    """
    Punto único de procesamiento, usado por el endpoint público y por el
    reprocesamiento desde administración.
    """

    def __init__(
        self,
        *,
        webhook_repo: Optional[WebhookRepository] = None,
        delivery_log: Optional[DeliveryLogService] = None,
        state_machine: Optional[AccountStateMachine] = None,
        welcome_trigger: Optional[IWelcomeTrigger] = None,
        test_log_limit: Optional[int] = None,
    ) -> None:
        self.webhook_repo = webhook_repo or WebhookRepository()
        self.delivery_log = delivery_log or DeliveryLogService()
        self.state_machine = state_machine or AccountStateMachine()
        self.welcome_trigger = welcome_trigger or WelcomeTriggerService()
        self.test_log_limit = test_log_limit or settings.webhook_test_log_limit

    async def handle(
        self,
        session: AsyncSession,
        webhook_id: Any,
        payload: Any,
        *,
        context: Optional[DeliveryContext] = None,
        is_reprocess: bool = False,
        request_meta: Optional[Dict[str, Any]] = None,
    ) -> HandlerResult:
        """
        Procesa una entrega y devuelve (status_code, body).

        Args:
            session: Sesión async (el handler confirma o revierte)
            webhook_id: Id recibido en la URL
            payload: Cuerpo ya decodificado; si no es objeto se usa {}
            context: Método, URL y cabeceras para el historial
            is_reprocess: Reprocesamiento interno autorizado
            request_meta: ip_address / user_agent para auditoría
        """
        body: Dict[str, Any] = payload if isinstance(payload, dict) else {}
        context = context or DeliveryContext()

        try:
            webhook = await self.webhook_repo.get_live(session, webhook_id)
        except Exception as e:
            logger.exception("webhook_config_load_failed webhook_id=%s", webhook_id)
            await session.rollback()
            parsed_id = parse_uuid(webhook_id)
            if parsed_id is not None:
                await self.delivery_log.record(
                    session,
                    webhook_id=parsed_id,
                    context=context,
                    payload=body,
                    status_code=500,
                    error=str(e) or e.__class__.__name__,
                )
            return 500, error_body(GENERIC_ERROR_MESSAGE)

        if webhook is None:
            logger.info("webhook_not_found webhook_id=%s", webhook_id)
            return WebhookNotFoundError.status_code, error_body(WebhookNotFoundError.public_message)

        # Tras un rollback los atributos ORM expiran; se copian antes.
        wh_id = webhook.id
        logger.info(
            "webhook_received webhook_id=%s test_mode=%s active=%s reprocess=%s",
            wh_id,
            webhook.test_mode,
            webhook.is_active,
            is_reprocess,
        )

        try:
            if webhook.test_mode and not is_reprocess:
                response = {"success": True, "data": {"message": TEST_MODE_MESSAGE}}
                await self.delivery_log.record_test_delivery(
                    session,
                    webhook=webhook,
                    context=context,
                    payload=body,
                    response=response,
                    window=self.test_log_limit,
                )
                return 200, response

            if not webhook.is_active and not is_reprocess:
                raise WebhookInactiveError()

            if not webhook.field_mappings:
                raise WebhookWithoutMappingsError()

            record = map_payload(body, webhook.field_mappings)
            result = await self.state_machine.apply(
                session,
                record,
                webhook_id=wh_id,
                request_meta=request_meta,
            )
            await session.commit()

        except WebhookProcessingError as e:
            await session.rollback()
            internal_error = str(e.__cause__) if e.__cause__ else e.message
            if e.status_code >= 500:
                logger.error("webhook_processing_conflict webhook_id=%s error=%s", wh_id, internal_error[:300])
            else:
                logger.info("webhook_rejected webhook_id=%s status=%s reason=%s", wh_id, e.status_code, e.message)
            await self.delivery_log.record(
                session,
                webhook_id=wh_id,
                context=context,
                payload=body,
                status_code=e.status_code,
                error=internal_error,
            )
            return e.status_code, error_body(e.message)

        except Exception as e:
            logger.exception("webhook_processing_failed webhook_id=%s", wh_id)
            await session.rollback()
            await self.delivery_log.record(
                session,
                webhook_id=wh_id,
                context=context,
                payload=body,
                status_code=500,
                error=str(e) or e.__class__.__name__,
            )
            return 500, error_body(GENERIC_ERROR_MESSAGE)

        response = result.to_response()
        await self.delivery_log.record(
            session,
            webhook_id=wh_id,
            context=context,
            payload=body,
            status_code=result.status_code,
            response=response,
        )

        if result.outcome is WebhookOutcome.CREATED:
            spawn_welcome_trigger(
                self.welcome_trigger,
                result.user_id,
                email=result.email,
                name=result.summary.get("usuario", {}).get("nome"),
            )

        return result.status_code, response


__all__ = [
    "WebhookReceiveHandler",
    "HandlerResult",
    "TEST_MODE_MESSAGE",
    "GENERIC_ERROR_MESSAGE",
    "error_body",
]
# Fin del archivo backend/app/modules/webhooks/facades/receive_handler.py
