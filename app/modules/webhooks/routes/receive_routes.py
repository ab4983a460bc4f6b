# -*- coding: utf-8 -*-
"""
backend/app/modules/webhooks/routes/receive_routes.py

Endpoint público de recepción:
- POST /webhooks/receive/{webhook_id}

El cuerpo se decodifica de forma tolerante: JSON inválido o un valor que
no es objeto se procesa como {}. La respuesta siempre es
{"success": bool, "data" | "error"} con el status que decide el handler.

Autor: Equipo Revenda
Fecha: 2026-03-02
"""

from __future__ import annotations

import logging
import secrets
from typing import Any, Dict

from fastapi import APIRouter, Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from app.modules.webhooks.facades import WebhookReceiveHandler
from app.modules.webhooks.services.delivery_log_service import DeliveryContext
from app.shared.config import settings
from app.shared.database.database import get_async_session
from app.shared.http_utils.request_meta import get_request_meta
from app.shared.utils.json_response import UTF8JSONResponse, json_response_utf8

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/webhooks",
    tags=["webhooks:receive"],
)


def get_receive_handler() -> WebhookReceiveHandler:
    return WebhookReceiveHandler()


def is_reprocess_request(request: Request) -> bool:
    """La cabecera de reprocesamiento debe coincidir exactamente con el secreto."""
    provided = request.headers.get(settings.webhook_reprocess_header)
    if not provided:
        return False
    expected = settings.webhook_reprocess_secret.get_secret_value()
    return secrets.compare_digest(provided.encode("utf-8"), expected.encode("utf-8"))


async def read_json_object(request: Request) -> Dict[str, Any]:
    try:
        payload = await request.json()
    except ValueError:
        logger.debug("webhook_body_not_json path=%s", request.url.path)
        return {}
    return payload if isinstance(payload, dict) else {}


@router.post("/receive/{webhook_id}", response_class=UTF8JSONResponse)
async def receive_webhook(
    webhook_id: str,
    request: Request,
    session: AsyncSession = Depends(get_async_session),
    handler: WebhookReceiveHandler = Depends(get_receive_handler),
):
    """
    Recibe la notificación de una plataforma externa.

    - modo prueba: guarda el payload y responde 200
    - activo: mapea y crea/restaura/actualiza usuario y cuenta (201/200)
    - 400/404 para errores de configuración o de entrada, 500 genérico
    """
    payload = await read_json_object(request)
    context = DeliveryContext(
        method=request.method,
        url=str(request.url),
        headers=dict(request.headers),
    )

    status_code, body = await handler.handle(
        session,
        webhook_id,
        payload,
        context=context,
        is_reprocess=is_reprocess_request(request),
        request_meta=get_request_meta(request),
    )
    return json_response_utf8(body, status_code=status_code)


# Fin del archivo backend/app/modules/webhooks/routes/receive_routes.py
