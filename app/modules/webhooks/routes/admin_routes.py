# -*- coding: utf-8 -*-
"""
backend/app/modules/webhooks/routes/admin_routes.py

Administración de webhooks (protegida con token de servicio interno).

Endpoints (prefijo /admin/webhooks):
- GET    /                     listar
- POST   /                     crear (inactivo y en modo prueba)
- GET    /logs                 historial de todos los webhooks
- GET    /{id}                 detalle
- PUT    /{id}                 editar y reemplazar reglas
- DELETE /{id}                 borrado lógico
- POST   /{id}/activate        activar (requiere reglas)
- POST   /{id}/deactivate      volver a modo prueba
- GET    /{id}/logs            historial del webhook
- POST   /{id}/reprocess       reprocesar el último payload de prueba

Autor: Equipo Revenda
Fecha: 2026-03-02
"""

from __future__ import annotations

import logging
import secrets
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, Request, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.modules.webhooks.facades import WebhookReceiveHandler
from app.modules.webhooks.models import Webhook
from app.modules.webhooks.repositories import WebhookLogRepository, WebhookRepository
from app.modules.webhooks.routes.receive_routes import get_receive_handler
from app.modules.webhooks.schemas import (
    WebhookCreate,
    WebhookLogOut,
    WebhookLogPage,
    WebhookOut,
    WebhookUpdate,
)
from app.modules.webhooks.services.delivery_log_service import DeliveryContext
from app.shared.config import settings
from app.shared.database.database import get_async_session
from app.shared.http_utils.request_meta import get_request_meta
from app.shared.internal_auth import require_internal_service_token
from app.shared.utils.json_response import json_response_utf8

logger = logging.getLogger(__name__)

DEFAULT_LOG_LIMIT = 100
MAX_LOG_LIMIT = 500

router = APIRouter(
    prefix="/admin/webhooks",
    tags=["admin:webhooks"],
    dependencies=[Depends(require_internal_service_token)],
)

webhook_repo = WebhookRepository()
log_repo = WebhookLogRepository()


def build_server_url(webhook_id) -> str:
    path = f"/webhooks/receive/{webhook_id}"
    base = (settings.webhook_public_base_url or "").rstrip("/")
    return f"{base}{path}" if base else path


def clamp_log_limit(limit: Optional[int]) -> int:
    return min(limit or DEFAULT_LOG_LIMIT, MAX_LOG_LIMIT)


async def _get_or_404(session: AsyncSession, webhook_id: str) -> Webhook:
    webhook = await webhook_repo.get_live(session, webhook_id)
    if webhook is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Webhook não encontrado")
    return webhook


async def _reload(session: AsyncSession, webhook: Webhook) -> Webhook:
    await session.refresh(webhook, attribute_names=["field_mappings"])
    return webhook


@router.get("", response_model=List[WebhookOut])
async def list_webhooks(session: AsyncSession = Depends(get_async_session)):
    return await webhook_repo.list_live(session)


@router.post("", response_model=WebhookOut, status_code=status.HTTP_201_CREATED)
async def create_webhook(payload: WebhookCreate, session: AsyncSession = Depends(get_async_session)):
    webhook = await webhook_repo.create(
        session,
        name=payload.name.strip(),
        description=payload.description,
        secret=f"whsec_{secrets.token_hex(24)}",
        is_active=False,
        test_mode=True,
        field_mappings=[],
    )
    webhook.server_url = build_server_url(webhook.id)
    await webhook_repo.replace_mappings(session, webhook, [m.model_dump() for m in payload.field_mappings])
    await session.commit()

    logger.info("webhook_created webhook_id=%s mappings=%s", webhook.id, len(payload.field_mappings))
    return await _reload(session, webhook)


@router.get("/logs", response_model=WebhookLogPage)
async def list_all_logs(
    limit: Optional[int] = Query(default=None, ge=1),
    offset: int = Query(default=0, ge=0),
    session: AsyncSession = Depends(get_async_session),
):
    rows, total = await log_repo.list_page(session, limit=clamp_log_limit(limit), offset=offset)
    return WebhookLogPage(data=[WebhookLogOut.model_validate(r) for r in rows], total=total)


@router.get("/{webhook_id}", response_model=WebhookOut)
async def get_webhook(webhook_id: str, session: AsyncSession = Depends(get_async_session)):
    return await _get_or_404(session, webhook_id)


@router.put("/{webhook_id}", response_model=WebhookOut)
async def update_webhook(
    webhook_id: str,
    payload: WebhookUpdate,
    session: AsyncSession = Depends(get_async_session),
):
    webhook = await _get_or_404(session, webhook_id)

    changes = payload.model_dump(exclude_unset=True, exclude={"field_mappings"})
    if changes:
        await webhook_repo.update(session, webhook, **changes)
    if payload.field_mappings is not None:
        await webhook_repo.replace_mappings(session, webhook, [m.model_dump() for m in payload.field_mappings])
    await session.commit()

    logger.info("webhook_updated webhook_id=%s fields=%s", webhook.id, sorted(payload.model_fields_set))
    return await _reload(session, webhook)


@router.delete("/{webhook_id}", status_code=status.HTTP_204_NO_CONTENT, response_class=Response)
async def delete_webhook(webhook_id: str, session: AsyncSession = Depends(get_async_session)):
    webhook = await _get_or_404(session, webhook_id)
    await webhook_repo.soft_delete(session, webhook)
    await session.commit()
    logger.info("webhook_deleted webhook_id=%s", webhook_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post("/{webhook_id}/activate", response_model=WebhookOut)
async def activate_webhook(webhook_id: str, session: AsyncSession = Depends(get_async_session)):
    webhook = await _get_or_404(session, webhook_id)
    if not webhook.field_mappings:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Configure ao menos um campo mapeado antes de ativar",
        )

    await webhook_repo.update(session, webhook, is_active=True, test_mode=False)
    await session.commit()
    logger.info("webhook_activated webhook_id=%s", webhook_id)
    return await _reload(session, webhook)


@router.post("/{webhook_id}/deactivate", response_model=WebhookOut)
async def deactivate_webhook(webhook_id: str, session: AsyncSession = Depends(get_async_session)):
    webhook = await _get_or_404(session, webhook_id)
    await webhook_repo.update(session, webhook, is_active=False, test_mode=True)
    await session.commit()
    logger.info("webhook_deactivated webhook_id=%s", webhook_id)
    return await _reload(session, webhook)


@router.get("/{webhook_id}/logs", response_model=WebhookLogPage)
async def list_webhook_logs(
    webhook_id: str,
    limit: Optional[int] = Query(default=None, ge=1),
    offset: int = Query(default=0, ge=0),
    session: AsyncSession = Depends(get_async_session),
):
    webhook = await _get_or_404(session, webhook_id)
    rows, total = await log_repo.list_page(
        session,
        webhook_id=webhook.id,
        limit=clamp_log_limit(limit),
        offset=offset,
    )
    return WebhookLogPage(data=[WebhookLogOut.model_validate(r) for r in rows], total=total)


@router.post("/{webhook_id}/reprocess")
async def reprocess_webhook(
    webhook_id: str,
    request: Request,
    session: AsyncSession = Depends(get_async_session),
    handler: WebhookReceiveHandler = Depends(get_receive_handler),
):
    """
    Reenvía lastTestPayload por el handler de recepción con el bypass de
    modo prueba / inactivo. Devuelve el status y cuerpo del handler.
    """
    webhook = await _get_or_404(session, webhook_id)
    if not webhook.last_test_payload:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Nenhum payload de teste salvo")
    if not webhook.field_mappings:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Configure os campos mapeados antes de reprocessar",
        )

    payload = dict(webhook.last_test_payload)
    logger.info("webhook_reprocess_requested webhook_id=%s", webhook.id)

    status_code, body = await handler.handle(
        session,
        webhook.id,
        payload,
        context=DeliveryContext(
            method="POST",
            url=build_server_url(webhook.id),
            headers={"x-reprocess-source": "admin"},
        ),
        is_reprocess=True,
        request_meta=get_request_meta(request),
    )
    return json_response_utf8(body, status_code=status_code)


# Fin del archivo backend/app/modules/webhooks/routes/admin_routes.py
