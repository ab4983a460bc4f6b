# -*- coding: utf-8 -*-
"""
backend/app/modules/webhooks/repositories/webhook_log_repository.py

Repositorio del historial de entregas (webhook_logs).

Autor: Equipo Revenda
Fecha: 2026-03-02
"""

from __future__ import annotations

from typing import Sequence, Tuple

from sqlalchemy import delete, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.shared.database.repository import BaseRepository
from app.modules.webhooks.models import WebhookLog


class WebhookLogRepository(BaseRepository[WebhookLog]):
    def __init__(self) -> None:
        super().__init__(WebhookLog)

    async def count_for_webhook(self, session: AsyncSession, webhook_id) -> int:
        stmt = select(func.count()).select_from(WebhookLog).where(WebhookLog.webhook_id == webhook_id)
        result = await session.execute(stmt)
        return int(result.scalar_one())

    async def delete_oldest(self, session: AsyncSession, webhook_id, count: int = 1) -> int:
        """Borra las `count` filas más antiguas (received_at, id). Devuelve cuántas borró."""
        if count < 1:
            return 0

        oldest_ids = (
            select(WebhookLog.id)
            .where(WebhookLog.webhook_id == webhook_id)
            .order_by(WebhookLog.received_at.asc(), WebhookLog.id.asc())
            .limit(count)
        )
        ids = list((await session.execute(oldest_ids)).scalars().all())
        if not ids:
            return 0

        await session.execute(
            delete(WebhookLog)
            .where(WebhookLog.id.in_(ids))
            .execution_options(synchronize_session="fetch")
        )
        return len(ids)

    async def list_page(
        self,
        session: AsyncSession,
        *,
        webhook_id=None,
        limit: int = 100,
        offset: int = 0,
    ) -> Tuple[Sequence[WebhookLog], int]:
        """Página de logs (más recientes primero) y total. Sin webhook_id: todos."""
        total_stmt = select(func.count()).select_from(WebhookLog)
        stmt = select(WebhookLog)
        if webhook_id is not None:
            total_stmt = total_stmt.where(WebhookLog.webhook_id == webhook_id)
            stmt = stmt.where(WebhookLog.webhook_id == webhook_id)

        total = int((await session.execute(total_stmt)).scalar_one())

        stmt = (
            stmt
            .order_by(WebhookLog.received_at.desc(), WebhookLog.id.desc())
            .offset(offset)
            .limit(limit)
        )
        rows = (await session.execute(stmt)).scalars().all()
        return rows, total

# Fin del archivo backend/app/modules/webhooks/repositories/webhook_log_repository.py
