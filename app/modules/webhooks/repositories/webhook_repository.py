# -*- coding: utf-8 -*-
"""
backend/app/modules/webhooks/repositories/webhook_repository.py

Repositorio de configuración de webhooks.

La configuración se lee fresca en cada entrega (sin caché): las reglas
las edita el administrador en cualquier momento. get_live (heredado)
trae las reglas por selectin, ordenadas por position.

Autor: Equipo Revenda
Fecha: 2026-03-02
"""

from __future__ import annotations

from typing import Iterable, Sequence

from sqlalchemy.ext.asyncio import AsyncSession

from app.shared.database.repository import BaseRepository
from app.modules.webhooks.models import Webhook, WebhookFieldMapping


class WebhookRepository(BaseRepository[Webhook]):
    def __init__(self) -> None:
        super().__init__(Webhook)

    async def list_live(self, session: AsyncSession) -> Sequence[Webhook]:
        stmt = self.live_select().order_by(Webhook.created_at.desc())
        result = await session.execute(stmt)
        return result.scalars().all()

    async def replace_mappings(
        self,
        session: AsyncSession,
        webhook: Webhook,
        mappings: Iterable[dict],
    ) -> Webhook:
        """Sustituye la lista completa de reglas conservando el orden recibido."""
        webhook.field_mappings = [
            WebhookFieldMapping(
                external_field=item["external_field"],
                canonical_field=item["canonical_field"],
                prefix=item.get("prefix"),
                suffix=item.get("suffix"),
                position=position,
            )
            for position, item in enumerate(mappings)
        ]
        await session.flush()
        return webhook

    async def store_test_payload(self, session: AsyncSession, webhook: Webhook, payload: dict) -> None:
        webhook.last_test_payload = payload
        await session.flush()

    async def soft_delete(self, session: AsyncSession, webhook: Webhook, **fields) -> Webhook:
        # Un webhook borrado nunca queda activo
        return await super().soft_delete(session, webhook, is_active=False, **fields)

# Fin del archivo backend/app/modules/webhooks/repositories/webhook_repository.py
