# -*- coding: utf-8 -*-
"""
backend/app/modules/webhooks/services/plan_resolver.py

Resuelve el plan referido por una entrega.

La plataforma externa manda un token de plan (id interno o nombre
comercial) y, aparte, la oferta ("trimestral", {"interval": ...}).
Un mismo nombre puede tener variantes por duración, así que:

1. resolve_base: id exacto (no borrado) y, si no, nombre exacto.
2. resolve_by_offer: con el nombre del plan base y el bucket de duración
   de la oferta busca la variante hermana; si no existe, el plan base.

Autor: Equipo Revenda
Fecha: 2026-03-02
"""

from __future__ import annotations

import logging
from typing import Any, Optional

from sqlalchemy.ext.asyncio import AsyncSession

from app.modules.accounts.models import Plan
from app.modules.accounts.repositories import PlanRepository
from app.modules.webhooks.services.recurrence_parser import parse_recurrence, to_duration_months

logger = logging.getLogger(__name__)


class PlanResolver:
    def __init__(self, plan_repo: Optional[PlanRepository] = None) -> None:
        self.plan_repo = plan_repo or PlanRepository()

    async def _resolve_base_plan(self, session: AsyncSession, identifier_or_name: Optional[str]) -> Optional[Plan]:
        token = (identifier_or_name or "").strip()
        if not token:
            return None

        plan = await self.plan_repo.get_live(session, token)
        if plan is None:
            plan = await self.plan_repo.get_live_by_name(session, token)
        return plan

    async def resolve_base(self, session: AsyncSession, identifier_or_name: Optional[str]):
        """Id del plan base o None."""
        plan = await self._resolve_base_plan(session, identifier_or_name)
        return plan.id if plan else None

    async def resolve_name(self, session: AsyncSession, identifier_or_name: Optional[str]) -> Optional[str]:
        """Nombre comercial del plan base (se usa como nombre de la cuenta)."""
        plan = await self._resolve_base_plan(session, identifier_or_name)
        return plan.name if plan else None

    async def resolve_by_offer(
        self,
        session: AsyncSession,
        identifier_or_name: Optional[str],
        offer_raw: Any,
        quantity_raw: Any = None,
    ):
        """
        Id de la variante cuya duración coincide con la oferta.

        La cantidad no cambia el bucket: 2 × trimestral sigue buscando el
        plan de 3 meses (la cantidad solo alarga la fecha de vencimiento).
        """
        base = await self._resolve_base_plan(session, identifier_or_name)
        if base is None:
            return None

        if offer_raw is None or (isinstance(offer_raw, str) and not offer_raw.strip()):
            return base.id

        duration_months = to_duration_months(parse_recurrence(offer_raw))
        if base.duration_months == duration_months:
            return base.id

        variant = await self.plan_repo.get_live_by_name_and_duration(session, base.name, duration_months)
        if variant is None:
            logger.debug(
                "plan_variant_not_found plan=%s duration_months=%s quantity=%s",
                base.name,
                duration_months,
                quantity_raw,
            )
            return base.id
        return variant.id


__all__ = ["PlanResolver"]
# Fin del archivo backend/app/modules/webhooks/services/plan_resolver.py
