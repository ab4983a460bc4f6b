# -*- coding: utf-8 -*-
"""
backend/app/modules/accounts/repositories/plan_repository.py

Consultas del catálogo de planes (siempre sobre planes no borrados).
La búsqueda por id es get_live (heredado).

Autor: Equipo Revenda
Fecha: 2026-03-02
"""

from __future__ import annotations

from typing import Optional

from sqlalchemy.ext.asyncio import AsyncSession

from app.shared.database.repository import BaseRepository
from app.modules.accounts.models import Plan


class PlanRepository(BaseRepository[Plan]):
    def __init__(self) -> None:
        super().__init__(Plan)

    async def get_live_by_name(self, session: AsyncSession, name: str) -> Optional[Plan]:
        """Coincidencia exacta de nombre (la variante más antigua primero)."""
        stmt = self.live_select().where(Plan.name == name).order_by(Plan.created_at.asc())
        result = await session.execute(stmt)
        return result.scalars().first()

    async def get_live_by_name_and_duration(
        self,
        session: AsyncSession,
        name: str,
        duration_months: int,
    ) -> Optional[Plan]:
        stmt = (
            self.live_select()
            .where(Plan.name == name, Plan.duration_months == duration_months)
            .order_by(Plan.created_at.asc())
        )
        result = await session.execute(stmt)
        return result.scalars().first()

# Fin del archivo backend/app/modules/accounts/repositories/plan_repository.py
