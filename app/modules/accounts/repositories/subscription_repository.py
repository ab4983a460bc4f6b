# -*- coding: utf-8 -*-
"""
backend/app/modules/accounts/repositories/subscription_repository.py

Repositorio para la tabla subscriptions.

Autor: Equipo Revenda
Fecha: 2026-03-02
"""

from __future__ import annotations

from typing import Optional

from sqlalchemy.ext.asyncio import AsyncSession

from app.shared.database.repository import BaseRepository
from app.modules.accounts.models import Subscription


class SubscriptionRepository(BaseRepository[Subscription]):
    def __init__(self) -> None:
        super().__init__(Subscription)

    async def get_current_for_account(
        self,
        session: AsyncSession,
        account_id,
    ) -> Optional[Subscription]:
        """Suscripción "actual": la más reciente no borrada."""
        stmt = (
            self.live_select()
            .where(Subscription.account_id == account_id)
            .order_by(Subscription.created_at.desc())
        )
        result = await session.execute(stmt)
        return result.scalars().first()

# Fin del archivo backend/app/modules/accounts/repositories/subscription_repository.py
