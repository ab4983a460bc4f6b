# -*- coding: utf-8 -*-
"""
backend/app/modules/accounts/repositories/user_repository.py

Repositorio de usuarios con semántica de soft-delete.

Las búsquedas por email son case-insensitive (func.lower) para tolerar
filas legadas guardadas sin normalizar.

Autor: Equipo Revenda
Fecha: 2026-03-02
"""

from __future__ import annotations

from typing import Optional

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.shared.database.repository import BaseRepository
from app.shared.utils.email_utils import normalize_email
from app.modules.accounts.models import Account, User


class UserRepository(BaseRepository[User]):
    def __init__(self) -> None:
        super().__init__(User)

    async def get_live_by_email(self, session: AsyncSession, email: str) -> Optional[User]:
        """Usuario vivo (deleted_at IS NULL) por email normalizado."""
        norm_email = normalize_email(email)
        if not norm_email:
            return None

        stmt = self.live_select().where(func.lower(User.email) == norm_email)
        result = await session.execute(stmt)
        return result.scalars().first()

    async def get_soft_deleted_by_email(self, session: AsyncSession, email: str) -> Optional[User]:
        """Usuario borrado lógicamente por email (candidato a restauración)."""
        norm_email = normalize_email(email)
        if not norm_email:
            return None

        stmt = (
            select(User)
            .where(
                func.lower(User.email) == norm_email,
                User.deleted_at.is_not(None),
            )
            .order_by(User.deleted_at.desc())
        )
        result = await session.execute(stmt)
        return result.scalars().first()

    async def get_live_account(self, session: AsyncSession, user_id) -> Optional[Account]:
        """Cuenta viva del usuario (la más antigua si hubiera varias)."""
        stmt = (
            select(Account)
            .where(
                Account.user_id == user_id,
                Account.deleted_at.is_(None),
            )
            .order_by(Account.created_at.asc())
        )
        result = await session.execute(stmt)
        return result.scalars().first()

# Fin del archivo backend/app/modules/accounts/repositories/user_repository.py
