# -*- coding: utf-8 -*-
"""
backend/app/shared/database/repository.py

Repositorio base async para los modelos de Revenda.

Convención de borrado: las entidades con `deleted_at` no se eliminan;
"vivo" significa deleted_at IS NULL. Los ids llegan como texto desde URLs
y payloads externos, así que se validan antes de consultar.

Autor: Equipo Revenda
Fecha: 2026-03-02
"""

import uuid
from typing import Any, Generic, Optional, Type, TypeVar

from sqlalchemy import Select, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.shared.utils.datetime_helpers import utcnow

T = TypeVar("T")  # modelo ORM


def parse_uuid(value: Any) -> Optional[uuid.UUID]:
    """UUID o None si el valor no tiene formato válido."""
    if isinstance(value, uuid.UUID):
        return value
    try:
        return uuid.UUID(str(value))
    except (ValueError, TypeError):
        return None


class BaseRepository(Generic[T]):
    """Alta, modificación y lectura de filas vivas con borrado lógico."""

    def __init__(self, model: Type[T]):
        self.model = model

    def live_select(self) -> Select:
        return select(self.model).where(self.model.deleted_at.is_(None))

    async def get_live(self, session: AsyncSession, obj_id: Any) -> Optional[T]:
        """Fila viva por id; None también para ids mal formados."""
        parsed = parse_uuid(obj_id)
        if parsed is None:
            return None
        result = await session.execute(self.live_select().where(self.model.id == parsed))
        return result.scalars().first()

    async def create(self, session: AsyncSession, **kwargs) -> T:
        obj = self.model(**kwargs)
        session.add(obj)
        await session.flush()
        return obj

    async def update(self, session: AsyncSession, obj: T, **fields) -> T:
        for name, value in fields.items():
            setattr(obj, name, value)
        await session.flush()
        return obj

    async def soft_delete(self, session: AsyncSession, obj: T, **fields) -> T:
        return await self.update(session, obj, deleted_at=utcnow(), **fields)

# Fin del archivo backend/app/shared/database/repository.py
