# -*- coding: utf-8 -*-
"""
backend/app/shared/database/models_registry.py

Registro de los modelos ORM de todos los módulos en Base.metadata.

Las relationships se declaran por nombre ("User", "Subscription"), así
que cualquier proceso que cree tablas o consulte necesita importar los
módulos de modelos antes de usarlas.

Autor: Equipo Revenda
Fecha: 2026-03-02
"""

from __future__ import annotations

import importlib
import logging

from sqlalchemy.ext.asyncio import AsyncEngine

from app.shared.database.base import Base

logger = logging.getLogger(__name__)

MODEL_MODULES = (
    "app.modules.accounts.models",
    "app.modules.audit.models",
    "app.modules.webhooks.models",
)


def import_all_models() -> None:
    for module_path in MODEL_MODULES:
        importlib.import_module(module_path)


async def create_all_tables(engine: AsyncEngine) -> None:
    """Crea las tablas que falten (no altera las existentes)."""
    import_all_models()
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    logger.info("db_tables_ensured count=%s", len(Base.metadata.tables))


__all__ = ["MODEL_MODULES", "import_all_models", "create_all_tables"]
# Fin del archivo backend/app/shared/database/models_registry.py
