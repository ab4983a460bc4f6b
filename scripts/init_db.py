#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
backend/scripts/init_db.py

Crea las tablas de la base configurada (DB_URL / DB_*) a partir de los
modelos ORM. Opcionalmente da de alta las variantes de duración de un
plan (1, 3, 6 y 12 meses) para poder probar la resolución por oferta.

Uso:
    python scripts/init_db.py
    python scripts/init_db.py --seed-plan "Pro" --price 49.90

Autor: Equipo Revenda
Fecha: 2026-03-02
"""

import argparse
import asyncio
import logging
from decimal import Decimal

from app.core.logging import setup_logging
from app.shared.database import get_engine, session_scope
from app.shared.database.models_registry import create_all_tables

logger = logging.getLogger("scripts.init_db")

PLAN_DURATIONS = (1, 3, 6, 12)


async def _seed_plan(name: str, monthly_price: Decimal) -> None:
    from app.modules.accounts.repositories import PlanRepository

    repo = PlanRepository()
    async with session_scope() as session:
        for months in PLAN_DURATIONS:
            if await repo.get_live_by_name_and_duration(session, name, months):
                continue
            await repo.create(session, name=name, duration_months=months, price=monthly_price * months)
            logger.info("plan_seeded name=%s duration_months=%s", name, months)
        await session.commit()


async def main(args: argparse.Namespace) -> None:
    await create_all_tables(get_engine())
    if args.seed_plan:
        await _seed_plan(args.seed_plan, Decimal(str(args.price)))
    await get_engine().dispose()


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Inicializa el esquema de Revenda")
    parser.add_argument("--seed-plan", default=None, help="Nombre comercial del plan a sembrar")
    parser.add_argument("--price", default="0", help="Precio mensual de referencia")

    setup_logging(level="INFO", fmt="plain")
    asyncio.run(main(parser.parse_args()))

# Fin del archivo backend/scripts/init_db.py
