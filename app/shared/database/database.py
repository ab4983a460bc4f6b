# -*- coding: utf-8 -*-
"""
backend/app/shared/database/database.py

SQLAlchemy 2.0 async (asyncpg en PostgreSQL, aiosqlite en pruebas).

Provee:
- get_engine() / get_sessionmaker(): creados de forma perezosa desde settings
- Base (DeclarativeBase con naming convention)
- Dependencia FastAPI: get_async_session
- context manager: session_scope()
- check_database_health()

El engine no se crea al importar: los tests fijan PYTHON_ENV y
sobreescriben la sesión antes de que exista cualquier conexión.
"""

from __future__ import annotations

import asyncio
import logging
from contextlib import asynccontextmanager
from functools import lru_cache
from typing import AsyncGenerator

from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from app.shared.config import settings
from app.shared.database.base import Base  # reutilizamos la Base única

logger = logging.getLogger(__name__)


@lru_cache(maxsize=1)
def get_engine() -> AsyncEngine:
    url = settings.database_url
    connect_args: dict = {}

    if url.startswith("postgresql+asyncpg"):
        # Timeouts a nivel de conexión/consulta (asyncpg)
        connect_args = {
            "timeout": 5.0,
            "command_timeout": 10.0,
            "server_settings": {"search_path": "public"},
        }
        if settings.db_sslmode == "require":
            connect_args["ssl"] = "require"

    host = url.split("@")[-1] if "@" in url else url
    logger.info("[DB] engine_created target=%s echo=%s", host, settings.db_echo_sql)

    return create_async_engine(
        url,
        echo=settings.db_echo_sql,
        pool_pre_ping=True,
        connect_args=connect_args,
    )


@lru_cache(maxsize=1)
def get_sessionmaker() -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(
        bind=get_engine(),
        expire_on_commit=False,
        class_=AsyncSession,
        autoflush=False,
    )


# ── Dependencia FastAPI
async def get_async_session() -> AsyncGenerator[AsyncSession, None]:
    async with get_sessionmaker()() as session:
        try:
            yield session
        except SQLAlchemyError:
            # rollback para liberar cualquier transacción/lock
            await session.rollback()
            raise
        finally:
            if session.in_transaction():
                await session.rollback()


# ── Context manager reutilizable en scripts/tests
@asynccontextmanager
async def session_scope() -> AsyncGenerator[AsyncSession, None]:
    async with get_sessionmaker()() as session:
        try:
            yield session
            # commit/rollback queda a cargo de quien usa el scope
        finally:
            if session.in_transaction():
                await session.rollback()


# ── Health check
async def check_database_health(timeout_s: float = 3.0, sql: str = "SELECT 1") -> bool:
    """
    Verifica conectividad a la base de datos.

    Args:
        timeout_s: Tiempo máximo de espera en segundos
        sql: Query SQL a ejecutar (default: "SELECT 1")

    Returns:
        True si la conexión es exitosa, False en caso contrario
    """
    try:
        async with asyncio.timeout(timeout_s):
            async with get_engine().connect() as conn:
                await conn.execute(text(sql))
        return True
    except (SQLAlchemyError, OSError, TimeoutError) as e:
        logger.warning("db_health_check_failed error=%s", e)
        return False


__all__ = [
    "get_engine",
    "get_sessionmaker",
    "Base",
    "get_async_session",
    "session_scope",
    "check_database_health",
]
# Fin del archivo backend/app/shared/database/database.py
