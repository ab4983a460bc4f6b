# backend/tests/conftest.py
# -*- coding: utf-8 -*-
"""
Config global de tests para Revenda.

- PYTHON_ENV=test antes de importar la app (settings de test, token de servicio).
- Motor ASYNC sqlite+aiosqlite en memoria por test, con StaticPool para que
  la app y el test compartan la misma base.
- SAVEPOINT funcional en SQLite (receta de SQLAlchemy para pysqlite/aiosqlite):
  la auditoría escribe dentro de begin_nested().
- Cliente httpx con ciclo de vida (asgi-lifespan) y get_async_session
  sobreescrito para usar la sesión del test.
"""

import os
import uuid
from collections.abc import AsyncIterator
from decimal import Decimal

os.environ["PYTHON_ENV"] = "test"
os.environ.pop("DB_URL", None)

import pytest
from httpx import AsyncClient, ASGITransport
from asgi_lifespan import LifespanManager
from sqlalchemy import event
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from app.shared.database.base import Base
from app.shared.database.models_registry import import_all_models

import_all_models()

SERVICE_TOKEN = "test-service-token"


# -----------------------------------------------------------------------------
# 1) Base de datos
# -----------------------------------------------------------------------------
@pytest.fixture
async def engine():
    eng = create_async_engine(
        "sqlite+aiosqlite://",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )

    @event.listens_for(eng.sync_engine, "connect")
    def _disable_pysqlite_transactions(dbapi_connection, connection_record):
        # El driver no emite BEGIN; lo hace el evento "begin"
        dbapi_connection.isolation_level = None

    @event.listens_for(eng.sync_engine, "begin")
    def _emit_begin(conn):
        conn.exec_driver_sql("BEGIN")

    async with eng.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    try:
        yield eng
    finally:
        await eng.dispose()


@pytest.fixture
async def db_session(engine) -> AsyncIterator[AsyncSession]:
    """
    Sesión ASYNC compartida entre el test y la app (misma identidad de objetos).
    """
    SessionLocal = async_sessionmaker(
        bind=engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autoflush=False,
    )
    async with SessionLocal() as session:
        try:
            yield session
        finally:
            await session.rollback()


# -----------------------------------------------------------------------------
# 2) App FastAPI y cliente httpx
# -----------------------------------------------------------------------------
@pytest.fixture
def app(db_session):
    """
    App principal con la sesión del test inyectada en get_async_session.
    """
    from app.main import app as fastapi_app
    from app.shared.database.database import get_async_session

    async def _override_session():
        yield db_session

    fastapi_app.dependency_overrides[get_async_session] = _override_session
    try:
        yield fastapi_app
    finally:
        fastapi_app.dependency_overrides.clear()


@pytest.fixture
async def async_client(app) -> AsyncIterator[AsyncClient]:
    """
    Cliente HTTP asíncrono contra la app con ASGITransport y gestión de
    startup/shutdown mediante asgi-lifespan.
    """
    async with LifespanManager(app):
        transport = ASGITransport(app=app)
        async with AsyncClient(transport=transport, base_url="http://testserver") as client:
            yield client


@pytest.fixture
def admin_headers() -> dict:
    return {"Authorization": f"Bearer {SERVICE_TOKEN}"}


# -----------------------------------------------------------------------------
# 3) Datos de apoyo
# -----------------------------------------------------------------------------
@pytest.fixture
def make_webhook(db_session):
    """
    Crea un webhook con reglas [(external_field, canonical_field[, prefix, suffix])].
    """
    from app.modules.webhooks.models import Webhook, WebhookFieldMapping

    async def _make(
        mappings=(("email", "email"),),
        *,
        is_active=True,
        test_mode=False,
        name="Hotmart",
    ):
        webhook = Webhook(
            id=uuid.uuid4(),
            name=name,
            secret="whsec_test",
            is_active=is_active,
            test_mode=test_mode,
        )
        webhook.field_mappings = [
            WebhookFieldMapping(
                external_field=m[0],
                canonical_field=m[1],
                prefix=m[2] if len(m) > 2 else None,
                suffix=m[3] if len(m) > 3 else None,
                position=i,
            )
            for i, m in enumerate(mappings)
        ]
        db_session.add(webhook)
        await db_session.commit()
        return webhook

    return _make


@pytest.fixture
def make_plan(db_session):
    from app.modules.accounts.models import Plan

    async def _make(name="Pro", duration_months=1, price="49.90", deleted=False):
        from app.shared.utils.datetime_helpers import utcnow

        plan = Plan(
            name=name,
            duration_months=duration_months,
            price=Decimal(price),
            deleted_at=utcnow() if deleted else None,
        )
        db_session.add(plan)
        await db_session.commit()
        return plan

    return _make
