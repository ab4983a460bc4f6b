# -*- coding: utf-8 -*-
"""
backend/app/routes/health_routes.py

Endpoint básico de health check del backend de Revenda.

Autor: Equipo Revenda
Fecha: 2026-03-02
"""

from fastapi import APIRouter

from app.core.settings import get_settings
from app.core.db import check_database_health
from app.shared.utils.datetime_helpers import utcnow

router = APIRouter()


@router.get(
    "/health",
    summary="Health check del backend",
    description=(
        "Devuelve el estado básico del backend de Revenda, incluyendo "
        "verificación simple de conectividad a la base de datos."
    ),
)
async def health_check() -> dict:
    settings = get_settings()

    db_ok = await check_database_health(timeout_s=2.0)

    return {
        "status": "ok" if db_ok else "degraded",
        "timestamp": utcnow().isoformat(),
        "environment": settings.python_env,
        "database": {
            "reachable": db_ok,
        },
        "service": {
            "name": "revenda-backend",
            "version": "1.0.0",
        },
    }

# Fin del archivo backend/app/routes/health_routes.py
