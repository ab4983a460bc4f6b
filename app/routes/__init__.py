# -*- coding: utf-8 -*-
"""
backend/app/routes/__init__.py

Ensamblador principal de ruteadores de la API de Revenda.

Responsabilidades:
- Incluir el router de health (/health).
- Incluir los routers de módulos (webhooks: recepción pública y
  administración interna).

Autor: Equipo Revenda
Fecha: 2026-03-02
"""

from fastapi import APIRouter

from .health_routes import router as health_router
from app.modules.webhooks.routes import router as webhooks_router

router = APIRouter()

# Health check sin prefijo adicional
router.include_router(health_router)

router.include_router(webhooks_router)

__all__ = ["router"]

# Fin del archivo backend/app/routes/__init__.py
