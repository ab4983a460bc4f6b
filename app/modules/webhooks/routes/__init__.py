# -*- coding: utf-8 -*-
"""
backend/app/modules/webhooks/routes/__init__.py

Ensamblador de rutas del módulo Webhooks.

Incluye:
- /webhooks/receive/{webhook_id}   (público)
- /admin/webhooks/*                (token de servicio interno)

Autor: Equipo Revenda
Fecha: 2026-03-02
"""

from fastapi import APIRouter

from .receive_routes import router as receive_router
from .admin_routes import router as admin_router

router = APIRouter()
router.include_router(receive_router)
router.include_router(admin_router)

__all__ = ["router"]

# Fin del archivo backend/app/modules/webhooks/routes/__init__.py
