# -*- coding: utf-8 -*-
"""
backend/app/shared/middleware/__init__.py

Middleware de la app: cualquier excepción no controlada fuera del handler
de webhooks sale como JSON 500 con su request_id.

Autor: Equipo Revenda
Fecha: 2026-03-02
"""

from .exception_handler import JSONExceptionMiddleware, get_request_id

__all__ = ["JSONExceptionMiddleware", "get_request_id"]
