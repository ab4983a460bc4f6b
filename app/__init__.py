# -*- coding: utf-8 -*-
"""
backend/app/__init__.py

Paquete principal del backend de Revenda.

- app.main: aplicación FastAPI (recepción pública + administración)
- app.modules: dominios (webhooks, accounts, audit, notifications)
- app.shared: configuración, base de datos, middleware e integraciones

Autor: Equipo Revenda
Fecha: 2026-03-02
"""

# Fin del archivo backend/app/__init__.py
