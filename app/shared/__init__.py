# -*- coding: utf-8 -*-
"""
backend/app/shared/__init__.py

Infraestructura transversal de Revenda: configuración, base de datos,
middleware, integraciones y utilidades HTTP.
"""
