
# -*- coding: utf-8 -*-
"""
backend/app/core/__init__.py

Fachada unificada para componentes centrales del backend Revenda:
- Configuración (settings)
- Logging
- Motor de base de datos y sesiones

Envuelve la implementación de `app.shared.*` para ofrecer puntos de
entrada estables hacia el resto de los módulos.

Autor: Equipo Revenda
Fecha: 2026-03-02
"""

from .settings import get_settings
from .logging import setup_logging
from .db import (
    get_engine,
    get_sessionmaker,
    Base,
    get_async_session,
    session_scope,
    check_database_health,
)

__all__ = [
    "get_settings",
    "setup_logging",
    "get_engine",
    "get_sessionmaker",
    "Base",
    "get_async_session",
    "session_scope",
    "check_database_health",
]

# Fin del archivo backend/app/core/__init__.py
