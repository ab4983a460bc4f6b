
# -*- coding: utf-8 -*-
"""
backend/app/core/db.py

Fachada para la capa de acceso a datos basada en SQLAlchemy async.
Envuelve `app.shared.database.database`:

- get_engine / get_sessionmaker
- Base
- get_async_session (dependencia FastAPI)
- session_scope()
- check_database_health()

Autor: Equipo Revenda
Fecha: 2026-03-02
"""

from app.shared.database.database import (
    get_engine,
    get_sessionmaker,
    Base,
    get_async_session,
    session_scope,
    check_database_health,
)


__all__ = [
    "get_engine",
    "get_sessionmaker",
    "Base",
    "get_async_session",
    "session_scope",
    "check_database_health",
]

# Fin del archivo backend/app/core/db.py
