# -*- coding: utf-8 -*-
"""
backend/app/shared/database/__init__.py

Re-exporta utilidades comunes de base de datos.

Autor: Equipo Revenda
Fecha: 2026-03-02
"""

from __future__ import annotations

from .database import (
    get_engine,
    get_sessionmaker,
    get_async_session,
    session_scope,
    check_database_health,
)
from .base import Base, NAMING_CONVENTION, JSONType
from .repository import BaseRepository, parse_uuid

__all__ = [
    "get_engine",
    "get_sessionmaker",
    "Base",
    "NAMING_CONVENTION",
    "JSONType",
    "BaseRepository",
    "parse_uuid",
    "get_async_session",
    "session_scope",
    "check_database_health",
]

# Fin del archivo backend/app/shared/database/__init__.py
