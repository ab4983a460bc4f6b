
# -*- coding: utf-8 -*-
"""
backend/app/shared/config/__init__.py

Punto único de acceso a la configuración:
    from app.shared.config import settings

El objeto `settings` es un proxy perezoso sobre config_loader.get_settings():
no instancia nada al importar, así los tests pueden fijar PYTHON_ENV y
variables de entorno antes del primer acceso.
"""

from __future__ import annotations

from typing import Any, Callable

from .config_loader import get_settings


class _SettingsProxy:
    __slots__ = ("_base_getter",)

    def __init__(self, base_getter: Callable[[], object]) -> None:
        object.__setattr__(self, "_base_getter", base_getter)

    def _get_base(self) -> object:
        return object.__getattribute__(self, "_base_getter")()

    def __getattr__(self, name: str) -> Any:
        return getattr(self._get_base(), name)

    def __setattr__(self, name: str, value: Any) -> None:
        setattr(self._get_base(), name, value)


# Singleton accesible como `settings` (lazy-load via getter)
settings = _SettingsProxy(get_settings)

__all__ = ["settings", "get_settings"]
# Fin del archivo backend/app/shared/config/__init__.py
