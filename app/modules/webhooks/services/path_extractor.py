# -*- coding: utf-8 -*-
"""
backend/app/modules/webhooks/services/path_extractor.py

Resolución de rutas con notación de punto y corchetes sobre un payload
JSON arbitrario: "data.customer.email", "items[0].sku", "a.b[2][1]".

La ausencia se representa con None, nunca con una excepción: un segmento
inexistente, un índice fuera de rango o un intermedio que no es
objeto/lista terminan la búsqueda.

Autor: Equipo Revenda
Fecha: 2026-03-02
"""

from __future__ import annotations

import logging
import re
from typing import Any, List, Optional

logger = logging.getLogger(__name__)

_SEGMENT_SPLIT = re.compile(r"[.\[\]]+")
_INDEX = re.compile(r"^\d+$")


def is_path_expression(field: str) -> bool:
    """Una ruta contiene '.' o '['; lo demás es un token fijo."""
    return "." in field or "[" in field


def split_path(path: str) -> List[str]:
    """Divide en segmentos ignorando los vacíos ("a..b" == "a.b")."""
    return [segment for segment in _SEGMENT_SPLIT.split(path or "") if segment]


def extract(payload: Any, path: str) -> Optional[Any]:
    """
    Obtiene el valor en `path` o None si no existe.

    Args:
        payload: Objeto raíz (normalmente dict)
        path: Ruta como "data.items[0].email"

    Returns:
        Valor encontrado o None
    """
    current = payload

    for segment in split_path(path):
        if current is None:
            return None

        if isinstance(current, list):
            if not _INDEX.match(segment):
                return None
            idx = int(segment)
            if idx >= len(current):
                return None
            current = current[idx]
        elif isinstance(current, dict):
            if segment not in current:
                return None
            current = current[segment]
        else:
            return None

    return current


__all__ = ["extract", "split_path", "is_path_expression"]
# Fin del archivo backend/app/modules/webhooks/services/path_extractor.py
