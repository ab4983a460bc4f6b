# -*- coding: utf-8 -*-
"""
backend/app/shared/utils/json_response.py

Respuestas JSON con charset UTF-8 explícito.

- UTF8JSONResponse: default_response_class de la app FastAPI
- json_response_utf8: helper para respuestas con status dinámico
  (los webhooks contestan 200/201/400/404/500 según el resultado)

Los mensajes de la API van en portugués con acentos ("não", "Usuário"),
sin charset explícito algunos proxies los muestran con mojibake.

Autor: Equipo Revenda
Fecha: 2026-03-02
"""

from typing import Any, Dict, Optional
from fastapi.responses import JSONResponse


class UTF8JSONResponse(JSONResponse):
    """JSONResponse con Content-Type: application/json; charset=utf-8."""
    media_type = "application/json; charset=utf-8"


def json_response_utf8(
    content: Any,
    status_code: int = 200,
    headers: Optional[Dict[str, str]] = None,
) -> UTF8JSONResponse:
    """
    Crea un UTF8JSONResponse.

    Args:
        content: Contenido a serializar como JSON
        status_code: Código HTTP (default 200)
        headers: Headers adicionales opcionales
    """
    return UTF8JSONResponse(
        content=content,
        status_code=status_code,
        headers=headers,
    )


__all__ = ["UTF8JSONResponse", "json_response_utf8"]
