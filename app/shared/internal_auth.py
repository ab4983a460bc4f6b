# -*- coding: utf-8 -*-
"""
backend/app/shared/internal_auth.py

Autenticación de servicio interno para la superficie de administración
de webhooks (listado, activación, reprocesamiento, logs).

Uso:
    router = APIRouter(dependencies=[Depends(require_internal_service_token)])

Autor: Equipo Revenda
Fecha: 2026-03-02
"""

from __future__ import annotations

import logging
import secrets
from typing import Annotated

from fastapi import Header, HTTPException, status

from app.shared.config import get_settings

logger = logging.getLogger(__name__)


async def require_internal_service_token(
    authorization: Annotated[str | None, Header()] = None,
) -> bool:
    """
    Valida el header Authorization: Bearer <token> contra
    settings.internal_service_token (APP_SERVICE_TOKEN).

    Raises:
        HTTPException 401: Si no hay Authorization header o el formato es inválido.
        HTTPException 403: Si el token es inválido.
        HTTPException 500: Si el token no está configurado en el backend.
    """
    settings = get_settings()

    if not settings.internal_service_token:
        logger.error(
            "internal_service_token_not_configured: "
            "APP_SERVICE_TOKEN must be set for internal endpoints"
        )
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Internal service token not configured",
        )

    if not authorization:
        logger.warning("internal_auth_missing_header")
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Authorization header required",
            headers={"WWW-Authenticate": "Bearer"},
        )

    parts = authorization.split()
    if len(parts) != 2 or parts[0].lower() != "bearer":
        logger.warning("internal_auth_invalid_format")
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid authorization format. Use: Bearer <token>",
            headers={"WWW-Authenticate": "Bearer"},
        )

    expected_token = settings.internal_service_token.get_secret_value()

    # Comparación timing-safe
    if not secrets.compare_digest(parts[1], expected_token):
        logger.warning("internal_auth_invalid_token")
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Invalid service token",
        )

    return True


__all__ = ["require_internal_service_token"]
# Fin del archivo backend/app/shared/internal_auth.py
