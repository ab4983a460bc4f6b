# -*- coding: utf-8 -*-
"""
backend/app/shared/http_utils/request_meta.py

Helpers para extraer metadatos de request (IP, User-Agent) de manera segura
detrás de proxies (nginx, Cloudflare, etc.). Alimentan el contexto de actor
de la auditoría.

Autor: Equipo Revenda
Fecha: 2026-03-02
"""
from __future__ import annotations

import logging
from typing import Optional

from starlette.requests import Request

from app.shared.config import settings

logger = logging.getLogger(__name__)

# Orden de preferencia cuando se confía en el proxy
PROXY_IP_HEADERS = ("x-forwarded-for", "x-real-ip", "cf-connecting-ip")


def get_client_ip(request: Request) -> str:
    """
    Extrae la IP real del cliente.

    Si TRUST_PROXY_HEADERS=true:
        1. X-Forwarded-For (primer IP, cliente original)
        2. X-Real-IP (patrón nginx)
        3. CF-Connecting-IP (Cloudflare)
        4. request.client.host (fallback)

    Si TRUST_PROXY_HEADERS=false (default):
        Solo usa request.client.host (IP directa del socket)

    Returns:
        IP del cliente como string, o "unknown" si no se puede determinar
    """
    if settings.trust_proxy_headers:
        for header in PROXY_IP_HEADERS:
            value = request.headers.get(header)
            if value:
                # X-Forwarded-For: "client, proxy1, proxy2"
                return value.split(",")[0].strip()

    if request.client and request.client.host:
        return request.client.host

    return "unknown"


def get_user_agent(request: Request) -> Optional[str]:
    """User-Agent del request, o None si no existe."""
    ua = request.headers.get("user-agent")
    return ua.strip() if ua else None


def get_request_meta(request: Request) -> dict:
    """
    Extrae metadatos completos del request para auditoría.

    Returns:
        Dict con ip_address y user_agent
    """
    return {
        "ip_address": get_client_ip(request),
        "user_agent": get_user_agent(request),
    }


__all__ = [
    "get_client_ip",
    "get_user_agent",
    "get_request_meta",
]
# Fin del archivo backend/app/shared/http_utils/request_meta.py
