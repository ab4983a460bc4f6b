# -*- coding: utf-8 -*-
"""
backend/app/shared/http_utils/__init__.py

Metadatos del request entrante (IP del cliente detrás de proxy y
User-Agent) que la auditoría de webhooks guarda como contexto del actor.

Autor: Equipo Revenda
Fecha: 2026-03-02
"""

from app.shared.http_utils.request_meta import get_client_ip, get_request_meta, get_user_agent

__all__ = ["get_client_ip", "get_request_meta", "get_user_agent"]
