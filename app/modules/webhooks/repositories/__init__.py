# -*- coding: utf-8 -*-
"""
backend/app/modules/webhooks/repositories/__init__.py

Autor: Equipo Revenda
Fecha: 2026-03-02
"""

from .webhook_repository import WebhookRepository
from .webhook_log_repository import WebhookLogRepository

__all__ = ["WebhookRepository", "WebhookLogRepository"]
