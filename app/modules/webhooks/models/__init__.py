# -*- coding: utf-8 -*-
"""
backend/app/modules/webhooks/models/__init__.py

Autor: Equipo Revenda
Fecha: 2026-03-02
"""

from .webhook_models import Webhook, WebhookFieldMapping
from .webhook_log_models import WebhookLog

__all__ = ["Webhook", "WebhookFieldMapping", "WebhookLog"]
