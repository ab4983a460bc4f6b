# -*- coding: utf-8 -*-
"""
backend/app/modules/webhooks/schemas/__init__.py

Autor: Equipo Revenda
Fecha: 2026-03-02
"""

from .webhook_schemas import (
    FieldMappingIn,
    FieldMappingOut,
    WebhookCreate,
    WebhookUpdate,
    WebhookOut,
    WebhookLogOut,
    WebhookLogPage,
)

__all__ = [
    "FieldMappingIn",
    "FieldMappingOut",
    "WebhookCreate",
    "WebhookUpdate",
    "WebhookOut",
    "WebhookLogOut",
    "WebhookLogPage",
]
