# -*- coding: utf-8 -*-
"""
backend/app/modules/webhooks/enums/webhook_outcome_enum.py

Resultado terminal de una entrega procesada en modo activo.

Autor: Equipo Revenda
Fecha: 2026-03-02
"""

from enum import StrEnum


class WebhookOutcome(StrEnum):
    """Transición aplicada por la máquina de estados de cuentas."""

    CREATED = "created"
    RESTORED = "restored"
    ACCOUNT_CREATED = "account_created"
    UPDATED = "updated"


__all__ = ["WebhookOutcome"]
# Fin del archivo backend/app/modules/webhooks/enums/webhook_outcome_enum.py
