# -*- coding: utf-8 -*-
"""
backend/app/modules/webhooks/facades/__init__.py

Autor: Equipo Revenda
Fecha: 2026-03-02
"""

from .account_state_machine import AccountStateMachine, DeliveryFields, TransitionResult
from .receive_handler import WebhookReceiveHandler, TEST_MODE_MESSAGE, GENERIC_ERROR_MESSAGE

__all__ = [
    "AccountStateMachine",
    "DeliveryFields",
    "TransitionResult",
    "WebhookReceiveHandler",
    "TEST_MODE_MESSAGE",
    "GENERIC_ERROR_MESSAGE",
]
