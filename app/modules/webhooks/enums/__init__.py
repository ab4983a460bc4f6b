# -*- coding: utf-8 -*-
"""
backend/app/modules/webhooks/enums/__init__.py

Autor: Equipo Revenda
Fecha: 2026-03-02
"""

from .webhook_outcome_enum import WebhookOutcome
from .recurrence_period_enum import RecurrencePeriod, DAYS_PER_PERIOD

__all__ = ["WebhookOutcome", "RecurrencePeriod", "DAYS_PER_PERIOD"]
