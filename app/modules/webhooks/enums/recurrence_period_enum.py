# -*- coding: utf-8 -*-
"""
backend/app/modules/webhooks/enums/recurrence_period_enum.py

Periodos de cobro reconocidos por el parser de recurrencia.

Autor: Equipo Revenda
Fecha: 2026-03-02
"""

from enum import StrEnum


class RecurrencePeriod(StrEnum):
    DAY = "day"
    WEEK = "week"
    MONTH = "month"
    YEAR = "year"
    # Entrada no reconocida: no produce días
    UNKNOWN = "unknown"


DAYS_PER_PERIOD = {
    RecurrencePeriod.DAY: 1,
    RecurrencePeriod.WEEK: 7,
    RecurrencePeriod.MONTH: 30,
    RecurrencePeriod.YEAR: 365,
    RecurrencePeriod.UNKNOWN: 0,
}


__all__ = ["RecurrencePeriod", "DAYS_PER_PERIOD"]
# Fin del archivo backend/app/modules/webhooks/enums/recurrence_period_enum.py
