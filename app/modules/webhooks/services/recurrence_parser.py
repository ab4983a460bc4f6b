# -*- coding: utf-8 -*-
"""
backend/app/modules/webhooks/services/recurrence_parser.py

Normaliza el valor "offer" de las plataformas (token libre u objeto) a
un descriptor {period, multiplier} y deriva de él:

- días de vigencia (convención de 30 días por mes, 365 por año)
- bucket de duración en meses ∈ {1, 3, 6, 12} para elegir la variante de plan

Entradas reconocidas (sin distinguir mayúsculas):
- ISO-8601: P1M, P3M, P1Y, P2W, P7D
- PT: mensal, mês, trimestral, trimestre, "3 meses", semestral, semestre,
  "6 meses", anual, ano, "12 meses", semanal, semana, diário, dia
- EN: monthly, quarterly, semiannual/biannual, yearly/annual, weekly, daily
- "N meses" / "N months" (1..12), "N anos" / "N years", entero N → N meses
- objetos: {interval|frequency|period, interval_count|intervalCount|count|multiplier},
  {billing_period: "P3M"}, {recurrence: "..."}

Lo no reconocido produce el centinela UNKNOWN × 0, que no genera fecha.

Autor: Equipo Revenda
Fecha: 2026-03-02
"""

from __future__ import annotations

import json
import logging
import math
import re
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Any, Dict, Optional, Union

from app.modules.webhooks.enums import DAYS_PER_PERIOD, RecurrencePeriod
from app.shared.utils.datetime_helpers import utcnow

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RecurrenceDescriptor:
    period: RecurrencePeriod
    multiplier: int

    @property
    def is_known(self) -> bool:
        return self.period is not RecurrencePeriod.UNKNOWN and self.multiplier >= 1


UNKNOWN_RECURRENCE = RecurrenceDescriptor(RecurrencePeriod.UNKNOWN, 0)

OfferValue = Union[str, Dict[str, Any]]

# =============================================================================
# Vocabulario. El orden importa: "3 meses" antes que "mes", "12 meses"
# como mensual×12 antes de la regla genérica "N meses".
# =============================================================================
_KEYWORD_RULES = [
    (re.compile(r"\b(mensal|m[eê]s|por m[eê]s|1 m[eê]s)\b"), RecurrencePeriod.MONTH, 1),
    (re.compile(r"\b(trimestral|trimestre|3 meses)\b"), RecurrencePeriod.MONTH, 3),
    (re.compile(r"\b(semestral|semestre|6 meses)\b"), RecurrencePeriod.MONTH, 6),
    (re.compile(r"\b(12 meses)\b"), RecurrencePeriod.MONTH, 12),
    (re.compile(r"\b(anual|ano)\b"), RecurrencePeriod.YEAR, 1),
    (re.compile(r"\b(semanal|semana)\b"), RecurrencePeriod.WEEK, 1),
    (re.compile(r"\b(di[aá]rio|dia)\b"), RecurrencePeriod.DAY, 1),
    (re.compile(r"\b(monthly|month)\b"), RecurrencePeriod.MONTH, 1),
    (re.compile(r"\b(quarterly|quarter)\b"), RecurrencePeriod.MONTH, 3),
    (re.compile(r"\b(semiannual|biannual|semi-annual|bi-annual)\b"), RecurrencePeriod.MONTH, 6),
    (re.compile(r"\b(yearly|annual|year)\b"), RecurrencePeriod.YEAR, 1),
    (re.compile(r"\b(weekly|week)\b"), RecurrencePeriod.WEEK, 1),
    (re.compile(r"\b(daily|day)\b"), RecurrencePeriod.DAY, 1),
]

_N_MONTHS = re.compile(r"\b(\d+)\s*(meses|m[eê]s|months?)\b")
_N_YEARS = re.compile(r"\b(\d+)\s*(anos?|years?)\b")
_INTEGER = re.compile(r"^\d+$")
_ISO_DURATION = re.compile(r"^P(?:(\d+)Y)?(?:(\d+)M)?(?:(\d+)W)?(?:(\d+)D)?$")

_INTERVAL_KEYS = ("interval", "frequency", "period")
_COUNT_KEYS = ("interval_count", "intervalCount", "count", "multiplier")


# =============================================================================
# Paso explícito de JSON-en-string
# =============================================================================
def parse_offer_value(raw: Any) -> OfferValue:
    """
    Devuelve un dict si `raw` es (o contiene como texto) un objeto JSON;
    en cualquier otro caso, el texto original recortado.
    """
    if isinstance(raw, dict):
        return raw
    if raw is None:
        return ""

    text = str(raw).strip()
    if text.startswith("{"):
        try:
            parsed = json.loads(text)
        except ValueError:
            logger.debug("offer_json_parse_failed value=%s", text[:80])
            return text
        if isinstance(parsed, dict):
            return parsed
    return text


# =============================================================================
# Parsers
# =============================================================================
def _parse_iso_duration(value: str) -> Optional[RecurrenceDescriptor]:
    match = _ISO_DURATION.match(value.strip().upper())
    if not match:
        return None
    years, months, weeks, days = match.groups()
    for amount, period in (
        (years, RecurrencePeriod.YEAR),
        (months, RecurrencePeriod.MONTH),
        (weeks, RecurrencePeriod.WEEK),
        (days, RecurrencePeriod.DAY),
    ):
        if amount and int(amount) > 0:
            return RecurrenceDescriptor(period, int(amount))
    return None


def _parse_token(value: str) -> RecurrenceDescriptor:
    lower = value.strip().lower()
    if not lower:
        return UNKNOWN_RECURRENCE

    iso = _parse_iso_duration(lower)
    if iso:
        return iso

    if _INTEGER.match(lower):
        n = int(lower)
        return RecurrenceDescriptor(RecurrencePeriod.MONTH, n) if n >= 1 else UNKNOWN_RECURRENCE

    years = _N_YEARS.search(lower)
    if years and int(years.group(1)) >= 1:
        return RecurrenceDescriptor(RecurrencePeriod.YEAR, int(years.group(1)))

    for pattern, period, multiplier in _KEYWORD_RULES:
        if pattern.search(lower):
            return RecurrenceDescriptor(period, multiplier)

    months = _N_MONTHS.search(lower)
    if months:
        n = int(months.group(1))
        if 1 <= n <= 12:
            return RecurrenceDescriptor(RecurrencePeriod.MONTH, n)

    return UNKNOWN_RECURRENCE


def _coerce_count(value: Any) -> int:
    if isinstance(value, bool):
        return 1
    if isinstance(value, float) and not math.isfinite(value):
        return 1
    if isinstance(value, (int, float)):
        count = int(value)
    elif isinstance(value, str):
        match = re.match(r"^\s*(-?\d+)", value)
        count = int(match.group(1)) if match else 0
    else:
        return 1
    return count if count >= 1 else 1


def _descriptor_from_interval(interval: str) -> Optional[RecurrenceDescriptor]:
    """
    Descriptor base del campo interval/frequency/period. Acepta todo el
    vocabulario de tokens ("quarterly" → mes×3) y las formas cortas d/w/m/y.
    """
    lower = interval.strip().lower()
    if not lower:
        return None

    token = _parse_token(lower)
    if token.is_known:
        return token

    if "day" in lower or lower == "d":
        return RecurrenceDescriptor(RecurrencePeriod.DAY, 1)
    if "week" in lower or lower == "w":
        return RecurrenceDescriptor(RecurrencePeriod.WEEK, 1)
    if "month" in lower or lower == "m":
        return RecurrenceDescriptor(RecurrencePeriod.MONTH, 1)
    if "year" in lower or lower == "y":
        return RecurrenceDescriptor(RecurrencePeriod.YEAR, 1)
    return None


def _parse_object(obj: Dict[str, Any]) -> RecurrenceDescriptor:
    interval = next((obj[k] for k in _INTERVAL_KEYS if obj.get(k) is not None), "")
    count = next((obj[k] for k in _COUNT_KEYS if obj.get(k) is not None), 1)

    base = _descriptor_from_interval(str(interval))
    if base is not None:
        return RecurrenceDescriptor(base.period, base.multiplier * _coerce_count(count))

    billing_period = obj.get("billing_period") or obj.get("billingPeriod")
    if billing_period:
        return _parse_iso_duration(str(billing_period)) or UNKNOWN_RECURRENCE

    recurrence = obj.get("recurrence") or obj.get("recurrence_type")
    if recurrence:
        return parse_recurrence(recurrence)

    return UNKNOWN_RECURRENCE


def parse_recurrence(offer: Any) -> RecurrenceDescriptor:
    """
    Normaliza un valor de oferta (token, texto JSON u objeto).

    Examples:
        >>> parse_recurrence("trimestral")
        RecurrenceDescriptor(period=<RecurrencePeriod.MONTH: 'month'>, multiplier=3)
        >>> parse_recurrence({"interval": "year", "count": 2}).multiplier
        2
    """
    if offer is None or isinstance(offer, bool):
        return UNKNOWN_RECURRENCE

    if isinstance(offer, (int, float)):
        if isinstance(offer, float) and not math.isfinite(offer):
            return UNKNOWN_RECURRENCE
        n = int(offer)
        return RecurrenceDescriptor(RecurrencePeriod.MONTH, n) if n >= 1 else UNKNOWN_RECURRENCE

    value = parse_offer_value(offer)
    if isinstance(value, dict):
        return _parse_object(value)
    return _parse_token(value)


# =============================================================================
# Derivados
# =============================================================================
def days_per_period(period: RecurrencePeriod) -> int:
    return DAYS_PER_PERIOD.get(period, 0)


def days_for(descriptor: RecurrenceDescriptor, quantity: int = 1) -> int:
    """
    Días de vigencia: días_por_periodo × multiplicador × cantidad.
    0 para el centinela UNKNOWN; cantidades < 1 cuentan como 1.
    """
    if not descriptor.is_known:
        return 0
    q = quantity if quantity >= 1 else 1
    return days_per_period(descriptor.period) * descriptor.multiplier * q


def to_duration_months(descriptor: RecurrenceDescriptor) -> int:
    """Bucket de duración para buscar la variante de plan: 1, 3, 6 o 12."""
    if descriptor.period is RecurrencePeriod.MONTH:
        m = descriptor.multiplier
        if m <= 1:
            return 1
        if m <= 3:
            return 3
        if m <= 6:
            return 6
        return 12
    if descriptor.period is RecurrencePeriod.YEAR:
        return 12
    return 1


def parse_quantity(quantity_raw: Any) -> int:
    """Entero ≥ 1; inválido o ausente cuenta como 1."""
    if quantity_raw is None:
        return 1
    match = re.match(r"^\s*(-?\d+)", str(quantity_raw))
    if not match:
        return 1
    q = int(match.group(1))
    return q if q >= 1 else 1


def build_due_date(
    offer_raw: Any,
    quantity_raw: Any = None,
    now: Optional[datetime] = None,
) -> Optional[datetime]:
    """
    Fecha de vencimiento = ahora + días(oferta × cantidad).
    None si no hay oferta, si la oferta no produce días o si la fecha
    resultante no es representable (más allá del año 9999).
    """
    if offer_raw is None or (isinstance(offer_raw, str) and not offer_raw.strip()):
        return None

    total_days = days_for(parse_recurrence(offer_raw), parse_quantity(quantity_raw))
    if total_days <= 0:
        return None
    try:
        return (now or utcnow()) + timedelta(days=total_days)
    except OverflowError:
        logger.warning("due_date_out_of_range total_days=%s", total_days)
        return None


__all__ = [
    "RecurrenceDescriptor",
    "UNKNOWN_RECURRENCE",
    "parse_offer_value",
    "parse_recurrence",
    "days_per_period",
    "days_for",
    "to_duration_months",
    "parse_quantity",
    "build_due_date",
]
# Fin del archivo backend/app/modules/webhooks/services/recurrence_parser.py
