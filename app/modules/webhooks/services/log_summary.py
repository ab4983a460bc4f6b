# -*- coding: utf-8 -*-
"""
backend/app/modules/webhooks/services/log_summary.py

"Resumo" legible de una entrega procesada, que el panel muestra en el
bloque "Ação" del historial: acción, usuario, plano, oferta, vencimento
y status de la assinatura.

Autor: Equipo Revenda
Fecha: 2026-03-02
"""

from __future__ import annotations

from datetime import datetime
from typing import Any, Dict, Optional, Tuple

from app.modules.webhooks.enums import RecurrencePeriod
from app.modules.webhooks.services.recurrence_parser import parse_recurrence

EMPTY = "—"


def format_date_for_summary(value: Optional[datetime]) -> str:
    """DD/MM/YYYY o '—'."""
    if value is None:
        return EMPTY
    return value.strftime("%d/%m/%Y")


def format_offer_for_summary(offer_raw: Any) -> str:
    if offer_raw is None or (isinstance(offer_raw, str) and not offer_raw.strip()):
        return EMPTY

    descriptor = parse_recurrence(offer_raw)
    if descriptor.period is RecurrencePeriod.YEAR:
        return "Anual" if descriptor.multiplier == 1 else f"{descriptor.multiplier} anos"
    if descriptor.period is RecurrencePeriod.MONTH:
        if descriptor.multiplier <= 1:
            return "Mensal"
        if descriptor.multiplier <= 3:
            return "Trimestral"
        if descriptor.multiplier <= 6:
            return "Semestral"
        return "Anual"
    return EMPTY


def split_plan_display(plan_name: Optional[str]) -> Tuple[str, str]:
    """'Pro - Anual' -> ('Pro', 'Anual'); sin separador -> (nombre, '—')."""
    if not plan_name or not plan_name.strip():
        return EMPTY, EMPTY

    text = plan_name.strip()
    idx = text.find(" - ")
    if idx > 0:
        return text[:idx].strip(), text[idx + 3:].strip()
    return text, EMPTY


def build_log_summary(
    *,
    action_label: str,
    user_name: Optional[str],
    email: Optional[str],
    cpf_cnpj: Optional[str] = None,
    plan_display: Optional[str] = None,
    offer_raw: Any = None,
    due_date: Optional[datetime] = None,
    status: Optional[str] = None,
) -> Dict[str, Any]:
    plan, offer_from_plan = split_plan_display(plan_display)
    offer = offer_from_plan if offer_from_plan != EMPTY else format_offer_for_summary(offer_raw)

    return {
        "acao": action_label,
        "usuario": {
            "nome": user_name or EMPTY,
            "email": email or EMPTY,
            "cpfCnpj": cpf_cnpj,
        },
        "plano": plan,
        "oferta": offer,
        "dataVencimento": format_date_for_summary(due_date),
        "status": "Vencido" if (status or "active").strip().lower() == "vencido" else "Ativo",
    }


__all__ = [
    "format_date_for_summary",
    "format_offer_for_summary",
    "split_plan_display",
    "build_log_summary",
]
# Fin del archivo backend/app/modules/webhooks/services/log_summary.py
