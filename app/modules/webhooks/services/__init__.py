# -*- coding: utf-8 -*-
"""
backend/app/modules/webhooks/services/__init__.py

Piezas puras y servicios de apoyo de la recepción de webhooks.

Autor: Equipo Revenda
Fecha: 2026-03-02
"""

from .path_extractor import extract, split_path, is_path_expression
from .recurrence_parser import (
    RecurrenceDescriptor,
    UNKNOWN_RECURRENCE,
    parse_offer_value,
    parse_recurrence,
    days_for,
    to_duration_months,
    parse_quantity,
    build_due_date,
)
from .field_mapper import FixedMapping, PathMapping, compile_mapping, map_payload, get_mapped
from .plan_resolver import PlanResolver
from .delivery_log_service import DeliveryContext, DeliveryLogService, sanitize_headers_for_log
from .log_summary import build_log_summary

__all__ = [
    "extract",
    "split_path",
    "is_path_expression",
    "RecurrenceDescriptor",
    "UNKNOWN_RECURRENCE",
    "parse_offer_value",
    "parse_recurrence",
    "days_for",
    "to_duration_months",
    "parse_quantity",
    "build_due_date",
    "FixedMapping",
    "PathMapping",
    "compile_mapping",
    "map_payload",
    "get_mapped",
    "PlanResolver",
    "DeliveryContext",
    "DeliveryLogService",
    "sanitize_headers_for_log",
    "build_log_summary",
]
