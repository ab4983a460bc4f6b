# -*- coding: utf-8 -*-
"""
backend/app/modules/webhooks/services/field_mapper.py

Aplica las reglas de mapeo configuradas por el administrador a un
payload entrante y produce el registro canónico {campo: texto}.

Dos variantes cerradas, ambas puras:
- FixedMapping: token sin '.' ni '['. Toma payload[token] si existe y no
  es nulo; si no, usa el propio token como valor constante.
- PathMapping: ruta con punto/corchetes resuelta con el extractor.

Un valor ausente no genera clave: "email no mapeado" es error duro aguas
abajo, mientras que "name no mapeado" cae a un valor derivado.

Autor: Equipo Revenda
Fecha: 2026-03-02
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from typing import Any, Dict, Iterable, Optional, Protocol, Union

from app.modules.webhooks.services.path_extractor import extract, is_path_expression

logger = logging.getLogger(__name__)

CanonicalRecord = Dict[str, str]


class MappingRule(Protocol):
    """Forma mínima de una regla persistida (WebhookFieldMapping)."""

    external_field: str
    canonical_field: str
    prefix: Optional[str]
    suffix: Optional[str]


@dataclass(frozen=True)
class FixedMapping:
    token: str
    canonical_field: str
    prefix: str = ""
    suffix: str = ""

    def evaluate(self, payload: Dict[str, Any]) -> Optional[Any]:
        value = payload.get(self.token)
        return value if value is not None else self.token


@dataclass(frozen=True)
class PathMapping:
    path: str
    canonical_field: str
    prefix: str = ""
    suffix: str = ""

    def evaluate(self, payload: Dict[str, Any]) -> Optional[Any]:
        return extract(payload, self.path)


CompiledMapping = Union[FixedMapping, PathMapping]


def compile_mapping(rule: MappingRule) -> CompiledMapping:
    """Convierte una regla persistida en su variante evaluable."""
    external = rule.external_field or ""
    prefix = rule.prefix or ""
    suffix = rule.suffix or ""

    if is_path_expression(external):
        return PathMapping(external, rule.canonical_field, prefix, suffix)
    return FixedMapping(external, rule.canonical_field, prefix, suffix)


def _stringify(value: Any) -> str:
    if isinstance(value, str):
        return value
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    if isinstance(value, (dict, list)):
        return json.dumps(value, ensure_ascii=False, separators=(",", ":"))
    return str(value)


def map_payload(payload: Dict[str, Any], rules: Iterable[MappingRule]) -> CanonicalRecord:
    """
    Evalúa las reglas en orden y arma el registro canónico.

    Si dos reglas apuntan al mismo campo canónico, gana la última con valor.
    """
    record: CanonicalRecord = {}

    for rule in rules:
        compiled = compile_mapping(rule)
        if not compiled.canonical_field:
            continue

        value = compiled.evaluate(payload)
        if value is None:
            continue

        record[compiled.canonical_field] = f"{compiled.prefix}{_stringify(value)}{compiled.suffix}"

    logger.debug("payload_mapped fields=%s", sorted(record))
    return record


def get_mapped(record: CanonicalRecord, key: str) -> Optional[str]:
    """Valor recortado o None si falta o queda vacío."""
    value = record.get(key)
    if value is None:
        return None
    value = value.strip()
    return value or None


__all__ = [
    "CanonicalRecord",
    "MappingRule",
    "FixedMapping",
    "PathMapping",
    "CompiledMapping",
    "compile_mapping",
    "map_payload",
    "get_mapped",
]
# Fin del archivo backend/app/modules/webhooks/services/field_mapper.py
