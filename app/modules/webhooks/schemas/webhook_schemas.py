# -*- coding: utf-8 -*-
"""
backend/app/modules/webhooks/schemas/webhook_schemas.py

Schemas Pydantic v2 de la administración de webhooks.

Incluye:
- FieldMappingIn / FieldMappingOut: regla de mapeo.
- WebhookCreate / WebhookUpdate: alta y edición (la lista de reglas se
  reemplaza completa, en el orden recibido).
- WebhookOut: configuración expuesta al panel.
- WebhookLogOut / WebhookLogPage: historial paginado.

Autor: Equipo Revenda
Fecha: 2026-03-02
"""

from __future__ import annotations

from datetime import datetime
from typing import Any, Dict, List, Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, field_validator


class FieldMappingIn(BaseModel):
    external_field: str = Field(..., min_length=1, max_length=255, description="Token fijo o ruta (data.customer.email)")
    canonical_field: str = Field(..., min_length=1, max_length=64, description="Campo canónico (email, name, plan, offer, ...)")
    prefix: Optional[str] = Field(default=None, max_length=64)
    suffix: Optional[str] = Field(default=None, max_length=64)

    @field_validator("external_field", "canonical_field")
    @classmethod
    def _strip(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("no puede estar vacío")
        return value


class FieldMappingOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    external_field: str
    canonical_field: str
    prefix: Optional[str] = None
    suffix: Optional[str] = None
    position: int = 0


class WebhookCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    description: Optional[str] = None
    field_mappings: List[FieldMappingIn] = Field(default_factory=list)


class WebhookUpdate(BaseModel):
    """Campos omitidos no se tocan; field_mappings presente reemplaza la lista."""

    name: Optional[str] = Field(default=None, min_length=1, max_length=255)
    description: Optional[str] = None
    field_mappings: Optional[List[FieldMappingIn]] = None


class WebhookOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    name: str
    description: Optional[str] = None
    secret: str
    server_url: Optional[str] = None
    is_active: bool
    test_mode: bool
    last_test_payload: Optional[Dict[str, Any]] = None
    field_mappings: List[FieldMappingOut] = Field(default_factory=list)
    created_at: datetime
    updated_at: datetime


class WebhookLogOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    webhook_id: UUID
    method: str
    url: Optional[str] = None
    headers: Optional[Dict[str, Any]] = None
    body: Optional[Any] = None
    response_status: Optional[int] = None
    response_body: Optional[Any] = None
    error: Optional[str] = None
    processed_in_test_mode: bool
    received_at: datetime


class WebhookLogPage(BaseModel):
    data: List[WebhookLogOut]
    total: int


__all__ = [
    "FieldMappingIn",
    "FieldMappingOut",
    "WebhookCreate",
    "WebhookUpdate",
    "WebhookOut",
    "WebhookLogOut",
    "WebhookLogPage",
]
# Fin del archivo backend/app/modules/webhooks/schemas/webhook_schemas.py
