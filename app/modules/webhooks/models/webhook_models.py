# -*- coding: utf-8 -*-
"""
backend/app/modules/webhooks/models/webhook_models.py

Configuración de webhooks de entrada y sus reglas de mapeo.

- Webhook: identidad, modo (activo / prueba), secreto y URL pública,
  último payload capturado en modo prueba.
- WebhookFieldMapping: regla ordenada (position) externalField → campo
  canónico, con prefijo/sufijo opcionales.

Autor: Equipo Revenda
Fecha: 2026-03-02
"""

from __future__ import annotations

import uuid
from datetime import datetime
from typing import Any, Dict, List, Optional

from sqlalchemy import Boolean, DateTime, ForeignKey, Integer, String, Text, Uuid, func
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.shared.database.base import Base, JSONType
from app.shared.utils.datetime_helpers import utcnow


class Webhook(Base):
    __tablename__ = "webhooks"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    secret: Mapped[str] = mapped_column(String(80), nullable=False)
    server_url: Mapped[Optional[str]] = mapped_column(String(512), nullable=True)

    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False, server_default="false")
    test_mode: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True, server_default="true")
    last_test_payload: Mapped[Optional[Dict[str, Any]]] = mapped_column(JSONType, nullable=True)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utcnow, server_default=func.now(), nullable=False
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utcnow, onupdate=utcnow, server_default=func.now(), nullable=False
    )
    deleted_at: Mapped[Optional[datetime]] = mapped_column(DateTime(timezone=True), nullable=True)

    field_mappings: Mapped[List["WebhookFieldMapping"]] = relationship(
        "WebhookFieldMapping",
        back_populates="webhook",
        order_by="WebhookFieldMapping.position",
        cascade="all, delete-orphan",
        lazy="selectin",
    )

    def __repr__(self) -> str:
        return f"<Webhook id={self.id} active={self.is_active} test_mode={self.test_mode}>"


class WebhookFieldMapping(Base):
    __tablename__ = "webhook_field_mappings"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    webhook_id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        ForeignKey("webhooks.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    external_field: Mapped[str] = mapped_column(String(255), nullable=False)
    canonical_field: Mapped[str] = mapped_column(String(64), nullable=False)
    prefix: Mapped[Optional[str]] = mapped_column(String(64), nullable=True)
    suffix: Mapped[Optional[str]] = mapped_column(String(64), nullable=True)
    position: Mapped[int] = mapped_column(Integer, nullable=False, default=0, server_default="0")

    webhook: Mapped["Webhook"] = relationship("Webhook", back_populates="field_mappings")

    def __repr__(self) -> str:
        return f"<WebhookFieldMapping {self.external_field!r} -> {self.canonical_field!r}>"


__all__ = ["Webhook", "WebhookFieldMapping"]
# Fin del archivo backend/app/modules/webhooks/models/webhook_models.py
