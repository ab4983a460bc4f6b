# -*- coding: utf-8 -*-
"""
backend/app/modules/webhooks/models/webhook_log_models.py

Historial de entregas recibidas: una fila por llamada entrante.

Append-only salvo la ventana deslizante del modo prueba, que borra la
fila más antigua antes de insertar. El id entero da orden total incluso
con received_at idénticos.

Autor: Equipo Revenda
Fecha: 2026-03-02
"""

from __future__ import annotations

import uuid
from datetime import datetime
from typing import Any, Dict, Optional

from sqlalchemy import BigInteger, Boolean, DateTime, ForeignKey, Index, Integer, String, Text, Uuid, func
from sqlalchemy.orm import Mapped, mapped_column

from app.shared.database.base import Base, JSONType
from app.shared.utils.datetime_helpers import utcnow


class WebhookLog(Base):
    __tablename__ = "webhook_logs"

    id: Mapped[int] = mapped_column(
        BigInteger().with_variant(Integer, "sqlite"),
        primary_key=True,
        autoincrement=True,
    )
    webhook_id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        ForeignKey("webhooks.id", ondelete="CASCADE"),
        nullable=False,
    )

    method: Mapped[str] = mapped_column(String(10), nullable=False, default="POST")
    url: Mapped[Optional[str]] = mapped_column(String(1024), nullable=True)
    headers: Mapped[Optional[Dict[str, Any]]] = mapped_column(JSONType, nullable=True)
    body: Mapped[Optional[Any]] = mapped_column(JSONType, nullable=True)

    response_status: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)
    response_body: Mapped[Optional[Any]] = mapped_column(JSONType, nullable=True)
    error: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    processed_in_test_mode: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=False, server_default="false"
    )
    received_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utcnow, server_default=func.now(), nullable=False
    )

    __table_args__ = (
        Index("ix_webhook_logs_webhook_received", "webhook_id", "received_at"),
        {"sqlite_autoincrement": True},
    )

    def __repr__(self) -> str:
        return f"<WebhookLog id={self.id} webhook={self.webhook_id} status={self.response_status}>"


__all__ = ["WebhookLog"]
# Fin del archivo backend/app/modules/webhooks/models/webhook_log_models.py
