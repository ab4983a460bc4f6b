# -*- coding: utf-8 -*-
"""
backend/app/modules/accounts/models/plan_models.py

Catálogo de planes. Un mismo nombre comercial ("Pro") puede existir en
varias variantes de duración (1, 3, 6, 12 meses).

Autor: Equipo Revenda
Fecha: 2026-03-02
"""

from __future__ import annotations

import uuid
from datetime import datetime
from decimal import Decimal
from typing import Optional

from sqlalchemy import DateTime, Index, Integer, Numeric, String, Uuid, func
from sqlalchemy.orm import Mapped, mapped_column

from app.shared.database.base import Base
from app.shared.utils.datetime_helpers import utcnow


class Plan(Base):
    __tablename__ = "plans"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    name: Mapped[str] = mapped_column(String(120), nullable=False)
    duration_months: Mapped[int] = mapped_column(Integer, nullable=False, default=1, server_default="1")
    price: Mapped[Decimal] = mapped_column(Numeric(12, 2), nullable=False, default=Decimal("0"))

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utcnow, server_default=func.now(), nullable=False
    )
    deleted_at: Mapped[Optional[datetime]] = mapped_column(DateTime(timezone=True), nullable=True)

    __table_args__ = (
        Index("ix_plans_name_duration", "name", "duration_months"),
    )

    def __repr__(self) -> str:
        return f"<Plan id={self.id} name={self.name!r} months={self.duration_months}>"


__all__ = ["Plan"]
# Fin del archivo backend/app/modules/accounts/models/plan_models.py
