# -*- coding: utf-8 -*-
"""
backend/app/modules/accounts/models/subscription_models.py

Suscripciones de una cuenta. La "actual" es la más reciente no borrada
(created_at desc).

Autor: Equipo Revenda
Fecha: 2026-03-02
"""

from __future__ import annotations

import uuid
from datetime import datetime
from typing import Optional, TYPE_CHECKING

from sqlalchemy import DateTime, ForeignKey, Index, Text, Uuid, func
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.shared.database.base import Base
from app.shared.utils.datetime_helpers import utcnow

if TYPE_CHECKING:
    from .account_models import Account


class Subscription(Base):
    __tablename__ = "subscriptions"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    account_id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        ForeignKey("accounts.id", ondelete="CASCADE"),
        nullable=False,
    )
    plan_id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        ForeignKey("plans.id"),
        nullable=False,
    )
    status: Mapped[str] = mapped_column(Text, nullable=False, default="active", server_default="active")
    start_date: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utcnow, server_default=func.now(), nullable=False
    )
    end_date: Mapped[Optional[datetime]] = mapped_column(DateTime(timezone=True), nullable=True)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utcnow, server_default=func.now(), nullable=False
    )
    deleted_at: Mapped[Optional[datetime]] = mapped_column(DateTime(timezone=True), nullable=True)

    account: Mapped["Account"] = relationship("Account", back_populates="subscriptions")

    __table_args__ = (
        Index("ix_subscriptions_account_created", "account_id", "created_at"),
    )

    def __repr__(self) -> str:
        return f"<Subscription id={self.id} account_id={self.account_id} plan_id={self.plan_id}>"


__all__ = ["Subscription"]
# Fin del archivo backend/app/modules/accounts/models/subscription_models.py
