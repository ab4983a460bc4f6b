# -*- coding: utf-8 -*-
"""
backend/app/modules/accounts/models/account_models.py

Cuentas (tenants). Un usuario tiene a lo sumo una cuenta viva en el flujo
de webhooks; `status` es un token libre que llega de la plataforma
("active", "vencido", ...).

Autor: Equipo Revenda
Fecha: 2026-03-02
"""

from __future__ import annotations

import uuid
from datetime import datetime
from typing import List, Optional, TYPE_CHECKING

from sqlalchemy import DateTime, ForeignKey, Text, Uuid, func
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.shared.database.base import Base
from app.shared.utils.datetime_helpers import utcnow

if TYPE_CHECKING:
    from .user_models import User
    from .subscription_models import Subscription


class Account(Base):
    __tablename__ = "accounts"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    user_id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    name: Mapped[str] = mapped_column(Text, nullable=False)
    status: Mapped[str] = mapped_column(Text, nullable=False, default="active", server_default="active")
    trial_ends_at: Mapped[Optional[datetime]] = mapped_column(DateTime(timezone=True), nullable=True)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utcnow, server_default=func.now(), nullable=False
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utcnow, onupdate=utcnow, server_default=func.now(), nullable=False
    )
    deleted_at: Mapped[Optional[datetime]] = mapped_column(DateTime(timezone=True), nullable=True)

    user: Mapped["User"] = relationship("User", back_populates="accounts")
    subscriptions: Mapped[List["Subscription"]] = relationship(
        "Subscription", back_populates="account", lazy="noload"
    )

    def __repr__(self) -> str:
        return f"<Account id={self.id} name={self.name!r} status={self.status!r}>"


__all__ = ["Account"]
# Fin del archivo backend/app/modules/accounts/models/account_models.py
