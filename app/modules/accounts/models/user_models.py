# -*- coding: utf-8 -*-
"""
backend/app/modules/accounts/models/user_models.py

Usuarios de la plataforma (dueños de cuenta).

El email se guarda siempre normalizado (strip + lower) y es único en la
tabla: un usuario borrado lógicamente se restaura, nunca se duplica.

Autor: Equipo Revenda
Fecha: 2026-03-02
"""

from __future__ import annotations

import uuid
from datetime import datetime
from typing import List, Optional, TYPE_CHECKING

from sqlalchemy import DateTime, String, Text, Uuid, func
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.shared.database.base import Base
from app.shared.utils.datetime_helpers import utcnow

if TYPE_CHECKING:
    from .account_models import Account


class User(Base):
    __tablename__ = "users"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    name: Mapped[str] = mapped_column(Text, nullable=False)
    email: Mapped[str] = mapped_column(Text, unique=True, nullable=False, index=True)
    password_hash: Mapped[str] = mapped_column(String(255), nullable=False)
    phone: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    cpf_cnpj: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    role: Mapped[str] = mapped_column(String(20), nullable=False, default="user", server_default="user")

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utcnow, server_default=func.now(), nullable=False
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utcnow, onupdate=utcnow, server_default=func.now(), nullable=False
    )
    deleted_at: Mapped[Optional[datetime]] = mapped_column(DateTime(timezone=True), nullable=True, index=True)

    accounts: Mapped[List["Account"]] = relationship(
        "Account", back_populates="user", lazy="selectin"
    )

    @property
    def is_deleted(self) -> bool:
        return self.deleted_at is not None

    def __repr__(self) -> str:
        return f"<User id={self.id} email={self.email!r} deleted={self.is_deleted}>"


__all__ = ["User"]
# Fin del archivo backend/app/modules/accounts/models/user_models.py
