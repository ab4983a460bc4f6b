# -*- coding: utf-8 -*-
"""
backend/app/modules/audit/services/audit_log_service.py

Servicio de auditoría persistente.

`record()` nunca lanza: la escritura se hace dentro de un SAVEPOINT y,
si falla, se revierte solo ese SAVEPOINT y el error queda en el log del
proceso. La operación de negocio que audita sigue su curso.

Autor: Equipo Revenda
Fecha: 2026-03-02
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.modules.audit.models import AuditLog

logger = logging.getLogger(__name__)


class AuditLogService:
    """Escribe entradas de AuditLog en la sesión del llamador."""

    async def record(
        self,
        session: AsyncSession,
        *,
        user_id: Any,
        action: str,
        entity: str,
        entity_id: Optional[str] = None,
        payload: Optional[Dict[str, Any]] = None,
        ip_address: Optional[str] = None,
        user_agent: Optional[str] = None,
    ) -> bool:
        """
        Registra una acción auditable.

        Args:
            session: Sesión activa (la entrada se confirma con la transacción del llamador)
            user_id: Usuario actor/afectado (None para sistema)
            action: Acción (p. ej. "webhook_register")
            entity: Entidad afectada (p. ej. "User")
            entity_id: ID de la entidad
            payload: Detalle libre (incluye "description" legible)
            ip_address: IP del request
            user_agent: User-Agent del request

        Returns:
            True si se escribió, False si falló (ya registrado en el log).
        """
        try:
            async with session.begin_nested():
                session.add(
                    AuditLog(
                        user_id=user_id,
                        action=action,
                        entity=entity,
                        entity_id=entity_id,
                        payload=payload or {},
                        ip_address=ip_address[:64] if ip_address else None,
                        user_agent=user_agent[:255] if user_agent else None,
                    )
                )
            return True
        except SQLAlchemyError:
            logger.exception(
                "audit_log_write_failed action=%s entity=%s entity_id=%s",
                action,
                entity,
                entity_id,
            )
            return False


__all__ = ["AuditLogService"]
# Fin del archivo backend/app/modules/audit/services/audit_log_service.py
