# -*- coding: utf-8 -*-
"""
backend/tests/modules/audit/test_audit_log_service.py

Tests de AuditLogService.record (SAVEPOINT, nunca lanza).

Autor: Equipo Revenda
Fecha: 2026-03-02
"""

import uuid

import pytest
from sqlalchemy import select
from sqlalchemy.exc import OperationalError

from app.modules.audit.models import AuditLog
from app.modules.audit.services import AuditLogService


class TestAuditLogService:
    @pytest.mark.asyncio
    async def test_record_writes_entry(self, db_session):
        user_id = uuid.uuid4()
        ok = await AuditLogService().record(
            db_session,
            user_id=user_id,
            action="webhook_register",
            entity="User",
            entity_id=str(user_id),
            payload={"description": "criado"},
            ip_address="127.0.0.1",
            user_agent="x" * 400,
        )
        await db_session.commit()

        assert ok is True
        entry = (await db_session.execute(select(AuditLog))).scalar_one()
        assert entry.user_id == user_id
        assert entry.payload == {"description": "criado"}
        assert len(entry.user_agent) == 255

    @pytest.mark.asyncio
    async def test_payload_defaults_to_empty_dict(self, db_session):
        await AuditLogService().record(db_session, user_id=None, action="system", entity="Webhook")
        await db_session.commit()

        entry = (await db_session.execute(select(AuditLog))).scalar_one()
        assert entry.payload == {}
        assert entry.user_id is None

    @pytest.mark.asyncio
    async def test_failure_is_logged_not_raised(self, db_session, mocker, caplog):
        mocker.patch.object(
            db_session,
            "begin_nested",
            side_effect=OperationalError("SAVEPOINT", {}, Exception("locked")),
        )

        ok = await AuditLogService().record(db_session, user_id=None, action="webhook_update", entity="User")

        assert ok is False
        assert "audit_log_write_failed" in caplog.text
