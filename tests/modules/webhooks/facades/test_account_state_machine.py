# -*- coding: utf-8 -*-
"""
backend/tests/modules/webhooks/facades/test_account_state_machine.py

Tests de la máquina de estados usuario/cuenta/suscripción:
created, restored, account_created y updated (idempotencia por email).

Autor: Equipo Revenda
Fecha: 2026-03-02
"""

import uuid
from datetime import datetime, timedelta, timezone

import pytest
from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError

from app.modules.accounts.models import Account, Subscription, User
from app.modules.accounts.repositories import UserRepository
from app.modules.audit.models import AuditLog
from app.modules.webhooks.enums import WebhookOutcome
from app.modules.webhooks.exceptions import ConcurrentDeliveryConflictError, MissingEmailError
from app.modules.webhooks.facades.account_state_machine import AccountStateMachine
from app.shared.utils.datetime_helpers import ensure_utc

NOW = datetime(2026, 1, 1, 12, 0, tzinfo=timezone.utc)
WEBHOOK_ID = uuid.uuid4()


def _record(**overrides):
    record = {
        "email": "ana@example.com",
        "name": "Ana Souza",
        "phone": "11999990000",
        "cpfCnpj": "12345678900",
        "plan": "Pro",
        "offer": "trimestral",
        "quantity": "1",
        "status": "active",
    }
    record.update(overrides)
    return {k: v for k, v in record.items() if v is not None}


async def _count(session, model):
    return (await session.execute(select(func.count()).select_from(model))).scalar_one()


@pytest.fixture
def machine():
    return AccountStateMachine()


@pytest.fixture
async def plans(make_plan):
    monthly = await make_plan("Pro", duration_months=1)
    quarterly = await make_plan("Pro", duration_months=3)
    return monthly, quarterly


class TestCreated:
    @pytest.mark.asyncio
    async def test_creates_user_account_and_subscription(self, db_session, machine, plans):
        _, quarterly = plans

        result = await machine.apply(db_session, _record(), webhook_id=WEBHOOK_ID, now=NOW)
        await db_session.commit()

        assert result.outcome is WebhookOutcome.CREATED
        assert result.status_code == 201

        user = (await db_session.execute(select(User))).scalar_one()
        assert user.email == "ana@example.com"
        assert user.name == "Ana Souza"
        assert user.password_hash

        account = (await db_session.execute(select(Account))).scalar_one()
        assert account.user_id == user.id
        assert account.name == "Pro"
        assert ensure_utc(account.trial_ends_at) == NOW + timedelta(days=90)

        subscription = (await db_session.execute(select(Subscription))).scalar_one()
        assert subscription.plan_id == quarterly.id
        assert ensure_utc(subscription.end_date) == NOW + timedelta(days=90)

    @pytest.mark.asyncio
    async def test_response_envelope_and_summary(self, db_session, machine, plans):
        result = await machine.apply(db_session, _record(), webhook_id=WEBHOOK_ID, now=NOW)
        body = result.to_response()

        assert body["success"] is True
        data = body["data"]
        assert data["action"] == "created"
        assert data["email"] == "ana@example.com"
        assert data["message"] == "Webhook processado com sucesso"
        assert data["accountId"] == result.account_id
        assert data["resumo"]["acao"] == "Usuário criado"
        assert data["resumo"]["usuario"]["cpfCnpj"] == "12345678900"
        assert data["resumo"]["dataVencimento"] == "01/04/2026"

    @pytest.mark.asyncio
    async def test_email_is_normalized(self, db_session, machine, plans):
        result = await machine.apply(
            db_session, _record(email="  Ana@Example.COM "), webhook_id=WEBHOOK_ID, now=NOW
        )
        assert result.email == "ana@example.com"

    @pytest.mark.asyncio
    async def test_name_defaults_to_email_local_part(self, db_session, machine, plans):
        result = await machine.apply(db_session, _record(name=None), webhook_id=WEBHOOK_ID, now=NOW)
        assert result.summary["usuario"]["nome"] == "ana"

    @pytest.mark.asyncio
    async def test_unknown_plan_keeps_token_as_account_name(self, db_session, machine):
        await machine.apply(db_session, _record(plan="Enterprise"), webhook_id=WEBHOOK_ID, now=NOW)
        await db_session.commit()

        account = (await db_session.execute(select(Account))).scalar_one()
        assert account.name == "Enterprise"
        assert await _count(db_session, Subscription) == 0

    @pytest.mark.asyncio
    async def test_oversize_platform_tokens_are_stored_verbatim(self, db_session, machine):
        long_status = "subscription_" + "x" * 60
        long_plan = "Plano " + "P" * 400
        long_phone = "+55 " + "9" * 80
        long_document = "1" * 80

        await machine.apply(
            db_session,
            _record(status=long_status, plan=long_plan, phone=long_phone, cpfCnpj=long_document),
            webhook_id=WEBHOOK_ID,
            now=NOW,
        )
        await db_session.commit()

        user = (await db_session.execute(select(User))).scalar_one()
        assert (user.phone, user.cpf_cnpj) == (long_phone, long_document)
        account = (await db_session.execute(select(Account))).scalar_one()
        assert (account.name, account.status) == (long_plan, long_status)

    def test_platform_token_columns_are_unbounded(self):
        columns = [
            User.__table__.c.name,
            User.__table__.c.email,
            User.__table__.c.phone,
            User.__table__.c.cpf_cnpj,
            Account.__table__.c.name,
            Account.__table__.c.status,
            Subscription.__table__.c.status,
        ]
        for column in columns:
            assert getattr(column.type, "length", None) is None, column.name

    @pytest.mark.asyncio
    async def test_no_offer_leaves_due_date_empty(self, db_session, machine, plans):
        monthly, _ = plans
        await machine.apply(db_session, _record(offer=None), webhook_id=WEBHOOK_ID, now=NOW)
        await db_session.commit()

        account = (await db_session.execute(select(Account))).scalar_one()
        assert account.trial_ends_at is None
        subscription = (await db_session.execute(select(Subscription))).scalar_one()
        assert subscription.plan_id == monthly.id

    @pytest.mark.asyncio
    async def test_audit_entry_written(self, db_session, machine, plans):
        result = await machine.apply(
            db_session,
            _record(),
            webhook_id=WEBHOOK_ID,
            request_meta={"ip_address": "10.0.0.1", "user_agent": "Hotmart/1.0"},
            now=NOW,
        )
        await db_session.commit()

        entry = (await db_session.execute(select(AuditLog))).scalar_one()
        assert entry.action == "webhook_register"
        assert entry.entity == "User"
        assert entry.entity_id == result.user_id
        assert entry.ip_address == "10.0.0.1"
        assert entry.payload["webhookId"] == str(WEBHOOK_ID)
        assert entry.payload["accountId"] == result.account_id


class TestIdempotence:
    @pytest.mark.asyncio
    async def test_second_delivery_updates(self, db_session, machine, plans):
        first = await machine.apply(db_session, _record(), webhook_id=WEBHOOK_ID, now=NOW)
        await db_session.commit()

        later = NOW + timedelta(days=10)
        second = await machine.apply(
            db_session,
            _record(phone="11888880000", offer="mensal", status="vencido"),
            webhook_id=WEBHOOK_ID,
            now=later,
        )
        await db_session.commit()

        assert second.outcome is WebhookOutcome.UPDATED
        assert second.status_code == 200
        assert second.user_id == first.user_id
        assert second.account_id == first.account_id
        assert await _count(db_session, User) == 1
        assert await _count(db_session, Account) == 1
        assert await _count(db_session, Subscription) == 1

        user = (await db_session.execute(select(User))).scalar_one()
        assert user.phone == "11888880000"
        account = (await db_session.execute(select(Account))).scalar_one()
        assert account.status == "vencido"
        assert ensure_utc(account.trial_ends_at) == later + timedelta(days=30)

        monthly, _ = plans
        subscription = (await db_session.execute(select(Subscription))).scalar_one()
        assert subscription.plan_id == monthly.id

        actions = (await db_session.execute(select(AuditLog.action).order_by(AuditLog.created_at))).scalars().all()
        assert actions == ["webhook_register", "webhook_update"]

    @pytest.mark.asyncio
    async def test_update_without_offer_keeps_due_date(self, db_session, machine, plans):
        await machine.apply(db_session, _record(), webhook_id=WEBHOOK_ID, now=NOW)
        await db_session.commit()

        await machine.apply(db_session, _record(offer=None), webhook_id=WEBHOOK_ID, now=NOW)
        await db_session.commit()

        account = (await db_session.execute(select(Account))).scalar_one()
        assert ensure_utc(account.trial_ends_at) == NOW + timedelta(days=90)


class TestRestoredAndAccountCreated:
    @pytest.mark.asyncio
    async def test_soft_deleted_user_is_restored(self, db_session, machine, plans):
        user = User(
            name="Antiga",
            email="ana@example.com",
            password_hash="x",
            deleted_at=NOW - timedelta(days=5),
        )
        db_session.add(user)
        await db_session.commit()

        result = await machine.apply(db_session, _record(), webhook_id=WEBHOOK_ID, now=NOW)
        await db_session.commit()

        assert result.outcome is WebhookOutcome.RESTORED
        assert result.status_code == 200
        assert result.user_id == str(user.id)
        assert result.summary["acao"] == "Usuário restaurado"

        restored = (await db_session.execute(select(User))).scalar_one()
        assert restored.deleted_at is None
        assert restored.name == "Ana Souza"
        assert await _count(db_session, Account) == 1

        entry = (await db_session.execute(select(AuditLog))).scalar_one()
        assert entry.action == "webhook_register"
        assert entry.payload["restored"] is True

    @pytest.mark.asyncio
    async def test_live_user_without_account(self, db_session, machine, plans):
        user = User(name="Ana", email="ana@example.com", password_hash="x")
        db_session.add(user)
        await db_session.commit()

        result = await machine.apply(db_session, _record(), webhook_id=WEBHOOK_ID, now=NOW)
        await db_session.commit()

        assert result.outcome is WebhookOutcome.ACCOUNT_CREATED
        assert result.user_id == str(user.id)
        account = (await db_session.execute(select(Account))).scalar_one()
        assert account.user_id == user.id

        entry = (await db_session.execute(select(AuditLog))).scalar_one()
        assert entry.action == "webhook_account_created"


class TestErrors:
    @pytest.mark.asyncio
    async def test_missing_email(self, db_session, machine):
        with pytest.raises(MissingEmailError):
            await machine.apply(db_session, _record(email="   "), webhook_id=WEBHOOK_ID)

        with pytest.raises(MissingEmailError):
            await machine.apply(db_session, _record(email=None), webhook_id=WEBHOOK_ID)

    @pytest.mark.asyncio
    async def test_concurrent_create_becomes_conflict(self, db_session, plans, mocker):
        user_repo = UserRepository()
        mocker.patch.object(
            user_repo,
            "create",
            side_effect=IntegrityError("INSERT INTO users", {}, Exception("UNIQUE constraint failed")),
        )
        machine = AccountStateMachine(user_repo=user_repo)

        with pytest.raises(ConcurrentDeliveryConflictError) as exc_info:
            await machine.apply(db_session, _record(), webhook_id=WEBHOOK_ID, now=NOW)

        assert exc_info.value.status_code == 500
        assert isinstance(exc_info.value.__cause__, IntegrityError)
