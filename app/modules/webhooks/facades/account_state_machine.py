# -*- coding: utf-8 -*-
"""
backend/app/modules/webhooks/facades/account_state_machine.py

Máquina de estados de usuario/cuenta/suscripción para entregas activas.

Estados por email normalizado:
    sin usuario              -> crear usuario + cuenta + suscripción  (created)
    usuario borrado (soft)   -> restaurar + cuenta + suscripción      (restored)
    usuario vivo sin cuenta  -> crear cuenta + suscripción            (account_created)
    usuario vivo con cuenta  -> refrescar usuario/cuenta/suscripción  (updated)

La fecha de vencimiento se recalcula siempre desde oferta × cantidad;
ningún otro campo mapeado la sobrescribe.

No confirma la transacción: lo hace el manejador de recepción.

Autor: Equipo Revenda
Fecha: 2026-03-02
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from app.modules.accounts.models import Account, User
from app.modules.accounts.repositories import (
    AccountRepository,
    SubscriptionRepository,
    UserRepository,
)
from app.modules.audit.services import AuditLogService
from app.modules.webhooks.enums import WebhookOutcome
from app.modules.webhooks.exceptions import ConcurrentDeliveryConflictError, MissingEmailError
from app.modules.webhooks.services.field_mapper import CanonicalRecord, get_mapped
from app.modules.webhooks.services.log_summary import build_log_summary
from app.modules.webhooks.services.plan_resolver import PlanResolver
from app.modules.webhooks.services.recurrence_parser import build_due_date
from app.shared.config import settings
from app.shared.utils.email_utils import is_valid_email_address, mask_email, normalize_email
from app.shared.utils.security import hash_password

logger = logging.getLogger(__name__)

SUCCESS_MESSAGE = "Webhook processado com sucesso"

ACTION_LABELS = {
    WebhookOutcome.CREATED: "Usuário criado",
    WebhookOutcome.RESTORED: "Usuário restaurado",
    WebhookOutcome.ACCOUNT_CREATED: "Conta criada para usuário existente",
    WebhookOutcome.UPDATED: "Usuário atualizado (dados, plano, data de vencimento e/ou status da assinatura)",
}

AUDIT_ACTIONS = {
    WebhookOutcome.CREATED: "webhook_register",
    WebhookOutcome.RESTORED: "webhook_register",
    WebhookOutcome.ACCOUNT_CREATED: "webhook_account_created",
    WebhookOutcome.UPDATED: "webhook_update",
}


@dataclass(frozen=True)
class DeliveryFields:
    """Campos derivados del registro canónico para una entrega."""

    email: str
    user_name: str
    phone: Optional[str]
    cpf_cnpj: Optional[str]
    plan_token: Optional[str]
    offer_raw: Optional[str]
    quantity: Optional[str]
    status: str
    trial_ends_at: Optional[datetime]

    @classmethod
    def from_record(cls, record: CanonicalRecord, now: Optional[datetime] = None) -> "DeliveryFields":
        raw_email = get_mapped(record, "email")
        if not raw_email:
            raise MissingEmailError()

        email = normalize_email(raw_email)
        offer_raw = record.get("offer")
        quantity = get_mapped(record, "quantity")

        return cls(
            email=email,
            user_name=get_mapped(record, "name") or email.split("@")[0],
            phone=get_mapped(record, "phone"),
            cpf_cnpj=get_mapped(record, "cpfCnpj"),
            plan_token=get_mapped(record, "plan"),
            offer_raw=offer_raw,
            quantity=quantity,
            status=get_mapped(record, "status") or "active",
            trial_ends_at=build_due_date(offer_raw, quantity, now=now),
        )


@dataclass
class TransitionResult:
    outcome: WebhookOutcome
    user_id: str
    email: str
    account_id: Optional[str] = None
    summary: Dict[str, Any] = field(default_factory=dict)

    @property
    def status_code(self) -> int:
        return 201 if self.outcome is WebhookOutcome.CREATED else 200

    def to_response(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "action": self.outcome.value,
            "userId": self.user_id,
            "email": self.email,
            "message": SUCCESS_MESSAGE,
            "resumo": self.summary,
        }
        if self.account_id:
            data["accountId"] = self.account_id
        return {"success": True, "data": data}


class AccountStateMachine:
    def __init__(
        self,
        *,
        user_repo: Optional[UserRepository] = None,
        account_repo: Optional[AccountRepository] = None,
        subscription_repo: Optional[SubscriptionRepository] = None,
        plan_resolver: Optional[PlanResolver] = None,
        audit_service: Optional[AuditLogService] = None,
    ) -> None:
        self.user_repo = user_repo or UserRepository()
        self.account_repo = account_repo or AccountRepository()
        self.subscription_repo = subscription_repo or SubscriptionRepository()
        self.plan_resolver = plan_resolver or PlanResolver()
        self.audit_service = audit_service or AuditLogService()

    # ------------------------------------------------------------------
    # Entrada
    # ------------------------------------------------------------------
    async def apply(
        self,
        session: AsyncSession,
        record: CanonicalRecord,
        *,
        webhook_id: Any,
        request_meta: Optional[Dict[str, Any]] = None,
        now: Optional[datetime] = None,
    ) -> TransitionResult:
        """
        Aplica la transición que corresponde al estado actual del email.

        Raises:
            MissingEmailError: si el registro no trae email.
            ConcurrentDeliveryConflictError: otra entrega creó el mismo email
                entre la lectura y la inserción.
        """
        fields = DeliveryFields.from_record(record, now=now)
        if not is_valid_email_address(fields.email):
            logger.warning("webhook_email_format_suspicious email=%s", mask_email(fields.email))

        account_name = (
            await self.plan_resolver.resolve_name(session, fields.plan_token)
            or fields.plan_token
            or f"{fields.user_name}'s Account"
        )

        user = await self.user_repo.get_live_by_email(session, fields.email)
        if user is None:
            deleted = await self.user_repo.get_soft_deleted_by_email(session, fields.email)
            if deleted is not None:
                return await self._restore(session, deleted, fields, account_name, webhook_id, request_meta)
            return await self._create(session, fields, account_name, webhook_id, request_meta)

        account = await self.user_repo.get_live_account(session, user.id)
        if account is None:
            return await self._create_account_for(session, user, fields, account_name, webhook_id, request_meta)
        return await self._update(session, user, account, fields, account_name, webhook_id, request_meta)

    # ------------------------------------------------------------------
    # Transiciones
    # ------------------------------------------------------------------
    async def _create(self, session, fields: DeliveryFields, account_name, webhook_id, request_meta):
        try:
            user = await self.user_repo.create(
                session,
                email=fields.email,
                password_hash=hash_password(settings.webhook_default_password.get_secret_value()),
                name=fields.user_name,
                phone=fields.phone,
                cpf_cnpj=fields.cpf_cnpj,
                role="user",
            )
        except IntegrityError as e:
            logger.warning(
                "webhook_concurrent_user_create webhook_id=%s email=%s",
                webhook_id,
                mask_email(fields.email),
            )
            raise ConcurrentDeliveryConflictError() from e

        account = await self._create_account(session, user, fields, account_name)
        await self._upsert_subscription(session, account, fields)

        return await self._finish(
            session,
            WebhookOutcome.CREATED,
            user,
            account,
            fields,
            account_name,
            webhook_id,
            request_meta,
            description=f"Usuário '{user.name}' ({user.email}) criado via webhook",
        )

    async def _restore(self, session, user: User, fields: DeliveryFields, account_name, webhook_id, request_meta):
        await self.user_repo.update(
            session,
            user,
            deleted_at=None,
            name=fields.user_name,
            phone=fields.phone,
            cpf_cnpj=fields.cpf_cnpj,
        )

        account = await self.user_repo.get_live_account(session, user.id)
        if account is None:
            account = await self._create_account(session, user, fields, account_name)
        else:
            await self._refresh_account(session, account, fields, account_name)
        await self._upsert_subscription(session, account, fields)

        return await self._finish(
            session,
            WebhookOutcome.RESTORED,
            user,
            account,
            fields,
            account_name,
            webhook_id,
            request_meta,
            description=f"Usuário '{user.name}' ({user.email}) restaurado via webhook",
            extra={"restored": True},
        )

    async def _create_account_for(self, session, user: User, fields: DeliveryFields, account_name, webhook_id, request_meta):
        account = await self._create_account(session, user, fields, account_name)
        await self._upsert_subscription(session, account, fields)

        return await self._finish(
            session,
            WebhookOutcome.ACCOUNT_CREATED,
            user,
            account,
            fields,
            account_name,
            webhook_id,
            request_meta,
            description=f"Conta '{account.name}' criada via webhook para o usuário '{user.name}' ({user.email})",
        )

    async def _update(self, session, user: User, account: Account, fields: DeliveryFields, account_name, webhook_id, request_meta):
        await self.user_repo.update(
            session,
            user,
            name=fields.user_name,
            phone=fields.phone,
            cpf_cnpj=fields.cpf_cnpj,
        )
        await self._refresh_account(session, account, fields, account_name)
        await self._upsert_subscription(session, account, fields)

        return await self._finish(
            session,
            WebhookOutcome.UPDATED,
            user,
            account,
            fields,
            account_name,
            webhook_id,
            request_meta,
            description=f"Usuário '{user.name}' ({user.email}) atualizado via webhook",
        )

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------
    async def _create_account(self, session, user: User, fields: DeliveryFields, account_name: str) -> Account:
        return await self.account_repo.create(
            session,
            user_id=user.id,
            name=account_name,
            status=fields.status,
            trial_ends_at=fields.trial_ends_at,
        )

    async def _refresh_account(self, session, account: Account, fields: DeliveryFields, account_name: str) -> None:
        changes: Dict[str, Any] = {"name": account_name, "status": fields.status}
        if fields.trial_ends_at is not None:
            changes["trial_ends_at"] = fields.trial_ends_at
        await self.account_repo.update(session, account, **changes)

    async def _upsert_subscription(self, session, account: Account, fields: DeliveryFields) -> None:
        """Apunta la suscripción actual a la variante de plan de la oferta (o la crea)."""
        plan_id = await self.plan_resolver.resolve_by_offer(
            session, fields.plan_token, fields.offer_raw, fields.quantity
        )
        if plan_id is None:
            return

        current = await self.subscription_repo.get_current_for_account(session, account.id)
        if current is not None:
            changes: Dict[str, Any] = {"plan_id": plan_id}
            if fields.trial_ends_at is not None:
                changes["end_date"] = fields.trial_ends_at
            await self.subscription_repo.update(session, current, **changes)
            return

        await self.subscription_repo.create(
            session,
            account_id=account.id,
            plan_id=plan_id,
            status="active",
            end_date=fields.trial_ends_at,
        )

    async def _finish(
        self,
        session,
        outcome: WebhookOutcome,
        user: User,
        account: Account,
        fields: DeliveryFields,
        account_name: str,
        webhook_id,
        request_meta,
        *,
        description: str,
        extra: Optional[Dict[str, Any]] = None,
    ) -> TransitionResult:
        meta = request_meta or {}
        payload: Dict[str, Any] = {
            "description": description,
            "webhookId": str(webhook_id),
            "email": fields.email,
            "entityName": user.name,
            "accountId": str(account.id),
        }
        payload.update(extra or {})

        await self.audit_service.record(
            session,
            user_id=user.id,
            action=AUDIT_ACTIONS[outcome],
            entity="User",
            entity_id=str(user.id),
            payload=payload,
            ip_address=meta.get("ip_address"),
            user_agent=meta.get("user_agent"),
        )

        logger.info(
            "webhook_transition_applied webhook_id=%s outcome=%s user_id=%s account_id=%s",
            webhook_id,
            outcome.value,
            user.id,
            account.id,
        )

        return TransitionResult(
            outcome=outcome,
            user_id=str(user.id),
            email=user.email,
            account_id=str(account.id),
            summary=build_log_summary(
                action_label=ACTION_LABELS[outcome],
                user_name=user.name,
                email=user.email,
                cpf_cnpj=user.cpf_cnpj,
                plan_display=account_name,
                offer_raw=fields.offer_raw,
                due_date=fields.trial_ends_at,
                status=fields.status,
            ),
        )


__all__ = ["AccountStateMachine", "DeliveryFields", "TransitionResult", "SUCCESS_MESSAGE"]
# Fin del archivo backend/app/modules/webhooks/facades/account_state_machine.py
