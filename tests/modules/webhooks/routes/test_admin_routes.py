# -*- coding: utf-8 -*-
"""
backend/tests/modules/webhooks/routes/test_admin_routes.py

Tests de la administración de webhooks (/admin/webhooks): autenticación
por token de servicio, CRUD con reglas, activación, historial y
reprocesamiento del último payload de prueba.

Autor: Equipo Revenda
Fecha: 2026-03-02
"""

import uuid

import pytest
from sqlalchemy import func, select

from app.modules.accounts.models import User
from app.modules.webhooks.models import WebhookLog

BASE = "/admin/webhooks"

HOTMART_RULES = [
    {"external_field": "data.buyer.email", "canonical_field": "email"},
    {"external_field": "data.buyer.name", "canonical_field": "name"},
    {"external_field": "Pro", "canonical_field": "plan"},
]


async def _create(async_client, admin_headers, **overrides):
    payload = {"name": "Hotmart", "description": "Vendas Pro", "field_mappings": HOTMART_RULES}
    payload.update(overrides)
    resp = await async_client.post(BASE, json=payload, headers=admin_headers)
    assert resp.status_code == 201, resp.text
    return resp.json()


class TestAuth:
    @pytest.mark.asyncio
    async def test_missing_token_is_401(self, async_client):
        resp = await async_client.get(BASE)
        assert resp.status_code == 401
        assert resp.json() == {"success": False, "error": {"message": "Authorization header required"}}

    @pytest.mark.asyncio
    async def test_malformed_header_is_401(self, async_client):
        resp = await async_client.get(BASE, headers={"Authorization": "Token abc"})
        assert resp.status_code == 401

    @pytest.mark.asyncio
    async def test_wrong_token_is_403(self, async_client):
        resp = await async_client.get(BASE, headers={"Authorization": "Bearer nope"})
        assert resp.status_code == 403

    @pytest.mark.asyncio
    async def test_receive_endpoint_stays_public(self, async_client):
        resp = await async_client.post(f"/webhooks/receive/{uuid.uuid4()}", json={})
        assert resp.status_code == 404


class TestCrud:
    @pytest.mark.asyncio
    async def test_create_starts_inactive_in_test_mode(self, async_client, admin_headers):
        created = await _create(async_client, admin_headers)

        assert created["name"] == "Hotmart"
        assert created["is_active"] is False
        assert created["test_mode"] is True
        assert created["secret"].startswith("whsec_")
        assert created["server_url"] == f"/webhooks/receive/{created['id']}"
        assert [m["canonical_field"] for m in created["field_mappings"]] == ["email", "name", "plan"]
        assert [m["position"] for m in created["field_mappings"]] == [0, 1, 2]

    @pytest.mark.asyncio
    async def test_create_rejects_blank_rule(self, async_client, admin_headers):
        resp = await async_client.post(
            BASE,
            json={"name": "X", "field_mappings": [{"external_field": "  ", "canonical_field": "email"}]},
            headers=admin_headers,
        )
        assert resp.status_code == 422

    @pytest.mark.asyncio
    async def test_list_and_get(self, async_client, admin_headers):
        first = await _create(async_client, admin_headers, name="Hotmart")
        second = await _create(async_client, admin_headers, name="Kiwify")

        resp = await async_client.get(BASE, headers=admin_headers)
        assert resp.status_code == 200
        assert {w["id"] for w in resp.json()} == {first["id"], second["id"]}

        resp = await async_client.get(f"{BASE}/{first['id']}", headers=admin_headers)
        assert resp.status_code == 200
        assert resp.json()["name"] == "Hotmart"

    @pytest.mark.asyncio
    async def test_get_unknown_is_404(self, async_client, admin_headers):
        resp = await async_client.get(f"{BASE}/{uuid.uuid4()}", headers=admin_headers)
        assert resp.status_code == 404
        assert resp.json()["error"]["message"] == "Webhook não encontrado"

    @pytest.mark.asyncio
    async def test_update_replaces_rules(self, async_client, admin_headers):
        created = await _create(async_client, admin_headers)

        resp = await async_client.put(
            f"{BASE}/{created['id']}",
            json={
                "name": "Hotmart BR",
                "field_mappings": [{"external_field": "buyer.email", "canonical_field": "email", "prefix": ""}],
            },
            headers=admin_headers,
        )
        assert resp.status_code == 200
        body = resp.json()
        assert body["name"] == "Hotmart BR"
        assert body["description"] == "Vendas Pro"
        assert [m["external_field"] for m in body["field_mappings"]] == ["buyer.email"]

    @pytest.mark.asyncio
    async def test_update_without_rules_keeps_them(self, async_client, admin_headers):
        created = await _create(async_client, admin_headers)
        resp = await async_client.put(
            f"{BASE}/{created['id']}", json={"description": "nova"}, headers=admin_headers
        )
        assert resp.status_code == 200
        assert len(resp.json()["field_mappings"]) == 3

    @pytest.mark.asyncio
    async def test_delete_is_soft(self, async_client, admin_headers, db_session):
        created = await _create(async_client, admin_headers)

        resp = await async_client.delete(f"{BASE}/{created['id']}", headers=admin_headers)
        assert resp.status_code == 204

        resp = await async_client.get(f"{BASE}/{created['id']}", headers=admin_headers)
        assert resp.status_code == 404
        resp = await async_client.get(BASE, headers=admin_headers)
        assert resp.json() == []

        resp = await async_client.post(f"/webhooks/receive/{created['id']}", json={})
        assert resp.status_code == 404


class TestActivation:
    @pytest.mark.asyncio
    async def test_activate_requires_rules(self, async_client, admin_headers):
        created = await _create(async_client, admin_headers, field_mappings=[])

        resp = await async_client.post(f"{BASE}/{created['id']}/activate", headers=admin_headers)
        assert resp.status_code == 400
        assert resp.json()["error"]["message"] == "Configure ao menos um campo mapeado antes de ativar"

    @pytest.mark.asyncio
    async def test_activate_then_deactivate(self, async_client, admin_headers):
        created = await _create(async_client, admin_headers)

        resp = await async_client.post(f"{BASE}/{created['id']}/activate", headers=admin_headers)
        assert resp.status_code == 200
        assert resp.json()["is_active"] is True
        assert resp.json()["test_mode"] is False

        resp = await async_client.post(f"{BASE}/{created['id']}/deactivate", headers=admin_headers)
        assert resp.status_code == 200
        assert resp.json()["is_active"] is False
        assert resp.json()["test_mode"] is True


class TestLogs:
    @pytest.mark.asyncio
    async def test_logs_are_paged_newest_first(self, async_client, admin_headers):
        created = await _create(async_client, admin_headers)
        await async_client.post(f"{BASE}/{created['id']}/activate", headers=admin_headers)

        for n in range(3):
            await async_client.post(f"/webhooks/receive/{created['id']}", json={"n": n})

        resp = await async_client.get(f"{BASE}/{created['id']}/logs?limit=2", headers=admin_headers)
        assert resp.status_code == 200
        page = resp.json()
        assert page["total"] == 3
        assert [row["body"]["n"] for row in page["data"]] == [2, 1]
        assert all(row["response_status"] == 400 for row in page["data"])

        resp = await async_client.get(f"{BASE}/{created['id']}/logs?limit=2&offset=2", headers=admin_headers)
        assert [row["body"]["n"] for row in resp.json()["data"]] == [0]

    @pytest.mark.asyncio
    async def test_global_logs_span_webhooks(self, async_client, admin_headers):
        a = await _create(async_client, admin_headers, name="A")
        b = await _create(async_client, admin_headers, name="B")
        await async_client.post(f"/webhooks/receive/{a['id']}", json={"x": 1})
        await async_client.post(f"/webhooks/receive/{b['id']}", json={"x": 2})

        resp = await async_client.get(f"{BASE}/logs", headers=admin_headers)
        assert resp.status_code == 200
        assert resp.json()["total"] == 2
        assert {row["webhook_id"] for row in resp.json()["data"]} == {a["id"], b["id"]}

    @pytest.mark.asyncio
    async def test_logs_of_unknown_webhook_is_404(self, async_client, admin_headers):
        resp = await async_client.get(f"{BASE}/{uuid.uuid4()}/logs", headers=admin_headers)
        assert resp.status_code == 404


class TestReprocess:
    @pytest.mark.asyncio
    async def test_without_captured_payload_is_400(self, async_client, admin_headers):
        created = await _create(async_client, admin_headers)

        resp = await async_client.post(f"{BASE}/{created['id']}/reprocess", headers=admin_headers)
        assert resp.status_code == 400
        assert resp.json()["error"]["message"] == "Nenhum payload de teste salvo"

    @pytest.mark.asyncio
    async def test_reprocess_applies_last_test_payload(self, async_client, admin_headers, db_session):
        created = await _create(async_client, admin_headers)
        webhook_id = created["id"]

        payload = {"data": {"buyer": {"email": "Ana@Example.com", "name": "Ana"}}}
        resp = await async_client.post(f"/webhooks/receive/{webhook_id}", json=payload)
        assert resp.status_code == 200
        assert (await db_session.execute(select(func.count()).select_from(User))).scalar_one() == 0

        resp = await async_client.post(f"{BASE}/{webhook_id}/reprocess", headers=admin_headers)
        assert resp.status_code == 201
        data = resp.json()["data"]
        assert data["action"] == "created"
        assert data["email"] == "ana@example.com"

        # Sigue en modo prueba: reprocesar no cambia la configuración
        resp = await async_client.get(f"{BASE}/{webhook_id}", headers=admin_headers)
        assert resp.json()["test_mode"] is True
        assert resp.json()["last_test_payload"] == payload

        logs = (
            await db_session.execute(
                select(WebhookLog).where(WebhookLog.webhook_id == uuid.UUID(webhook_id)).order_by(WebhookLog.id)
            )
        ).scalars().all()
        assert [log.processed_in_test_mode for log in logs] == [True, False]
        assert logs[-1].headers == {"x-reprocess-source": "admin"}

        resp = await async_client.post(f"{BASE}/{webhook_id}/reprocess", headers=admin_headers)
        assert resp.status_code == 200
        assert resp.json()["data"]["action"] == "updated"

    @pytest.mark.asyncio
    async def test_reprocess_without_rules_is_400(self, async_client, admin_headers):
        created = await _create(async_client, admin_headers, field_mappings=[])
        await async_client.post(f"/webhooks/receive/{created['id']}", json={"email": "a@b.com"})

        resp = await async_client.post(f"{BASE}/{created['id']}/reprocess", headers=admin_headers)
        assert resp.status_code == 400
        assert resp.json()["error"]["message"] == "Configure os campos mapeados antes de reprocessar"
