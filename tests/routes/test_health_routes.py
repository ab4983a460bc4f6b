# -*- coding: utf-8 -*-
"""
backend/tests/routes/test_health_routes.py
"""

import pytest


@pytest.mark.asyncio
async def test_health_reports_database(async_client, mocker):
    mocker.patch("app.routes.health_routes.check_database_health", return_value=True)

    resp = await async_client.get("/health")

    assert resp.status_code == 200
    body = resp.json()
    assert body["status"] == "ok"
    assert body["environment"] == "test"
    assert body["database"] == {"reachable": True}
    assert body["service"]["name"] == "revenda-backend"


@pytest.mark.asyncio
async def test_health_degraded(async_client, mocker):
    mocker.patch("app.routes.health_routes.check_database_health", return_value=False)

    resp = await async_client.get("/health")
    assert resp.json()["status"] == "degraded"


@pytest.mark.asyncio
async def test_root(async_client):
    resp = await async_client.get("/")
    assert resp.json() == {"service": "Revenda Backend", "status": "active"}
    assert "charset=utf-8" in resp.headers["content-type"]


@pytest.mark.asyncio
async def test_unknown_route_uses_error_envelope(async_client):
    resp = await async_client.get("/no-such-route")
    assert resp.status_code == 404
    assert resp.json() == {"success": False, "error": {"message": "Not Found"}}


@pytest.mark.asyncio
async def test_wrong_method_uses_error_envelope(async_client):
    resp = await async_client.get("/webhooks/receive/0b6f2a1e-3c4d-4e5f-8a9b-0c1d2e3f4a5b")
    assert resp.status_code == 405
    assert resp.json() == {"success": False, "error": {"message": "Method Not Allowed"}}
