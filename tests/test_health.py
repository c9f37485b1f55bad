# -*- coding: utf-8 -*-
"""
tests/test_health.py

/health y raíz con el ciclo de vida completo (asgi-lifespan).
"""

import pytest


@pytest.mark.anyio
async def test_health_without_redis(async_client):
    resp = await async_client.get("/health")

    assert resp.status_code == 200
    body = resp.json()
    assert body["status"] == "ok"
    assert body["environment"] == "test"
    assert body["stripe"] == {"configured": False}
    assert body["storage"] == {"backend": "file", "reachable": None}
    assert body["timestamp"].endswith("Z")


@pytest.mark.anyio
async def test_root(async_client):
    resp = await async_client.get("/")

    assert resp.status_code == 200
    assert resp.json() == {"service": "Zoomi Backend", "status": "active"}
    assert resp.headers["content-type"] == "application/json; charset=utf-8"
