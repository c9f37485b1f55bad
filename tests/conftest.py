# backend/tests/conftest.py
# -*- coding: utf-8 -*-
"""
Config global de tests para el backend de Zoomi.

- PYTHON_ENV=test antes de importar la app (claves admin conocidas, UTC).
- Sin Redis: los stores usan archivos en un tmp_path por test.
- FakeStripeProvider: mismos métodos async que StripeProvider, con datos
  en memoria y paginación real (limit / starting_after / has_more).
"""

import os
import pathlib
import sys
from collections.abc import AsyncIterator
from typing import Any

import pytest

# -----------------------------------------------------------------------------
# 0) Entorno mínimo (antes de cualquier import de app.*)
# -----------------------------------------------------------------------------
os.environ["PYTHON_ENV"] = "test"
for _name in ("REDIS_URL", "STRIPE_SECRET_KEY", "ADMIN_API_KEY", "ADMIN_VIEWER_KEY", "REVENUE_TIMEZONE"):
    os.environ.pop(_name, None)

BACKEND_ROOT = pathlib.Path(__file__).resolve().parents[1]
if str(BACKEND_ROOT) not in sys.path:
    sys.path.insert(0, str(BACKEND_ROOT))
assert (BACKEND_ROOT / "app").exists(), f"'app' no existe en {BACKEND_ROOT}"

from tests.support.stripe_fakes import ADMIN_HEADERS, VIEWER_HEADERS, FakeStripeProvider


# -----------------------------------------------------------------------------
# 1) anyio: solo asyncio
# -----------------------------------------------------------------------------
@pytest.fixture
def anyio_backend():
    return "asyncio"


# -----------------------------------------------------------------------------
# 2) Aislamiento de settings / singletons
# -----------------------------------------------------------------------------
@pytest.fixture(autouse=True)
def _reset_singletons(monkeypatch, tmp_path):
    """Settings frescos, DATA_DIR temporal y sin clientes compartidos."""
    from app.core.settings import reset_settings_cache
    from app.modules.billing.providers.stripe_provider import reset_stripe_provider
    from app.shared.redis import RedisClientManager

    monkeypatch.setenv("PYTHON_ENV", "test")
    monkeypatch.setenv("DATA_DIR", str(tmp_path / "data"))
    monkeypatch.delenv("REDIS_URL", raising=False)
    reset_settings_cache()
    reset_stripe_provider()
    RedisClientManager._instance = None
    yield
    reset_settings_cache()
    reset_stripe_provider()
    RedisClientManager._instance = None


# -----------------------------------------------------------------------------
# 3) Proveedor Stripe falso
# -----------------------------------------------------------------------------
@pytest.fixture
def fake_provider() -> FakeStripeProvider:
    return FakeStripeProvider()


# -----------------------------------------------------------------------------
# 4) App FastAPI y clientes
# -----------------------------------------------------------------------------
@pytest.fixture
def app(fake_provider):
    """App principal con el proveedor Stripe sustituido por el fake."""
    from app.main import app as fastapi_app
    from app.modules.billing.providers.stripe_provider import get_stripe_provider

    fastapi_app.dependency_overrides[get_stripe_provider] = lambda: fake_provider
    yield fastapi_app
    fastapi_app.dependency_overrides.clear()


@pytest.fixture
def client(app):
    from fastapi.testclient import TestClient

    return TestClient(app)


@pytest.fixture
async def async_client(app) -> AsyncIterator[Any]:
    """
    Cliente HTTP asíncrono con ASGITransport y startup/shutdown vía asgi-lifespan.
    """
    from asgi_lifespan import LifespanManager
    from httpx import ASGITransport, AsyncClient

    async with LifespanManager(app):
        transport = ASGITransport(app=app)
        async with AsyncClient(transport=transport, base_url="http://testserver") as c:
            yield c


@pytest.fixture
def admin_headers():
    return dict(ADMIN_HEADERS)


@pytest.fixture
def viewer_headers():
    return dict(VIEWER_HEADERS)
