# -*- coding: utf-8 -*-
import os

import pytest


@pytest.fixture(autouse=True)
def _isolate_env_and_cache(monkeypatch):
    """
    Aísla variables de entorno y limpia el caché de get_settings() en cada test.
    """
    # No heredar PYTHON_ENV ni secretos del shell del dev
    for k in list(os.environ.keys()):
        if k.startswith(("STRIPE_", "ADMIN_", "CORS_", "APP_", "REDIS_", "REVENUE_", "MONTH_", "LOG_", "DATA_")):
            monkeypatch.delenv(k, raising=False)
    monkeypatch.setenv("PYTHON_ENV", "development")

    from app.core.settings import reset_settings_cache

    reset_settings_cache()
    yield
    reset_settings_cache()
# Fin del archivo backend/tests/shared/config/conftest.py
