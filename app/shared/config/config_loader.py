# -*- coding: utf-8 -*-
"""
backend/app/shared/config/config_loader.py

Selección de la clase de settings según PYTHON_ENV (production / test /
cualquier otro valor = development) y singleton vía lru_cache.

Los tests llaman get_settings.cache_clear() (o reset_settings_cache en
app.core.settings) tras cambiar variables de entorno.

Autor: Zoomi
Actualizado: 2026-09-02
"""

import logging
import os
from functools import lru_cache

from .settings_base import BaseAppSettings
from .settings_dev import DevSettings
from .settings_prod import ProdSettings
from .settings_testing import EnvTestingSettings

logger = logging.getLogger(__name__)

_SETTINGS_BY_ENV: dict[str, type[BaseAppSettings]] = {
    "production": ProdSettings,
    "test": EnvTestingSettings,
}


@lru_cache(maxsize=1)
def get_settings() -> BaseAppSettings:
    """
    Instancia de configuración del entorno actual.

    Raises:
        ValueError: ADMIN_API_KEY ausente o corta en producción,
            o REVENUE_TIMEZONE desconocida.
    """
    env = os.getenv("PYTHON_ENV", "development").strip().lower()
    settings = _SETTINGS_BY_ENV.get(env, DevSettings)()
    settings._security_checks()
    logger.debug("settings_loaded env=%s class=%s", env, type(settings).__name__)
    return settings


__all__ = ["get_settings"]
# Fin del archivo backend/app/shared/config/config_loader.py
