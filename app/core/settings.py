# -*- coding: utf-8 -*-
"""
backend/app/core/settings.py

Fachada de configuración para el backend de Zoomi.
Reexpone la carga de settings basada en Pydantic v2 definida en
`app.shared.config` y ofrece el reinicio del singleton para tests.

Autor: Zoomi
Fecha: 2026-09-02
"""

from typing import cast

from app.shared.config.config_loader import get_settings as _get_settings
from app.shared.config.settings_base import BaseAppSettings


def get_settings() -> BaseAppSettings:
    """
    Devuelve la configuración global de la aplicación (según PYTHON_ENV).
    """
    return cast(BaseAppSettings, _get_settings())


def reset_settings_cache() -> None:
    """Descarta el singleton para que el próximo get_settings() relea el entorno."""
    _get_settings.cache_clear()

# Fin del archivo backend/app/core/settings.py
