# -*- coding: utf-8 -*-
"""
backend/app/shared/config/settings_testing.py

Overrides para entorno de PRUEBAS (test) usando Pydantic v2.
Busca ser determinista: logging moderado, claves de admin dummy y
sin Stripe real (los tests inyectan un proveedor falso).

Autor: Zoomi
Fecha: 2026-09-02
"""

from typing import Optional

from pydantic import SecretStr
from pydantic_settings import SettingsConfigDict

from .settings_base import BaseAppSettings


class EnvTestingSettings(BaseAppSettings):
    # --- Identidad de entorno ---
    python_env: str = "test"

    # --- Logging en test: menos ruido ---
    log_level: str = "WARNING"
    log_format: str = "pretty"

    # --- Acceso administrativo con claves conocidas ---
    admin_api_key: Optional[SecretStr] = SecretStr("test-admin-key")
    admin_viewer_key: Optional[SecretStr] = SecretStr("test-viewer-key")

    # --- Zona horaria fija para fronteras de mes reproducibles ---
    revenue_timezone: Optional[str] = "UTC"

    model_config = SettingsConfigDict(
        env_file=".env.test",
        env_file_encoding="utf-8",
        extra="ignore",
    )


__all__ = ["EnvTestingSettings"]
# Fin del archivo backend/app/shared/config/settings_testing.py
