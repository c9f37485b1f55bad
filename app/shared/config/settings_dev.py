# -*- coding: utf-8 -*-
"""
backend/app/shared/config/settings_dev.py

Ajustes para desarrollo local del panel de Zoomi.

- Logging DEBUG en texto plano.
- CORS abierto al servidor de Vite del panel (localhost:5173) salvo que
  CORS_ORIGINS diga otra cosa.
- Sin REDIS_URL los stores escriben en ./data/*.json.

Autor: Zoomi
Fecha: 2026-09-02
"""

from pydantic import Field
from pydantic_settings import SettingsConfigDict

from .settings_base import BaseAppSettings

DEV_PANEL_ORIGINS = "http://localhost:5173,http://127.0.0.1:5173"


class DevSettings(BaseAppSettings):
    python_env: str = "development"
    debug: bool = Field(default=True, validation_alias="DEBUG")

    log_level: str = "DEBUG"
    log_format: str = "plain"

    allowed_origins: str = Field(default=DEV_PANEL_ORIGINS, validation_alias="CORS_ORIGINS")

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )


__all__ = ["DevSettings", "DEV_PANEL_ORIGINS"]
# Fin del archivo backend/app/shared/config/settings_dev.py
