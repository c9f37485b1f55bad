# -*- coding: utf-8 -*-
"""
backend/app/shared/config/settings_prod.py

Ajustes de producción: solo variables de entorno (sin .env), logging
JSON en INFO. ADMIN_API_KEY (≥24 caracteres) es obligatorio; lo valida
BaseAppSettings._security_checks. En producción se espera REDIS_URL:
el disco del contenedor puede ser de solo lectura y entonces los stores
responden StoreUnavailableError.

Autor: Zoomi
Fecha: 2026-09-02
"""

from typing import Literal

from pydantic_settings import SettingsConfigDict

from .settings_base import BaseAppSettings


class ProdSettings(BaseAppSettings):
    python_env: Literal["development", "test", "production"] = "production"

    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"
    log_format: Literal["json", "pretty", "plain"] = "json"

    model_config = SettingsConfigDict(env_file=None, extra="ignore")

    def _security_checks(self) -> None:
        super()._security_checks()
        if not self.redis_url:
            import logging
            logging.getLogger(__name__).warning(
                "⚠️ REDIS_URL vacío en producción - gastos y clientes pendientes usarán %s",
                self.data_dir,
            )


__all__ = ["ProdSettings"]
# Fin del archivo backend/app/shared/config/settings_prod.py
