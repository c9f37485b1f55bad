# -*- coding: utf-8 -*-
"""
backend/app/shared/config/settings_base.py

Base de configuración (Pydantic v2) para el backend de Zoomi.
- Esta clase NO instancia singletons ni resuelve .env; eso lo hace config_loader.
- Es la base para settings_dev.py, settings_testing.py y settings_prod.py.

Autor: Zoomi
Fecha: 2026-09-02
"""

from typing import Literal, Optional
from pydantic import Field, SecretStr, computed_field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


# Tipos de entorno soportados
EnvName = Literal["development", "test", "production"]


class BaseAppSettings(BaseSettings):
    # =========================
    # Núcleo de la aplicación
    # =========================
    python_env: EnvName = Field(default="development", validation_alias="PYTHON_ENV")
    app_name: str = Field(default="Zoomi Admin API", validation_alias="APP_NAME")
    app_version: str = Field(default="0.1.0", validation_alias="APP_VERSION")
    app_host: str = Field(default="0.0.0.0", validation_alias="APP_HOST")
    app_port: int = Field(default=8000, validation_alias="APP_PORT")
    debug: bool = Field(default=False, validation_alias="DEBUG")

    # =========================
    # CORS / Frontend
    # =========================
    allowed_origins: str = Field(default="*", validation_alias="CORS_ORIGINS")

    # =========================
    # Stripe (solo lectura: ingresos y pronósticos)
    # =========================
    stripe_secret_key: Optional[SecretStr] = Field(default=None, validation_alias="STRIPE_SECRET_KEY")

    # =========================
    # Acceso administrativo
    # =========================
    # ADMIN_API_KEY puede editar; ADMIN_VIEWER_KEY solo lectura.
    admin_api_key: Optional[SecretStr] = Field(default=None, validation_alias="ADMIN_API_KEY")
    admin_viewer_key: Optional[SecretStr] = Field(default=None, validation_alias="ADMIN_VIEWER_KEY")

    # =========================
    # Almacenamiento local (gastos manuales, unidades, clientes pendientes)
    # =========================
    redis_url: Optional[str] = Field(default=None, validation_alias="REDIS_URL")
    data_dir: str = Field(default="data", validation_alias="DATA_DIR")

    # =========================
    # Reportes de ingresos
    # =========================
    # None = zona horaria local del servidor
    revenue_timezone: Optional[str] = Field(default=None, validation_alias="REVENUE_TIMEZONE")
    month_label_timezone: str = Field(default="America/New_York", validation_alias="MONTH_LABEL_TIMEZONE")
    revenue_paid_invoice_lookback_days: int = Field(
        default=60,
        ge=0,
        validation_alias="REVENUE_PAID_INVOICE_LOOKBACK_DAYS",
    )

    # =========================
    # Observabilidad / Logging
    # =========================
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(default="INFO", validation_alias="LOG_LEVEL")
    log_format: Literal["json", "pretty", "plain"] = Field(default="pretty", validation_alias="LOG_FORMAT")

    # ===== Helpers de entorno =====
    @computed_field  # type: ignore[misc]
    @property
    def is_dev(self) -> bool:
        return self.python_env == "development"

    @computed_field  # type: ignore[misc]
    @property
    def is_test(self) -> bool:
        return self.python_env == "test"

    @computed_field  # type: ignore[misc]
    @property
    def is_prod(self) -> bool:
        return self.python_env == "production"

    @computed_field  # type: ignore[misc]
    @property
    def stripe_configured(self) -> bool:
        return bool(self.stripe_secret_key and self.stripe_secret_key.get_secret_value())

    # ===== Normalizador: cadenas vacías -> None =====
    @field_validator("stripe_secret_key", "admin_api_key", "admin_viewer_key", "redis_url", "revenue_timezone", mode="before")
    @classmethod
    def _blank_to_none(cls, v):
        if isinstance(v, str) and not v.strip():
            return None
        return v

    # ===== Utilidad para normalizar CORS =====
    def get_cors_origins(self) -> list[str]:
        """Convierte allowed_origins en lista procesable para CORS middleware."""
        if not self.allowed_origins or self.allowed_origins == "*":
            return ["*"]
        # Parsea lista separada por comas, limpia comillas
        return [o.strip().strip('"').strip("'") for o in self.allowed_origins.split(",") if o.strip()]

    def _security_checks(self) -> None:
        """
        Validaciones mínimas de seguridad y coherencia.
        Se invoca desde config_loader tras instanciar el settings.
        """
        import logging
        logger = logging.getLogger(__name__)

        if self.is_prod:
            if not self.admin_api_key:
                raise ValueError("ADMIN_API_KEY es requerido en producción")
            key = self.admin_api_key.get_secret_value()
            if len(key) < 24:
                raise ValueError("ADMIN_API_KEY debe tener ≥24 caracteres en producción")

        if self.revenue_timezone:
            from zoneinfo import ZoneInfo, ZoneInfoNotFoundError
            try:
                ZoneInfo(self.revenue_timezone)
            except ZoneInfoNotFoundError as e:
                raise ValueError(f"REVENUE_TIMEZONE inválida: {self.revenue_timezone}") from e

        # Validaciones suaves para desarrollo
        if self.is_dev:
            if not self.stripe_configured:
                logger.info("ℹ️ STRIPE_SECRET_KEY vacío - ingresos y pronósticos reportarán cero")
            if not self.redis_url:
                logger.info("ℹ️ REDIS_URL vacío - stores locales usan archivos JSON en %s", self.data_dir)

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )


__all__ = ["BaseAppSettings", "EnvName"]
# Fin del archivo backend/app/shared/config/settings_base.py
