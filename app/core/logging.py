# -*- coding: utf-8 -*-
"""
backend/app/core/logging.py

Punto de entrada de logging bajo `app.core`.
Traduce LOG_LEVEL / LOG_FORMAT de la configuración activa a la llamada
de `app.shared.config.logging_config.setup_logging`.

Autor: Zoomi
Fecha: 2026-09-02
"""

from typing import Optional

from app.shared.config.logging_config import setup_logging
from app.shared.config.settings_base import BaseAppSettings


def configure_logging(settings: Optional[BaseAppSettings] = None) -> None:
    """
    Configura logging a partir de la configuración de la aplicación.

    Args:
        settings: instancia de configuración; si es None se usa get_settings().
    """
    if settings is None:
        from app.core.settings import get_settings
        settings = get_settings()
    setup_logging(level=settings.log_level, fmt=settings.log_format)

# Fin del archivo backend/app/core/logging.py
