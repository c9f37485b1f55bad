# -*- coding: utf-8 -*-
"""
backend/app/core/__init__.py

Fachada unificada para componentes centrales del backend de Zoomi:
- Configuración (settings)
- Logging

Autor: Zoomi
Fecha: 2026-09-02
"""

from .settings import get_settings, reset_settings_cache
from .logging import configure_logging

__all__ = [
    "get_settings",
    "reset_settings_cache",
    "configure_logging",
]
