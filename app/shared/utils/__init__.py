# -*- coding: utf-8 -*-
"""
backend/app/shared/utils/__init__.py

Exportación de utilidades comunes.

Autor: Zoomi
Fecha: 2026-09-03
"""

from .json_response import NO_STORE_HEADERS, UTF8JSONResponse, no_store_json

__all__ = ["UTF8JSONResponse", "NO_STORE_HEADERS", "no_store_json"]
