# -*- coding: utf-8 -*-
"""
backend/app/modules/customers/__init__.py

Clientes pendientes (capturados por un admin antes del registro).

Autor: Zoomi
Fecha: 2026-09-06
"""

from .routes import router

__all__ = ["router"]
