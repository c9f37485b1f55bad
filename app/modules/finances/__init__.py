# -*- coding: utf-8 -*-
"""
backend/app/modules/finances/__init__.py

Módulo de Finanzas: egresos de unidades, gastos manuales y resumen
ingresos / egresos para el panel administrativo.

Autor: Zoomi
Fecha: 2026-09-06
"""

from .routes import router

__all__ = ["router"]
