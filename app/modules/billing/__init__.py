# -*- coding: utf-8 -*-
"""
backend/app/modules/billing/__init__.py

Módulo de billing: reportes de ingresos a partir de Stripe.

Exporta un router unificado que incluye:
- /api/admin/revenue
- /api/admin/revenue/transactions
- /api/admin/revenue/debug

Autor: Zoomi
Fecha: 2026-09-05
"""

from fastapi import APIRouter

from .revenue.routes import router as revenue_router

router = APIRouter(tags=["billing"])
router.include_router(revenue_router)

__all__ = ["router"]
