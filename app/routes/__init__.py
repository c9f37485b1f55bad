# -*- coding: utf-8 -*-
"""
backend/app/routes/__init__.py

Ensamblador principal de ruteadores de la API de Zoomi.

Responsabilidades:
- Incluir el router de health (/health).
- Incluir los routers de /api/admin/* (ingresos, finanzas, clientes pendientes).

Autor: Zoomi
Fecha: 2026-09-06
"""

from fastapi import APIRouter

from app.modules.billing import router as billing_router
from app.modules.customers import router as customers_router
from app.modules.finances import router as finances_router

from .health_routes import router as health_router

router = APIRouter()

# Health check sin prefijo adicional
router.include_router(health_router)

# Panel administrativo
router.include_router(billing_router)
router.include_router(finances_router)
router.include_router(customers_router)

__all__ = ["router"]

# Fin del archivo backend/app/routes/__init__.py
