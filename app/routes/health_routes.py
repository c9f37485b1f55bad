# -*- coding: utf-8 -*-
"""
backend/app/routes/health_routes.py

Endpoint básico de health check para el backend de Zoomi.

Autor: Zoomi
Fecha: 2026-09-06
"""

from datetime import datetime, timezone

from fastapi import APIRouter

from app.core.settings import get_settings
from app.shared.redis import RedisClientManager

router = APIRouter()


@router.get(
    "/health",
    summary="Health check del backend",
    description=(
        "Devuelve el estado básico del backend, si Stripe está configurado "
        "y qué backend usan los stores locales (redis o file)."
    ),
)
async def health_check() -> dict:
    """
    Health check básico del backend.

    Returns:
        dict: información mínima de estado de la aplicación.
    """
    settings = get_settings()
    manager = RedisClientManager.get_instance()

    storage_backend = "redis" if manager.is_configured else "file"
    redis_ok = await manager.ping() if manager.is_configured else None

    return {
        "status": "degraded" if redis_ok is False else "ok",
        "timestamp": datetime.now(timezone.utc).isoformat().replace("+00:00", "Z"),
        "environment": settings.python_env,
        "stripe": {
            "configured": settings.stripe_configured,
        },
        "storage": {
            "backend": storage_backend,
            "reachable": redis_ok,
        },
        "service": {
            "name": settings.app_name,
            "version": settings.app_version,
        },
    }

# Fin del archivo backend/app/routes/health_routes.py
