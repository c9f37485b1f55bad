# -*- coding: utf-8 -*-
"""
backend/app/main.py

Punto de entrada principal del backend de Zoomi (API del panel administrativo).

Ajustes clave:
- Uso de app.core.settings como fachada de configuración.
- Logging configurado desde LOG_LEVEL / LOG_FORMAT (json en producción).
- Ciclo de vida: cierre del cliente Redis compartido en shutdown.
- Health principal /health delegado al paquete app.routes (health_routes.py).
- CORS desde CORS_ORIGINS.

Autor: Zoomi
Fecha: 2026-09-06
"""

import logging
import os
from contextlib import asynccontextmanager
from pathlib import Path

# ---------------------------------------------------------------------------
# Cargar .env ANTES de leer settings
# En DEV: override=True para que .env mande sobre variables del entorno
# En PROD: override=False para respetar variables del entorno
# ---------------------------------------------------------------------------
from dotenv import load_dotenv

_ENV_PATH = Path(__file__).resolve().parents[1] / ".env"
_PYTHON_ENV = os.getenv("PYTHON_ENV", "development").strip().strip('"').strip("'").lower()
_override_env = _PYTHON_ENV != "production"
load_dotenv(dotenv_path=_ENV_PATH, override=_override_env)

from fastapi import FastAPI, HTTPException, Request
from fastapi.middleware.cors import CORSMiddleware
import uvicorn

from app.core.logging import configure_logging
from app.core.settings import get_settings
from app.shared.redis import close_async_redis_client
from app.shared.utils.json_response import UTF8JSONResponse

configure_logging()
logger = logging.getLogger(__name__)

logger.info(f"[dotenv] Loaded {_ENV_PATH} (override={_override_env}, PYTHON_ENV={_PYTHON_ENV})")


@asynccontextmanager
async def lifespan(app: FastAPI):
    # ────────── STARTUP ──────────
    settings = get_settings()
    logger.info(
        f"🚀 {settings.app_name} v{settings.app_version} env={settings.python_env} "
        f"stripe_configured={settings.stripe_configured} "
        f"storage={'redis' if settings.redis_url else 'file'}"
    )

    yield

    # ────────── SHUTDOWN ──────────
    try:
        await close_async_redis_client()
    except Exception as e:
        logger.warning(f"⚠️ Error cerrando cliente Redis: {e}")
    logger.info("🛑 Shutdown completo")


openapi_tags = [
    {"name": "admin-revenue", "description": "Ingresos realizados, esperados y pronóstico (Stripe)"},
    {"name": "admin-finances", "description": "Egresos de unidades y gastos manuales"},
    {"name": "admin-customers", "description": "Clientes pendientes de registro"},
]

app = FastAPI(
    title="Zoomi Admin API",
    description="API del panel administrativo de Zoomi",
    version=get_settings().app_version,
    lifespan=lifespan,
    openapi_tags=openapi_tags,
    default_response_class=UTF8JSONResponse,  # Fuerza charset=utf-8 en todas las respuestas JSON
)


# ═══════════════════════════════════════════════════════════════════════════════
# CORS
# ═══════════════════════════════════════════════════════════════════════════════
def _configure_cors(app_instance: FastAPI) -> dict:
    """
    Configura CORS middleware.

    Returns:
        dict con la configuración aplicada para logging.
    """
    origins = get_settings().get_cors_origins()
    cors_config = {
        "allow_origins": origins,
        # Credenciales solo con orígenes explícitos
        "allow_credentials": origins != ["*"],
        "allow_methods": ["GET", "POST", "OPTIONS"],
        "allow_headers": ["*"],
        "max_age": 600,
    }
    app_instance.add_middleware(CORSMiddleware, **cors_config)
    return cors_config


_cors = _configure_cors(app)
logger.info(f"🌐 CORS allow_origins={_cors['allow_origins']}")


@app.exception_handler(HTTPException)
async def http_exception_handler(request: Request, exc: HTTPException):
    """HTTPException con charset UTF-8 explícito."""
    return UTF8JSONResponse(
        content={"detail": exc.detail},
        status_code=exc.status_code,
        headers=getattr(exc, "headers", None),
    )


# Incluye router maestro
from app.routes import router as main_router

app.include_router(main_router)


@app.get("/")
async def root():
    return {"service": "Zoomi Backend", "status": "active"}


if __name__ == "__main__":
    settings = get_settings()
    uvicorn.run(
        "app.main:app",
        host=settings.app_host,
        port=settings.app_port,
        reload=settings.is_dev,
    )

# Fin del archivo backend/app/main.py
