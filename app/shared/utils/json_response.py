# -*- coding: utf-8 -*-
"""
backend/app/shared/utils/json_response.py

Respuestas JSON con charset UTF-8 explícito y variante sin caché.

Este módulo proporciona:
1. UTF8JSONResponse: default_response_class de la app
2. NO_STORE_HEADERS / no_store_json: para reportes que deben recalcularse
   en cada carga del panel (ingresos, finanzas)

Uso:

    from app.shared.utils.json_response import no_store_json

    return no_store_json(payload.model_dump(by_alias=True))

Autor: Zoomi
Fecha: 2026-09-03
"""

from typing import Any, Dict, Optional
from fastapi.responses import JSONResponse


NO_STORE_HEADERS: Dict[str, str] = {
    "Cache-Control": "no-store, no-cache, must-revalidate",
}


class UTF8JSONResponse(JSONResponse):
    """JSONResponse con Content-Type: application/json; charset=utf-8."""
    media_type = "application/json; charset=utf-8"


def no_store_json(
    content: Any,
    status_code: int = 200,
    headers: Optional[Dict[str, str]] = None,
) -> UTF8JSONResponse:
    """
    Crea una respuesta JSON UTF-8 con Cache-Control: no-store.

    Args:
        content: Contenido serializable a JSON
        status_code: Código HTTP (default 200)
        headers: Headers adicionales opcionales
    """
    merged = dict(NO_STORE_HEADERS)
    if headers:
        merged.update(headers)
    return UTF8JSONResponse(content=content, status_code=status_code, headers=merged)


__all__ = ["UTF8JSONResponse", "NO_STORE_HEADERS", "no_store_json"]
