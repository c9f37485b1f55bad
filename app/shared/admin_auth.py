# -*- coding: utf-8 -*-
"""
backend/app/shared/admin_auth.py

Control de acceso para los endpoints /api/admin/*.

La identidad de usuarios vive en el proveedor externo; aquí solo se
verifica una clave de administración enviada en el header X-Admin-Key:
- ADMIN_API_KEY    -> admin con permiso de edición
- ADMIN_VIEWER_KEY -> admin de solo lectura

En desarrollo, si no hay ninguna clave configurada, se permite el acceso.

Uso:
    from app.shared.admin_auth import require_admin, require_can_edit

Autor: Zoomi
Fecha: 2026-09-03
"""

from __future__ import annotations

import logging
import secrets
from typing import Annotated, Literal, Optional

from fastapi import Depends, Header, HTTPException, status
from pydantic import SecretStr

from app.core.settings import get_settings

logger = logging.getLogger(__name__)

AdminRole = Literal["editor", "viewer"]


def _matches(provided: str, expected: Optional[SecretStr]) -> bool:
    if expected is None:
        return False
    # Comparación timing-safe
    return secrets.compare_digest(provided.encode(), expected.get_secret_value().encode())


def resolve_admin_role(x_admin_key: Optional[str]) -> AdminRole:
    """
    Determina el rol administrativo a partir del header.

    Raises:
        HTTPException 401: Sin header.
        HTTPException 403: Clave inválida.
        HTTPException 500: Sin claves configuradas fuera de desarrollo.
    """
    settings = get_settings()
    editor_key = settings.admin_api_key
    viewer_key = settings.admin_viewer_key

    if editor_key is None and viewer_key is None:
        if settings.is_dev:
            logger.debug("admin_auth_dev_bypass")
            return "editor"
        logger.error("admin_auth_not_configured: ADMIN_API_KEY must be set")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Admin access not configured",
        )

    if not x_admin_key:
        logger.warning("admin_auth_missing_header")
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Missing X-Admin-Key header",
        )

    if _matches(x_admin_key, editor_key):
        return "editor"
    if _matches(x_admin_key, viewer_key):
        return "viewer"

    logger.warning("admin_auth_invalid_key")
    raise HTTPException(
        status_code=status.HTTP_403_FORBIDDEN,
        detail="Forbidden",
    )


async def require_admin(
    x_admin_key: Annotated[str | None, Header()] = None,
) -> AdminRole:
    """Dependencia: cualquier admin (editor o lector)."""
    return resolve_admin_role(x_admin_key)


async def require_can_edit(
    x_admin_key: Annotated[str | None, Header()] = None,
) -> AdminRole:
    """Dependencia: admin con permiso de edición."""
    role = resolve_admin_role(x_admin_key)
    if role != "editor":
        logger.warning("admin_auth_read_only_write_attempt")
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Forbidden",
        )
    return role


# Type aliases para uso en endpoints con Depends()
AdminAccess = Annotated[AdminRole, Depends(require_admin)]
AdminEditAccess = Annotated[AdminRole, Depends(require_can_edit)]


__all__ = [
    "AdminRole",
    "AdminAccess",
    "AdminEditAccess",
    "resolve_admin_role",
    "require_admin",
    "require_can_edit",
]
