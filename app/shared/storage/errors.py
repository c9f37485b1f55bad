# -*- coding: utf-8 -*-
"""
backend/app/shared/storage/errors.py

Excepciones semánticas para los stores JSON locales.

Autor: Zoomi
Fecha: 2026-09-03
"""

from __future__ import annotations


class StoreUnavailableError(Exception):
    """
    No se pudo persistir el blob (disco de solo lectura, permisos, Redis caído).

    Attributes:
        backend: "redis" o "file"
        key: clave Redis o ruta del archivo
    """

    def __init__(self, backend: str, key: str, cause: BaseException | None = None) -> None:
        self.backend = backend
        self.key = key
        msg = f"Store unavailable ({backend}): {key}"
        if cause is not None:
            msg = f"{msg}: {cause}"
        super().__init__(msg)

    def to_dict(self) -> dict:
        """Serializa el error para respuestas JSON."""
        return {
            "error": "store_unavailable",
            "backend": self.backend,
            "message": "Storage unavailable. Configure REDIS_URL for production.",
        }


__all__ = ["StoreUnavailableError"]
