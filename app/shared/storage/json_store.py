# -*- coding: utf-8 -*-
"""
backend/app/shared/storage/json_store.py

Store de "blob JSON": una lista completa de registros por entidad.

Backends:
    - Redis (REDIS_URL configurado): el arreglo vive como string JSON bajo `key`.
    - Archivo (desarrollo): DATA_DIR/<filename>, JSON indentado.

Semántica:
    - read_all(): blob ausente, corrupto o no-lista -> [].
    - write_all(): reemplaza el blob completo (última escritura gana, sin locks).

Autor: Zoomi
Fecha: 2026-09-03
"""

from __future__ import annotations

import asyncio
import json
import logging
from pathlib import Path
from typing import Any, Optional

import redis.asyncio as aioredis

from app.shared.redis import get_async_redis_client
from .errors import StoreUnavailableError

logger = logging.getLogger(__name__)


class JsonBlobStore:
    """
    Persistencia de una lista de dicts en Redis o archivo JSON.

    Args:
        key: clave Redis (p.ej. "zoomi:manual-expenses")
        filename: nombre de archivo dentro de data_dir
        data_dir: directorio de archivos; None = settings.data_dir
    """

    def __init__(self, key: str, filename: str, data_dir: Optional[str | Path] = None):
        self.key = key
        self.filename = filename
        self._data_dir = Path(data_dir) if data_dir is not None else None

    @property
    def file_path(self) -> Path:
        if self._data_dir is None:
            from app.core.settings import get_settings
            self._data_dir = Path(get_settings().data_dir)
        return self._data_dir / self.filename

    # ------------------------------------------------------------------
    # Lectura
    # ------------------------------------------------------------------
    async def read_all(self) -> list[dict[str, Any]]:
        client = await get_async_redis_client()
        if client is not None:
            try:
                raw = await client.get(self.key)
            except aioredis.RedisError as e:
                logger.warning("json_store_redis_read_failed key=%s error=%s", self.key, e)
                return []
            return _decode_list(raw, self.key)
        return await asyncio.to_thread(self._read_file)

    def _read_file(self) -> list[dict[str, Any]]:
        path = self.file_path
        try:
            raw = path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return []
        except OSError as e:
            logger.warning("json_store_file_read_failed path=%s error=%s", path, e)
            return []
        return _decode_list(raw, str(path))

    # ------------------------------------------------------------------
    # Escritura
    # ------------------------------------------------------------------
    async def write_all(self, items: list[dict[str, Any]]) -> None:
        client = await get_async_redis_client()
        if client is not None:
            try:
                await client.set(self.key, json.dumps(items))
            except aioredis.RedisError as e:
                raise StoreUnavailableError("redis", self.key, e) from e
            return
        await asyncio.to_thread(self._write_file, items)

    def _write_file(self, items: list[dict[str, Any]]) -> None:
        path = self.file_path
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(json.dumps(items, indent=2), encoding="utf-8")
        except OSError as e:
            raise StoreUnavailableError("file", str(path), e) from e


def _decode_list(raw: Any, source: str) -> list[dict[str, Any]]:
    if raw is None:
        return []
    if isinstance(raw, (str, bytes)):
        try:
            data = json.loads(raw)
        except ValueError:
            logger.warning("json_store_corrupt_blob source=%s", source)
            return []
    else:
        data = raw
    return data if isinstance(data, list) else []


__all__ = ["JsonBlobStore"]
