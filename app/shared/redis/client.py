# -*- coding: utf-8 -*-
"""
backend/app/shared/redis/client.py

Cliente Redis asíncrono (singleton) para los stores locales de Zoomi.
En producción los gastos manuales, unidades y clientes pendientes viven
en Redis; en desarrollo se usan archivos JSON (ver app.shared.storage).

Características:
- Inicialización perezosa (sin conexión al importar)
- Un único cliente compartido por proceso
- Sin REDIS_URL devuelve None y los stores caen a archivo
- Los errores de comandos se propagan al store que los usa

Autor: Zoomi
Fecha: 2026-09-03
"""
from __future__ import annotations

import asyncio
import inspect
import logging
import os
from typing import Optional

import redis.asyncio as aioredis

logger = logging.getLogger(__name__)


class RedisClientManager:
    """
    Administra un único cliente Redis asíncrono.

    Singleton con creación perezosa protegida por asyncio.Lock.
    """

    _instance: Optional["RedisClientManager"] = None

    @classmethod
    def get_instance(cls) -> "RedisClientManager":
        """Obtiene la instancia singleton."""
        if cls._instance is None:
            cls._instance = cls()
        return cls._instance

    @classmethod
    async def reset_instance_async(cls) -> None:
        """Cierra el cliente y descarta el singleton (tests / shutdown)."""
        if cls._instance is not None:
            await cls._instance.close()
        cls._instance = None

    def __init__(self, redis_url: Optional[str] = None):
        self._redis_url = redis_url if redis_url is not None else self._load_url()
        self._client: Optional[aioredis.Redis] = None
        self._lock: Optional[asyncio.Lock] = None

        if self._redis_url:
            logger.debug("RedisClientManager: configured (lazy connect) pid=%d", os.getpid())
        else:
            logger.debug("RedisClientManager: REDIS_URL not configured pid=%d", os.getpid())

    @staticmethod
    def _load_url() -> Optional[str]:
        from app.core.settings import get_settings
        return get_settings().redis_url

    @property
    def is_configured(self) -> bool:
        """True si hay REDIS_URL."""
        return bool(self._redis_url)

    async def get_client(self) -> Optional[aioredis.Redis]:
        """
        Devuelve el cliente Redis (creación perezosa) o None si no hay URL.

        redis-py conecta en el primer comando; los errores de conexión
        aparecen ahí y los maneja el llamador.
        """
        if not self.is_configured:
            return None
        if self._client is not None:
            return self._client

        if self._lock is None:
            self._lock = asyncio.Lock()

        async with self._lock:
            if self._client is None:
                self._client = aioredis.from_url(
                    self._redis_url,
                    decode_responses=True,
                    socket_connect_timeout=2,
                    socket_timeout=2,
                )
                logger.info("RedisClientManager: client created pid=%d", os.getpid())
        return self._client

    async def ping(self) -> bool:
        """
        Ejecuta PING.

        Returns:
            True si responde, False si no está configurado o falla.
        """
        client = await self.get_client()
        if client is None:
            return False
        try:
            await client.ping()
            return True
        except aioredis.RedisError as e:
            logger.warning("RedisClientManager: ping failed: %s", str(e))
            return False

    async def close(self) -> None:
        """Cierra la conexión Redis."""
        if self._client is None:
            return
        try:
            close_method = getattr(self._client, "aclose", None) or getattr(self._client, "close")
            result = close_method()
            if inspect.isawaitable(result):
                await result
        except aioredis.RedisError as e:
            logger.warning("RedisClientManager: close error: %s", str(e))
        finally:
            self._client = None


async def get_async_redis_client() -> Optional[aioredis.Redis]:
    """Cliente Redis canónico o None si no está configurado."""
    return await RedisClientManager.get_instance().get_client()


async def close_async_redis_client() -> None:
    """Cierra el cliente Redis compartido."""
    await RedisClientManager.reset_instance_async()


__all__ = [
    "get_async_redis_client",
    "close_async_redis_client",
    "RedisClientManager",
]
