# -*- coding: utf-8 -*-
"""
backend/app/shared/redis/__init__.py

Cliente Redis asíncrono compartido. Lo usan JsonBlobStore (persistencia
de gastos manuales, unidades y clientes pendientes) y /health (ping).
"""

from .client import RedisClientManager, close_async_redis_client, get_async_redis_client

__all__ = ["RedisClientManager", "get_async_redis_client", "close_async_redis_client"]
