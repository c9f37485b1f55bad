# -*- coding: utf-8 -*-
"""
backend/app/shared/storage/__init__.py

Stores JSON locales (Redis en producción, archivo en desarrollo).
"""

from .errors import StoreUnavailableError
from .json_store import JsonBlobStore

__all__ = ["JsonBlobStore", "StoreUnavailableError"]
