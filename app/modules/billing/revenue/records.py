# -*- coding: utf-8 -*-
"""
backend/app/modules/billing/revenue/records.py

Acceso tolerante a campos de objetos Stripe.

Los registros pueden llegar como StripeObject (atributos), como dict
(tests, payloads) o como id string cuando un campo no fue expandido.

Autor: Zoomi
Fecha: 2026-09-04
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any


def get_field(obj: Any, *path: str, default: Any = None) -> Any:
    """
    Lee obj.a.b.c (o obj["a"]["b"]["c"]) devolviendo `default` si algo falta.

    Ejemplo:
        >>> get_field({"status_transitions": {"paid_at": 10}}, "status_transitions", "paid_at")
        10
    """
    current = obj
    for name in path:
        if current is None or isinstance(current, str):
            return default
        if isinstance(current, Mapping):
            current = current.get(name)
        else:
            current = getattr(current, name, None)
    return default if current is None else current


def first_present(*values: Any) -> Any:
    """Primer valor distinto de None (equivalente a a ?? b ?? c)."""
    for value in values:
        if value is not None:
            return value
    return None


def is_expanded(obj: Any) -> bool:
    """True si el campo llegó expandido (objeto) y no está marcado como eliminado."""
    if obj is None or isinstance(obj, str):
        return False
    return not get_field(obj, "deleted", default=False)


def ref_id(obj: Any) -> str | None:
    """Id de una referencia Stripe, expandida o no."""
    if obj is None:
        return None
    if isinstance(obj, str):
        return obj or None
    return get_field(obj, "id")


__all__ = ["get_field", "first_present", "is_expanded", "ref_id"]
# Fin del archivo backend/app/modules/billing/revenue/records.py
