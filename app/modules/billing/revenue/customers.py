# -*- coding: utf-8 -*-
"""
backend/app/modules/billing/revenue/customers.py

Resolución de nombre de cliente para el listado de transacciones.

Se crea un resolver por request: cada id de cliente se consulta a lo sumo
una vez. Cualquier fallo o cliente eliminado se muestra como "—".

Autor: Zoomi
Fecha: 2026-09-04
"""

from __future__ import annotations

from typing import Any, Optional, Protocol

from .records import first_present, get_field, is_expanded

UNKNOWN_CUSTOMER = "—"


class CustomerLookup(Protocol):
    async def retrieve_customer(self, customer_id: str) -> Optional[Any]: ...


def display_name(customer: Any) -> str:
    """name ?? email ?? "—", sin espacios sobrantes."""
    if not is_expanded(customer):
        return UNKNOWN_CUSTOMER
    name = first_present(get_field(customer, "name"), get_field(customer, "email"))
    return str(name).strip() if name and str(name).strip() else UNKNOWN_CUSTOMER


class CustomerNameResolver:
    """Cache id -> nombre para la duración de un request."""

    def __init__(self, provider: CustomerLookup):
        self._provider = provider
        self._names: dict[str, str] = {}
        self.lookups = 0

    async def resolve(self, customer: Any) -> str:
        """
        Nombre visible de una referencia de cliente (objeto expandido o id).
        """
        if customer is None:
            return UNKNOWN_CUSTOMER
        if not isinstance(customer, str):
            name = display_name(customer)
            customer_id = get_field(customer, "id")
            if customer_id and name != UNKNOWN_CUSTOMER:
                self._names.setdefault(customer_id, name)
            return name
        if not customer:
            return UNKNOWN_CUSTOMER

        if customer not in self._names:
            self.lookups += 1
            fetched = await self._provider.retrieve_customer(customer)
            self._names[customer] = display_name(fetched)
        return self._names[customer]


__all__ = ["UNKNOWN_CUSTOMER", "CustomerLookup", "display_name", "CustomerNameResolver"]
# Fin del archivo backend/app/modules/billing/revenue/customers.py
