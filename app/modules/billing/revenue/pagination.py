# -*- coding: utf-8 -*-
"""
backend/app/modules/billing/revenue/pagination.py

Iteración por cursor sobre listados paginados de Stripe.

Cada llamada a paginate() arranca desde la primera página y avanza con
`starting_after=<id del último registro>` mientras `has_more` sea verdadero.
Una página vacía termina la iteración aunque `has_more` diga lo contrario.

Autor: Zoomi
Fecha: 2026-09-04
"""

from __future__ import annotations

from typing import Any, AsyncIterator, Awaitable, Callable

from .records import get_field

FetchPage = Callable[..., Awaitable[Any]]


async def paginate(fetch_page: FetchPage, **params: Any) -> AsyncIterator[list[Any]]:
    """
    Genera las páginas (listas de registros) de un listado.

    Args:
        fetch_page: método async del proveedor, p.ej. provider.list_invoices
        **params: filtros del listado (status, created, expand...)
    """
    cursor: str | None = None
    while True:
        query = dict(params)
        if cursor is not None:
            query["starting_after"] = cursor
        page = await fetch_page(**query)
        records = list(get_field(page, "data", default=[]))
        if not records:
            return
        yield records
        if not get_field(page, "has_more", default=False):
            return
        cursor = get_field(records[-1], "id")


async def iterate_records(fetch_page: FetchPage, **params: Any) -> AsyncIterator[Any]:
    """Aplana paginate(): un registro a la vez."""
    async for records in paginate(fetch_page, **params):
        for record in records:
            yield record


__all__ = ["paginate", "iterate_records"]
# Fin del archivo backend/app/modules/billing/revenue/pagination.py
