# -*- coding: utf-8 -*-
"""
backend/app/modules/billing/revenue/schemas.py

Esquemas Pydantic de salida para el panel de ingresos.
Los campos se exponen en camelCase (contrato del frontend).

Autor: Zoomi
Fecha: 2026-09-05
"""

from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class AdminRevenueSummary(CamelModel):
    """
    Resumen para Admin → Ingresos.

    - last_month_revenue: realizado del mes pasado
    - this_month_revenue: realizado + esperado del mes actual
    - next_month_forecast: esperado del mes siguiente
    """
    last_month_revenue: float = Field(0, description="Ingreso realizado del mes pasado (USD)")
    last_month_name: str = Field(..., description="Nombre del mes pasado (en inglés)")
    this_month_revenue: float = Field(0, description="Realizado + esperado del mes actual (USD)")
    this_month_name: str = Field(..., description="Nombre del mes actual")
    next_month_forecast: float = Field(0, description="Pronóstico del mes siguiente (USD)")
    next_month_name: str = Field(..., description="Nombre del mes siguiente")


class RevenueTransactionOut(CamelModel):
    customer_name: str
    date: str = Field(..., description="YYYY-MM-DD (UTC)")
    date_timestamp: int = Field(..., description="Unix seconds; el cliente formatea en su zona")
    amount: float
    type: Literal["subscription", "invoice"]


class RevenueTransactionsResponse(CamelModel):
    transactions: list[RevenueTransactionOut] = Field(default_factory=list)


class RevenueDebugSubscription(BaseModel):
    # snake_case: espejo directo de los campos de Stripe
    id: str
    status: Optional[str] = None
    current_period_end: Optional[int] = None
    latest_invoice: Optional[str] = None
    latest_invoice_status: Optional[str] = None
    latest_invoice_due_date: Optional[int] = None
    collection_method: Optional[str] = None
    items_count: int = 0


class RevenueDebugInvoice(BaseModel):
    id: str
    subscription: Optional[str] = None
    due_date: Optional[int] = None
    amount_due: float = Field(0, description="USD")
    status: str = "unknown"


class RevenueDebugBounds(CamelModel):
    start: int
    end: int


class RevenueDebugResponse(CamelModel):
    """Volcado de diagnóstico (solo fuera de producción; primera página de cada listado)."""
    now: int
    this_month: RevenueDebugBounds
    next_month: RevenueDebugBounds
    subscriptions: list[RevenueDebugSubscription] = Field(default_factory=list)
    open_invoices: list[RevenueDebugInvoice] = Field(default_factory=list)


__all__ = [
    "CamelModel",
    "AdminRevenueSummary",
    "RevenueTransactionOut",
    "RevenueTransactionsResponse",
    "RevenueDebugSubscription",
    "RevenueDebugInvoice",
    "RevenueDebugBounds",
    "RevenueDebugResponse",
]
# Fin del archivo backend/app/modules/billing/revenue/schemas.py
