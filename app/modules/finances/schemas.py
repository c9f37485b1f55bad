# -*- coding: utf-8 -*-
"""
backend/app/modules/finances/schemas.py

Esquemas de salida de Admin → Finanzas (camelCase).

Autor: Zoomi
Fecha: 2026-09-06
"""

from pydantic import Field

from app.modules.billing.revenue.schemas import AdminRevenueSummary, CamelModel
from app.modules.billing.revenue.periods import FinancesPeriod

from .models import ExpenseTransaction


class FinancesOverview(CamelModel):
    money_in: AdminRevenueSummary
    money_out: float = Field(0, description="Egreso histórico total de unidades (USD)")


class ExpensesResponse(CamelModel):
    period: FinancesPeriod
    label: str
    start_date: str
    end_date: str
    total: float
    expenses: list[ExpenseTransaction] = Field(default_factory=list)


__all__ = ["FinancesOverview", "ExpensesResponse"]
