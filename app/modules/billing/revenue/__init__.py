# -*- coding: utf-8 -*-
"""
backend/app/modules/billing/revenue/__init__.py

Ingresos realizados, esperados y pronóstico por mes desde Stripe.

Autor: Zoomi
Fecha: 2026-09-05
"""

from .aggregator import (
    AdminRevenueData,
    RevenueAggregator,
    RevenueTransaction,
    compute_admin_revenue,
    compute_revenue_transactions,
)
from .pagination import iterate_records, paginate
from .periods import MonthBounds, MonthKey, get_month_bounds, get_month_name

__all__ = [
    "AdminRevenueData",
    "RevenueAggregator",
    "RevenueTransaction",
    "compute_admin_revenue",
    "compute_revenue_transactions",
    "iterate_records",
    "paginate",
    "MonthBounds",
    "MonthKey",
    "get_month_bounds",
    "get_month_name",
]
