# -*- coding: utf-8 -*-
"""
backend/app/modules/finances/routes.py

Rutas de Admin → Finanzas.

- GET  /api/admin/finances/overview: ingresos (resumen Stripe) y egresos totales
- GET  /api/admin/finances/expenses?period=ytd|this|last: egresos del periodo
- POST /api/admin/finances/expenses: alta de gasto manual (solo editores)

Autor: Zoomi
Fecha: 2026-09-06
"""

import logging
import uuid
from typing import Any

from fastapi import APIRouter, Body, Depends, HTTPException, Query, status

from app.modules.billing.providers.stripe_provider import StripeProvider, get_stripe_provider
from app.modules.billing.revenue.periods import (
    FINANCES_PERIODS,
    get_period_date_range,
    get_period_label,
)
from app.modules.billing.revenue.routes import build_revenue_summary
from app.shared.admin_auth import AdminAccess, AdminEditAccess
from app.shared.storage import StoreUnavailableError
from app.shared.utils.json_response import no_store_json

from .errors import InvalidExpenseError
from .models import ManualExpense
from .schemas import ExpensesResponse, FinancesOverview
from .services import (
    compute_money_out,
    compute_money_out_for_period,
    create_manual_expense,
    get_expense_transactions,
)
from .stores import ManualExpensesStore, UnitsStore, get_manual_expenses_store, get_units_store

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/admin/finances", tags=["admin-finances"])


@router.get("/overview", response_model=FinancesOverview)
async def get_finances_overview(
    _role: AdminAccess,
    provider: StripeProvider = Depends(get_stripe_provider),
    units_store: UnitsStore = Depends(get_units_store),
):
    """moneyIn = resumen de ingresos; moneyOut = costo histórico de unidades."""
    request_id = str(uuid.uuid4())[:8]
    logger.info(f"[finances_overview:{request_id}] Request started")

    try:
        money_in = await build_revenue_summary(provider)
        units = await units_store.list_all()
    except Exception as e:
        logger.exception(f"[finances_overview:{request_id}] Error inesperado: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to compute finances overview",
        )

    overview = FinancesOverview(money_in=money_in, money_out=compute_money_out(units))
    logger.info(f"[finances_overview:{request_id}] units={len(units)} money_out={overview.money_out}")
    return no_store_json(overview.model_dump(by_alias=True))


@router.get("/expenses", response_model=ExpensesResponse)
async def get_finances_expenses(
    _role: AdminAccess,
    period: str = Query("ytd", description="ytd | this | last"),
    units_store: UnitsStore = Depends(get_units_store),
    expenses_store: ManualExpensesStore = Depends(get_manual_expenses_store),
):
    """Egresos (manuales, adquisiciones y reparaciones) del periodo."""
    if period not in FINANCES_PERIODS:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Invalid period. Use ytd, this, or last.",
        )

    start_date, end_date = get_period_date_range(period)
    units = await units_store.list_all()
    manual = await expenses_store.list_all()

    response = ExpensesResponse(
        period=period,
        label=get_period_label(period),
        start_date=start_date,
        end_date=end_date,
        total=compute_money_out_for_period(units, manual, start_date, end_date),
        expenses=get_expense_transactions(units, manual, start_date, end_date),
    )
    return no_store_json(response.model_dump(by_alias=True))


@router.post("/expenses", status_code=status.HTTP_201_CREATED, response_model=ManualExpense)
async def post_finances_expense(
    _role: AdminEditAccess,
    body: dict[str, Any] = Body(...),
    expenses_store: ManualExpensesStore = Depends(get_manual_expenses_store),
):
    """Registra un gasto manual {date: YYYY-MM-DD, amount > 0, description}."""
    try:
        expense = await create_manual_expense(expenses_store, body)
    except InvalidExpenseError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    except StoreUnavailableError as e:
        logger.error(f"[finances_expense] {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to create expense",
        )

    return no_store_json(expense.model_dump(by_alias=True), status_code=status.HTTP_201_CREATED)


# Fin del archivo backend/app/modules/finances/routes.py
