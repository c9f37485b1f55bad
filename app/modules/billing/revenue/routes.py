# -*- coding: utf-8 -*-
"""
backend/app/modules/billing/revenue/routes.py

Rutas de Admin → Ingresos.

- GET /api/admin/revenue: resumen mes pasado / actual / siguiente
- GET /api/admin/revenue/transactions?month=last|this|next: detalle
- GET /api/admin/revenue/debug: diagnóstico (deshabilitado en producción)

Respuestas con Cache-Control: no-store (el panel consulta cada 60 s).
Fallos de Stripe a nivel de listado responden 500 con mensaje genérico.

Autor: Zoomi
Fecha: 2026-09-05
"""

import logging
import uuid
from dataclasses import asdict
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status

from app.core.settings import get_settings
from app.modules.billing.providers.stripe_provider import StripeProvider, get_stripe_provider
from app.shared.admin_auth import AdminAccess, require_admin
from app.shared.utils.json_response import no_store_json

from .aggregator import RevenueAggregator
from .periods import MONTH_KEYS
from .records import get_field, is_expanded, ref_id
from .schemas import (
    AdminRevenueSummary,
    RevenueDebugBounds,
    RevenueDebugInvoice,
    RevenueDebugResponse,
    RevenueDebugSubscription,
    RevenueTransactionOut,
    RevenueTransactionsResponse,
)
from .subscriptions import current_period_end, invoice_subscription

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/admin/revenue", tags=["admin-revenue"])

DEBUG_PAGE_SIZE = 20


async def build_revenue_summary(provider: StripeProvider) -> AdminRevenueSummary:
    """Resumen de ingresos como esquema de salida (reutilizado por finanzas)."""
    data = await RevenueAggregator(provider).compute_admin_revenue()
    return AdminRevenueSummary(**asdict(data))


@router.get("", response_model=AdminRevenueSummary)
async def get_admin_revenue(
    _role: AdminAccess,
    provider: StripeProvider = Depends(get_stripe_provider),
):
    """
    Ingreso realizado del mes pasado, realizado + esperado del mes actual
    y pronóstico del mes siguiente (USD).
    """
    request_id = str(uuid.uuid4())[:8]
    logger.info(f"[revenue_summary:{request_id}] Request started")

    try:
        summary = await build_revenue_summary(provider)
    except Exception as e:
        logger.exception(f"[revenue_summary:{request_id}] Error inesperado: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to load revenue",
        )

    logger.info(
        f"[revenue_summary:{request_id}] last={summary.last_month_revenue} "
        f"this={summary.this_month_revenue} next={summary.next_month_forecast}"
    )
    return no_store_json(summary.model_dump(by_alias=True))


@router.get("/transactions", response_model=RevenueTransactionsResponse)
async def get_revenue_transactions(
    _role: AdminAccess,
    month: Optional[str] = Query(None, description="last | this | next"),
    provider: StripeProvider = Depends(get_stripe_provider),
):
    """Transacciones individuales del mes indicado, ordenadas por fecha."""
    if month not in MONTH_KEYS:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Invalid month. Use last, this, or next.",
        )

    request_id = str(uuid.uuid4())[:8]
    logger.info(f"[revenue_transactions:{request_id}] Request started month={month}")

    try:
        transactions = await RevenueAggregator(provider).compute_revenue_transactions(month)
    except Exception as e:
        logger.exception(f"[revenue_transactions:{request_id}] Error inesperado: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to load transactions",
        )

    response = RevenueTransactionsResponse(
        transactions=[RevenueTransactionOut(**asdict(t)) for t in transactions]
    )
    logger.info(f"[revenue_transactions:{request_id}] count={len(transactions)}")
    return no_store_json(response.model_dump(by_alias=True))


async def _require_non_production() -> None:
    if get_settings().is_prod:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Not found")


@router.get(
    "/debug",
    response_model=RevenueDebugResponse,
    dependencies=[Depends(_require_non_production), Depends(require_admin)],
)
async def get_revenue_debug(provider: StripeProvider = Depends(get_stripe_provider)):
    """
    Primera página de suscripciones y facturas draft/open junto con las
    fronteras de mes, para revisar por qué algo no aparece en el resumen.
    """
    if not provider.is_configured:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Stripe not configured",
        )

    aggregator = RevenueAggregator(provider)
    this_month = aggregator.bounds("this")
    next_month = aggregator.bounds("next")

    try:
        subscriptions: list[RevenueDebugSubscription] = []
        for sub_status in ("active", "trialing", "past_due", "incomplete"):
            page = await provider.list_subscriptions(
                status=sub_status, limit=DEBUG_PAGE_SIZE, expand=["data.latest_invoice"]
            )
            for sub in get_field(page, "data", default=[]):
                latest = get_field(sub, "latest_invoice")
                expanded = latest if is_expanded(latest) else None
                subscriptions.append(
                    RevenueDebugSubscription(
                        id=get_field(sub, "id"),
                        status=get_field(sub, "status"),
                        current_period_end=current_period_end(sub),
                        latest_invoice=ref_id(latest),
                        latest_invoice_status=get_field(expanded, "status"),
                        latest_invoice_due_date=get_field(expanded, "due_date"),
                        collection_method=get_field(expanded, "collection_method"),
                        items_count=len(get_field(sub, "items", "data", default=[])),
                    )
                )

        open_invoices: list[RevenueDebugInvoice] = []
        for inv_status in ("draft", "open"):
            page = await provider.list_invoices(status=inv_status, limit=DEBUG_PAGE_SIZE)
            for inv in get_field(page, "data", default=[]):
                open_invoices.append(
                    RevenueDebugInvoice(
                        id=get_field(inv, "id"),
                        subscription=invoice_subscription(inv),
                        due_date=get_field(inv, "due_date"),
                        amount_due=get_field(inv, "amount_due", default=0) / 100,
                        status=get_field(inv, "status", default="unknown"),
                    )
                )
    except Exception as e:
        logger.exception(f"[revenue_debug] Error inesperado: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to load revenue debug data",
        )

    response = RevenueDebugResponse(
        now=aggregator.now_ts,
        this_month=RevenueDebugBounds(start=this_month.start, end=this_month.end),
        next_month=RevenueDebugBounds(start=next_month.start, end=next_month.end),
        subscriptions=subscriptions,
        open_invoices=open_invoices,
    )
    return no_store_json(response.model_dump(by_alias=True))


# Fin del archivo backend/app/modules/billing/revenue/routes.py
