# -*- coding: utf-8 -*-
"""
backend/app/modules/billing/revenue/aggregator.py

Agregador de ingresos desde Stripe para el panel administrativo.

Fuentes:
- Realizado: balance transactions (charge, payment). Si el total del mes es
  exactamente cero, se usan facturas pagadas (ventana de 60 días hacia atrás,
  filtradas por status_transitions.paid_at ?? created), tanto en el resumen
  como en el listado de transacciones.
- Esperado / pronóstico: facturas draft/open sin suscripción, suscripciones
  (active, trialing, past_due, incomplete) y schedules not_started.

Todos los montos se acumulan en centavos y se convierten a dólares una sola
vez al cerrar cada bucket. Sin STRIPE_SECRET_KEY todo reporta cero / vacío.

Errores de listados (páginas) se propagan; la ruta responde 500.

Autor: Zoomi
Fecha: 2026-09-05
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone, tzinfo
from typing import Any, Literal, Optional

from app.modules.billing.providers.stripe_provider import StripeProvider, get_stripe_provider

from .amounts import cents_to_dollars, invoice_amount_cents
from .customers import CustomerNameResolver
from .pagination import iterate_records
from .periods import MonthBounds, MonthKey, get_month_bounds, get_month_name, month_offset
from .records import first_present, get_field, is_expanded, ref_id
from .subscriptions import (
    invoice_subscription,
    resolve_schedule_payment,
    resolve_subscription_payments,
)

logger = logging.getLogger(__name__)

INCOME_BALANCE_TYPES = ("charge", "payment")
EXPECTED_SUBSCRIPTION_STATUSES = ("active", "trialing", "past_due", "incomplete")
DRAFT_OPEN_STATUSES = ("draft", "open")
SECONDS_PER_DAY = 86400

TransactionType = Literal["subscription", "invoice"]


@dataclass
class AdminRevenueData:
    """Resumen de ingresos por mes (montos en dólares)."""
    last_month_revenue: float
    last_month_name: str
    this_month_revenue: float
    this_month_name: str
    next_month_forecast: float
    next_month_name: str


@dataclass
class RevenueTransaction:
    """Un cobro realizado o esperado dentro del mes consultado."""
    customer_name: str
    date: str  # YYYY-MM-DD (UTC)
    date_timestamp: int
    amount: float
    type: TransactionType


@dataclass
class _Buckets:
    """Acumuladores en centavos para los meses actual y siguiente."""
    this_month: MonthBounds
    next_month: MonthBounds
    this_cents: float = 0.0
    next_cents: float = 0.0

    def add(self, amount_cents: float, ts: Optional[int]) -> None:
        if amount_cents <= 0 or not ts:
            return
        if self.this_month.contains(ts):
            self.this_cents += amount_cents
        elif self.next_month.contains(ts):
            self.next_cents += amount_cents


@dataclass
class _Listing:
    items: list[RevenueTransaction] = field(default_factory=list)

    def add(self, customer_name: str, ts: int, amount_cents: float, kind: TransactionType) -> None:
        if amount_cents <= 0:
            return
        self.items.append(
            RevenueTransaction(
                customer_name=customer_name,
                date=utc_date(ts),
                date_timestamp=ts,
                amount=cents_to_dollars(amount_cents),
                type=kind,
            )
        )


def utc_date(ts: int) -> str:
    """Fecha calendario UTC (YYYY-MM-DD) de un timestamp unix."""
    return datetime.fromtimestamp(ts, tz=timezone.utc).date().isoformat()


def _round_dollars(value: float) -> float:
    return round(value, 2)


class RevenueAggregator:
    """
    Cálculo de ingresos realizados y esperados por mes.

    Args:
        provider: StripeProvider (o un fake con los mismos métodos async)
        now: instante de referencia (default: ahora)
        tz: zona horaria de las fronteras de mes (default: REVENUE_TIMEZONE / local)
        lookback_days: ventana del fallback de facturas pagadas
    """

    def __init__(
        self,
        provider: Any,
        now: Optional[datetime] = None,
        tz: Optional[tzinfo | str] = None,
        lookback_days: Optional[int] = None,
    ):
        self.provider = provider
        self.now = now or datetime.now(timezone.utc)
        self.tz = tz
        if lookback_days is None:
            from app.core.settings import get_settings
            lookback_days = get_settings().revenue_paid_invoice_lookback_days
        self.lookback_seconds = lookback_days * SECONDS_PER_DAY

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------
    @property
    def configured(self) -> bool:
        return bool(getattr(self.provider, "is_configured", True))

    @property
    def now_ts(self) -> int:
        return int(self.now.timestamp())

    def bounds(self, month: MonthKey) -> MonthBounds:
        return get_month_bounds(month_offset(month), self.now, self.tz)

    def month_name(self, month: MonthKey) -> str:
        return get_month_name(month_offset(month), self.now)

    def _paid_invoice_query(self, bounds: MonthBounds) -> dict[str, Any]:
        return {"status": "paid", "created": {"gte": bounds.start - self.lookback_seconds}}

    @staticmethod
    def _paid_at(inv: Any) -> Optional[int]:
        return first_present(get_field(inv, "status_transitions", "paid_at"), get_field(inv, "created"))

    # ------------------------------------------------------------------
    # Realizado
    # ------------------------------------------------------------------
    async def realized_cents(self, bounds: MonthBounds) -> float:
        """
        Ingreso realizado del mes en centavos.

        Balance transactions charge + payment; si suman exactamente cero,
        facturas pagadas cuyo paid_at (o created) cae en el mes.
        """
        total = 0.0
        for tx_type in INCOME_BALANCE_TYPES:
            async for tx in iterate_records(
                self.provider.list_balance_transactions,
                type=tx_type,
                created={"gte": bounds.start, "lte": bounds.end},
            ):
                total += get_field(tx, "amount", default=0)

        if total != 0:
            return total

        async for inv in iterate_records(self.provider.list_invoices, **self._paid_invoice_query(bounds)):
            if bounds.contains(self._paid_at(inv)):
                total += get_field(inv, "amount_paid", default=0)
        if total:
            logger.info("revenue_paid_invoice_fallback start=%s cents=%s", bounds.start, total)
        return total

    # ------------------------------------------------------------------
    # Esperado / pronóstico
    # ------------------------------------------------------------------
    async def expected_cents(self) -> tuple[float, float]:
        """
        (esperado del mes actual, pronóstico del mes siguiente) en centavos.
        """
        buckets = _Buckets(this_month=self.bounds("this"), next_month=self.bounds("next"))

        for status in EXPECTED_SUBSCRIPTION_STATUSES:
            async for sub in iterate_records(
                self.provider.list_subscriptions,
                status=status,
                expand=["data.items.data.price", "data.discounts", "data.latest_invoice"],
            ):
                for payment in await resolve_subscription_payments(self.provider, sub, status):
                    buckets.add(payment.amount_cents, payment.due_ts)

        async for schedule in iterate_records(self.provider.list_subscription_schedules):
            payment = await resolve_schedule_payment(self.provider, schedule, self.now_ts)
            if payment is not None:
                buckets.add(payment.amount_cents, payment.due_ts)

        for status in DRAFT_OPEN_STATUSES:
            async for inv in iterate_records(self.provider.list_invoices, status=status):
                if invoice_subscription(inv):
                    continue
                due_ts = first_present(
                    get_field(inv, "due_date"),
                    get_field(inv, "period_end"),
                    get_field(inv, "created"),
                )
                buckets.add(invoice_amount_cents(inv), due_ts)

        return buckets.this_cents, buckets.next_cents

    async def compute_admin_revenue(self) -> AdminRevenueData:
        """
        Resumen del panel: realizado del mes pasado, realizado + esperado del
        mes actual y pronóstico del mes siguiente (en dólares).
        """
        last_cents = this_received = this_expected = next_cents = 0.0

        if self.configured:
            last_cents = await self.realized_cents(self.bounds("last"))
            this_received = await self.realized_cents(self.bounds("this"))
            this_expected, next_cents = await self.expected_cents()
        else:
            logger.info("revenue_summary_skipped reason=stripe_not_configured")

        return AdminRevenueData(
            last_month_revenue=_round_dollars(cents_to_dollars(last_cents)),
            last_month_name=self.month_name("last"),
            this_month_revenue=_round_dollars(cents_to_dollars(this_received + this_expected)),
            this_month_name=self.month_name("this"),
            next_month_forecast=_round_dollars(cents_to_dollars(next_cents)),
            next_month_name=self.month_name("next"),
        )

    # ------------------------------------------------------------------
    # Listado de transacciones
    # ------------------------------------------------------------------
    async def _source_invoice(self, source: Any) -> Optional[Any]:
        """
        Factura que originó el cargo de una balance transaction.

        `source.invoice` (API anterior, id o expandida); si no existe, el
        InvoicePayment del PaymentIntent del cargo.
        """
        if not is_expanded(source):
            return None
        invoice = get_field(source, "invoice")
        if isinstance(invoice, str) and invoice:
            return await self.provider.retrieve_invoice(invoice)
        if is_expanded(invoice):
            return invoice
        payment_intent = ref_id(get_field(source, "payment_intent"))
        if not payment_intent and get_field(source, "object") == "payment_intent":
            payment_intent = get_field(source, "id")
        if not payment_intent:
            return None
        return await self.provider.find_payment_invoice(payment_intent)

    async def _list_realized(
        self,
        bounds: MonthBounds,
        listing: _Listing,
        customers: CustomerNameResolver,
    ) -> None:
        # Mismo criterio que realized_cents: facturas pagadas si el total es cero
        realized = _Listing()
        total = 0.0
        for tx_type in INCOME_BALANCE_TYPES:
            async for tx in iterate_records(
                self.provider.list_balance_transactions,
                type=tx_type,
                created={"gte": bounds.start, "lte": bounds.end},
                expand=["data.source"],
            ):
                amount = get_field(tx, "amount", default=0)
                total += amount
                if amount <= 0:
                    continue
                source = get_field(tx, "source")
                customer_name = await customers.resolve(
                    get_field(source, "customer") if is_expanded(source) else None
                )
                invoice = await self._source_invoice(source)
                kind: TransactionType = (
                    "subscription" if invoice is not None and invoice_subscription(invoice) else "invoice"
                )
                realized.add(customer_name, get_field(tx, "created", default=0), amount, kind)

        if total != 0:
            listing.items.extend(realized.items)
            return

        async for inv in iterate_records(
            self.provider.list_invoices,
            expand=["data.customer"],
            **self._paid_invoice_query(bounds),
        ):
            paid_at = self._paid_at(inv)
            if not bounds.contains(paid_at):
                continue
            amount = get_field(inv, "amount_paid", default=0)
            if amount <= 0:
                continue
            kind = "subscription" if invoice_subscription(inv) else "invoice"
            listing.add(await customers.resolve(get_field(inv, "customer")), paid_at, amount, kind)

    async def _list_expected(
        self,
        bounds: MonthBounds,
        listing: _Listing,
        customers: CustomerNameResolver,
    ) -> None:
        for status in DRAFT_OPEN_STATUSES:
            async for inv in iterate_records(
                self.provider.list_invoices, status=status, expand=["data.customer"]
            ):
                if invoice_subscription(inv):
                    continue
                due_ts = first_present(
                    get_field(inv, "due_date"),
                    get_field(inv, "period_end"),
                    get_field(inv, "created"),
                )
                amount = invoice_amount_cents(inv)
                if not bounds.contains(due_ts) or amount <= 0:
                    continue
                listing.add(await customers.resolve(get_field(inv, "customer")), due_ts, amount, "invoice")

        for status in EXPECTED_SUBSCRIPTION_STATUSES:
            async for sub in iterate_records(
                self.provider.list_subscriptions,
                status=status,
                expand=[
                    "data.customer",
                    "data.items.data.price",
                    "data.discounts",
                    "data.latest_invoice",
                ],
            ):
                for payment in await resolve_subscription_payments(self.provider, sub, status):
                    if not bounds.contains(payment.due_ts):
                        continue
                    listing.add(
                        await customers.resolve(get_field(sub, "customer")),
                        payment.due_ts,
                        payment.amount_cents,
                        "subscription",
                    )

        async for schedule in iterate_records(
            self.provider.list_subscription_schedules, expand=["data.customer"]
        ):
            payment = await resolve_schedule_payment(self.provider, schedule, self.now_ts)
            if payment is None or not bounds.contains(payment.due_ts):
                continue
            listing.add(
                await customers.resolve(get_field(schedule, "customer")),
                payment.due_ts,
                payment.amount_cents,
                "subscription",
            )

    async def compute_revenue_transactions(self, month: MonthKey) -> list[RevenueTransaction]:
        """
        Transacciones individuales del mes.

        - last / this: cobros realizados (balance transactions o facturas pagadas)
        - this / next: cobros esperados (facturas, suscripciones, schedules)

        Solo montos > 0, ordenados por fecha ascendente.
        """
        listing = _Listing()
        if not self.configured:
            return listing.items

        bounds = self.bounds(month)
        customers = CustomerNameResolver(self.provider)

        if month in ("last", "this"):
            await self._list_realized(bounds, listing, customers)
        if month in ("this", "next"):
            await self._list_expected(bounds, listing, customers)

        logger.debug(
            "revenue_transactions month=%s count=%s customer_lookups=%s",
            month,
            len(listing.items),
            customers.lookups,
        )
        return sorted(listing.items, key=lambda t: t.date)


# ---------------------------------------------------------------------------
# Helpers con el proveedor por defecto
# ---------------------------------------------------------------------------
async def compute_admin_revenue(provider: Optional[StripeProvider] = None) -> AdminRevenueData:
    return await RevenueAggregator(provider or get_stripe_provider()).compute_admin_revenue()


async def compute_revenue_transactions(
    month: MonthKey,
    provider: Optional[StripeProvider] = None,
) -> list[RevenueTransaction]:
    return await RevenueAggregator(provider or get_stripe_provider()).compute_revenue_transactions(month)


__all__ = [
    "AdminRevenueData",
    "RevenueTransaction",
    "TransactionType",
    "RevenueAggregator",
    "utc_date",
    "compute_admin_revenue",
    "compute_revenue_transactions",
]
# Fin del archivo backend/app/modules/billing/revenue/aggregator.py
