# -*- coding: utf-8 -*-
"""
backend/app/modules/billing/revenue/subscriptions.py

Próximos cobros de suscripciones y de subscription schedules.

Cada suscripción produce una lista de ScheduledPayment (monto en centavos
y fecha de cobro). Un ciclo se cuenta una sola vez:

1) latest_invoice en draft/open -> OpenInvoice con el monto de esa factura,
   más un Estimated para el ciclo siguiente (precio × cantidad − descuentos).
2) si no, vista previa de la próxima factura -> PreviewAvailable.
3) si Stripe no puede dar la vista previa -> Estimated, fechado en
   trial_end (solo trialing) o current_period_end.

Autor: Zoomi
Fecha: 2026-09-05
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Optional, Protocol, Union

from .amounts import (
    discount_coupon,
    invoice_amount_cents,
    recurring_amount_cents,
    subscription_discounts,
    subscription_items,
)
from .records import first_present, get_field, is_expanded, ref_id

logger = logging.getLogger(__name__)

DEFAULT_PERIOD_SECONDS = 30 * 86400

OPEN_INVOICE_STATUSES = frozenset({"draft", "open"})


@dataclass(frozen=True)
class PreviewAvailable:
    """Monto y fecha tomados de la vista previa de Stripe."""
    amount_cents: float
    due_ts: int


@dataclass(frozen=True)
class Estimated:
    """Monto sintetizado a partir de precios, cantidades y descuentos."""
    amount_cents: float
    due_ts: int


@dataclass(frozen=True)
class OpenInvoice:
    """Factura draft/open vigente de la suscripción."""
    amount_cents: float
    due_ts: int


ScheduledPayment = Union[PreviewAvailable, Estimated, OpenInvoice]


class SubscriptionLookups(Protocol):
    async def retrieve_invoice(self, invoice_id: str) -> Optional[Any]: ...

    async def retrieve_price(self, price_id: str) -> Optional[Any]: ...

    async def retrieve_coupon(self, coupon_id: str) -> Optional[Any]: ...

    async def preview_upcoming_invoice(
        self, *, customer_id: str, subscription_id: str
    ) -> Optional[Any]: ...


# ---------------------------------------------------------------------------
# Campos con fallback entre versiones del API
# ---------------------------------------------------------------------------
def _period_field(sub: Any, name: str) -> Optional[int]:
    # Versiones recientes del API mueven el periodo a los items
    value = get_field(sub, name)
    if value is not None:
        return value
    items = subscription_items(sub)
    return get_field(items[0], name) if items else None


def current_period_start(sub: Any) -> Optional[int]:
    return _period_field(sub, "current_period_start")


def current_period_end(sub: Any) -> Optional[int]:
    return _period_field(sub, "current_period_end")


def invoice_subscription(inv: Any) -> Optional[str]:
    """Id de la suscripción de una factura (campo directo o parent.subscription_details)."""
    return ref_id(
        first_present(
            get_field(inv, "subscription"),
            get_field(inv, "parent", "subscription_details", "subscription"),
        )
    )


def invoice_due_ts(inv: Any, fallback: Optional[int]) -> Optional[int]:
    """due_date ?? period_end ?? fallback."""
    return first_present(get_field(inv, "due_date"), get_field(inv, "period_end"), fallback)


# ---------------------------------------------------------------------------
# Suscripciones
# ---------------------------------------------------------------------------
async def _latest_invoice(provider: SubscriptionLookups, sub: Any) -> Optional[Any]:
    latest = get_field(sub, "latest_invoice")
    if isinstance(latest, str) and latest:
        return await provider.retrieve_invoice(latest)
    return latest if is_expanded(latest) else None


async def resolve_discounts(provider: SubscriptionLookups, sub: Any) -> list[Any]:
    """
    Descuentos de la suscripción con el cupón expandido.

    El listado solo expande `data.discounts`; el cupón puede llegar como id
    (en `coupon` o en `source.coupon`) y se consulta al proveedor. Cupones
    que no se pueden recuperar no descuentan nada.
    """
    resolved: list[Any] = []
    for discount in subscription_discounts(sub):
        coupon = discount_coupon(discount)
        if isinstance(coupon, str) and coupon:
            coupon = await provider.retrieve_coupon(coupon)
        if is_expanded(coupon):
            resolved.append({"coupon": coupon})
    return resolved


async def estimated_amount_cents(provider: SubscriptionLookups, sub: Any) -> float:
    """Monto recurrente con los cupones resueltos."""
    return recurring_amount_cents(sub, await resolve_discounts(provider, sub))


def next_cycle_due_ts(sub: Any, open_invoice: Any) -> Optional[int]:
    """
    Fecha estimada del ciclo siguiente a una factura abierta:
    current_period_end + duración del periodo + desfase due_date - period_end.
    """
    period_end = current_period_end(sub)
    if not period_end:
        return None
    period_start = current_period_start(sub)
    period_length = period_end - period_start if period_start else DEFAULT_PERIOD_SECONDS

    gap = 0
    inv_due = get_field(open_invoice, "due_date")
    inv_period_end = get_field(open_invoice, "period_end")
    if inv_due and inv_period_end:
        gap = max(0, inv_due - inv_period_end)
    return period_end + period_length + gap


async def resolve_subscription_payments(
    provider: SubscriptionLookups,
    sub: Any,
    status: str,
) -> list[ScheduledPayment]:
    """
    Próximos cobros de una suscripción.

    Args:
        provider: proveedor con retrieve_invoice / preview_upcoming_invoice
        sub: suscripción (customer y latest_invoice pueden venir expandidos)
        status: estado con el que se listó (active, trialing, past_due, incomplete)

    Returns:
        Cobros con monto > 0 y fecha conocida.
    """
    customer_id = ref_id(get_field(sub, "customer"))
    if not customer_id:
        return []

    payments: list[ScheduledPayment] = []
    latest = await _latest_invoice(provider, sub)

    if latest is not None and get_field(latest, "status") in OPEN_INVOICE_STATUSES:
        payments.append(
            OpenInvoice(
                amount_cents=invoice_amount_cents(latest),
                due_ts=invoice_due_ts(latest, current_period_end(sub)),
            )
        )
        next_due = next_cycle_due_ts(sub, latest)
        if next_due is not None:
            payments.append(
                Estimated(amount_cents=await estimated_amount_cents(provider, sub), due_ts=next_due)
            )
    else:
        preview = await provider.preview_upcoming_invoice(
            customer_id=customer_id,
            subscription_id=get_field(sub, "id"),
        )
        if preview is not None:
            payments.append(
                PreviewAvailable(
                    amount_cents=invoice_amount_cents(preview),
                    due_ts=invoice_due_ts(preview, current_period_end(sub)),
                )
            )
        else:
            trial_end = get_field(sub, "trial_end") if status == "trialing" else None
            payments.append(
                Estimated(
                    amount_cents=await estimated_amount_cents(provider, sub),
                    due_ts=trial_end or current_period_end(sub),
                )
            )

    return [p for p in payments if p.amount_cents > 0 and p.due_ts]


# ---------------------------------------------------------------------------
# Subscription schedules (not_started)
# ---------------------------------------------------------------------------
def select_schedule_phase(schedule: Any, now_ts: int) -> Optional[Any]:
    """Primera fase que empieza en o después de `now_ts`; si no hay, la primera."""
    phases = list(get_field(schedule, "phases", default=[]))
    if not phases:
        return None
    for phase in phases:
        start = get_field(phase, "start_date")
        if start is not None and start >= now_ts:
            return phase
    return phases[0]


async def schedule_phase_amount_cents(provider: SubscriptionLookups, phase: Any) -> float:
    """Σ unit_amount × quantity de la fase; precios no resolubles suman cero."""
    total = 0.0
    for item in get_field(phase, "items", default=[]):
        price = get_field(item, "price")
        if isinstance(price, str):
            price = await provider.retrieve_price(price)
        if not is_expanded(price):
            continue
        unit_amount = get_field(price, "unit_amount")
        if unit_amount is None:
            continue
        total += unit_amount * get_field(item, "quantity", default=1)
    return total


async def resolve_schedule_payment(
    provider: SubscriptionLookups,
    schedule: Any,
    now_ts: int,
) -> Optional[Estimated]:
    """Cobro inicial de un schedule not_started, fechado en el start_date de la fase."""
    if get_field(schedule, "status") != "not_started":
        return None
    phase = select_schedule_phase(schedule, now_ts)
    start = get_field(phase, "start_date")
    if not start:
        return None
    amount = await schedule_phase_amount_cents(provider, phase)
    if amount <= 0:
        logger.debug("schedule_without_amount id=%s", get_field(schedule, "id"))
        return None
    return Estimated(amount_cents=amount, due_ts=start)


__all__ = [
    "PreviewAvailable",
    "Estimated",
    "OpenInvoice",
    "ScheduledPayment",
    "SubscriptionLookups",
    "current_period_start",
    "current_period_end",
    "invoice_subscription",
    "invoice_due_ts",
    "resolve_discounts",
    "estimated_amount_cents",
    "next_cycle_due_ts",
    "resolve_subscription_payments",
    "select_schedule_phase",
    "schedule_phase_amount_cents",
    "resolve_schedule_payment",
]
# Fin del archivo backend/app/modules/billing/revenue/subscriptions.py
