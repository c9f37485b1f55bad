# -*- coding: utf-8 -*-
"""
backend/app/modules/billing/revenue/amounts.py

Montos de Stripe (centavos) y aplicación de descuentos.

Todo se calcula en centavos; cents_to_dollars() es la única conversión
a dólares y se aplica al acumular en el bucket del mes.

Autor: Zoomi
Fecha: 2026-09-04
"""

from __future__ import annotations

from typing import Any, Iterable, Optional

from .records import first_present, get_field, is_expanded


def cents_to_dollars(cents: float) -> float:
    """Centavos (unidad menor de Stripe) -> dólares."""
    return cents / 100


def apply_discounts(
    cents: float,
    discounts: Iterable[Any],
    currency: Optional[str] = None,
) -> float:
    """
    Aplica los cupones en orden de lista.

    - percent_off: amount * (100 - p) / 100
    - amount_off: resta, con piso en cero. Si se pasa `currency` y el cupón
      tiene otra moneda, el cupón se ignora.

    Resultado en [0, cents].
    """
    amount = float(cents)
    if amount <= 0:
        return amount

    for discount in discounts:
        coupon = discount_coupon(discount)
        if not is_expanded(coupon):
            continue
        percent_off = get_field(coupon, "percent_off")
        amount_off = get_field(coupon, "amount_off")
        if percent_off is not None:
            amount = amount * (100 - float(percent_off)) / 100
        elif amount_off is not None:
            coupon_currency = get_field(coupon, "currency")
            if currency and coupon_currency and coupon_currency.lower() != currency.lower():
                continue
            amount = amount - float(amount_off)
        amount = min(max(amount, 0.0), float(cents))
    return amount


def discount_coupon(discount: Any) -> Any:
    """
    Cupón de un descuento: `coupon` (API anterior) o `source.coupon`
    (API actual, donde `source.type == "coupon"`). Puede ser un id sin expandir.
    """
    return first_present(get_field(discount, "coupon"), get_field(discount, "source", "coupon"))


def subscription_discounts(sub: Any) -> list[Any]:
    """Lista `discounts` o, en suscripciones antiguas, el campo único `discount`."""
    discounts = get_field(sub, "discounts")
    if discounts:
        return [d for d in discounts if is_expanded(d)]
    legacy = get_field(sub, "discount")
    return [legacy] if is_expanded(legacy) else []


def items_amount_cents(items: Iterable[Any]) -> float:
    """
    Σ unit_amount × quantity (quantity por defecto 1).

    Items cuyo precio no está expandido o no tiene unit_amount no suman.
    """
    total = 0.0
    for item in items:
        price = get_field(item, "price")
        unit_amount = get_field(price, "unit_amount") if is_expanded(price) else None
        if unit_amount is None:
            continue
        total += unit_amount * get_field(item, "quantity", default=1)
    return total


def subscription_items(sub: Any) -> list[Any]:
    return list(get_field(sub, "items", "data", default=[]))


def recurring_amount_cents(sub: Any, discounts: Optional[Iterable[Any]] = None) -> float:
    """
    Monto recurrente estimado de una suscripción: precios × cantidades,
    menos descuentos (amount_off sin chequeo de moneda).

    `discounts` reemplaza a los de la suscripción cuando el llamador ya
    resolvió cupones que venían como id.
    """
    amount = items_amount_cents(subscription_items(sub))
    if amount <= 0:
        return amount
    return apply_discounts(amount, subscription_discounts(sub) if discounts is None else discounts)


def invoice_amount_cents(inv: Any) -> float:
    """amount_due, si falta amount_remaining, si falta 0."""
    return first_present(
        get_field(inv, "amount_due"),
        get_field(inv, "amount_remaining"),
        0,
    )


__all__ = [
    "cents_to_dollars",
    "apply_discounts",
    "discount_coupon",
    "subscription_discounts",
    "items_amount_cents",
    "subscription_items",
    "recurring_amount_cents",
    "invoice_amount_cents",
]
# Fin del archivo backend/app/modules/billing/revenue/amounts.py
