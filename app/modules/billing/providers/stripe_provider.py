# -*- coding: utf-8 -*-
"""
backend/app/modules/billing/providers/stripe_provider.py

Proveedor Stripe de solo lectura para reportes de ingresos.

Dos familias de llamadas:
- Listados por página (balance transactions, invoices, subscriptions,
  subscription schedules): devuelven un ListObject con `data` y `has_more`.
  Sus errores se propagan; la ruta los convierte en HTTP 500.
- Consultas por registro (customer, price, invoice, coupon, factura de un
  PaymentIntent, vista previa de la próxima factura): un `stripe.StripeError`
  se registra y se devuelve None, de modo que el agregador trata ese aporte como ausente.

El SDK es bloqueante; cada llamada corre en el threadpool de FastAPI.

Autor: Zoomi
Fecha: 2026-09-04
"""

from __future__ import annotations

import logging
import os
from typing import Any, Optional

import stripe
from fastapi.concurrency import run_in_threadpool

logger = logging.getLogger(__name__)

PAGE_SIZE = 100


class StripeProvider:
    """
    Acceso asíncrono a los objetos de Stripe que alimentan el panel de ingresos.

    Usa un StripeClient propio (no muta la api_key global del SDK).
    """

    def __init__(self, secret_key: Optional[str] = None):
        """
        Inicializa el proveedor Stripe.

        Args:
            secret_key: Stripe secret key. Si no se proporciona,
                        se carga desde settings o env.
        """
        self._secret_key = secret_key or self._load_secret_key()
        self._client: Optional[stripe.StripeClient] = (
            stripe.StripeClient(self._secret_key) if self._secret_key else None
        )

    def _load_secret_key(self) -> Optional[str]:
        """Carga la secret key desde settings o env."""
        from app.core.settings import get_settings

        secret = get_settings().stripe_secret_key
        key = secret.get_secret_value() if secret else os.getenv("STRIPE_SECRET_KEY")
        if not key:
            logger.warning("STRIPE_SECRET_KEY not configured")
        return key or None

    @property
    def is_configured(self) -> bool:
        """True si hay secret key."""
        return self._client is not None

    @property
    def client(self) -> stripe.StripeClient:
        if self._client is None:
            raise ValueError("Stripe is not configured. Set STRIPE_SECRET_KEY.")
        return self._client

    # ------------------------------------------------------------------
    # Listados por página (errores se propagan)
    # ------------------------------------------------------------------
    async def list_balance_transactions(self, **params: Any) -> Any:
        return await run_in_threadpool(
            self.client.balance_transactions.list, params=_page_params(params)
        )

    async def list_invoices(self, **params: Any) -> Any:
        return await run_in_threadpool(self.client.invoices.list, params=_page_params(params))

    async def list_subscriptions(self, **params: Any) -> Any:
        return await run_in_threadpool(
            self.client.subscriptions.list, params=_page_params(params)
        )

    async def list_subscription_schedules(self, **params: Any) -> Any:
        return await run_in_threadpool(
            self.client.subscription_schedules.list, params=_page_params(params)
        )

    # ------------------------------------------------------------------
    # Consultas por registro (StripeError -> None)
    # ------------------------------------------------------------------
    async def retrieve_customer(self, customer_id: str) -> Optional[Any]:
        return await self._optional(
            "customer", customer_id, self.client.customers.retrieve, customer_id
        )

    async def retrieve_price(self, price_id: str) -> Optional[Any]:
        return await self._optional("price", price_id, self.client.prices.retrieve, price_id)

    async def retrieve_invoice(self, invoice_id: str) -> Optional[Any]:
        return await self._optional(
            "invoice", invoice_id, self.client.invoices.retrieve, invoice_id
        )

    async def retrieve_coupon(self, coupon_id: str) -> Optional[Any]:
        return await self._optional("coupon", coupon_id, self.client.coupons.retrieve, coupon_id)

    async def find_payment_invoice(self, payment_intent_id: str) -> Optional[Any]:
        """
        Factura pagada por un PaymentIntent, vía InvoicePayment.

        En versiones recientes del API el Charge ya no trae `invoice`; el
        vínculo vive en los InvoicePayment. None si no hay factura asociada.
        """
        page = await self._optional(
            "invoice_payment",
            payment_intent_id,
            self.client.invoice_payments.list,
            params={
                "payment": {"type": "payment_intent", "payment_intent": payment_intent_id},
                "expand": ["data.invoice"],
                "limit": 1,
            },
        )
        data = list(getattr(page, "data", None) or [])
        if not data:
            return None
        entry = data[0]
        invoice = entry.get("invoice") if isinstance(entry, dict) else getattr(entry, "invoice", None)
        return invoice or None

    async def preview_upcoming_invoice(
        self,
        *,
        customer_id: str,
        subscription_id: str,
    ) -> Optional[Any]:
        """
        Vista previa de la próxima factura de una suscripción.

        None cuando Stripe no puede generarla (p.ej. suscripción que no
        renueva); el llamador estima el monto a partir de los precios.
        """
        return await self._optional(
            "upcoming_invoice",
            subscription_id,
            self.client.invoices.create_preview,
            params={"customer": customer_id, "subscription": subscription_id},
        )

    async def _optional(self, kind: str, ref: str, fn: Any, *args: Any, **kwargs: Any) -> Optional[Any]:
        try:
            return await run_in_threadpool(fn, *args, **kwargs)
        except stripe.StripeError as e:
            logger.debug("stripe_lookup_failed kind=%s ref=%s error=%s", kind, ref, e)
            return None


def _page_params(params: dict[str, Any]) -> dict[str, Any]:
    out = {"limit": PAGE_SIZE}
    out.update({k: v for k, v in params.items() if v is not None})
    return out


_default_provider: Optional[StripeProvider] = None


def get_stripe_provider() -> StripeProvider:
    """
    Instancia compartida (dependencia FastAPI sustituible en tests).
    """
    global _default_provider
    if _default_provider is None:
        _default_provider = StripeProvider()
    return _default_provider


def reset_stripe_provider() -> None:
    """Descarta la instancia compartida (tras cambiar STRIPE_SECRET_KEY)."""
    global _default_provider
    _default_provider = None


__all__ = [
    "PAGE_SIZE",
    "StripeProvider",
    "get_stripe_provider",
    "reset_stripe_provider",
]
# Fin del archivo backend/app/modules/billing/providers/stripe_provider.py
