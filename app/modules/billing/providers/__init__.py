# -*- coding: utf-8 -*-
"""
backend/app/modules/billing/providers/__init__.py

Proveedores de datos de facturación (Stripe, solo lectura).

Autor: Zoomi
Fecha: 2026-09-04
"""

from .stripe_provider import StripeProvider, get_stripe_provider, reset_stripe_provider

__all__ = [
    "StripeProvider",
    "get_stripe_provider",
    "reset_stripe_provider",
]
