# -*- coding: utf-8 -*-
"""
backend/app/modules/customers/errors.py

Excepciones del módulo de clientes pendientes.

Autor: Zoomi
Fecha: 2026-09-06
"""


class InvalidPendingCustomerError(ValueError):
    """El formulario no trae ningún dato (nombre, email o dirección)."""

    def __init__(self, message: str = "Enter at least one field (name, email, or address)."):
        super().__init__(message)


__all__ = ["InvalidPendingCustomerError"]
