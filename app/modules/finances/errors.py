# -*- coding: utf-8 -*-
"""
backend/app/modules/finances/errors.py

Excepciones del módulo de Finanzas.

Autor: Zoomi
Fecha: 2026-09-06
"""


class InvalidExpenseError(ValueError):
    """Datos de gasto manual inválidos (fecha, monto o descripción)."""

    def __init__(self, message: str, field: str):
        self.field = field
        super().__init__(message)


__all__ = ["InvalidExpenseError"]
