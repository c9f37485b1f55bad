# -*- coding: utf-8 -*-
"""
backend/app/modules/finances/stores.py

Stores de Finanzas sobre JsonBlobStore:
- ManualExpensesStore: zoomi:manual-expenses / manual-expenses.json
- UnitsStore: zoomi:units / units.json (solo lectura desde este servicio)

Autor: Zoomi
Fecha: 2026-09-06
"""

from __future__ import annotations

import logging
import secrets
import string
import time
from datetime import datetime, timezone
from typing import Optional

from pydantic import ValidationError

from app.shared.storage import JsonBlobStore

from .models import ManualExpense, Unit

logger = logging.getLogger(__name__)

MANUAL_EXPENSES_KEY = "zoomi:manual-expenses"
MANUAL_EXPENSES_FILE = "manual-expenses.json"
UNITS_KEY = "zoomi:units"
UNITS_FILE = "units.json"

_ID_ALPHABET = string.digits + string.ascii_lowercase


def generate_expense_id() -> str:
    """me_<epoch ms>_<7 caracteres base36>."""
    suffix = "".join(secrets.choice(_ID_ALPHABET) for _ in range(7))
    return f"me_{int(time.time() * 1000)}_{suffix}"


def _utc_now_iso() -> str:
    return datetime.now(timezone.utc).isoformat().replace("+00:00", "Z")


class ManualExpensesStore:
    """Gastos manuales capturados desde el panel."""

    def __init__(self, blob: Optional[JsonBlobStore] = None):
        self.blob = blob or JsonBlobStore(MANUAL_EXPENSES_KEY, MANUAL_EXPENSES_FILE)

    async def list_all(self) -> list[ManualExpense]:
        """Todos los gastos, ordenados por fecha ascendente."""
        expenses: list[ManualExpense] = []
        for raw in await self.blob.read_all():
            if not isinstance(raw, dict):
                continue
            try:
                expenses.append(ManualExpense.model_validate(raw))
            except ValidationError as e:
                logger.warning("manual_expense_skipped id=%s error=%s", raw.get("id"), e)
        return sorted(expenses, key=lambda e: e.date)

    async def create(self, *, date: str, amount: float, description: str) -> ManualExpense:
        """Agrega un gasto (lectura + escritura del blob completo)."""
        expense = ManualExpense(
            id=generate_expense_id(),
            date=date,
            amount=amount,
            description=description,
            created_at=_utc_now_iso(),
        )
        raw = await self.blob.read_all()
        raw.append(expense.model_dump(by_alias=True))
        await self.blob.write_all(raw)
        logger.info("manual_expense_created id=%s amount=%s", expense.id, expense.amount)
        return expense


class UnitsStore:
    """Inventario de unidades (lectura)."""

    def __init__(self, blob: Optional[JsonBlobStore] = None):
        self.blob = blob or JsonBlobStore(UNITS_KEY, UNITS_FILE)

    async def list_all(self) -> list[Unit]:
        units: list[Unit] = []
        for raw in await self.blob.read_all():
            if not isinstance(raw, dict):
                continue
            try:
                units.append(Unit.model_validate(raw))
            except ValidationError as e:
                logger.warning("unit_skipped id=%s error=%s", raw.get("id"), e)
        return units


def get_manual_expenses_store() -> ManualExpensesStore:
    return ManualExpensesStore()


def get_units_store() -> UnitsStore:
    return UnitsStore()


__all__ = [
    "MANUAL_EXPENSES_KEY",
    "MANUAL_EXPENSES_FILE",
    "UNITS_KEY",
    "UNITS_FILE",
    "generate_expense_id",
    "ManualExpensesStore",
    "UnitsStore",
    "get_manual_expenses_store",
    "get_units_store",
]
