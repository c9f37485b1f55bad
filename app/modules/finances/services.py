# -*- coding: utf-8 -*-
"""
backend/app/modules/finances/services.py

Cálculos de egresos (money out) sobre unidades y gastos manuales.

Las fechas se comparan como cadenas YYYY-MM-DD (inclusivo en ambos
extremos), sin conversión de zona horaria.

Autor: Zoomi
Fecha: 2026-09-06
"""

from __future__ import annotations

import math
import re
from typing import Any, Iterable

from .errors import InvalidExpenseError
from .models import ExpenseTransaction, MachineInfo, ManualExpense, Unit
from .stores import ManualExpensesStore

DATE_PATTERN = re.compile(r"^\d{4}-\d{2}-\d{2}$")


def _day(value: str) -> str:
    return value.split("T")[0]


def date_in_range(value: str, start_date: str, end_date: str) -> bool:
    d = _day(value)
    if not d or len(d) != 10:
        return False
    return start_date <= d <= end_date


def _machines(unit: Unit) -> tuple[tuple[str, MachineInfo], ...]:
    return (("Washer", unit.washer), ("Dryer", unit.dryer))


def machine_cost(machine: MachineInfo) -> float:
    """Compra + reparaciones (Σ costos adicionales si existen, si no repair_costs)."""
    if machine.additional_costs:
        repair = sum(e.amount for e in machine.additional_costs)
    else:
        repair = machine.repair_costs
    return machine.purchase_cost + repair


def compute_money_out(units: Iterable[Unit]) -> float:
    """Egreso total histórico de todas las unidades."""
    return sum(machine_cost(unit.washer) + machine_cost(unit.dryer) for unit in units)


def get_expense_transactions(
    units: Iterable[Unit],
    manual_expenses: Iterable[ManualExpense],
    start_date: str,
    end_date: str,
) -> list[ExpenseTransaction]:
    """
    Egresos individuales dentro del rango, del más reciente al más antiguo.

    Incluye gastos manuales, adquisiciones de máquinas (fecha de adquisición
    o de alta de la unidad) y reparaciones.
    """
    items: list[ExpenseTransaction] = []

    for expense in manual_expenses:
        d = _day(expense.date)
        if date_in_range(d, start_date, end_date):
            items.append(
                ExpenseTransaction(date=d, amount=expense.amount, description=expense.description)
            )

    for unit in units:
        unit_date = _day(unit.created_at)
        for label, machine in _machines(unit):
            acquired = machine.acquisition_date or unit_date
            if date_in_range(acquired, start_date, end_date) and machine.purchase_cost > 0:
                items.append(
                    ExpenseTransaction(
                        date=acquired,
                        amount=machine.purchase_cost,
                        description=f"{label} acquisition",
                        unit_id=unit.id,
                    )
                )
            if machine.additional_costs:
                for entry in machine.additional_costs:
                    entry_date = _day(entry.date or unit_date)
                    if date_in_range(entry_date, start_date, end_date):
                        items.append(
                            ExpenseTransaction(
                                date=entry_date,
                                amount=entry.amount,
                                description=entry.description or f"{label} repair",
                                unit_id=unit.id,
                            )
                        )
            elif date_in_range(unit_date, start_date, end_date) and machine.repair_costs > 0:
                items.append(
                    ExpenseTransaction(
                        date=unit_date,
                        amount=machine.repair_costs,
                        description=f"{label} repair",
                        unit_id=unit.id,
                    )
                )

    items.sort(key=lambda t: t.date, reverse=True)
    return items


def compute_money_out_for_period(
    units: Iterable[Unit],
    manual_expenses: Iterable[ManualExpense],
    start_date: str,
    end_date: str,
) -> float:
    """Suma de egresos del rango (mismas reglas de fecha que el listado)."""
    total = 0.0
    for expense in manual_expenses:
        if date_in_range(expense.date, start_date, end_date):
            total += expense.amount

    for unit in units:
        unit_date = _day(unit.created_at)
        for _, machine in _machines(unit):
            if date_in_range(machine.acquisition_date or unit_date, start_date, end_date):
                total += machine.purchase_cost
            if machine.additional_costs:
                for entry in machine.additional_costs:
                    if date_in_range(entry.date or unit_date, start_date, end_date):
                        total += entry.amount
            elif date_in_range(unit_date, start_date, end_date):
                total += machine.repair_costs
    return total


def validate_expense_input(body: dict[str, Any]) -> tuple[str, float, str]:
    """
    Normaliza y valida un gasto manual.

    Returns:
        (date, amount, description)

    Raises:
        InvalidExpenseError: fecha no YYYY-MM-DD, monto no positivo/finito,
            o descripción vacía.
    """
    raw_date = body.get("date")
    date = raw_date.strip() if isinstance(raw_date, str) else ""
    if not date or not DATE_PATTERN.match(date):
        raise InvalidExpenseError("Invalid date. Use YYYY-MM-DD.", "date")

    raw_amount = body.get("amount")
    try:
        if isinstance(raw_amount, bool):
            raise TypeError("bool amount")
        amount = float(raw_amount)
    except (TypeError, ValueError):
        amount = math.nan
    if not math.isfinite(amount) or amount <= 0:
        raise InvalidExpenseError("Invalid amount. Must be a positive number.", "amount")

    raw_description = body.get("description")
    description = raw_description.strip() if isinstance(raw_description, str) else ""
    if not description:
        raise InvalidExpenseError("Description is required.", "description")

    return date, amount, description


async def create_manual_expense(store: ManualExpensesStore, body: dict[str, Any]) -> ManualExpense:
    """Valida y persiste un gasto manual."""
    date, amount, description = validate_expense_input(body)
    return await store.create(date=date, amount=amount, description=description)


__all__ = [
    "DATE_PATTERN",
    "date_in_range",
    "machine_cost",
    "compute_money_out",
    "get_expense_transactions",
    "compute_money_out_for_period",
    "validate_expense_input",
    "create_manual_expense",
]
