# -*- coding: utf-8 -*-
"""
tests/modules/finances/test_finances_services.py

Cálculos de egresos y validación de gastos manuales.
"""

import pytest

from app.modules.finances.errors import InvalidExpenseError
from app.modules.finances.models import CostEntry, MachineInfo, ManualExpense, Unit
from app.modules.finances.services import (
    compute_money_out,
    compute_money_out_for_period,
    date_in_range,
    get_expense_transactions,
    machine_cost,
    validate_expense_input,
)


def _unit(**kwargs) -> Unit:
    return Unit(id=kwargs.pop("id", "u1"), created_at=kwargs.pop("created_at", "2026-03-10T15:00:00Z"), **kwargs)


def _expense(date: str, amount: float, description: str = "Soap") -> ManualExpense:
    return ManualExpense(id=f"me_{date}", date=date, amount=amount, description=description, created_at=date)


# ---------------------------------------------------------------------------
# money out
# ---------------------------------------------------------------------------
def test_money_out_sample():
    units = [
        _unit(
            washer=MachineInfo(purchase_cost=500),
            dryer=MachineInfo(
                purchase_cost=400,
                repair_costs=999,
                additional_costs=[CostEntry(amount=50), CostEntry(amount=25)],
            ),
        )
    ]

    assert compute_money_out(units) == 975


def test_machine_cost_uses_repair_costs_without_entries():
    assert machine_cost(MachineInfo(purchase_cost=300, repair_costs=40)) == 340


def test_money_out_empty():
    assert compute_money_out([]) == 0


# ---------------------------------------------------------------------------
# rangos
# ---------------------------------------------------------------------------
@pytest.mark.parametrize(
    "value,expected",
    [
        ("2026-07-01", True),
        ("2026-07-31T23:59:59Z", True),
        ("2026-06-30", False),
        ("2026-7-1", False),
        ("", False),
    ],
)
def test_date_in_range_is_inclusive_string_compare(value, expected):
    assert date_in_range(value, "2026-07-01", "2026-07-31") is expected


def test_expense_transactions_newest_first_with_unit_ids():
    units = [
        _unit(
            washer=MachineInfo(purchase_cost=500, acquisition_date="2026-02-01"),
            dryer=MachineInfo(
                purchase_cost=400,
                additional_costs=[
                    CostEntry(amount=80, description="Belt", date="2026-04-02"),
                    CostEntry(amount=20),
                ],
            ),
        )
    ]
    manual = [_expense("2026-05-05", 12.5)]

    items = get_expense_transactions(units, manual, "2026-01-01", "2026-12-31")

    assert [(t.date, t.amount, t.description, t.unit_id) for t in items] == [
        ("2026-05-05", 12.5, "Soap", ""),
        ("2026-04-02", 80, "Belt", "u1"),
        ("2026-03-10", 400, "Dryer acquisition", "u1"),
        ("2026-03-10", 20, "Dryer repair", "u1"),
        ("2026-02-01", 500, "Washer acquisition", "u1"),
    ]


def test_legacy_repair_costs_dated_at_unit_creation():
    units = [_unit(washer=MachineInfo(repair_costs=60), dryer=MachineInfo())]

    items = get_expense_transactions(units, [], "2026-03-01", "2026-03-31")

    assert [(t.description, t.amount) for t in items] == [("Washer repair", 60)]


def test_period_total_matches_listing():
    units = [
        _unit(
            washer=MachineInfo(purchase_cost=500, acquisition_date="2025-12-20"),
            dryer=MachineInfo(purchase_cost=400, repair_costs=30),
        )
    ]
    manual = [_expense("2026-03-01", 10), _expense("2026-04-01", 99)]

    total = compute_money_out_for_period(units, manual, "2026-03-01", "2026-03-31")
    listed = get_expense_transactions(units, manual, "2026-03-01", "2026-03-31")

    assert total == 440
    assert sum(t.amount for t in listed) == total


# ---------------------------------------------------------------------------
# validación de gastos manuales
# ---------------------------------------------------------------------------
def test_validate_expense_input_normalizes():
    assert validate_expense_input({"date": " 2026-07-04 ", "amount": "19.90", "description": "  Coins "}) == (
        "2026-07-04",
        19.9,
        "Coins",
    )


@pytest.mark.parametrize(
    "body,field,message",
    [
        ({"date": "07/04/2026", "amount": 1, "description": "x"}, "date", "Invalid date. Use YYYY-MM-DD."),
        ({"amount": 1, "description": "x"}, "date", "Invalid date. Use YYYY-MM-DD."),
        ({"date": "2026-07-04", "amount": 0, "description": "x"}, "amount", "Invalid amount. Must be a positive number."),
        ({"date": "2026-07-04", "amount": "abc", "description": "x"}, "amount", "Invalid amount. Must be a positive number."),
        ({"date": "2026-07-04", "amount": "inf", "description": "x"}, "amount", "Invalid amount. Must be a positive number."),
        ({"date": "2026-07-04", "amount": True, "description": "x"}, "amount", "Invalid amount. Must be a positive number."),
        ({"date": "2026-07-04", "amount": 5, "description": "   "}, "description", "Description is required."),
    ],
)
def test_validate_expense_input_errors(body, field, message):
    with pytest.raises(InvalidExpenseError) as exc:
        validate_expense_input(body)

    assert exc.value.field == field
    assert str(exc.value) == message
