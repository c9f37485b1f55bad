# -*- coding: utf-8 -*-
"""
tests/modules/billing/test_revenue_aggregator.py

Resumen de ingresos (compute_admin_revenue).

Cubre:
- Realizado por balance transactions y fallback a facturas pagadas
- Esperado / pronóstico: facturas, suscripciones y schedules
- Un solo bucket por monto; conversión de centavos una vez
- Proveedor sin configurar -> ceros
"""

import pytest

from app.modules.billing.revenue.aggregator import RevenueAggregator
from tests.support.stripe_fakes import NOW, FakeStripeProvider, ts


def _aggregator(provider):
    return RevenueAggregator(provider, now=NOW, tz="UTC", lookback_days=60)


def _bt(id_, amount, created, type_="charge"):
    return {"id": id_, "object": "balance_transaction", "type": type_, "amount": amount, "created": created}


@pytest.mark.anyio
async def test_balance_transaction_and_draft_invoice_sample():
    provider = FakeStripeProvider()
    provider.balance_transactions = [_bt("txn_1", 6000, ts(2026, 7, 3))]
    provider.invoices = [
        {
            "id": "in_1",
            "status": "draft",
            "amount_due": 6000,
            "due_date": ts(2026, 8, 5),
            "subscription": None,
            "created": ts(2026, 7, 1),
        }
    ]

    data = await _aggregator(provider).compute_admin_revenue()

    assert data.this_month_revenue == 60.00
    assert data.next_month_forecast == 60.00
    assert data.last_month_revenue == 0
    assert (data.last_month_name, data.this_month_name, data.next_month_name) == (
        "June",
        "July",
        "August",
    )


@pytest.mark.anyio
async def test_realized_sums_charge_and_payment_types_within_bounds():
    provider = FakeStripeProvider()
    provider.balance_transactions = [
        _bt("txn_1", 1000, ts(2026, 6, 2)),
        _bt("txn_2", 2550, ts(2026, 6, 30), type_="payment"),
        _bt("txn_3", 9999, ts(2026, 6, 10), type_="payout"),
        _bt("txn_4", 4000, ts(2026, 5, 31)),
    ]

    data = await _aggregator(provider).compute_admin_revenue()

    assert data.last_month_revenue == 35.50


@pytest.mark.anyio
async def test_realized_is_independent_of_page_boundaries():
    records = [_bt(f"txn_{i}", 100 + i, ts(2026, 6, 1 + i)) for i in range(25)]
    single = FakeStripeProvider(page_size=100)
    paged = FakeStripeProvider(page_size=4)
    single.balance_transactions = list(records)
    paged.balance_transactions = list(records)

    a = await _aggregator(single).compute_admin_revenue()
    b = await _aggregator(paged).compute_admin_revenue()

    assert a.last_month_revenue == b.last_month_revenue == sum(100 + i for i in range(25)) / 100


@pytest.mark.anyio
async def test_paid_invoice_fallback_when_no_balance_transactions():
    provider = FakeStripeProvider()
    provider.invoices = [
        # pagada en junio (paid_at manda sobre created)
        {
            "id": "in_1",
            "status": "paid",
            "amount_paid": 4500,
            "created": ts(2026, 5, 20),
            "status_transitions": {"paid_at": ts(2026, 6, 3)},
        },
        # sin paid_at: se usa created
        {"id": "in_2", "status": "paid", "amount_paid": 500, "created": ts(2026, 6, 9)},
        # fuera de la ventana de 60 días
        {
            "id": "in_3",
            "status": "paid",
            "amount_paid": 100000,
            "created": ts(2026, 1, 1),
            "status_transitions": {"paid_at": ts(2026, 6, 5)},
        },
        # pagada en julio
        {
            "id": "in_4",
            "status": "paid",
            "amount_paid": 700,
            "created": ts(2026, 6, 28),
            "status_transitions": {"paid_at": ts(2026, 7, 2)},
        },
    ]

    data = await _aggregator(provider).compute_admin_revenue()

    assert data.last_month_revenue == 50.00
    assert data.this_month_revenue == 7.00


@pytest.mark.anyio
async def test_fallback_not_used_when_balance_transactions_exist():
    provider = FakeStripeProvider()
    provider.balance_transactions = [_bt("txn_1", 1000, ts(2026, 6, 2))]
    provider.invoices = [{"id": "in_1", "status": "paid", "amount_paid": 4500, "created": ts(2026, 6, 3)}]

    data = await _aggregator(provider).compute_admin_revenue()

    assert data.last_month_revenue == 10.00
    paid_queries = [c for c in provider.calls_to("invoices") if c.get("status") == "paid"]
    # Solo el mes actual (sin balance transactions) consulta facturas pagadas
    assert len(paid_queries) == 1
    assert paid_queries[0]["created"] == {"gte": ts(2026, 7, 1, 0) - 60 * 86400}


@pytest.mark.anyio
async def test_open_invoice_and_next_cycle_land_in_separate_buckets():
    provider = FakeStripeProvider()
    provider.subscriptions = [
        {
            "id": "sub_1",
            "status": "active",
            "customer": "cus_1",
            "current_period_start": ts(2026, 6, 20),
            "current_period_end": ts(2026, 7, 20),
            "items": {"data": [{"price": {"unit_amount": 5000}, "quantity": 1}]},
            "latest_invoice": {
                "id": "in_open",
                "status": "open",
                "amount_due": 5000,
                "due_date": ts(2026, 7, 25),
                "period_end": ts(2026, 7, 20),
            },
        }
    ]

    data = await _aggregator(provider).compute_admin_revenue()

    # julio: factura abierta; agosto: 20 jul + 30 días + 5 días = 24 ago
    assert data.this_month_revenue == 50.00
    assert data.next_month_forecast == 50.00


@pytest.mark.anyio
async def test_subscription_estimate_with_discount_sample():
    provider = FakeStripeProvider()
    provider.subscriptions = [
        {
            "id": "sub_1",
            "status": "active",
            "customer": "cus_1",
            "current_period_end": ts(2026, 8, 3),
            "items": {"data": [{"price": {"unit_amount": 8000}, "quantity": 1}]},
            "discounts": [{"coupon": {"percent_off": 25}}],
        }
    ]

    data = await _aggregator(provider).compute_admin_revenue()

    assert data.next_month_forecast == 60.00
    assert data.this_month_revenue == 0


@pytest.mark.anyio
async def test_all_expected_statuses_are_listed():
    provider = FakeStripeProvider()

    await _aggregator(provider).compute_admin_revenue()

    statuses = [c["status"] for c in provider.calls_to("subscriptions")]
    assert statuses == ["active", "trialing", "past_due", "incomplete"]


@pytest.mark.anyio
async def test_not_started_schedule_adds_to_forecast():
    provider = FakeStripeProvider()
    provider.prices["price_1"] = {"id": "price_1", "unit_amount": 9000}
    provider.schedules = [
        {
            "id": "sub_sched_1",
            "status": "not_started",
            "phases": [{"start_date": ts(2026, 8, 1), "items": [{"price": "price_1", "quantity": 1}]}],
        },
        {
            "id": "sub_sched_2",
            "status": "active",
            "phases": [{"start_date": ts(2026, 8, 1), "items": [{"price": "price_1", "quantity": 1}]}],
        },
    ]

    data = await _aggregator(provider).compute_admin_revenue()

    assert data.next_month_forecast == 90.00


@pytest.mark.anyio
async def test_subscription_invoices_and_out_of_range_invoices_are_skipped():
    provider = FakeStripeProvider()
    provider.invoices = [
        {"id": "in_1", "status": "open", "amount_due": 1000, "due_date": ts(2026, 7, 20), "subscription": "sub_1"},
        {
            "id": "in_2",
            "status": "open",
            "amount_due": 2000,
            "due_date": ts(2026, 7, 20),
            "parent": {"subscription_details": {"subscription": "sub_2"}},
        },
        {"id": "in_3", "status": "draft", "amount_due": 3000, "due_date": ts(2026, 9, 20)},
        {"id": "in_4", "status": "open", "amount_remaining": 400, "period_end": ts(2026, 7, 22)},
        {"id": "in_5", "status": "open", "amount_due": 0, "due_date": ts(2026, 7, 22)},
    ]

    data = await _aggregator(provider).compute_admin_revenue()

    assert data.this_month_revenue == 4.00
    assert data.next_month_forecast == 0


@pytest.mark.anyio
async def test_unconfigured_provider_reports_zeros():
    provider = FakeStripeProvider(configured=False)
    provider.balance_transactions = [_bt("txn_1", 6000, ts(2026, 7, 3))]

    data = await _aggregator(provider).compute_admin_revenue()

    assert (data.last_month_revenue, data.this_month_revenue, data.next_month_forecast) == (0, 0, 0)
    assert data.this_month_name == "July"
    assert provider.calls == []


@pytest.mark.anyio
async def test_page_level_errors_propagate():
    provider = FakeStripeProvider()

    async def boom(**params):
        raise RuntimeError("stripe down")

    provider.list_balance_transactions = boom

    with pytest.raises(RuntimeError):
        await _aggregator(provider).compute_admin_revenue()
