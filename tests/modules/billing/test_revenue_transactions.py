# -*- coding: utf-8 -*-
"""
tests/modules/billing/test_revenue_transactions.py

Listado de transacciones por mes (compute_revenue_transactions).
"""

import pytest

from app.modules.billing.revenue.aggregator import RevenueAggregator, RevenueTransaction
from tests.support.stripe_fakes import NOW, FakeStripeProvider, ts


def _aggregator(provider):
    return RevenueAggregator(provider, now=NOW, tz="UTC", lookback_days=60)


@pytest.mark.anyio
async def test_schedule_in_next_month_is_listed_as_subscription():
    provider = FakeStripeProvider()
    provider.prices["price_1"] = {"id": "price_1", "unit_amount": 9000}
    provider.schedules = [
        {
            "id": "sub_sched_1",
            "status": "not_started",
            "customer": {"id": "cus_1", "name": "Acme Rentals"},
            "phases": [{"start_date": ts(2026, 8, 10), "items": [{"price": "price_1"}]}],
        }
    ]

    items = await _aggregator(provider).compute_revenue_transactions("next")

    assert items == [
        RevenueTransaction(
            customer_name="Acme Rentals",
            date="2026-08-10",
            date_timestamp=ts(2026, 8, 10),
            amount=90.0,
            type="subscription",
        )
    ]


@pytest.mark.anyio
async def test_last_month_lists_only_realized():
    provider = FakeStripeProvider()
    provider.balance_transactions = [
        {
            "id": "txn_1",
            "type": "charge",
            "amount": 2500,
            "created": ts(2026, 6, 12),
            "source": {"id": "ch_1", "customer": {"id": "cus_1", "name": "Ana"}, "invoice": None},
        },
        {"id": "txn_2", "type": "charge", "amount": -300, "created": ts(2026, 6, 13)},
    ]
    provider.invoices = [{"id": "in_1", "status": "open", "amount_due": 1000, "due_date": ts(2026, 6, 20)}]

    items = await _aggregator(provider).compute_revenue_transactions("last")

    assert [(t.customer_name, t.date, t.amount, t.type) for t in items] == [
        ("Ana", "2026-06-12", 25.0, "invoice")
    ]
    assert provider.calls_to("subscriptions") == []


@pytest.mark.anyio
async def test_balance_transaction_from_subscription_invoice():
    provider = FakeStripeProvider()
    provider.customers["cus_9"] = {"id": "cus_9", "email": "ops@example.com"}
    provider.balance_transactions = [
        {
            "id": "txn_1",
            "type": "payment",
            "amount": 4000,
            "created": ts(2026, 7, 2),
            "source": {
                "id": "py_1",
                "customer": "cus_9",
                "invoice": {"id": "in_1", "subscription": "sub_1"},
            },
        }
    ]

    items = await _aggregator(provider).compute_revenue_transactions("this")

    assert len(items) == 1
    assert items[0].type == "subscription"
    assert items[0].customer_name == "ops@example.com"
    assert items[0].amount == 40.0


@pytest.mark.anyio
async def test_charge_without_invoice_field_is_classified_through_invoice_payment():
    provider = FakeStripeProvider()
    provider.payment_invoices["pi_1"] = {
        "id": "in_1",
        "parent": {"subscription_details": {"subscription": "sub_1"}},
    }
    provider.balance_transactions = [
        {
            "id": "txn_1",
            "type": "charge",
            "amount": 4000,
            "created": ts(2026, 7, 2),
            "source": {
                "id": "ch_1",
                "object": "charge",
                "customer": {"id": "cus_1", "name": "Epsilon"},
                "payment_intent": "pi_1",
            },
        },
        {
            "id": "txn_2",
            "type": "charge",
            "amount": 1000,
            "created": ts(2026, 7, 3),
            "source": {"id": "ch_2", "object": "charge", "payment_intent": "pi_2"},
        },
    ]

    items = await _aggregator(provider).compute_revenue_transactions("this")

    assert [(t.customer_name, t.amount, t.type) for t in items] == [
        ("Epsilon", 40.0, "subscription"),
        ("—", 10.0, "invoice"),
    ]
    assert provider.calls_to("invoice_payment") == [
        {"payment_intent": "pi_1"},
        {"payment_intent": "pi_2"},
    ]
    assert provider.calls_to("balance_transactions")[0]["expand"] == ["data.source"]


@pytest.mark.anyio
async def test_charge_with_invoice_id_is_classified_through_invoice_lookup():
    provider = FakeStripeProvider()
    provider.invoices = [{"id": "in_1", "status": "paid", "subscription": "sub_1", "created": ts(2026, 1, 5)}]
    provider.balance_transactions = [
        {
            "id": "txn_1",
            "type": "charge",
            "amount": 2500,
            "created": ts(2026, 7, 2),
            "source": {"id": "ch_1", "object": "charge", "invoice": "in_1", "payment_intent": "pi_1"},
        }
    ]

    items = await _aggregator(provider).compute_revenue_transactions("this")

    assert [(t.amount, t.type) for t in items] == [(25.0, "subscription")]
    assert provider.calls_to("invoice") == [{"id": "in_1"}]
    assert provider.calls_to("invoice_payment") == []


@pytest.mark.anyio
async def test_this_month_merges_realized_and_expected_sorted_by_date():
    provider = FakeStripeProvider()
    provider.customers["cus_1"] = {"id": "cus_1", "name": "Beta"}
    provider.balance_transactions = [
        {"id": "txn_1", "type": "charge", "amount": 1500, "created": ts(2026, 7, 9), "source": None},
    ]
    provider.invoices = [
        {"id": "in_1", "status": "draft", "amount_due": 700, "due_date": ts(2026, 7, 28), "customer": "cus_1"},
        {"id": "in_2", "status": "open", "amount_due": 900, "due_date": ts(2026, 7, 3), "customer": "cus_1"},
        {"id": "in_3", "status": "open", "amount_due": 900, "due_date": ts(2026, 8, 3), "customer": "cus_1"},
    ]
    provider.subscriptions = [
        {
            "id": "sub_1",
            "status": "past_due",
            "customer": "cus_1",
            "current_period_end": ts(2026, 7, 20),
            "items": {"data": [{"price": {"unit_amount": 3000}, "quantity": 2}]},
        }
    ]

    items = await _aggregator(provider).compute_revenue_transactions("this")

    assert [t.date for t in items] == ["2026-07-03", "2026-07-09", "2026-07-20", "2026-07-28"]
    assert [t.amount for t in items] == [9.0, 15.0, 60.0, 7.0]
    assert [t.type for t in items] == ["invoice", "invoice", "subscription", "invoice"]
    assert items[1].customer_name == "—"
    assert all(t.amount > 0 for t in items)
    # mismo cliente en tres registros: una sola consulta
    assert len(provider.calls_to("customer")) == 1


@pytest.mark.anyio
async def test_paid_invoice_fallback_in_listing():
    provider = FakeStripeProvider()
    provider.invoices = [
        {
            "id": "in_1",
            "status": "paid",
            "amount_paid": 1200,
            "customer": {"id": "cus_1", "name": "Gamma"},
            "created": ts(2026, 6, 25),
            "status_transitions": {"paid_at": ts(2026, 6, 26)},
            "parent": {"subscription_details": {"subscription": "sub_1"}},
        }
    ]

    items = await _aggregator(provider).compute_revenue_transactions("last")

    assert [(t.customer_name, t.amount, t.type) for t in items] == [("Gamma", 12.0, "subscription")]


@pytest.mark.anyio
async def test_listing_uses_paid_invoices_when_balance_transactions_net_to_zero():
    provider = FakeStripeProvider()
    provider.balance_transactions = [
        {"id": "txn_1", "type": "charge", "amount": 500, "created": ts(2026, 6, 10), "source": None},
        {"id": "txn_2", "type": "charge", "amount": -500, "created": ts(2026, 6, 11), "source": None},
    ]
    provider.invoices = [
        {
            "id": "in_1",
            "status": "paid",
            "amount_paid": 1200,
            "customer": {"id": "cus_1", "name": "Gamma"},
            "created": ts(2026, 6, 20),
            "status_transitions": {"paid_at": ts(2026, 6, 21)},
        }
    ]
    aggregator = _aggregator(provider)

    items = await aggregator.compute_revenue_transactions("last")
    realized = await aggregator.realized_cents(aggregator.bounds("last"))

    assert [(t.customer_name, t.date, t.amount) for t in items] == [("Gamma", "2026-06-21", 12.0)]
    assert sum(t.amount for t in items) * 100 == realized


@pytest.mark.anyio
async def test_next_month_open_invoice_subscription_cycle():
    provider = FakeStripeProvider()
    provider.subscriptions = [
        {
            "id": "sub_1",
            "status": "active",
            "customer": {"id": "cus_1", "name": "Delta"},
            "current_period_start": ts(2026, 7, 1),
            "current_period_end": ts(2026, 7, 31),
            "items": {"data": [{"price": {"unit_amount": 8000}, "quantity": 1}]},
            "latest_invoice": {"id": "in_1", "status": "open", "amount_due": 8000, "due_date": ts(2026, 7, 31)},
        }
    ]

    this_items = await _aggregator(provider).compute_revenue_transactions("this")
    next_items = await _aggregator(provider).compute_revenue_transactions("next")

    assert [(t.date, t.amount) for t in this_items] == [("2026-07-31", 80.0)]
    assert [(t.date, t.amount) for t in next_items] == [("2026-08-30", 80.0)]


@pytest.mark.anyio
async def test_unconfigured_provider_returns_empty_list():
    provider = FakeStripeProvider(configured=False)

    assert await _aggregator(provider).compute_revenue_transactions("this") == []
    assert provider.calls == []
