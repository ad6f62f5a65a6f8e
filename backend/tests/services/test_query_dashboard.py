"""Dashboard queries — revenue order, latest invoices per customer, card totals.

Invariants:
    - fetch_latest_invoices never repeats a customer and returns at most 5 rows
    - Equal dates within one customer resolve to the higher invoice id
    - fetch_card_data figures match the fixture exactly, zero when empty
    - fetch_card_data is one snapshot even while invoices are being created
"""

import uuid

import pytest

from dashboard.services.invoice_actions import create_invoice
from dashboard.services.query_dashboard import (
    fetch_card_data, fetch_dashboard_overview, fetch_latest_invoices, fetch_revenue,
)
from dashboard.services.query_helpers import gather_reads
from tests.services.fake_presenter import Redirected, RecordingPresenter


async def test_fetch_revenue_orders_by_calendar_month(test_db, make_revenue):
    await make_revenue([("Mar", 2200), ("Jan", 2000), ("Dec", 4800), ("Feb", 1800)])

    revenue = await fetch_revenue(test_db)

    assert [p.month for p in revenue] == ["Jan", "Feb", "Mar", "Dec"]
    assert revenue[0].revenue == 2000


async def test_fetch_revenue_empty_table(test_db):
    assert await fetch_revenue(test_db) == []


async def test_latest_invoices_one_row_per_customer(test_db, make_customer, make_invoice):
    busy = await make_customer("Michael Novotny")
    for day in ("2023-09-01", "2023-09-02", "2023-09-03", "2023-09-04"):
        await make_invoice(busy, 1000, issued=day)
    others = [await make_customer(f"Customer {i}") for i in range(3)]
    for i, customer in enumerate(others):
        await make_invoice(customer, 2000 + i, issued=f"2023-08-0{i + 1}")

    latest = await fetch_latest_invoices(test_db)

    names = [row.name for row in latest]
    assert len(names) == len(set(names)) == 4
    assert names[0] == "Michael Novotny"
    assert latest[0].date.isoformat() == "2023-09-04"


async def test_latest_invoices_limited_to_five_newest(test_db, make_customer, make_invoice):
    for i in range(7):
        customer = await make_customer(f"Customer {i}")
        await make_invoice(customer, 100 * (i + 1), issued=f"2023-01-1{i}")

    latest = await fetch_latest_invoices(test_db)

    assert [row.name for row in latest] == [f"Customer {i}" for i in (6, 5, 4, 3, 2)]


async def test_latest_invoices_format_amount(test_db, make_customer, make_invoice):
    customer = await make_customer("Amy Burns")
    await make_invoice(customer, 123456)

    latest = await fetch_latest_invoices(test_db)

    assert latest[0].amount == "$1,234.56"
    assert latest[0].email == "amy.burns@example.com"


async def test_latest_invoices_same_date_tie_breaks_on_highest_id(
    test_db, make_customer, make_invoice,
):
    customer = await make_customer("Lee Robinson")
    low = uuid.UUID("00000000-0000-4000-8000-000000000001")
    high = uuid.UUID("ffffffff-0000-4000-8000-000000000001")
    await make_invoice(customer, 111, issued="2023-05-05", invoice_id=low)
    await make_invoice(customer, 222, issued="2023-05-05", invoice_id=high)

    latest = await fetch_latest_invoices(test_db)

    assert len(latest) == 1
    assert latest[0].id == high


async def test_card_data_matches_fixture(test_db, make_customer, make_invoice):
    customers = [await make_customer(f"Customer {i}") for i in range(4)]
    for i in range(10):
        await make_invoice(customers[i % 4], 500, status="paid")
    for i in range(3):
        await make_invoice(customers[i], 300, status="pending")

    cards = await fetch_card_data(test_db)

    assert cards.number_of_invoices == 13
    assert cards.number_of_customers == 4
    assert cards.paid_cents == 5000
    assert cards.pending_cents == 900
    assert cards.total_paid_invoices == "$50.00"
    assert cards.total_pending_invoices == "$9.00"


async def test_card_data_empty_store_reports_zero(test_db, make_customer):
    await make_customer("Evil Rabbit")

    cards = await fetch_card_data(test_db)

    assert cards.number_of_invoices == 0
    assert cards.number_of_customers == 1
    assert cards.paid_cents == 0
    assert cards.pending_cents == 0
    assert cards.total_pending_invoices == "$0.00"


async def test_card_data_consistent_during_concurrent_creates(
    sessions, make_customer, make_invoice,
):
    customer = await make_customer("Delba de Oliveira")
    for _ in range(2):
        await make_invoice(customer, 500, status="paid")
    form = {"customerId": str(customer.id), "amount": "5.00", "status": "paid"}

    async def create(db):
        with pytest.raises(Redirected):
            await create_invoice(db, RecordingPresenter(), None, form)

    interleaved = [fetch_card_data, create] * 6
    results = await gather_reads(sessions, *interleaved)

    cards = results[::2]
    for card in cards:
        assert card.pending_cents == 0
        assert card.paid_cents == 500 * card.number_of_invoices
        assert 2 <= card.number_of_invoices <= 8
    [final] = await gather_reads(sessions, fetch_card_data)
    assert final.number_of_invoices == 8
    assert final.paid_cents == 4000


async def test_dashboard_overview_combines_three_reads(
    sessions, make_customer, make_invoice, make_revenue,
):
    await make_revenue([("Jan", 2000), ("Feb", 4800)])
    customer = await make_customer("Balazs Orban")
    await make_invoice(customer, 8945, status="paid")

    overview = await fetch_dashboard_overview(sessions)

    assert [p.month for p in overview.revenue] == ["Jan", "Feb"]
    assert overview.top_label == 5000
    assert overview.y_axis_labels[0] == "$5K"
    assert overview.latest_invoices[0].name == "Balazs Orban"
    assert overview.cards.paid_cents == 8945
