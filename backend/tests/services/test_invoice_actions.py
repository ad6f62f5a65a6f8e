"""Invoice actions — validation short-circuit, cents persistence, redirects.

Invariants:
    - Invalid forms return errors and write nothing
    - Persisted amount == round(amount * 100); lookup returns amount
    - create/update revalidate and redirect to /dashboard/invoices
    - delete revalidates only; unknown ids are a no-op
"""

import uuid
from datetime import datetime, timezone
from decimal import Decimal

import pytest
from sqlalchemy import func, select

from dashboard.core.errors import InvoiceValidationError
from dashboard.models.invoice import Invoice
from dashboard.services.invoice_actions import (
    create_invoice, delete_invoice, update_invoice,
)
from dashboard.services.query_invoices import fetch_invoice_by_id
from tests.services.fake_presenter import Redirected


async def _count_invoices(db) -> int:
    return (await db.execute(select(func.count()).select_from(Invoice))).scalar_one()


async def _only_invoice(db) -> Invoice:
    return (await db.execute(select(Invoice))).scalar_one()


@pytest.fixture
async def customer(make_customer):
    return await make_customer("Michael Novotny")


@pytest.mark.parametrize("amount, cents", [
    ("12.34", 1234), ("0.01", 1), ("157.95", 15795), ("1000", 100000),
])
async def test_create_persists_cents_and_round_trips(
    test_db, presenter, customer, amount, cents,
):
    form = {"customerId": str(customer.id), "amount": amount, "status": "paid"}

    with pytest.raises(Redirected):
        await create_invoice(test_db, presenter, None, form)

    invoice = await _only_invoice(test_db)
    assert invoice.amount == cents
    found = await fetch_invoice_by_id(test_db, str(invoice.id))
    assert found.amount == Decimal(amount)


async def test_create_revalidates_and_redirects_to_listing(test_db, presenter, customer):
    form = {"customerId": str(customer.id), "amount": "10", "status": "paid"}

    with pytest.raises(Redirected) as exc_info:
        await create_invoice(test_db, presenter, None, form)

    assert exc_info.value.path == "/dashboard/invoices"
    assert presenter.revalidated == ["/dashboard/invoices"]
    assert presenter.redirects == ["/dashboard/invoices"]


async def test_create_defaults_status_to_pending_and_dates_today(
    test_db, presenter, customer,
):
    form = {"customerId": str(customer.id), "amount": "10"}

    with pytest.raises(Redirected):
        await create_invoice(test_db, presenter, None, form)

    invoice = await _only_invoice(test_db)
    assert invoice.status == "pending"
    assert invoice.date == datetime.now(timezone.utc).date()


@pytest.mark.parametrize("amount", ["0", "-20", "0.001", "1e999999999"])
async def test_create_with_out_of_range_amount_writes_nothing(
    test_db, presenter, customer, amount,
):
    form = {"customerId": str(customer.id), "amount": amount, "status": "paid"}

    state = await create_invoice(test_db, presenter, None, form)

    assert "amount" in state.errors
    assert state.message == "Missing Fields. Failed to Create Invoice."
    assert await _count_invoices(test_db) == 0
    assert presenter.revalidated == []
    assert presenter.redirects == []


async def test_create_without_customer_names_customer_field(test_db, presenter):
    state = await create_invoice(
        test_db, presenter, None, {"amount": "10", "status": "paid"},
    )

    assert state.errors == {"customerId": ["Please select a customer."]}
    assert await _count_invoices(test_db) == 0


async def test_update_changes_editable_fields_only(
    test_db, presenter, customer, make_customer, make_invoice,
):
    invoice = await make_invoice(customer, 500, "pending", "2022-11-14")
    other = await make_customer("Amy Burns")
    form = {"customerId": str(other.id), "amount": "99.99", "status": "paid"}

    with pytest.raises(Redirected):
        await update_invoice(test_db, presenter, str(invoice.id), None, form)

    test_db.expire_all()
    updated = await _only_invoice(test_db)
    assert updated.customer_id == other.id
    assert updated.amount == 9999
    assert updated.status == "paid"
    assert updated.date.isoformat() == "2022-11-14"
    assert presenter.revalidated == ["/dashboard/invoices"]


async def test_update_requires_status(test_db, presenter, customer, make_invoice):
    invoice = await make_invoice(customer, 500)

    state = await update_invoice(
        test_db, presenter, str(invoice.id), None,
        {"customerId": str(customer.id), "amount": "5"},
    )

    assert state.errors == {"status": ["Please select an invoice status."]}
    assert state.message == "Missing Fields. Failed to Update Invoice."


async def test_update_with_overflowing_amount_returns_field_error(
    test_db, presenter, customer, make_invoice,
):
    invoice = await make_invoice(customer, 500)
    form = {"customerId": str(customer.id), "amount": "1e999999999", "status": "paid"}

    state = await update_invoice(test_db, presenter, str(invoice.id), None, form)

    assert list(state.errors) == ["amount"]
    assert state.message == "Missing Fields. Failed to Update Invoice."
    test_db.expire_all()
    assert (await _only_invoice(test_db)).amount == 500


async def test_update_with_malformed_id_reports_database_error(
    test_db, presenter, customer,
):
    form = {"customerId": str(customer.id), "amount": "5", "status": "paid"}

    state = await update_invoice(test_db, presenter, "not-a-uuid", None, form)

    assert state.message == "Database Error: Failed to Update Invoice."
    assert presenter.redirects == []


async def test_delete_removes_row_and_revalidates_without_redirect(
    test_db, presenter, customer, make_invoice,
):
    invoice = await make_invoice(customer, 500)

    await delete_invoice(test_db, presenter, str(invoice.id))

    assert await _count_invoices(test_db) == 0
    assert presenter.revalidated == ["/dashboard/invoices"]
    assert presenter.redirects == []


async def test_delete_unknown_id_is_a_no_op(test_db, presenter, customer, make_invoice):
    await make_invoice(customer, 500)

    await delete_invoice(test_db, presenter, str(uuid.uuid4()))

    assert await _count_invoices(test_db) == 1


async def test_delete_requires_id(test_db, presenter):
    with pytest.raises(InvoiceValidationError):
        await delete_invoice(test_db, presenter, "")
