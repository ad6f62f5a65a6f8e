"""Invoice Queries — filtered/paginated invoice table, page count, single lookup.

Invariants:
    - Pages are fixed at ITEMS_PER_PAGE (6) rows; offset = (page - 1) * 6
    - fetch_filtered_invoices and fetch_invoices_pages share one filter predicate
    - fetch_invoice_by_id returns None for unknown or malformed ids (not an error)
    - Amount leaves fetch_invoice_by_id in major units (cents / 100)
"""

import logging
import math
from decimal import Decimal

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from dashboard.core.domain_types import ITEMS_PER_PAGE, parse_invoice_id
from dashboard.core.errors import InvoiceValidationError
from dashboard.models.customer import Customer
from dashboard.models.invoice import Invoice
from dashboard.schemas.invoice import InvoiceForm, InvoiceTableRow
from dashboard.services.query_helpers import invoice_search_filter, run_query

logger = logging.getLogger(__name__)


async def fetch_filtered_invoices(
    db: AsyncSession, query: str, current_page: int,
) -> list[InvoiceTableRow]:
    """One page of invoices matching query, newest first."""
    if current_page < 1:
        raise InvoiceValidationError(
            f"Page must be >= 1, got {current_page}", "page",
        )
    offset = (current_page - 1) * ITEMS_PER_PAGE

    stmt = (
        select(
            Invoice.id,
            Invoice.customer_id,
            Invoice.amount,
            Invoice.date,
            Invoice.status,
            Customer.name,
            Customer.email,
            Customer.image_url,
        )
        .join(Customer, Invoice.customer_id == Customer.id)
        .where(invoice_search_filter(query))
        .order_by(Invoice.date.desc(), Invoice.id.desc())
        .limit(ITEMS_PER_PAGE)
        .offset(offset)
    )
    result = await run_query(
        db, stmt,
        operation="fetch_filtered_invoices",
        failure="Failed to fetch invoices.",
    )
    return [InvoiceTableRow(**row) for row in result.mappings().all()]


async def fetch_invoices_pages(db: AsyncSession, query: str) -> int:
    """Number of pages needed to show every invoice matching query."""
    stmt = (
        select(func.count())
        .select_from(Invoice)
        .join(Customer, Invoice.customer_id == Customer.id)
        .where(invoice_search_filter(query))
    )
    result = await run_query(
        db, stmt,
        operation="fetch_invoices_pages",
        failure="Failed to fetch total number of invoices.",
    )
    return math.ceil(result.scalar_one() / ITEMS_PER_PAGE)


async def fetch_invoice_by_id(
    db: AsyncSession, invoice_id: str,
) -> InvoiceForm | None:
    """Invoice for the edit form, or None when it does not exist."""
    parsed_id = parse_invoice_id(invoice_id)
    if parsed_id is None:
        logger.info(
            "Malformed invoice id treated as not found",
            extra={"invoice_id": invoice_id},
        )
        return None

    stmt = select(
        Invoice.id, Invoice.customer_id, Invoice.amount, Invoice.status,
    ).where(Invoice.id == parsed_id)
    result = await run_query(
        db, stmt,
        operation="fetch_invoice_by_id",
        failure="Failed to fetch invoice.",
    )
    row = result.mappings().first()
    if row is None:
        return None
    # Convert amount from cents to dollars
    return InvoiceForm(**{**row, "amount": Decimal(row["amount"]) / 100})
