"""Customer Queries — selector options and the filtered customer table.

Invariants:
    - Both results ordered by customer name ascending
    - Customers without invoices appear with zero counts and "$0.00" sums (LEFT JOIN)
"""

from sqlalchemy import case, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from dashboard.core.domain_types import InvoiceStatus
from dashboard.core.formatting import format_currency
from dashboard.models.customer import Customer
from dashboard.models.invoice import Invoice
from dashboard.schemas.customer import CustomerField, FormattedCustomersTable
from dashboard.services.query_helpers import customer_search_filter, run_query


async def fetch_customers(db: AsyncSession) -> list[CustomerField]:
    """All customers (id, name) for select inputs."""
    result = await run_query(
        db,
        select(Customer.id, Customer.name).order_by(Customer.name.asc()),
        operation="fetch_customers",
        failure="Failed to fetch all customers.",
    )
    return [CustomerField(**row) for row in result.mappings().all()]


async def fetch_filtered_customers(
    db: AsyncSession, query: str,
) -> list[FormattedCustomersTable]:
    """Customers matching name/email with invoice count and paid/pending sums."""
    stmt = (
        select(
            Customer.id,
            Customer.name,
            Customer.email,
            Customer.image_url,
            func.count(Invoice.id).label("total_invoices"),
            func.sum(case(
                (Invoice.status == InvoiceStatus.PENDING.value, Invoice.amount),
                else_=0,
            )).label("total_pending"),
            func.sum(case(
                (Invoice.status == InvoiceStatus.PAID.value, Invoice.amount),
                else_=0,
            )).label("total_paid"),
        )
        .outerjoin(Invoice, Customer.id == Invoice.customer_id)
        .where(customer_search_filter(query))
        .group_by(Customer.id, Customer.name, Customer.email, Customer.image_url)
        .order_by(Customer.name.asc())
    )
    result = await run_query(
        db, stmt,
        operation="fetch_filtered_customers",
        failure="Failed to fetch customer table.",
    )
    return [
        FormattedCustomersTable(
            **{
                **row,
                "total_pending": format_currency(row["total_pending"]),
                "total_paid": format_currency(row["total_paid"]),
            }
        )
        for row in result.mappings().all()
    ]
