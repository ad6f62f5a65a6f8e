"""Dashboard Queries — revenue series, latest invoices, summary cards, overview.

Invariants:
    - fetch_latest_invoices returns at most one row per customer, at most 5 rows
    - fetch_card_data reads all four figures in ONE statement (single snapshot)
    - Null sums are reported as 0
    - fetch_dashboard_overview runs its three reads concurrently, one session each

Design Decisions:
    - Latest invoices ranked with ROW_NUMBER() per customer: a plain
      "ORDER BY date DESC LIMIT 5" lets one busy customer fill every slot
    - Tie-break for equal dates is explicit: date DESC, then invoice id DESC,
      both inside each customer and for the final ordering
    - Revenue ordered by calendar month via CASE: month labels do not sort alphabetically
    - Scalar count subqueries use correlate(None): they must count whole tables,
      not correlate to the outer FROM invoices
"""

import logging

from sqlalchemy import case, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from dashboard.core.domain_types import (
    LATEST_INVOICES_LIMIT, MONTHS, Cents, InvoiceStatus,
)
from dashboard.core.formatting import format_currency, generate_y_axis
from dashboard.infrastructure.database import DatabaseSessionManager
from dashboard.models.customer import Customer
from dashboard.models.invoice import Invoice
from dashboard.models.revenue import Revenue
from dashboard.schemas.dashboard import CardData, DashboardOverview, RevenuePoint
from dashboard.schemas.invoice import LatestInvoice
from dashboard.services.query_helpers import gather_reads, run_query

logger = logging.getLogger(__name__)


async def fetch_revenue(db: AsyncSession) -> list[RevenuePoint]:
    """All monthly revenue points, January first."""
    month_order = case(
        {month: index for index, month in enumerate(MONTHS)},
        value=Revenue.month,
        else_=len(MONTHS),
    )
    result = await run_query(
        db,
        select(Revenue.month, Revenue.revenue).order_by(month_order, Revenue.month),
        operation="fetch_revenue",
        failure="Failed to fetch revenue data.",
    )
    return [RevenuePoint(**row) for row in result.mappings().all()]


async def fetch_latest_invoices(db: AsyncSession) -> list[LatestInvoice]:
    """Each customer's most recent invoice, newest first, up to 5 customers."""
    ranked = (
        select(
            Invoice.amount,
            Customer.name,
            Customer.image_url,
            Customer.email,
            Invoice.id,
            Invoice.date,
            func.row_number().over(
                partition_by=Customer.id,
                order_by=(Invoice.date.desc(), Invoice.id.desc()),
            ).label("rn"),
        )
        .join(Customer, Invoice.customer_id == Customer.id)
        .cte("ranked_invoices")
    )
    stmt = (
        select(
            ranked.c.amount, ranked.c.name, ranked.c.image_url,
            ranked.c.email, ranked.c.id, ranked.c.date,
        )
        .where(ranked.c.rn == 1)
        .order_by(ranked.c.date.desc(), ranked.c.id.desc())
        .limit(LATEST_INVOICES_LIMIT)
    )
    result = await run_query(
        db, stmt,
        operation="fetch_latest_invoices",
        failure="Failed to fetch the latest invoices.",
    )
    rows = result.mappings().all()
    logger.debug(f"Latest invoices (distinct customers): {len(rows)}")
    return [
        LatestInvoice(**{**row, "amount": format_currency(row["amount"])})
        for row in rows
    ]


async def fetch_card_data(db: AsyncSession) -> CardData:
    """Invoice/customer counts and paid/pending totals from one statement."""
    invoice_count = (
        select(func.count()).select_from(Invoice).correlate(None).scalar_subquery()
    )
    customer_count = (
        select(func.count()).select_from(Customer).correlate(None).scalar_subquery()
    )
    stmt = select(
        invoice_count.label("invoice_count"),
        customer_count.label("customer_count"),
        func.sum(case(
            (Invoice.status == InvoiceStatus.PAID.value, Invoice.amount), else_=0,
        )).label("paid_total"),
        func.sum(case(
            (Invoice.status == InvoiceStatus.PENDING.value, Invoice.amount), else_=0,
        )).label("pending_total"),
    ).select_from(Invoice)
    result = await run_query(
        db, stmt,
        operation="fetch_card_data",
        failure="Failed to fetch card data.",
    )
    row = result.mappings().one()
    paid = Cents(int(row["paid_total"] or 0))
    pending = Cents(int(row["pending_total"] or 0))
    return CardData(
        number_of_invoices=int(row["invoice_count"] or 0),
        number_of_customers=int(row["customer_count"] or 0),
        paid_cents=paid,
        pending_cents=pending,
        total_paid_invoices=format_currency(paid),
        total_pending_invoices=format_currency(pending),
    )


async def fetch_dashboard_overview(
    sessions: DatabaseSessionManager,
) -> DashboardOverview:
    """Revenue, latest invoices and cards fetched concurrently."""
    revenue, latest_invoices, cards = await gather_reads(
        sessions, fetch_revenue, fetch_latest_invoices, fetch_card_data,
    )
    y_axis_labels, top_label = generate_y_axis(p.revenue for p in revenue)
    return DashboardOverview(
        revenue=revenue,
        y_axis_labels=y_axis_labels,
        top_label=top_label,
        latest_invoices=latest_invoices,
        cards=cards,
    )
