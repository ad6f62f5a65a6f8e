"""Dashboard Schemas — revenue series, summary cards and the overview bundle.

Invariants:
    - CardData sums are integer cents; *_invoices fields are their display strings
    - DashboardOverview is assembled from three independent reads
"""

from pydantic import BaseModel

from dashboard.core.domain_types import Cents
from dashboard.schemas.invoice import LatestInvoice


class RevenuePoint(BaseModel):
    """Aggregate revenue for one calendar month."""
    month: str
    revenue: int


class CardData(BaseModel):
    """Summary figures read in a single statement (one consistent snapshot)."""
    number_of_invoices: int
    number_of_customers: int
    paid_cents: Cents
    pending_cents: Cents
    total_paid_invoices: str
    total_pending_invoices: str


class DashboardOverview(BaseModel):
    """Everything the dashboard landing page renders."""
    revenue: list[RevenuePoint]
    y_axis_labels: list[str]
    top_label: int
    latest_invoices: list[LatestInvoice]
    cards: CardData
