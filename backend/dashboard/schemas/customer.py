"""Customer Schemas — read models for customer selectors and the customer table."""

from pydantic import BaseModel

from dashboard.core.domain_types import CustomerId


class CustomerField(BaseModel):
    """Customer option for select inputs."""
    id: CustomerId
    name: str


class FormattedCustomersTable(BaseModel):
    """Customer row with invoice aggregates; sums formatted as currency."""
    id: CustomerId
    name: str
    email: str
    image_url: str
    total_invoices: int
    total_pending: str
    total_paid: str
