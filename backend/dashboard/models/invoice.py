"""Invoice ORM — a billed amount owed by one customer.

Invariants:
    - amount is stored in cents (integer), never negative when persisted
    - status is one of InvoiceStatus values ("pending" | "paid")
    - date is a calendar date with no time component, set once on creation

Design Decisions:
    - Integer cents over Numeric: display amount is derived by dividing by 100
    - status as String(20) over a DB enum: keeps SQLite test schema identical
"""

import uuid
import datetime

from sqlalchemy import CheckConstraint, Date, ForeignKey, Integer, String
from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy.dialects.postgresql import UUID

from dashboard.db.base import Base


class Invoice(Base):
    """Invoice entity — amount in cents, status and issue date."""
    __tablename__ = "invoices"
    __table_args__ = (
        CheckConstraint("amount >= 0", name="ck_invoices_amount_non_negative"),
    )

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), primary_key=True, default=uuid.uuid4,
    )
    customer_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), ForeignKey("customers.id"), nullable=False,
    )
    amount: Mapped[int] = mapped_column(Integer, nullable=False)
    status: Mapped[str] = mapped_column(String(20), nullable=False)
    date: Mapped[datetime.date] = mapped_column(Date, nullable=False)

    customer: Mapped["Customer"] = relationship(
        "Customer", back_populates="invoices", lazy="raise",
    )
