"""Customer ORM — read-only reference entity that owns invoices.

Invariants:
    - id is UUID primary key
    - name, email, image_url are non-nullable
    - No create/update/delete path exists for customers in this layer

Design Decisions:
    - lazy="raise" on invoices: every read goes through an explicit query in services/
"""

import uuid

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy.dialects.postgresql import UUID

from dashboard.db.base import Base


class Customer(Base):
    """Customer entity — display name, contact email and avatar."""
    __tablename__ = "customers"

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), primary_key=True, default=uuid.uuid4,
    )
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    email: Mapped[str] = mapped_column(String(255), nullable=False)
    image_url: Mapped[str] = mapped_column(String(255), nullable=False)

    invoices: Mapped[list["Invoice"]] = relationship(
        "Invoice", back_populates="customer", lazy="raise",
    )
