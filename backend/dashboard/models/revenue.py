"""Revenue ORM — monthly revenue totals for the dashboard chart (read-only)."""

from sqlalchemy import Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from dashboard.db.base import Base


class Revenue(Base):
    """One calendar month of aggregate revenue."""
    __tablename__ = "revenue"

    month: Mapped[str] = mapped_column(String(4), primary_key=True)
    revenue: Mapped[int] = mapped_column(Integer, nullable=False)
