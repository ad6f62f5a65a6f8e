"""ORM Models — SQLAlchemy declarative models for customers, invoices and revenue.

Invariants:
    - All models inherit from Base (db/base.py)
    - Customer is the owner of invoices; revenue is standalone reference data

Design Decisions:
    - One file per entity for locality
    - All models imported here so SQLAlchemy resolves string-based relationship()
      references before any query runs
"""

from dashboard.models.customer import Customer  # noqa: F401
from dashboard.models.invoice import Invoice  # noqa: F401
from dashboard.models.revenue import Revenue  # noqa: F401
