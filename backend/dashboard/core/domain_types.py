"""Domain Types — rich types that replace bare primitives across the codebase.

Invariants:
    - InvoiceId, CustomerId wrap UUIDs in schemas, services and actions
    - Cents is always an integer number of minor currency units that fits
      the 32-bit amount column (0 .. MAX_INVOICE_CENTS)
    - All valid invoice states encoded as an Enum — no raw string matching

Design Decisions:
    - NewType over dataclass wrappers: zero runtime cost, full type-checker support
    - str Enum: serializes to JSON and binds to SQL without custom encoders
"""

from enum import Enum
from typing import NewType
from uuid import UUID


# ─── Identity Types ──────────────────────────────────────────────

InvoiceId = NewType("InvoiceId", UUID)
CustomerId = NewType("CustomerId", UUID)


# ─── Value Types ─────────────────────────────────────────────────

Cents = NewType("Cents", int)

MAX_INVOICE_CENTS = Cents(2**31 - 1)


# ─── Constants ───────────────────────────────────────────────────

ITEMS_PER_PAGE = 6
LATEST_INVOICES_LIMIT = 5
INVOICES_PATH = "/dashboard/invoices"

MONTHS = (
    "Jan", "Feb", "Mar", "Apr", "May", "Jun",
    "Jul", "Aug", "Sep", "Oct", "Nov", "Dec",
)


# ─── Enums ───────────────────────────────────────────────────────

class InvoiceStatus(str, Enum):
    """Invoice payment states — maps to DB `status` column."""
    PENDING = "pending"
    PAID = "paid"


def parse_uuid(raw: str | UUID | None) -> UUID | None:
    """Parse an opaque identifier; None when it is not a valid UUID."""
    if isinstance(raw, UUID):
        return raw
    if not raw:
        return None
    try:
        return UUID(str(raw).strip())
    except ValueError:
        return None


def parse_invoice_id(raw: str | UUID | None) -> InvoiceId | None:
    parsed = parse_uuid(raw)
    return InvoiceId(parsed) if parsed is not None else None
