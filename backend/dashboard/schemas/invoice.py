"""Invoice Schemas — form validation for invoice actions and invoice read models.

Invariants:
    - parse_invoice_form never raises: it returns a tagged success/failure result
    - Field errors are keyed by form field name (customerId, amount, status)
    - A valid form always has 1 <= amount_in_cents <= MAX_INVOICE_CENTS and a
      status in InvoiceStatus
    - to_cents(amount) == round(amount * 100), half-up

Design Decisions:
    - Decimal amount over float: cents conversion is exact for typed input
    - PydanticCustomError for messages: user-facing text without the
      "Value error, " prefix Pydantic adds to plain ValueError
    - Status default applied only on create: update forms always submit it
    - The positive-amount rule is checked on the rounded cents: "0.001" is $0
    - InvoiceForm.amount serializes to a JSON number for the edit form
"""

from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal, InvalidOperation, ROUND_HALF_UP
from typing import Annotated, Mapping

from pydantic import (
    BaseModel, ConfigDict, Field, PlainSerializer, ValidationError, field_validator,
)
from pydantic_core import PydanticCustomError

from dashboard.core.domain_types import (
    MAX_INVOICE_CENTS, Cents, CustomerId, InvoiceId, InvoiceStatus, parse_uuid,
)

CUSTOMER_REQUIRED = "Please select a customer."
AMOUNT_NOT_POSITIVE = "Please enter an amount greater than $0."
STATUS_REQUIRED = "Please select an invoice status."
AMOUNT_TOO_LARGE = "Please enter an amount no greater than $21,474,836.47."

MAX_AMOUNT = Decimal(MAX_INVOICE_CENTS) / 100


class InvoiceFormInput(BaseModel):
    """Validated invoice form — the only shape actions write to the store."""
    model_config = ConfigDict(populate_by_name=True, frozen=True)

    customer_id: CustomerId = Field(alias="customerId")
    amount: Decimal
    status: InvoiceStatus

    @field_validator("customer_id", mode="before")
    @classmethod
    def require_customer(cls, v):
        customer_id = parse_uuid(v)
        if customer_id is None:
            raise PydanticCustomError("customer_required", CUSTOMER_REQUIRED)
        return CustomerId(customer_id)

    @field_validator("amount", mode="before")
    @classmethod
    def coerce_positive_amount(cls, v):
        try:
            amount = Decimal(str(v).strip()) if v not in (None, "") else Decimal(0)
        except InvalidOperation:
            raise PydanticCustomError("amount_not_positive", AMOUNT_NOT_POSITIVE)
        if not amount.is_finite() or amount <= 0:
            raise PydanticCustomError("amount_not_positive", AMOUNT_NOT_POSITIVE)
        # Bound before scaling: amount * 100 overflows the decimal context
        if amount > MAX_AMOUNT:
            raise PydanticCustomError("amount_too_large", AMOUNT_TOO_LARGE)
        if to_cents(amount) < 1:
            raise PydanticCustomError("amount_not_positive", AMOUNT_NOT_POSITIVE)
        return amount

    @field_validator("status", mode="before")
    @classmethod
    def require_status(cls, v):
        try:
            return InvoiceStatus(v)
        except ValueError:
            raise PydanticCustomError("status_required", STATUS_REQUIRED)

    @property
    def amount_in_cents(self) -> Cents:
        return to_cents(self.amount)


@dataclass(frozen=True)
class ParsedInvoiceForm:
    """Tagged validation result: data on success, field errors on failure."""
    success: bool
    data: InvoiceFormInput | None = None
    errors: dict[str, list[str]] = field(default_factory=dict)


def to_cents(amount: Decimal) -> Cents:
    """Convert a major-unit amount to integer cents (half-up)."""
    return Cents(int((amount * 100).to_integral_value(rounding=ROUND_HALF_UP)))


def parse_invoice_form(
    form: Mapping[str, str | None], default_status: str | None = None,
) -> ParsedInvoiceForm:
    """Validate a raw form map into InvoiceFormInput. Never raises."""
    raw = {
        "customerId": form.get("customerId"),
        "amount": form.get("amount"),
        "status": form.get("status") or default_status,
    }
    try:
        return ParsedInvoiceForm(success=True, data=InvoiceFormInput(**raw))
    except ValidationError as e:
        return ParsedInvoiceForm(success=False, errors=_field_errors(e))


def _field_errors(exc: ValidationError) -> dict[str, list[str]]:
    """Group Pydantic errors by form field name."""
    errors: dict[str, list[str]] = {}
    for err in exc.errors():
        name = str(err["loc"][0]) if err["loc"] else "form"
        errors.setdefault(name, []).append(err["msg"])
    return errors


# --- Read models --------------------------------------------------------------

class LatestInvoice(BaseModel):
    """Row of the latest-invoices panel; amount already formatted."""
    id: InvoiceId
    name: str
    image_url: str
    email: str
    amount: str
    date: date


class InvoiceTableRow(BaseModel):
    """Row of the paginated invoice table (amount in cents)."""
    id: InvoiceId
    customer_id: CustomerId
    name: str
    email: str
    image_url: str
    date: date
    amount: Cents
    status: InvoiceStatus


class InvoiceForm(BaseModel):
    """Invoice prepared for the edit form; amount in major units."""
    id: InvoiceId
    customer_id: CustomerId
    amount: Annotated[Decimal, PlainSerializer(float, return_type=float, when_used="json")]
    status: InvoiceStatus


class ActionState(BaseModel):
    """Result of an invoice action that did not redirect."""
    errors: dict[str, list[str]] | None = None
    message: str | None = None
