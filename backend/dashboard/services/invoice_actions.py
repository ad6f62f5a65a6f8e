"""Invoice Actions — create, update and delete invoices from submitted forms.

Invariants:
    - Validation failures never touch the store; errors keyed by form field
    - Each action executes exactly one write statement
    - Amount persisted in cents: round(amount * 100)
    - date is captured (UTC, date only) on create and never rewritten
    - create/update: store failure -> ActionState message (form can re-render)
    - delete: store failure propagates; unknown id is a silent no-op
    - Success: invoice listing revalidated; create/update also redirect to it

Design Decisions:
    - Presenter injected per call: actions do not depend on a web framework
    - redirect() is the last statement: it unwinds the call (never returns)
    - Status defaults to "pending" on create only
"""

import logging
from datetime import date, datetime, timezone
from typing import Mapping

from sqlalchemy import delete, insert, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from dashboard.core.domain_types import (
    INVOICES_PATH, InvoiceStatus, parse_invoice_id,
)
from dashboard.core.errors import InvoiceValidationError
from dashboard.core.presentation_protocols import Presenter
from dashboard.models.invoice import Invoice
from dashboard.schemas.invoice import ActionState, parse_invoice_form

logger = logging.getLogger(__name__)


def _today() -> date:
    return datetime.now(timezone.utc).date()


async def create_invoice(
    db: AsyncSession,
    presenter: Presenter,
    prev_state: ActionState | None,
    form: Mapping[str, str],
) -> ActionState:
    """Validate form, insert one invoice, then revalidate and redirect."""
    parsed = parse_invoice_form(form, default_status=InvoiceStatus.PENDING.value)
    if not parsed.success:
        return ActionState(
            errors=parsed.errors,
            message="Missing Fields. Failed to Create Invoice.",
        )

    data = parsed.data
    try:
        await db.execute(
            insert(Invoice).values(
                customer_id=data.customer_id,
                amount=data.amount_in_cents,
                status=data.status.value,
                date=_today(),
            ),
        )
        await db.commit()
    except SQLAlchemyError as e:
        await db.rollback()
        logger.error(
            f"Database Error: {e}", extra={"operation": "create_invoice"},
        )
        return ActionState(message="Database Error: Failed to Create Invoice.")

    logger.info(
        f"Invoice created for customer {data.customer_id}",
        extra={"operation": "create_invoice"},
    )
    presenter.revalidate_path(INVOICES_PATH)
    presenter.redirect(INVOICES_PATH)


async def update_invoice(
    db: AsyncSession,
    presenter: Presenter,
    invoice_id: str,
    prev_state: ActionState | None,
    form: Mapping[str, str],
) -> ActionState:
    """Validate form, update one invoice by id, then revalidate and redirect."""
    parsed = parse_invoice_form(form)
    if not parsed.success:
        return ActionState(
            errors=parsed.errors,
            message="Missing Fields. Failed to Update Invoice.",
        )

    parsed_id = parse_invoice_id(invoice_id)
    if parsed_id is None:
        # A malformed id is rejected by the store's uuid type
        logger.error(
            "Database Error: malformed invoice id",
            extra={"operation": "update_invoice", "invoice_id": invoice_id},
        )
        return ActionState(message="Database Error: Failed to Update Invoice.")

    data = parsed.data
    try:
        await db.execute(
            update(Invoice)
            .where(Invoice.id == parsed_id)
            .values(
                customer_id=data.customer_id,
                amount=data.amount_in_cents,
                status=data.status.value,
            ),
        )
        await db.commit()
    except SQLAlchemyError as e:
        await db.rollback()
        logger.error(
            f"Database Error: {e}",
            extra={"operation": "update_invoice", "invoice_id": invoice_id},
        )
        return ActionState(message="Database Error: Failed to Update Invoice.")

    logger.info(
        "Invoice updated",
        extra={"operation": "update_invoice", "invoice_id": invoice_id},
    )
    presenter.revalidate_path(INVOICES_PATH)
    presenter.redirect(INVOICES_PATH)


async def delete_invoice(
    db: AsyncSession, presenter: Presenter, invoice_id: str,
) -> None:
    """Delete one invoice by id and revalidate the listing (no redirect)."""
    parsed_id = parse_invoice_id(invoice_id)
    if parsed_id is None:
        raise InvoiceValidationError("Invoice id is required", "id")

    await db.execute(delete(Invoice).where(Invoice.id == parsed_id))
    await db.commit()

    logger.info(
        "Invoice deleted",
        extra={"operation": "delete_invoice", "invoice_id": invoice_id},
    )
    presenter.revalidate_path(INVOICES_PATH)
