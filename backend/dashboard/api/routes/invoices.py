"""Invoice Routes — searchable table, edit-form lookup and form actions.

Invariants:
    - POST bodies are HTML form fields (customerId, amount, status)
    - Successful create/update answer 303 to /dashboard/invoices
    - Failed validation or store write answers 422 with the ActionState
    - DELETE answers 204 and never redirects

Design Decisions:
    - Table and page count read concurrently on separate sessions
"""

from functools import partial

from fastapi import APIRouter, Depends, Query, Request, Response, status
from fastapi.responses import JSONResponse
from sqlalchemy.ext.asyncio import AsyncSession

from dashboard.api.presentation import HttpPresenter
from dashboard.core.errors import ResourceNotFoundError
from dashboard.core.formatting import generate_pagination
from dashboard.infrastructure.database import (
    DatabaseSessionManager, get_db, get_db_manager,
)
from dashboard.schemas.invoice import ActionState, InvoiceForm
from dashboard.services.invoice_actions import (
    create_invoice, delete_invoice, update_invoice,
)
from dashboard.services.query_helpers import gather_reads
from dashboard.services.query_invoices import (
    fetch_filtered_invoices, fetch_invoice_by_id, fetch_invoices_pages,
)

router = APIRouter(prefix="/api/v1/invoices", tags=["invoices"])


@router.get("")
async def list_invoices(
    query: str = Query(""),
    page: int = Query(1),
    sessions: DatabaseSessionManager = Depends(get_db_manager),
):
    """One page of the invoice table plus pagination controls."""
    invoices, total_pages = await gather_reads(
        sessions,
        partial(fetch_filtered_invoices, query=query, current_page=page),
        partial(fetch_invoices_pages, query=query),
    )
    return {
        "invoices": [i.model_dump(mode="json") for i in invoices],
        "total_pages": total_pages,
        "pagination": generate_pagination(page, total_pages),
    }


@router.get("/{invoice_id}", response_model=InvoiceForm)
async def get_invoice(invoice_id: str, db: AsyncSession = Depends(get_db)):
    invoice = await fetch_invoice_by_id(db, invoice_id)
    if invoice is None:
        raise ResourceNotFoundError("Invoice", invoice_id)
    return invoice


@router.post("")
async def submit_create_invoice(
    request: Request, db: AsyncSession = Depends(get_db),
):
    form = await request.form()
    state = await create_invoice(db, HttpPresenter(), None, form)
    return _action_failed(state)


@router.post("/{invoice_id}")
async def submit_update_invoice(
    invoice_id: str, request: Request, db: AsyncSession = Depends(get_db),
):
    form = await request.form()
    state = await update_invoice(db, HttpPresenter(), invoice_id, None, form)
    return _action_failed(state)


@router.delete("/{invoice_id}", status_code=status.HTTP_204_NO_CONTENT)
async def submit_delete_invoice(
    invoice_id: str, db: AsyncSession = Depends(get_db),
):
    presenter = HttpPresenter()
    await delete_invoice(db, presenter, invoice_id)
    return Response(
        status_code=status.HTTP_204_NO_CONTENT, headers=presenter.headers(),
    )


def _action_failed(state: ActionState) -> JSONResponse:
    """Action returned instead of redirecting: hand the state back to the form."""
    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content=state.model_dump(),
    )
