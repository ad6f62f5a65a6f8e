"""Query Helpers — single-statement execution with uniform read-failure mapping.

Invariants:
    - Any SQLAlchemyError is logged and re-raised as DataFetchError
    - The returned Result is fully buffered (AsyncSession.execute)
    - gather_reads never shares one AsyncSession between concurrent reads
    - gather_reads cancels and awaits the sibling reads when one read fails
"""

import asyncio
import logging
from typing import Any, Awaitable, Callable

from sqlalchemy import ColumnElement, Executable, Result, String, cast, or_
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from dashboard.core.errors import DataFetchError
from dashboard.infrastructure.database import DatabaseSessionManager
from dashboard.models.customer import Customer
from dashboard.models.invoice import Invoice

logger = logging.getLogger(__name__)


async def run_query(
    db: AsyncSession, stmt: Executable, *, operation: str, failure: str,
) -> Result:
    """Execute one read statement; store failures become DataFetchError."""
    try:
        return await db.execute(stmt)
    except SQLAlchemyError as e:
        logger.error(
            f"Database Error: {e}", extra={"operation": operation},
        )
        raise DataFetchError(failure, operation) from e


def invoice_search_filter(query: str) -> ColumnElement[bool]:
    """Case-insensitive substring match over customer and invoice columns."""
    pattern = f"%{query}%"
    return or_(
        Customer.name.ilike(pattern),
        Customer.email.ilike(pattern),
        cast(Invoice.amount, String).ilike(pattern),
        cast(Invoice.date, String).ilike(pattern),
        Invoice.status.ilike(pattern),
    )


def customer_search_filter(query: str) -> ColumnElement[bool]:
    pattern = f"%{query}%"
    return or_(
        Customer.name.ilike(pattern),
        Customer.email.ilike(pattern),
    )


async def gather_reads(
    sessions: DatabaseSessionManager,
    *reads: Callable[[AsyncSession], Awaitable[Any]],
) -> list[Any]:
    """Run independent reads concurrently, each on its own session."""

    async def _read(fetch):
        async with sessions.session() as db:
            return await fetch(db)

    tasks = [asyncio.ensure_future(_read(fetch)) for fetch in reads]
    try:
        return await asyncio.gather(*tasks)
    except BaseException:
        for task in tasks:
            task.cancel()
        await asyncio.gather(*tasks, return_exceptions=True)
        raise
