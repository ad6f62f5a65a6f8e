"""Placeholder Data — creates the three tables and loads demo rows.

Invariants:
    - Safe to re-run: rows whose primary key already exists are skipped
    - Amounts are in cents; dates are ISO calendar dates

Design Decisions:
    - metadata.create_all only creates missing tables: this is a dev helper,
      not schema migration

Usage:
    python -m dashboard.db.seed
"""

import asyncio
import logging
import uuid
from datetime import date

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from dashboard.config import get_settings
from dashboard.infrastructure.database import DatabaseSessionManager
from dashboard.infrastructure.observability import setup_logging
from dashboard.models.customer import Customer
from dashboard.models.invoice import Invoice
from dashboard.models.revenue import Revenue

logger = logging.getLogger(__name__)

CUSTOMERS = [
    {
        "id": uuid.UUID("d6e15727-9fe1-4961-8c5b-ea44a9bd81aa"),
        "name": "Evil Rabbit",
        "email": "evil@rabbit.com",
        "image_url": "/customers/evil-rabbit.png",
    },
    {
        "id": uuid.UUID("3958dc9e-712f-4377-85e9-fec4b6a6442a"),
        "name": "Delba de Oliveira",
        "email": "delba@oliveira.com",
        "image_url": "/customers/delba-de-oliveira.png",
    },
    {
        "id": uuid.UUID("3958dc9e-742f-4377-85e9-fec4b6a6442a"),
        "name": "Lee Robinson",
        "email": "lee@robinson.com",
        "image_url": "/customers/lee-robinson.png",
    },
    {
        "id": uuid.UUID("76d65c26-f784-44a2-ac19-586678f7c2f2"),
        "name": "Michael Novotny",
        "email": "michael@novotny.com",
        "image_url": "/customers/michael-novotny.png",
    },
    {
        "id": uuid.UUID("cc27c14a-0acf-4f4a-a6c9-d45682c144b9"),
        "name": "Amy Burns",
        "email": "amy@burns.com",
        "image_url": "/customers/amy-burns.png",
    },
    {
        "id": uuid.UUID("13d07535-c59e-4157-a011-f8d2ef4e0cbb"),
        "name": "Balazs Orban",
        "email": "balazs@orban.com",
        "image_url": "/customers/balazs-orban.png",
    },
]

# (customer index, amount in cents, status, date)
INVOICES = [
    (0, 15795, "pending", "2022-12-06"),
    (1, 20348, "pending", "2022-11-14"),
    (4, 3040, "paid", "2022-10-29"),
    (3, 44800, "paid", "2023-09-10"),
    (5, 34577, "pending", "2023-08-05"),
    (2, 54246, "pending", "2023-07-16"),
    (0, 666, "pending", "2023-06-27"),
    (3, 32545, "paid", "2023-06-09"),
    (4, 1250, "paid", "2023-06-17"),
    (5, 8546, "paid", "2023-06-07"),
    (1, 500, "paid", "2023-08-19"),
    (5, 8945, "paid", "2023-06-03"),
    (2, 1000, "paid", "2022-06-05"),
]

REVENUE = [
    ("Jan", 2000), ("Feb", 1800), ("Mar", 2200), ("Apr", 2500),
    ("May", 2300), ("Jun", 3200), ("Jul", 3500), ("Aug", 3700),
    ("Sep", 2500), ("Oct", 2800), ("Nov", 3000), ("Dec", 4800),
]


async def seed_customers(db: AsyncSession) -> int:
    existing = set((await db.execute(select(Customer.id))).scalars().all())
    new = [Customer(**c) for c in CUSTOMERS if c["id"] not in existing]
    db.add_all(new)
    return len(new)


async def seed_invoices(db: AsyncSession) -> int:
    # Invoices have generated ids: only seed an empty table
    if (await db.execute(select(Invoice.id).limit(1))).first() is not None:
        return 0
    db.add_all(
        Invoice(
            customer_id=CUSTOMERS[customer]["id"],
            amount=amount,
            status=status,
            date=date.fromisoformat(issued),
        )
        for customer, amount, status, issued in INVOICES
    )
    return len(INVOICES)


async def seed_revenue(db: AsyncSession) -> int:
    existing = set((await db.execute(select(Revenue.month))).scalars().all())
    new = [
        Revenue(month=month, revenue=revenue)
        for month, revenue in REVENUE if month not in existing
    ]
    db.add_all(new)
    return len(new)


async def seed_database(sessions: DatabaseSessionManager) -> dict[str, int]:
    """Create missing tables and insert placeholder rows; returns rows added."""
    await sessions.create_schema()
    async with sessions.session() as db:
        added = {
            "customers": await seed_customers(db),
            "revenue": await seed_revenue(db),
        }
        await db.flush()
        added["invoices"] = await seed_invoices(db)
        await db.commit()
    logger.info(f"Seed complete: {added}")
    return added


async def _main() -> None:
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_format)
    sessions = DatabaseSessionManager(
        settings.database_url, ssl_require=settings.database_ssl_require,
    )
    try:
        await seed_database(sessions)
    finally:
        await sessions.dispose()


if __name__ == "__main__":
    asyncio.run(_main())
