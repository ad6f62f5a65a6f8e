"""Service test fixtures — async SQLite DB, row factories and FastAPI test client.

Invariants:
    - Every test gets a fresh SQLite database file under tmp_path
    - get_db / get_db_manager dependencies overridden to use the test DB
    - db_manager patched for routes that read it directly (readiness probe)

Design Decisions:
    - File-backed SQLite over :memory:: concurrent reads (gather_reads) open one
      connection per session, and each :memory: connection would be a new DB
    - Fake DatabaseSessionManager built with __new__: reuses the real session()
      error mapping on top of the test engine
"""

import uuid
from datetime import date

import pytest
from sqlalchemy.ext.asyncio import (
    AsyncSession, create_async_engine, async_sessionmaker,
)
from httpx import ASGITransport, AsyncClient

import dashboard.models  # noqa: F401
from dashboard.db.base import Base
from dashboard.infrastructure.database import (
    DatabaseSessionManager, get_db, get_db_manager,
)
import dashboard.infrastructure.database as db_module
from dashboard.main import app
from dashboard.models.customer import Customer
from dashboard.models.invoice import Invoice
from dashboard.models.revenue import Revenue
from tests.services.fake_presenter import RecordingPresenter


@pytest.fixture
async def test_engine(tmp_path):
    engine = create_async_engine(
        f"sqlite+aiosqlite:///{tmp_path / 'dashboard.db'}", echo=False,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest.fixture
async def test_session_factory(test_engine):
    return async_sessionmaker(
        test_engine, class_=AsyncSession, expire_on_commit=False,
    )


@pytest.fixture
async def test_db(test_session_factory):
    async with test_session_factory() as session:
        yield session


@pytest.fixture
def sessions(test_engine, test_session_factory):
    """DatabaseSessionManager bound to the test engine."""
    manager = DatabaseSessionManager.__new__(DatabaseSessionManager)
    manager.engine = test_engine
    manager._session_factory = test_session_factory
    return manager


@pytest.fixture
async def client(sessions):
    """FastAPI test client with DB dependencies overridden."""
    async def override_get_db():
        async with sessions.session() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_db_manager] = lambda: sessions

    original_manager = db_module.db_manager
    db_module.db_manager = sessions

    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c

    app.dependency_overrides.clear()
    db_module.db_manager = original_manager


@pytest.fixture
def presenter():
    return RecordingPresenter()


@pytest.fixture
def make_customer(test_db):
    """Insert a customer; name/email derived from `name` when not given."""
    async def _make(name: str, email: str | None = None) -> Customer:
        customer = Customer(
            id=uuid.uuid4(),
            name=name,
            email=email or f"{name.lower().replace(' ', '.')}@example.com",
            image_url=f"/customers/{name.lower().replace(' ', '-')}.png",
        )
        test_db.add(customer)
        await test_db.commit()
        return customer
    return _make


@pytest.fixture
def make_invoice(test_db):
    """Insert an invoice (amount in cents)."""
    async def _make(
        customer: Customer,
        amount: int,
        status: str = "pending",
        issued: str = "2023-06-01",
        invoice_id: uuid.UUID | None = None,
    ) -> Invoice:
        invoice = Invoice(
            id=invoice_id or uuid.uuid4(),
            customer_id=customer.id,
            amount=amount,
            status=status,
            date=date.fromisoformat(issued),
        )
        test_db.add(invoice)
        await test_db.commit()
        return invoice
    return _make


@pytest.fixture
def make_revenue(test_db):
    async def _make(rows: list[tuple[str, int]]) -> None:
        test_db.add_all(Revenue(month=m, revenue=r) for m, r in rows)
        await test_db.commit()
    return _make
