"""Dashboard Routes — overview bundle and its three independent panels."""

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from dashboard.infrastructure.database import (
    DatabaseSessionManager, get_db, get_db_manager,
)
from dashboard.schemas.dashboard import CardData, DashboardOverview, RevenuePoint
from dashboard.schemas.invoice import LatestInvoice
from dashboard.services.query_dashboard import (
    fetch_card_data, fetch_dashboard_overview, fetch_latest_invoices, fetch_revenue,
)

router = APIRouter(prefix="/api/v1/dashboard", tags=["dashboard"])


@router.get("", response_model=DashboardOverview)
async def get_overview(
    sessions: DatabaseSessionManager = Depends(get_db_manager),
):
    """Revenue, latest invoices and cards, fetched concurrently."""
    return await fetch_dashboard_overview(sessions)


@router.get("/revenue", response_model=list[RevenuePoint])
async def get_revenue(db: AsyncSession = Depends(get_db)):
    return await fetch_revenue(db)


@router.get("/latest-invoices", response_model=list[LatestInvoice])
async def get_latest_invoices(db: AsyncSession = Depends(get_db)):
    return await fetch_latest_invoices(db)


@router.get("/cards", response_model=CardData)
async def get_cards(db: AsyncSession = Depends(get_db)):
    return await fetch_card_data(db)
