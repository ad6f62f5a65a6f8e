"""Customer Routes — selector options and the searchable customer table."""

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from dashboard.infrastructure.database import get_db
from dashboard.schemas.customer import CustomerField, FormattedCustomersTable
from dashboard.services.query_customers import (
    fetch_customers, fetch_filtered_customers,
)

router = APIRouter(prefix="/api/v1/customers", tags=["customers"])


@router.get("", response_model=list[CustomerField])
async def list_customers(db: AsyncSession = Depends(get_db)):
    return await fetch_customers(db)


@router.get("/table", response_model=list[FormattedCustomersTable])
async def customers_table(
    query: str = Query(""), db: AsyncSession = Depends(get_db),
):
    return await fetch_filtered_customers(db, query)
