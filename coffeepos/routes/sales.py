"""Sales history routes"""

from datetime import date
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query

from ..core.config import settings
from ..core.errors import PosError
from ..core.session import TerminalSession
from ..models.report import DailySalesRow
from ..models.sale import Sale, SalesPage
from ..services.backend_client import PosBackendClient
from ..services.sales import SORT_FIELDS, build_sales_page
from .deps import get_backend_client, http_error, require_screen

router = APIRouter(prefix="/api/sales", tags=["Sales"])

screen = require_screen("sales")


@router.get("", response_model=SalesPage)
async def list_sales(
    page: int = Query(1, ge=1),
    page_size: Optional[int] = Query(None, ge=1, le=200),
    payment_method: Optional[str] = Query(None),
    cashier: Optional[str] = Query(None),
    sort_by: str = Query("date"),
    descending: bool = Query(True),
    session: TerminalSession = Depends(screen),
    client: PosBackendClient = Depends(get_backend_client),
):
    """Fetch all sales, then filter, sort and page them here"""
    if sort_by not in SORT_FIELDS:
        raise HTTPException(status_code=422, detail=f"sort_by must be one of {', '.join(SORT_FIELDS)}")

    try:
        session.sales = await client.get_sales()
    except PosError as e:
        raise http_error(session, e)

    return build_sales_page(
        session.sales,
        page=page,
        page_size=page_size or settings.sales_page_size,
        payment_method=payment_method,
        cashier=cashier,
        sort_by=sort_by,
        descending=descending,
    )


@router.get("/report", response_model=list[DailySalesRow])
async def sales_report(
    start_date: Optional[date] = Query(None),
    end_date: Optional[date] = Query(None),
    session: TerminalSession = Depends(screen),
    client: PosBackendClient = Depends(get_backend_client),
):
    """Daily totals, optionally limited to a date range"""
    try:
        return await client.get_sales_report(start_date, end_date)
    except PosError as e:
        raise http_error(session, e)


@router.get("/{sale_id}", response_model=Sale)
async def sale_details(
    sale_id: int,
    session: TerminalSession = Depends(screen),
    client: PosBackendClient = Depends(get_backend_client),
):
    try:
        return await client.get_sale(sale_id)
    except PosError as e:
        raise http_error(session, e)
