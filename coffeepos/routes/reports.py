"""Analytics report routes"""

from datetime import date
from typing import Optional

from fastapi import APIRouter, Depends, Query

from ..core.config import settings
from ..core.errors import PosError
from ..core.session import TerminalSession
from ..services import reports
from ..services.backend_client import PosBackendClient
from .deps import get_backend_client, http_error, require_screen

router = APIRouter(prefix="/api/reports", tags=["Reports"])


@router.get("")
async def get_reports(
    start_date: Optional[date] = Query(None),
    end_date: Optional[date] = Query(None),
    session: TerminalSession = Depends(require_screen("reports")),
    client: PosBackendClient = Depends(get_backend_client),
):
    """Overview, top sellers, stock alerts, peak hours and breakdowns"""
    try:
        data = await reports.fetch_report_data(client, start_date, end_date)
    except PosError as e:
        raise http_error(session, e)

    session.report = data
    threshold = settings.low_stock_threshold
    return {
        "overview": reports.overview_stats(data, threshold),
        "top_products": reports.top_selling_products(data.products),
        "low_stock_alerts": reports.low_stock_alerts(data.products, threshold),
        "peak_hours": reports.peak_hours(data.hourly_sales),
        "category_sales": reports.category_shares(data.category_sales),
        "payment_methods": reports.payment_breakdown(data.payment_analytics),
        "daily_sales": data.sales,
        "inventory_logs": data.inventory,
    }
