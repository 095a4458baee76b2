"""
Reports

Fetches everything the reports screen shows and derives the overview,
top sellers, low-stock alerts, peak hours and category shares from it.
"""

import asyncio
import logging
from datetime import date
from decimal import Decimal
from typing import Awaitable, Optional

from ..core.errors import BackendError
from ..models.product import Product
from ..models.report import (
    CategoryShare,
    CategorySalesRow,
    HourlySalesRow,
    OverviewStats,
    PaymentAnalyticsRow,
    PeakHour,
    ReportData,
)
from .backend_client import DateParam, PosBackendClient
from .formatting import format_hour, payment_method_info

logger = logging.getLogger(__name__)


async def _optional(call: Awaitable[list]) -> list:
    """Secondary report sections fall back to empty when the server refuses them"""
    try:
        return await call
    except BackendError as e:
        if e.status_code is None:
            raise
        logger.warning(f"Optional report section unavailable: {e}")
        return []


async def fetch_report_data(
    client: PosBackendClient,
    start_date: DateParam = None,
    end_date: DateParam = None,
    today: Optional[date] = None,
) -> ReportData:
    """Fetch all report sections concurrently; sales and products are required"""
    today = today or date.today()

    (
        sales,
        products,
        inventory,
        payment_analytics,
        hourly_sales,
        category_sales,
        today_sales,
    ) = await asyncio.gather(
        client.get_sales_report(start_date, end_date),
        client.get_products(),
        _optional(client.get_inventory_logs()),
        _optional(client.get_payment_analytics(start_date, end_date)),
        _optional(client.get_hourly_sales(start_date, end_date)),
        _optional(client.get_category_sales(start_date, end_date)),
        _optional(client.get_sales_report(today, today)),
    )

    return ReportData(
        sales=sales,
        products=products,
        inventory=inventory,
        payment_analytics=payment_analytics,
        hourly_sales=hourly_sales,
        category_sales=category_sales,
        today_sales=today_sales,
    )


def _by_sales_count(products: list[Product]) -> list[Product]:
    return sorted(
        (p for p in products if p.sales_count > 0),
        key=lambda p: p.sales_count,
        reverse=True,
    )


def overview_stats(data: ReportData, threshold: int = 10) -> OverviewStats:
    total_revenue = sum((row.total_revenue for row in data.sales), Decimal("0"))
    total_sales = sum(row.total_sales for row in data.sales)
    average_sale = total_revenue / total_sales if total_sales > 0 else Decimal("0")
    best = _by_sales_count(data.products)

    return OverviewStats(
        total_revenue=total_revenue,
        total_sales=total_sales,
        average_sale=average_sale,
        low_stock_products=sum(1 for p in data.products if 0 < p.stock <= threshold),
        out_of_stock_products=sum(1 for p in data.products if p.stock == 0),
        total_products=len(data.products),
        best_selling_product=best[0] if best else None,
        today_revenue=sum((row.total_revenue for row in data.today_sales), Decimal("0")),
        today_sales=sum(row.total_sales for row in data.today_sales),
    )


def top_selling_products(products: list[Product], limit: int = 5) -> list[Product]:
    return _by_sales_count(products)[:limit]


def low_stock_alerts(products: list[Product], threshold: int = 10) -> list[Product]:
    return sorted((p for p in products if p.stock <= threshold), key=lambda p: p.stock)


def peak_hours(hourly_sales: list[HourlySalesRow], limit: int = 3) -> list[PeakHour]:
    ranked = sorted(hourly_sales, key=lambda row: row.total_revenue, reverse=True)
    return [
        PeakHour(
            hour=row.hour,
            label=format_hour(row.hour),
            total_sales=row.total_sales,
            total_revenue=row.total_revenue,
        )
        for row in ranked[:limit]
    ]


def category_shares(rows: list[CategorySalesRow]) -> list[CategoryShare]:
    """Each category's share of revenue, in percent with one decimal"""
    total = sum((row.total_revenue for row in rows), Decimal("0"))
    shares = []
    for row in rows:
        percentage = float(row.total_revenue / total * 100) if total > 0 else 0.0
        shares.append(CategoryShare(
            category=row.category or "Uncategorized",
            total_revenue=row.total_revenue,
            percentage=round(percentage, 1),
        ))
    return shares


def payment_breakdown(rows: list[PaymentAnalyticsRow]) -> list[dict]:
    return [
        {
            "payment_method": row.payment_method,
            **payment_method_info(row.payment_method),
            "transaction_count": row.transaction_count,
            "total_amount": row.total_amount,
        }
        for row in rows
    ]
