"""Sales history: summary, filtering, sorting and pagination of fetched sales"""

import math
from decimal import Decimal, ROUND_HALF_UP
from typing import Optional

from ..models.sale import Sale, SalesPage, SalesSummary
from .formatting import CENTS

SORT_FIELDS = ("date", "total", "id")


def summarize(sales: list[Sale]) -> SalesSummary:
    total_revenue = sum((s.total for s in sales), Decimal("0"))
    total_sales = len(sales)
    average = Decimal("0")
    if total_sales:
        average = (total_revenue / total_sales).quantize(CENTS, rounding=ROUND_HALF_UP)
    return SalesSummary(
        total_revenue=total_revenue,
        total_sales=total_sales,
        average_sale=average,
    )


def filter_sales(
    sales: list[Sale],
    payment_method: Optional[str] = None,
    cashier: Optional[str] = None,
) -> list[Sale]:
    result = sales
    if payment_method:
        result = [s for s in result if s.payment_method == payment_method]
    if cashier:
        needle = cashier.lower()
        result = [s for s in result if needle in (s.cashier_name or "").lower()]
    return list(result)


def _sort_key(field: str):
    if field == "total":
        return lambda s: s.total
    if field == "id":
        return lambda s: s.id
    # undated sales sort before the oldest dated one
    return lambda s: (s.created_at is not None, s.created_at.timestamp() if s.created_at else 0.0)


def sort_sales(sales: list[Sale], sort_by: str = "date", descending: bool = True) -> list[Sale]:
    if sort_by not in SORT_FIELDS:
        raise ValueError(f"Cannot sort sales by {sort_by!r}")
    return sorted(sales, key=_sort_key(sort_by), reverse=descending)


def paginate(items: list, page: int, page_size: int) -> tuple[list, int]:
    """Slice out a 1-based page; returns (page items, total pages)"""
    if page < 1 or page_size < 1:
        raise ValueError("page and page_size must be >= 1")
    total_pages = math.ceil(len(items) / page_size)
    start = (page - 1) * page_size
    return items[start:start + page_size], total_pages


def build_sales_page(
    sales: list[Sale],
    page: int = 1,
    page_size: int = 20,
    payment_method: Optional[str] = None,
    cashier: Optional[str] = None,
    sort_by: str = "date",
    descending: bool = True,
) -> SalesPage:
    filtered = filter_sales(sales, payment_method=payment_method, cashier=cashier)
    ordered = sort_sales(filtered, sort_by=sort_by, descending=descending)
    items, total_pages = paginate(ordered, page, page_size)
    return SalesPage(
        sales=items,
        page=page,
        page_size=page_size,
        total_items=len(ordered),
        total_pages=total_pages,
        summary=summarize(filtered),
    )
