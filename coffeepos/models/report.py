"""Report and dashboard models"""

from datetime import datetime
from decimal import Decimal
from typing import Optional

from pydantic import BaseModel

from .product import Product


class DailySalesRow(BaseModel):
    """Row of the sales report, one per day"""
    date: Optional[str] = None
    total_sales: int = 0
    total_revenue: Decimal = Decimal("0")

    class Config:
        extra = "allow"


class PaymentAnalyticsRow(BaseModel):
    payment_method: str
    transaction_count: int = 0
    total_amount: Decimal = Decimal("0")

    class Config:
        extra = "allow"


class HourlySalesRow(BaseModel):
    hour: int
    total_sales: int = 0
    total_revenue: Decimal = Decimal("0")

    class Config:
        extra = "allow"


class CategorySalesRow(BaseModel):
    category: Optional[str] = None
    total_quantity: int = 0
    total_revenue: Decimal = Decimal("0")

    class Config:
        extra = "allow"


class InventoryLog(BaseModel):
    id: Optional[int] = None
    product_name: Optional[str] = None
    change_amount: int = 0
    note: Optional[str] = None
    created_at: Optional[datetime] = None

    class Config:
        extra = "allow"


class ReportData(BaseModel):
    """Everything the reports screen fetches in one go"""
    sales: list[DailySalesRow] = []
    products: list[Product] = []
    inventory: list[InventoryLog] = []
    payment_analytics: list[PaymentAnalyticsRow] = []
    hourly_sales: list[HourlySalesRow] = []
    category_sales: list[CategorySalesRow] = []
    today_sales: list[DailySalesRow] = []


class OverviewStats(BaseModel):
    total_revenue: Decimal
    total_sales: int
    average_sale: Decimal
    low_stock_products: int
    out_of_stock_products: int
    total_products: int
    best_selling_product: Optional[Product] = None
    today_revenue: Decimal
    today_sales: int


class PeakHour(BaseModel):
    hour: int
    label: str
    total_sales: int
    total_revenue: Decimal


class CategoryShare(BaseModel):
    category: str
    total_revenue: Decimal
    percentage: float


class DashboardStats(BaseModel):
    """Snapshot shown on the admin dashboard"""
    total_products: int = 0
    low_stock_items: int = 0
    out_of_stock_items: int = 0
    today_revenue: Decimal = Decimal("0")
    today_sales: int = 0
    refreshed_at: Optional[datetime] = None
