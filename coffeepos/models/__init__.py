# POS Terminal Models

from .product import Product, ProductInput, StockAdjustment
from .cart import (
    CartLine,
    CartLineView,
    CartView,
    AddToCartRequest,
    UpdateCartItemRequest,
    PaymentSelection,
    CheckoutRequest,
)
from .sale import (
    PaymentMethod,
    SaleItemRequest,
    SaleRequest,
    SaleItem,
    Sale,
    SaleResponse,
    SalesSummary,
    SalesPage,
)
from .user import Role, User, Credentials, UserInput, LoginResponse
from .report import (
    DailySalesRow,
    PaymentAnalyticsRow,
    HourlySalesRow,
    CategorySalesRow,
    InventoryLog,
    ReportData,
    OverviewStats,
    PeakHour,
    CategoryShare,
    DashboardStats,
)

__all__ = [
    "Product",
    "ProductInput",
    "StockAdjustment",
    "CartLine",
    "CartLineView",
    "CartView",
    "AddToCartRequest",
    "UpdateCartItemRequest",
    "PaymentSelection",
    "CheckoutRequest",
    "PaymentMethod",
    "SaleItemRequest",
    "SaleRequest",
    "SaleItem",
    "Sale",
    "SaleResponse",
    "SalesSummary",
    "SalesPage",
    "Role",
    "User",
    "Credentials",
    "UserInput",
    "LoginResponse",
    "DailySalesRow",
    "PaymentAnalyticsRow",
    "HourlySalesRow",
    "CategorySalesRow",
    "InventoryLog",
    "ReportData",
    "OverviewStats",
    "PeakHour",
    "CategoryShare",
    "DashboardStats",
]
