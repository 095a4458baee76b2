"""Sale models"""

from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field


class PaymentMethod(str, Enum):
    CASH = "cash"
    CARD = "card"
    GCASH = "gcash"

    @property
    def requires_reference(self) -> bool:
        """Card and e-wallet payments carry a processor reference number"""
        return self in (PaymentMethod.CARD, PaymentMethod.GCASH)


class SaleItemRequest(BaseModel):
    product_id: int
    quantity: int = Field(gt=0)


class SaleRequest(BaseModel):
    """Body of POST /api/sales"""
    items: list[SaleItemRequest]
    payment_method: PaymentMethod
    reference_no: Optional[str] = None


class SaleItem(BaseModel):
    """Line of a recorded sale"""
    product_id: Optional[int] = None
    product_name: Optional[str] = None
    price: Decimal = Decimal("0")
    quantity: int = 0
    subtotal: Decimal = Decimal("0")

    class Config:
        extra = "allow"


class Sale(BaseModel):
    """Recorded sale"""
    id: int
    total: Decimal = Decimal("0")
    payment_method: str = "cash"
    reference_no: Optional[str] = None
    cashier_name: Optional[str] = None
    created_at: Optional[datetime] = None
    items: list[SaleItem] = []

    class Config:
        extra = "allow"


class SaleResponse(BaseModel):
    """Response from POST /api/sales"""
    sale: Sale


class SalesSummary(BaseModel):
    total_revenue: Decimal
    total_sales: int
    average_sale: Decimal


class SalesPage(BaseModel):
    """One page of the filtered, sorted sales list"""
    sales: list[Sale]
    page: int
    page_size: int
    total_items: int
    total_pages: int
    summary: SalesSummary
