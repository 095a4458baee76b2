"""Product models for the POS terminal"""

from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, Field


class Product(BaseModel):
    """Product snapshot as returned by the catalog endpoint"""
    id: int
    name: str
    price: Decimal = Field(ge=0)
    stock: int = Field(ge=0, default=0)
    category: Optional[str] = None
    image: Optional[str] = None
    sales_count: int = 0

    class Config:
        extra = "allow"


class ProductInput(BaseModel):
    """Create/update payload for a product"""
    name: str
    price: Decimal = Field(ge=0)
    stock: int = Field(ge=0, default=0)
    category: str = ""
    image: str = ""


class StockAdjustment(BaseModel):
    """Relative stock change for a product"""
    change_amount: int
    note: str = "Quick stock adjustment"
