"""Cart models for the order-entry screen"""

from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, Field


class CartLine(BaseModel):
    """One product in the cart"""
    product_id: int
    name: str
    unit_price: Decimal = Field(ge=0)
    quantity: int = Field(ge=1)

    @property
    def subtotal(self) -> Decimal:
        return self.unit_price * self.quantity


class CartLineView(BaseModel):
    product_id: int
    name: str
    unit_price: Decimal
    quantity: int
    subtotal: Decimal


class CartView(BaseModel):
    """Cart as rendered by the order-entry screen"""
    lines: list[CartLineView] = []
    item_count: int = 0
    total: Decimal = Decimal("0")
    total_display: str = ""
    payment_method: str = "cash"
    reference_no: str = ""


class AddToCartRequest(BaseModel):
    """Request to add one unit of a product to the cart"""
    product_id: int


class UpdateCartItemRequest(BaseModel):
    """Request to set a line quantity; anything below 1 removes the line"""
    quantity: int


class PaymentSelection(BaseModel):
    """Payment method and reference chosen on the checkout form"""
    payment_method: Optional[str] = None
    reference_no: Optional[str] = None


class CheckoutRequest(BaseModel):
    """Request to submit the cart as a sale"""
    payment_method: Optional[str] = None
    reference_no: Optional[str] = None
