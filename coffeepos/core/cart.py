"""
Cart engine for the order-entry screen.

Every mutation is checked against the most recently fetched stock snapshot.
The backend stays the stock authority: these checks only give the cashier
fast feedback, and a stale snapshot surfaces as a rejected sale at checkout.
"""

from decimal import Decimal
from typing import Iterable, Optional

from ..models.cart import CartLine
from ..models.product import Product
from ..models.sale import SaleItemRequest
from .errors import OutOfStock, InsufficientStock, LineNotFound
from .notices import Notice

LOW_STOCK_THRESHOLD = 10


class Cart:
    """In-memory cart, one line per distinct product"""

    def __init__(self, low_stock_threshold: int = LOW_STOCK_THRESHOLD):
        self.low_stock_threshold = low_stock_threshold
        self._lines: dict[int, CartLine] = {}
        self._stock: dict[int, int] = {}

    def __len__(self) -> int:
        return len(self._lines)

    def __contains__(self, product_id: int) -> bool:
        return product_id in self._lines

    @property
    def lines(self) -> list[CartLine]:
        return list(self._lines.values())

    @property
    def is_empty(self) -> bool:
        return not self._lines

    @property
    def item_count(self) -> int:
        return sum(line.quantity for line in self._lines.values())

    def get_line(self, product_id: int) -> Optional[CartLine]:
        return self._lines.get(product_id)

    def quantity_of(self, product_id: int) -> int:
        line = self._lines.get(product_id)
        return line.quantity if line else 0

    def stock_of(self, product_id: int) -> Optional[int]:
        return self._stock.get(product_id)

    def refresh_stock(self, products: Iterable[Product]) -> None:
        """Replace the stock snapshot with a fresh catalog fetch"""
        self._stock = {p.id: p.stock for p in products}

    def add(self, product: Product) -> Notice:
        """Add one unit of a product; returns the notice for the cashier"""
        if product.stock == 0:
            raise OutOfStock(product.name)

        line = self._lines.get(product.id)
        if line is not None and line.quantity + 1 > product.stock:
            raise InsufficientStock(product.name, product.stock)

        self._stock[product.id] = product.stock
        if line is not None:
            line.quantity += 1
        else:
            line = CartLine(
                product_id=product.id,
                name=product.name,
                unit_price=product.price,
                quantity=1,
            )
            self._lines[product.id] = line

        remaining = product.stock - line.quantity
        if remaining <= self.low_stock_threshold:
            return Notice.warning(
                f"Low stock! Only {remaining} units of {product.name} remaining."
            )
        return Notice.success(f"Added {product.name} to cart")

    def update_line_quantity(self, product_id: int, new_quantity: int) -> Optional[CartLine]:
        """
        Set a line's quantity verbatim.

        A quantity below 1 removes the line and returns None.
        """
        line = self._lines.get(product_id)
        if line is None:
            raise LineNotFound(product_id)

        stock = self._stock.get(product_id)
        if stock is not None and new_quantity > stock:
            raise InsufficientStock(line.name, stock)

        if new_quantity < 1:
            self.remove_line(product_id)
            return None

        line.quantity = new_quantity
        return line

    def increment(self, product_id: int) -> Optional[CartLine]:
        return self.update_line_quantity(product_id, self.quantity_of(product_id) + 1)

    def decrement(self, product_id: int) -> Optional[CartLine]:
        return self.update_line_quantity(product_id, self.quantity_of(product_id) - 1)

    def remove_line(self, product_id: int) -> None:
        self._lines.pop(product_id, None)

    def clear(self) -> None:
        self._lines = {}

    def compute_total(self) -> Decimal:
        return sum((line.subtotal for line in self._lines.values()), Decimal("0"))

    def to_sale_items(self) -> list[SaleItemRequest]:
        """Lines in the shape the sales endpoint expects"""
        return [
            SaleItemRequest(product_id=line.product_id, quantity=line.quantity)
            for line in self._lines.values()
        ]
