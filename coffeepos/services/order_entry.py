"""
Order Entry

Controller behind the order-entry screen: keeps the catalog snapshot,
drives the cart, and turns it into a sale.
"""

import logging
from typing import Optional

from ..core.errors import (
    BackendError,
    CheckoutInProgress,
    EmptyCart,
    InvalidPaymentMethod,
    MissingReference,
    ProductNotFound,
)
from ..core.notices import Notice
from ..core.session import TerminalSession
from ..models.product import Product
from ..models.sale import PaymentMethod, Sale, SaleRequest
from .backend_client import PosBackendClient

logger = logging.getLogger(__name__)

ALL_CATEGORIES = "All"
UNCATEGORIZED = "Uncategorized"


def parse_payment_method(value) -> PaymentMethod:
    try:
        return PaymentMethod(value)
    except ValueError:
        raise InvalidPaymentMethod(str(value)) from None


def categories(products: list[Product]) -> list[str]:
    """Distinct categories in catalog order, "All" first"""
    seen = []
    for product in products:
        category = product.category or UNCATEGORIZED
        if category not in seen:
            seen.append(category)
    return [ALL_CATEGORIES] + seen


def filter_by_category(products: list[Product], category: str) -> list[Product]:
    if category == ALL_CATEGORIES:
        return list(products)
    return [p for p in products if p.category == category]


def stock_status(stock: int, threshold: int = 10) -> tuple[str, str]:
    """(level, label) shown next to a product"""
    if stock == 0:
        return "out", "Out of Stock"
    if stock <= threshold:
        return "low", f"Only {stock} left"
    return "ok", "In Stock"


class OrderEntry:
    """
    Order-entry controller for one terminal session.

    Cart rules are enforced by the session's Cart; this class feeds it
    products from the catalog snapshot and owns the checkout round trip.
    """

    def __init__(self, session: TerminalSession, client: PosBackendClient):
        self.session = session
        self.client = client

    @property
    def cart(self):
        return self.session.cart

    async def fetch_products(self) -> list[Product]:
        """Refresh the catalog snapshot the cart validates against"""
        products = await self.client.get_products()
        self.session.products = products
        self.session.cart.refresh_stock(products)
        self.session.touch()
        logger.debug(f"Catalog refreshed: {len(products)} products")
        return products

    def categories(self) -> list[str]:
        return categories(self.session.products)

    def visible_products(self, category: Optional[str] = None) -> list[Product]:
        if category is not None:
            self.session.active_category = category
        return filter_by_category(self.session.products, self.session.active_category)

    def _product(self, product_id: int) -> Product:
        product = self.session.find_product(product_id)
        if product is None:
            raise ProductNotFound(product_id)
        return product

    def add_to_cart(self, product_id: int) -> Notice:
        notice = self.cart.add(self._product(product_id))
        return self.session.notify(notice)

    def update_quantity(self, product_id: int, quantity: int):
        return self.cart.update_line_quantity(product_id, quantity)

    def increment(self, product_id: int):
        return self.cart.increment(product_id)

    def decrement(self, product_id: int):
        return self.cart.decrement(product_id)

    def remove_line(self, product_id: int) -> None:
        self.cart.remove_line(product_id)

    def clear_cart(self) -> None:
        self.cart.clear()

    def select_payment(
        self,
        payment_method: Optional[str] = None,
        reference_no: Optional[str] = None,
    ) -> None:
        """Update the checkout form"""
        if payment_method is not None:
            self.session.payment_method = parse_payment_method(payment_method)
        if reference_no is not None:
            self.session.reference_no = reference_no

    async def submit_checkout(
        self,
        payment_method: Optional[str] = None,
        reference_no: Optional[str] = None,
    ) -> Sale:
        """
        Submit the cart as a sale.

        All-or-nothing: the cart and payment form only change after the
        backend confirms the sale. Validation failures never reach the
        network.
        """
        self.select_payment(payment_method, reference_no)
        method = self.session.payment_method
        reference = (self.session.reference_no or "").strip()

        if self.cart.is_empty:
            raise EmptyCart()
        if method.requires_reference and not reference:
            raise MissingReference(method.value)
        if self.session.checkout_in_progress:
            raise CheckoutInProgress()

        request = SaleRequest(
            items=self.cart.to_sale_items(),
            payment_method=method,
            reference_no=reference or None,
        )

        self.session.checkout_in_progress = True
        try:
            result = await self.client.create_sale(request)
        finally:
            self.session.checkout_in_progress = False

        sale = result.sale
        self.cart.clear()
        self.session.reset_payment()
        self.session.notify(
            Notice.success(f"Sale #{sale.id} recorded successfully ({method.value})!")
        )
        logger.info(f"Sale {sale.id} recorded: {len(request.items)} lines via {method.value}")

        # Stock changed server-side; the next cart checks need the new numbers
        try:
            await self.fetch_products()
        except BackendError as e:
            logger.error(f"Catalog refresh after sale {sale.id} failed: {e}")

        return sale
