"""Exceptions raised by the POS terminal"""

from typing import Optional


class PosError(Exception):
    """Base exception for POS terminal errors"""
    pass


class CartError(PosError):
    """Cart rule violations detected before talking to the backend"""
    pass


class OutOfStock(CartError):
    """Product has no stock at all"""

    def __init__(self, product_name: str):
        self.product_name = product_name
        super().__init__(f"{product_name} is out of stock!")


class InsufficientStock(CartError):
    """Requested quantity exceeds the last known stock"""

    def __init__(self, product_name: str, available: int):
        self.product_name = product_name
        self.available = available
        super().__init__(f"Only {available} units of {product_name} available in stock!")


class EmptyCart(CartError):
    def __init__(self):
        super().__init__("Cart is empty!")


class MissingReference(CartError):
    """Non-cash payment submitted without a reference number"""

    def __init__(self, payment_method: str):
        self.payment_method = payment_method
        super().__init__(f"Please enter a {payment_method} reference number.")


class LineNotFound(CartError):
    def __init__(self, product_id: int):
        self.product_id = product_id
        super().__init__(f"Product {product_id} is not in the cart")


class CheckoutInProgress(CartError):
    def __init__(self):
        super().__init__("A checkout is already being processed")


class ProductNotFound(CartError):
    def __init__(self, product_id: int):
        self.product_id = product_id
        super().__init__(f"Product {product_id} is not in the catalog")


class InvalidPaymentMethod(CartError):
    def __init__(self, payment_method: str):
        self.payment_method = payment_method
        super().__init__(f"Unsupported payment method: {payment_method}")


class BackendError(PosError):
    """
    Network failure or non-2xx response from the backend.

    The message comes from the server's ``error`` field when present.
    """

    def __init__(self, message: str, status_code: Optional[int] = None):
        self.message = message
        self.status_code = status_code
        super().__init__(message)


class AuthError(PosError):
    """Authentication-related errors"""
    pass


class NotAuthenticated(AuthError):
    def __init__(self):
        super().__init__("Not authenticated")


class Forbidden(AuthError):
    def __init__(self, role: Optional[str]):
        self.role = role
        super().__init__("You don't have permission to access this page.")
