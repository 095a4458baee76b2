"""Display formatting shared by the screens"""

from decimal import Decimal, ROUND_HALF_UP
from typing import Optional

from ..core.config import settings

CENTS = Decimal("0.01")

PAYMENT_METHODS = {
    "cash": {"icon": "💵", "name": "Cash"},
    "card": {"icon": "💳", "name": "Credit Card"},
    "gcash": {"icon": "📱", "name": "GCash"},
    "paymaya": {"icon": "📲", "name": "PayMaya"},
}


def money(amount, symbol: Optional[str] = None) -> str:
    """Two-decimal currency string with thousands separators, e.g. ₱1,234.50"""
    symbol = settings.currency_symbol if symbol is None else symbol
    value = Decimal(str(amount or 0)).quantize(CENTS, rounding=ROUND_HALF_UP)
    sign = "-" if value < 0 else ""
    return f"{sign}{symbol}{abs(value):,.2f}"


def format_hour(hour: int) -> str:
    """0 -> 12 AM, 13 -> 1 PM"""
    period = "PM" if hour >= 12 else "AM"
    display = 12 if hour == 0 else hour - 12 if hour > 12 else hour
    return f"{display} {period}"


def payment_method_info(method: str) -> dict:
    return PAYMENT_METHODS.get(method, {"icon": "💰", "name": method})
