"""Terminal session state"""

import uuid
from datetime import datetime
from typing import Optional
from dataclasses import dataclass, field

from ..models.product import Product
from ..models.report import DashboardStats, ReportData
from ..models.sale import PaymentMethod, Sale
from ..models.user import User
from .cart import Cart
from .config import settings
from .notices import Notice, NoticeBoard


@dataclass
class TerminalSession:
    """
    Everything the terminal remembers between requests.

    Holds the bearer credential and signed-in user, the catalog snapshot
    and cart of the order-entry screen, and the last data each screen
    fetched. Screen data is overwritten by whichever fetch lands last.
    """
    session_id: str = field(default_factory=lambda: str(uuid.uuid4()))
    created_at: datetime = field(default_factory=datetime.utcnow)
    updated_at: datetime = field(default_factory=datetime.utcnow)

    # Auth
    token: Optional[str] = None
    user: Optional[User] = None

    # Order entry
    cart: Cart = field(default_factory=lambda: Cart(settings.low_stock_threshold))
    products: list[Product] = field(default_factory=list)
    active_category: str = "All"
    payment_method: PaymentMethod = PaymentMethod.CASH
    reference_no: str = ""
    checkout_in_progress: bool = False

    # Other screens
    sales: list[Sale] = field(default_factory=list)
    users: list[User] = field(default_factory=list)
    report: Optional[ReportData] = None
    dashboard: Optional[DashboardStats] = None

    notices: NoticeBoard = field(default_factory=lambda: NoticeBoard(settings.notice_ttl_seconds))

    @property
    def is_authenticated(self) -> bool:
        return self.user is not None

    @property
    def role(self) -> Optional[str]:
        return self.user.role if self.user else None

    def notify(self, notice: Notice) -> Notice:
        self.touch()
        return self.notices.post(notice)

    def find_product(self, product_id: int) -> Optional[Product]:
        return next((p for p in self.products if p.id == product_id), None)

    def reset_payment(self) -> None:
        """Back to the checkout form's defaults"""
        self.payment_method = PaymentMethod(settings.default_payment_method)
        self.reference_no = ""

    def sign_out(self) -> None:
        """Forget the user and everything fetched on their behalf"""
        self.token = None
        self.user = None
        self.cart = Cart(settings.low_stock_threshold)
        self.products = []
        self.active_category = "All"
        self.reset_payment()
        self.sales = []
        self.users = []
        self.report = None
        self.dashboard = None
        self.touch()

    def touch(self) -> None:
        self.updated_at = datetime.utcnow()


# Singleton instance
terminal_session = TerminalSession()
