# POS Terminal Routes

from .auth import router as auth_router
from .pos import router as pos_router
from .products import router as products_router
from .sales import router as sales_router
from .reports import router as reports_router
from .dashboard import router as dashboard_router
from .users import router as users_router
from .terminal import router as terminal_router

__all__ = [
    "auth_router",
    "pos_router",
    "products_router",
    "sales_router",
    "reports_router",
    "dashboard_router",
    "users_router",
    "terminal_router",
]
