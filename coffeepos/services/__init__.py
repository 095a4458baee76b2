# POS Terminal Services

from .backend_client import PosBackendClient
from .auth import AuthService, TokenStore
from .order_entry import OrderEntry

__all__ = ["PosBackendClient", "AuthService", "TokenStore", "OrderEntry"]
