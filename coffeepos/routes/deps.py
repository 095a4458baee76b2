"""Shared route dependencies"""

from typing import Optional

from fastapi import Depends, HTTPException

from ..core.config import settings
from ..core.errors import (
    AuthError,
    BackendError,
    CartError,
    CheckoutInProgress,
    Forbidden,
    LineNotFound,
    PosError,
    ProductNotFound,
)
from ..core.notices import Notice
from ..core.security import check_access
from ..core.session import TerminalSession, terminal_session
from ..services.auth import AuthService, TokenStore
from ..services.backend_client import PosBackendClient
from ..services.order_entry import OrderEntry

# Initialize services (one terminal per process)
backend_client: Optional[PosBackendClient] = None


def get_backend_client() -> PosBackendClient:
    """Get or create backend client"""
    global backend_client
    if backend_client is None:
        backend_client = PosBackendClient(
            backend_base_url=settings.backend_base_url,
            timeout=settings.request_timeout,
        )
    return backend_client


def get_session() -> TerminalSession:
    return terminal_session


def get_auth_service(
    session: TerminalSession = Depends(get_session),
    client: PosBackendClient = Depends(get_backend_client),
) -> AuthService:
    return AuthService(client, session, TokenStore(settings.token_file))


def get_order_entry(
    session: TerminalSession = Depends(get_session),
    client: PosBackendClient = Depends(get_backend_client),
) -> OrderEntry:
    return OrderEntry(session, client)


def http_error(session: TerminalSession, exc: PosError) -> HTTPException:
    """Record the failure as a notice and map it to an HTTP status"""
    session.notify(Notice.error(str(exc)))

    if isinstance(exc, CheckoutInProgress):
        status_code = 409
    elif isinstance(exc, (LineNotFound, ProductNotFound)):
        status_code = 404
    elif isinstance(exc, CartError):
        status_code = 400
    elif isinstance(exc, BackendError):
        # backend 4xx pass through, everything else is a bad gateway
        if exc.status_code and 400 <= exc.status_code < 500:
            status_code = exc.status_code
        else:
            status_code = 502
    elif isinstance(exc, Forbidden):
        status_code = 403
    elif isinstance(exc, AuthError):
        status_code = 401
    else:
        status_code = 500

    return HTTPException(status_code=status_code, detail=str(exc))


def require_screen(screen: Optional[str] = None):
    """Dependency factory: signed in, and allowed to open ``screen``"""

    def dependency(session: TerminalSession = Depends(get_session)) -> TerminalSession:
        try:
            check_access(session, screen)
        except AuthError as e:
            raise http_error(session, e)
        return session

    return dependency
