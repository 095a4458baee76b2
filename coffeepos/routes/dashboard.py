"""Admin dashboard routes"""

from fastapi import APIRouter, Depends, Query

from ..core.config import settings
from ..core.errors import PosError
from ..core.session import TerminalSession
from ..services.backend_client import PosBackendClient
from ..services.dashboard import QUICK_ACTIONS, refresh_dashboard
from ..services.formatting import money
from .deps import get_backend_client, http_error, require_screen

router = APIRouter(prefix="/api/dashboard", tags=["Dashboard"])


@router.get("")
async def get_dashboard(
    refresh: bool = Query(False),
    session: TerminalSession = Depends(require_screen("dashboard")),
    client: PosBackendClient = Depends(get_backend_client),
):
    """Latest snapshot; fetched now when none exists yet or when asked to"""
    if refresh or session.dashboard is None:
        try:
            await refresh_dashboard(session, client, settings.low_stock_threshold)
        except PosError as e:
            raise http_error(session, e)

    stats = session.dashboard
    return {
        "stats": stats,
        "today_revenue_display": money(stats.today_revenue),
        "quick_actions": QUICK_ACTIONS,
    }
