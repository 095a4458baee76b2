"""
Dashboard

Admin summary of catalog health and today's takings, refreshed in the
background on a fixed interval.
"""

import asyncio
import logging
from datetime import date, datetime
from decimal import Decimal
from typing import Optional

from ..core.errors import BackendError
from ..core.security import can_access
from ..core.session import TerminalSession
from ..models.product import Product
from ..models.report import DailySalesRow, DashboardStats
from .backend_client import PosBackendClient

logger = logging.getLogger(__name__)

QUICK_ACTIONS = [
    {"title": "Manage Products", "description": "Add, edit, or remove products", "path": "/products"},
    {"title": "New Sale", "description": "Process a new customer order", "path": "/pos"},
    {"title": "View Sales", "description": "Browse recorded sales", "path": "/sales"},
    {"title": "Sales Report", "description": "View sales analytics", "path": "/reports"},
]


def build_dashboard_stats(
    products: list[Product],
    today_sales: list[DailySalesRow],
    threshold: int = 10,
) -> DashboardStats:
    return DashboardStats(
        total_products=len(products),
        low_stock_items=sum(1 for p in products if 0 < p.stock <= threshold),
        out_of_stock_items=sum(1 for p in products if p.stock == 0),
        today_revenue=sum((row.total_revenue for row in today_sales), Decimal("0")),
        today_sales=sum(row.total_sales for row in today_sales),
        refreshed_at=datetime.utcnow(),
    )


async def refresh_dashboard(
    session: TerminalSession,
    client: PosBackendClient,
    threshold: int = 10,
    today: Optional[date] = None,
) -> DashboardStats:
    """Fetch fresh numbers; whichever refresh lands last wins"""
    today = today or date.today()
    products, today_sales = await asyncio.gather(
        client.get_products(),
        client.get_sales_report(today, today),
    )
    stats = build_dashboard_stats(products, today_sales, threshold)
    session.dashboard = stats
    return stats


class DashboardPoller:
    """Background task re-fetching the dashboard every ``interval`` seconds"""

    def __init__(
        self,
        session: TerminalSession,
        client: PosBackendClient,
        interval: float = 120.0,
        threshold: int = 10,
    ):
        self.session = session
        self.client = client
        self.interval = interval
        self.threshold = threshold
        self._task: Optional[asyncio.Task] = None

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    def start(self) -> None:
        if self.running:
            return
        self._task = asyncio.create_task(self._run())
        logger.info(f"Dashboard poller started, every {self.interval:g}s")

    async def stop(self) -> None:
        if self._task is None:
            return
        self._task.cancel()
        try:
            await self._task
        except asyncio.CancelledError:
            pass
        self._task = None
        logger.info("Dashboard poller stopped")

    async def refresh_once(self) -> Optional[DashboardStats]:
        """One poll; failures keep the previous snapshot"""
        if not can_access("dashboard", self.session.role):
            logger.debug("Dashboard refresh skipped: no admin signed in")
            return None
        try:
            return await refresh_dashboard(self.session, self.client, self.threshold)
        except BackendError as e:
            logger.warning(f"Dashboard refresh failed: {e}")
            return None

    async def _run(self) -> None:
        while True:
            try:
                await self.refresh_once()
            except Exception as e:
                # the poller outlives any single refresh; the old snapshot stays
                logger.exception(f"Unexpected dashboard refresh error: {e}")
            await asyncio.sleep(self.interval)
