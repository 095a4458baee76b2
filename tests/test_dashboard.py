"""Tests for the dashboard snapshot and its background poller"""

import asyncio
from datetime import date
from decimal import Decimal

import pytest

from coffeepos.models.report import DailySalesRow
from coffeepos.services.dashboard import (
    DashboardPoller,
    build_dashboard_stats,
    refresh_dashboard,
)
from tests.conftest import sign_in

TODAY = [{"date": "2026-10-18", "total_sales": 5, "total_revenue": "640.00"}]


def test_build_stats(products):
    stats = build_dashboard_stats(products, [DailySalesRow.model_validate(TODAY[0])])

    assert stats.total_products == 4
    assert stats.low_stock_items == 1
    assert stats.out_of_stock_items == 1
    assert stats.today_revenue == Decimal("640.00")
    assert stats.today_sales == 5
    assert stats.refreshed_at is not None


@pytest.mark.anyio
class TestRefresh:

    async def test_refresh_stores_snapshot(self, session, client, backend):
        backend.on("GET", "/api/sales/report", json=TODAY)

        stats = await refresh_dashboard(session, client, today=date(2026, 10, 18))

        assert session.dashboard is stats
        request = backend.calls("GET", "/api/sales/report")[0]
        assert request.url.params["start_date"] == "2026-10-18"
        assert request.url.params["end_date"] == "2026-10-18"

    async def test_poller_skips_non_admin(self, session, client, backend):
        sign_in(session, client, role="cashier")
        poller = DashboardPoller(session, client)

        assert await poller.refresh_once() is None
        assert backend.requests == []

    async def test_poller_failure_keeps_previous_snapshot(self, session, client, backend):
        sign_in(session, client, role="admin")
        backend.on("GET", "/api/sales/report", json=TODAY)
        poller = DashboardPoller(session, client)
        first = await poller.refresh_once()

        backend.on("GET", "/api/sales/report", status=500, json={"error": "busy"})
        assert await poller.refresh_once() is None
        assert session.dashboard is first

    async def test_malformed_catalog_keeps_poller_running(self, session, client, backend):
        sign_in(session, client, role="admin")
        backend.on("GET", "/api/sales/report", json=TODAY)
        backend.on("GET", "/api/products", json=[{"id": 1, "name": "Latte", "price": "-5", "stock": 3}])
        poller = DashboardPoller(session, client, interval=0.01)

        poller.start()
        for _ in range(50):
            if len(backend.calls("GET", "/api/products")) >= 2:
                break
            await asyncio.sleep(0.01)

        assert poller.running
        assert session.dashboard is None
        await poller.stop()
        assert not poller.running

    async def test_malformed_payload_is_a_failed_refresh(self, session, client, backend):
        sign_in(session, client, role="admin")
        backend.on("GET", "/api/sales/report", json=TODAY)
        poller = DashboardPoller(session, client)
        first = await poller.refresh_once()

        backend.on("GET", "/api/sales/report", json=[{"total_sales": "many"}])
        assert await poller.refresh_once() is None
        assert session.dashboard is first

    async def test_poller_start_and_stop(self, session, client, backend):
        sign_in(session, client, role="admin")
        backend.on("GET", "/api/sales/report", json=TODAY)
        poller = DashboardPoller(session, client, interval=0.01)

        poller.start()
        assert poller.running
        for _ in range(50):
            if session.dashboard is not None:
                break
            await asyncio.sleep(0.01)
        await poller.stop()

        assert not poller.running
        assert session.dashboard is not None
        assert session.dashboard.today_sales == 5
