"""Tests for the POS backend HTTP client"""

import json
from datetime import date

import httpx
import pytest

from coffeepos.core.errors import BackendError
from coffeepos.models.product import ProductInput, StockAdjustment
from coffeepos.models.user import Credentials, UserInput
from tests.conftest import BACKEND_URL

pytestmark = pytest.mark.anyio


class TestRequests:
    """URL building, headers and error mapping"""

    async def test_base_url_prefix_and_no_token(self, client, backend):
        await client.get_products()

        request = backend.calls("GET", "/api/products")[0]
        assert str(request.url) == f"{BACKEND_URL}/api/products"
        assert "Authorization" not in request.headers

    async def test_bearer_token_header(self, client, backend):
        client.token = "abc.def.ghi"
        await client.get_products()

        request = backend.calls("GET", "/api/products")[0]
        assert request.headers["Authorization"] == "Bearer abc.def.ghi"

    async def test_trailing_slash_in_base_url(self, backend):
        from coffeepos.services.backend_client import PosBackendClient

        client = PosBackendClient(f"{BACKEND_URL}/", transport=httpx.MockTransport(backend))
        await client.get_products()
        assert backend.calls("GET", "/api/products")

    async def test_server_error_message_is_used(self, client, backend):
        backend.on("GET", "/api/sales", status=500, json={"error": "Database is locked"})

        with pytest.raises(BackendError) as exc_info:
            await client.get_sales()

        assert exc_info.value.message == "Database is locked"
        assert exc_info.value.status_code == 500

    async def test_default_message_without_error_field(self, client, backend):
        backend.on("GET", "/api/users", status=403, json={"detail": "nope"})

        with pytest.raises(BackendError) as exc_info:
            await client.list_users()

        assert exc_info.value.message == "Failed to load users"
        assert exc_info.value.status_code == 403

    async def test_non_json_error_body(self, client, backend):
        backend.on("GET", "/api/products", handler=lambda r: httpx.Response(502, text="Bad Gateway"))

        with pytest.raises(BackendError) as exc_info:
            await client.get_products()

        assert exc_info.value.message == "Failed to fetch products"

    async def test_transport_error(self, client, backend):
        def refuse(request):
            raise httpx.ConnectError("refused", request=request)

        backend.on("GET", "/health", handler=refuse)

        with pytest.raises(BackendError) as exc_info:
            await client.health()

        assert exc_info.value.status_code is None
        assert "cannot reach backend" in exc_info.value.message

    async def test_empty_body_returns_none(self, client, backend):
        backend.on("DELETE", "/api/products/4", handler=lambda r: httpx.Response(204))
        assert await client.delete_product(4) is None


class TestEndpoints:

    async def test_login_body(self, client, backend):
        backend.on(
            "POST",
            "/api/auth/login",
            json={"token": "t0k", "user": {"id": 1, "name": "Admin", "username": "admin", "role": "admin"}},
        )

        result = await client.login(Credentials(username="admin", password="secret"))

        assert result.token == "t0k"
        assert result.user.role == "admin"
        body = json.loads(backend.calls("POST", "/api/auth/login")[0].content)
        assert body == {"username": "admin", "password": "secret"}

    async def test_products_parse_decimal_prices(self, client):
        products = await client.get_products()

        assert str(products[1].price) == "85.50"
        assert products[3].category is None

    async def test_product_payload(self, client, backend):
        backend.on("POST", "/api/products", status=201, json={"id": 9})

        await client.create_product(ProductInput(name="Mocha", price="140.00", stock=8, category="Coffee"))

        body = json.loads(backend.calls("POST", "/api/products")[0].content)
        assert body["name"] == "Mocha"
        assert body["price"] == "140.00"
        assert body["stock"] == 8

    async def test_stock_adjustment_uses_patch(self, client, backend):
        backend.on("PATCH", "/api/products/2/stock", json={"id": 2, "stock": 35})

        await client.adjust_stock(2, StockAdjustment(change_amount=5))

        body = json.loads(backend.calls("PATCH", "/api/products/2/stock")[0].content)
        assert body == {"change_amount": 5, "note": "Quick stock adjustment"}

    async def test_report_date_params(self, client, backend):
        backend.on("GET", "/api/sales/report", json=[{"date": "2026-10-18", "total_sales": 4, "total_revenue": "480.00"}])

        rows = await client.get_sales_report(date(2026, 10, 1), "2026-10-18")

        request = backend.calls("GET", "/api/sales/report")[0]
        assert request.url.params["start_date"] == "2026-10-01"
        assert request.url.params["end_date"] == "2026-10-18"
        assert len(rows) == 1

    async def test_report_without_dates_sends_no_params(self, client, backend):
        backend.on("GET", "/api/sales/hourly-sales", json=[])

        await client.get_hourly_sales()

        request = backend.calls("GET", "/api/sales/hourly-sales")[0]
        assert dict(request.url.params) == {}

    async def test_create_sale_bad_response(self, client, backend):
        from coffeepos.models.sale import SaleRequest

        backend.on("POST", "/api/sales", status=201, json={"ok": True})
        request = SaleRequest(items=[{"product_id": 2, "quantity": 1}], payment_method="cash")

        with pytest.raises(BackendError):
            await client.create_sale(request)

    async def test_malformed_product_is_backend_error(self, client, backend):
        backend.on("GET", "/api/products", json=[{"id": 1, "name": "Latte", "price": "-5", "stock": 3}])

        with pytest.raises(BackendError) as exc_info:
            await client.get_products()

        assert exc_info.value.message == "Failed to fetch products: unexpected response"

    async def test_list_endpoint_answering_object(self, client, backend):
        backend.on("GET", "/api/users", json={"users": []})

        with pytest.raises(BackendError) as exc_info:
            await client.list_users()

        assert exc_info.value.message == "Failed to load users: unexpected response"

    async def test_malformed_profile_is_backend_error(self, client, backend):
        backend.on("GET", "/api/auth/profile", json={"name": "no id"})

        with pytest.raises(BackendError):
            await client.get_profile()

    async def test_create_user_omits_blank_password(self, client, backend):
        backend.on("POST", "/api/users", status=201, json={"id": 5})

        await client.create_user(UserInput(name="Ben Reyes", username="ben"))

        body = json.loads(backend.calls("POST", "/api/users")[0].content)
        assert body == {"name": "Ben Reyes", "username": "ben", "role": "cashier"}
