"""
POS Backend Client

HTTP client for the CoffeePOS REST backend.
Prefixes the base URL and attaches the bearer credential to every request.
"""

import logging
from datetime import date
from typing import Optional, Any, Union

import httpx
from pydantic import BaseModel, ValidationError

from ..core.errors import BackendError
from ..models.product import Product, ProductInput, StockAdjustment
from ..models.report import (
    CategorySalesRow,
    DailySalesRow,
    HourlySalesRow,
    InventoryLog,
    PaymentAnalyticsRow,
)
from ..models.sale import Sale, SaleRequest, SaleResponse
from ..models.user import Credentials, LoginResponse, User, UserInput

logger = logging.getLogger(__name__)

DateParam = Optional[Union[date, str]]


class PosBackendClient:
    """
    Client for the POS backend API.

    The bearer token is set by the auth service after login and cleared
    on logout; requests made without one go out unauthenticated.
    """

    def __init__(
        self,
        backend_base_url: str,
        token: Optional[str] = None,
        timeout: float = 30.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """
        Initialize backend client.

        Args:
            backend_base_url: Base URL of the POS backend
            token: Bearer token of the signed-in user
            timeout: Request timeout in seconds
            transport: Alternative httpx transport (used by tests)
        """
        self.base_url = backend_base_url.rstrip("/")
        self.token = token
        self._http_client = httpx.AsyncClient(timeout=timeout, transport=transport)

    async def close(self) -> None:
        """Close HTTP client"""
        await self._http_client.aclose()

    def _generate_headers(self) -> dict[str, str]:
        """Generate headers including the bearer token if available"""
        headers = {
            "Content-Type": "application/json",
            "Accept": "application/json",
        }
        if self.token:
            headers["Authorization"] = f"Bearer {self.token}"
        return headers

    @staticmethod
    def _error_message(response: httpx.Response, default: str) -> str:
        """Prefer the server's own ``error`` field"""
        try:
            data = response.json()
        except ValueError:
            return default
        if isinstance(data, dict) and data.get("error"):
            return str(data["error"])
        return default

    async def _request(
        self,
        method: str,
        path: str,
        body: Optional[Any] = None,
        params: Optional[dict] = None,
        error_message: str = "Request failed",
    ) -> Any:
        """Make an HTTP request, raising BackendError on any failure"""
        url = f"{self.base_url}{path}"

        try:
            response = await self._http_client.request(
                method=method,
                url=url,
                headers=self._generate_headers(),
                json=body,
                params=params,
            )
        except httpx.HTTPError as e:
            logger.error(f"Request {method} {url} failed: {e}")
            raise BackendError(f"{error_message}: cannot reach backend") from e

        if response.status_code >= 400:
            logger.error(f"Request failed: {response.status_code} - {response.text}")
            raise BackendError(
                self._error_message(response, error_message),
                status_code=response.status_code,
            )

        if not response.content:
            return None
        try:
            return response.json()
        except ValueError as e:
            raise BackendError(f"{error_message}: invalid response", status_code=response.status_code) from e

    @staticmethod
    def _date_params(start_date: DateParam, end_date: DateParam) -> dict[str, str]:
        """Only dates actually provided go on the query string"""
        params = {}
        if start_date:
            params["start_date"] = str(start_date)
        if end_date:
            params["end_date"] = str(end_date)
        return params

    @staticmethod
    def _parse(model: type[BaseModel], data: Any, error_message: str) -> Any:
        """Validate a response body; malformed data is a backend failure"""
        try:
            return model.model_validate(data)
        except ValidationError as e:
            logger.error(f"{error_message}: unexpected response: {e}")
            raise BackendError(f"{error_message}: unexpected response") from e

    @classmethod
    def _parse_list(cls, model: type[BaseModel], data: Any, error_message: str) -> list:
        if data is None:
            return []
        if not isinstance(data, list):
            raise BackendError(f"{error_message}: unexpected response")
        return [cls._parse(model, item, error_message) for item in data]

    # ==================== Health ====================

    async def health(self) -> dict:
        """Check backend connectivity"""
        return await self._request("GET", "/health", error_message="Backend health check failed")

    # ==================== Auth APIs ====================

    async def login(self, credentials: Credentials) -> LoginResponse:
        data = await self._request(
            "POST",
            "/api/auth/login",
            body=credentials.model_dump(),
            error_message="Login failed",
        )
        return self._parse(LoginResponse, data, "Login failed")

    async def register(self, user_data: dict) -> dict:
        return await self._request(
            "POST",
            "/api/auth/register",
            body=user_data,
            error_message="Registration failed",
        )

    async def get_profile(self) -> User:
        """Who the current token belongs to"""
        data = await self._request("GET", "/api/auth/profile", error_message="Session expired")
        return self._parse(User, data, "Session expired")

    # ==================== Product APIs ====================

    async def get_products(self) -> list[Product]:
        data = await self._request("GET", "/api/products", error_message="Failed to fetch products")
        return self._parse_list(Product, data, "Failed to fetch products")

    async def create_product(self, product: ProductInput) -> dict:
        return await self._request(
            "POST",
            "/api/products",
            body=product.model_dump(mode="json"),
            error_message="Failed to save product",
        )

    async def update_product(self, product_id: int, product: ProductInput) -> dict:
        return await self._request(
            "PUT",
            f"/api/products/{product_id}",
            body=product.model_dump(mode="json"),
            error_message="Failed to save product",
        )

    async def delete_product(self, product_id: int) -> Optional[dict]:
        return await self._request(
            "DELETE",
            f"/api/products/{product_id}",
            error_message="Failed to delete product",
        )

    async def adjust_stock(self, product_id: int, adjustment: StockAdjustment) -> dict:
        return await self._request(
            "PATCH",
            f"/api/products/{product_id}/stock",
            body=adjustment.model_dump(),
            error_message="Failed to update stock",
        )

    # ==================== Sales APIs ====================

    async def create_sale(self, sale: SaleRequest) -> SaleResponse:
        """Record a sale; the backend validates stock and is the final word"""
        data = await self._request(
            "POST",
            "/api/sales",
            body=sale.model_dump(mode="json"),
            error_message="Failed to record sale",
        )
        return self._parse(SaleResponse, data, "Failed to record sale")

    async def get_sales(self) -> list[Sale]:
        data = await self._request("GET", "/api/sales", error_message="Failed to fetch sales")
        return self._parse_list(Sale, data, "Failed to fetch sales")

    async def get_sale(self, sale_id: int) -> Sale:
        data = await self._request(
            "GET",
            f"/api/sales/{sale_id}",
            error_message="Failed to fetch sale details",
        )
        return self._parse(Sale, data, "Failed to fetch sale details")

    async def get_sales_report(
        self,
        start_date: DateParam = None,
        end_date: DateParam = None,
    ) -> list[DailySalesRow]:
        data = await self._request(
            "GET",
            "/api/sales/report",
            params=self._date_params(start_date, end_date),
            error_message="Failed to fetch sales report",
        )
        return self._parse_list(DailySalesRow, data, "Failed to fetch sales report")

    async def get_payment_analytics(
        self,
        start_date: DateParam = None,
        end_date: DateParam = None,
    ) -> list[PaymentAnalyticsRow]:
        data = await self._request(
            "GET",
            "/api/sales/payment-analytics",
            params=self._date_params(start_date, end_date),
            error_message="Failed to fetch payment analytics",
        )
        return self._parse_list(PaymentAnalyticsRow, data, "Failed to fetch payment analytics")

    async def get_hourly_sales(
        self,
        start_date: DateParam = None,
        end_date: DateParam = None,
    ) -> list[HourlySalesRow]:
        data = await self._request(
            "GET",
            "/api/sales/hourly-sales",
            params=self._date_params(start_date, end_date),
            error_message="Failed to fetch hourly sales",
        )
        return self._parse_list(HourlySalesRow, data, "Failed to fetch hourly sales")

    async def get_category_sales(
        self,
        start_date: DateParam = None,
        end_date: DateParam = None,
    ) -> list[CategorySalesRow]:
        data = await self._request(
            "GET",
            "/api/sales/category-sales",
            params=self._date_params(start_date, end_date),
            error_message="Failed to fetch category sales",
        )
        return self._parse_list(CategorySalesRow, data, "Failed to fetch category sales")

    async def get_inventory_logs(self) -> list[InventoryLog]:
        data = await self._request(
            "GET",
            "/api/inventory/logs",
            error_message="Failed to fetch inventory logs",
        )
        return self._parse_list(InventoryLog, data, "Failed to fetch inventory logs")

    # ==================== User APIs ====================

    async def list_users(self) -> list[User]:
        data = await self._request("GET", "/api/users", error_message="Failed to load users")
        return self._parse_list(User, data, "Failed to load users")

    async def create_user(self, user: UserInput) -> dict:
        return await self._request(
            "POST",
            "/api/users",
            body=user.model_dump(mode="json", exclude_none=True),
            error_message="Failed to create user",
        )

    async def update_user(self, user_id: int, user: UserInput) -> dict:
        return await self._request(
            "PUT",
            f"/api/users/{user_id}",
            body=user.model_dump(mode="json", exclude_none=True),
            error_message="Failed to update user",
        )

    async def delete_user(self, user_id: int) -> Optional[dict]:
        return await self._request(
            "DELETE",
            f"/api/users/{user_id}",
            error_message="Failed to delete user",
        )
