"""Shared fixtures: a scripted fake backend and a fresh terminal session"""

import httpx
import pytest
from fastapi.testclient import TestClient

from coffeepos.core.session import TerminalSession
from coffeepos.models.product import Product
from coffeepos.models.user import User
from coffeepos.services.auth import AuthService, TokenStore
from coffeepos.services.backend_client import PosBackendClient

BACKEND_URL = "http://backend.test"

CATALOG = [
    {"id": 1, "name": "Latte", "price": "120.00", "stock": 2, "category": "Coffee", "sales_count": 40},
    {"id": 2, "name": "Muffin", "price": "85.50", "stock": 30, "category": "Pastry", "sales_count": 12},
    {"id": 3, "name": "Cold Brew", "price": "150.00", "stock": 0, "category": "Coffee", "sales_count": 0},
    {"id": 4, "name": "Bottled Water", "price": "35.00", "stock": 12, "category": None, "sales_count": 3},
]


class FakeBackend:
    """Routes (method, path) to canned responses and records every request"""

    def __init__(self):
        self.routes = {}
        self.requests: list[httpx.Request] = []

    def on(self, method: str, path: str, status: int = 200, json=None, handler=None):
        self.routes[(method, path)] = handler or (status, json)
        return self

    def calls(self, method: str, path: str) -> list[httpx.Request]:
        return [r for r in self.requests if r.method == method and r.url.path == path]

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        route = self.routes.get((request.method, request.url.path))
        if route is None:
            return httpx.Response(404, json={"error": f"No route for {request.method} {request.url.path}"})
        if callable(route):
            return route(request)
        status, payload = route
        return httpx.Response(status, json=payload)


@pytest.fixture
def anyio_backend():
    return "asyncio"


@pytest.fixture
def backend():
    return FakeBackend().on("GET", "/api/products", json=CATALOG)


@pytest.fixture
def client(backend):
    return PosBackendClient(BACKEND_URL, transport=httpx.MockTransport(backend))


@pytest.fixture
def products():
    return [Product.model_validate(p) for p in CATALOG]


@pytest.fixture
def session():
    return TerminalSession()


@pytest.fixture
def token_store(tmp_path):
    return TokenStore(str(tmp_path / "token"))


def sign_in(session: TerminalSession, client: PosBackendClient, role: str = "cashier") -> User:
    user = User(id=7, name="Ana Cruz", username="ana", role=role)
    session.user = user
    session.token = "test-token"
    client.token = "test-token"
    return user


@pytest.fixture
def api(session, client, token_store):
    from coffeepos.main import app
    from coffeepos.routes.deps import get_auth_service, get_backend_client, get_session

    app.dependency_overrides[get_session] = lambda: session
    app.dependency_overrides[get_backend_client] = lambda: client
    app.dependency_overrides[get_auth_service] = lambda: AuthService(client, session, token_store)
    yield TestClient(app)
    app.dependency_overrides.clear()
