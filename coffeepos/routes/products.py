"""Product administration routes"""

from fastapi import APIRouter, Depends

from ..core.errors import Forbidden, PosError
from ..core.security import can_access
from ..core.session import TerminalSession
from ..models.product import Product, ProductInput, StockAdjustment
from ..services.backend_client import PosBackendClient
from ..services.order_entry import OrderEntry
from .deps import get_backend_client, get_order_entry, http_error, require_screen

router = APIRouter(prefix="/api/products", tags=["Products"])

screen = require_screen("products")


def _require_admin(session: TerminalSession) -> None:
    if not can_access("manage_products", session.role):
        raise http_error(session, Forbidden(session.role))


@router.get("", response_model=list[Product])
async def list_products(
    session: TerminalSession = Depends(screen),
    order_entry: OrderEntry = Depends(get_order_entry),
):
    try:
        return await order_entry.fetch_products()
    except PosError as e:
        raise http_error(session, e)


@router.post("", response_model=list[Product])
async def create_product(
    product: ProductInput,
    session: TerminalSession = Depends(screen),
    client: PosBackendClient = Depends(get_backend_client),
    order_entry: OrderEntry = Depends(get_order_entry),
):
    """Create a product; answers with the refreshed catalog"""
    _require_admin(session)
    try:
        await client.create_product(product)
        return await order_entry.fetch_products()
    except PosError as e:
        raise http_error(session, e)


@router.put("/{product_id}", response_model=list[Product])
async def update_product(
    product_id: int,
    product: ProductInput,
    session: TerminalSession = Depends(screen),
    client: PosBackendClient = Depends(get_backend_client),
    order_entry: OrderEntry = Depends(get_order_entry),
):
    _require_admin(session)
    try:
        await client.update_product(product_id, product)
        return await order_entry.fetch_products()
    except PosError as e:
        raise http_error(session, e)


@router.delete("/{product_id}", response_model=list[Product])
async def delete_product(
    product_id: int,
    session: TerminalSession = Depends(screen),
    client: PosBackendClient = Depends(get_backend_client),
    order_entry: OrderEntry = Depends(get_order_entry),
):
    _require_admin(session)
    try:
        await client.delete_product(product_id)
        return await order_entry.fetch_products()
    except PosError as e:
        raise http_error(session, e)


@router.patch("/{product_id}/stock", response_model=list[Product])
async def adjust_stock(
    product_id: int,
    adjustment: StockAdjustment,
    session: TerminalSession = Depends(screen),
    client: PosBackendClient = Depends(get_backend_client),
    order_entry: OrderEntry = Depends(get_order_entry),
):
    """Quick +/- stock adjustment"""
    _require_admin(session)
    try:
        await client.adjust_stock(product_id, adjustment)
        return await order_entry.fetch_products()
    except PosError as e:
        raise http_error(session, e)
