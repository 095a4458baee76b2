"""Order-entry (POS) routes"""

from typing import Optional

from fastapi import APIRouter, Depends, Query

from ..core.config import settings
from ..core.errors import PosError
from ..core.session import TerminalSession
from ..models.product import Product
from ..models.cart import (
    AddToCartRequest,
    CartLineView,
    CartView,
    CheckoutRequest,
    PaymentSelection,
    UpdateCartItemRequest,
)
from ..services.formatting import money
from ..services.order_entry import OrderEntry, stock_status
from .deps import get_order_entry, http_error, require_screen

router = APIRouter(prefix="/api/pos", tags=["POS"])

screen = require_screen("pos")


def _product_row(session: TerminalSession, product: Product) -> dict:
    level, label = stock_status(product.stock, settings.low_stock_threshold)
    return {
        **product.model_dump(mode="json"),
        "stock_level": level,
        "stock_label": label,
        "in_cart": session.cart.quantity_of(product.id),
    }


def cart_view(session: TerminalSession) -> CartView:
    cart = session.cart
    total = cart.compute_total()
    return CartView(
        lines=[
            CartLineView(
                product_id=line.product_id,
                name=line.name,
                unit_price=line.unit_price,
                quantity=line.quantity,
                subtotal=line.subtotal,
            )
            for line in cart.lines
        ],
        item_count=cart.item_count,
        total=total,
        total_display=money(total),
        payment_method=session.payment_method.value,
        reference_no=session.reference_no,
    )


@router.get("/products")
async def list_products(
    category: Optional[str] = Query(None),
    session: TerminalSession = Depends(screen),
    order_entry: OrderEntry = Depends(get_order_entry),
):
    """Fetch the catalog and show it filtered by category"""
    try:
        await order_entry.fetch_products()
    except PosError as e:
        raise http_error(session, e)

    products = order_entry.visible_products(category)
    return {
        "categories": order_entry.categories(),
        "active_category": session.active_category,
        "products": [_product_row(session, product) for product in products],
    }


@router.get("/cart", response_model=CartView)
async def get_cart(session: TerminalSession = Depends(screen)):
    return cart_view(session)


@router.post("/cart/items")
async def add_to_cart(
    request: AddToCartRequest,
    session: TerminalSession = Depends(screen),
    order_entry: OrderEntry = Depends(get_order_entry),
):
    """Add one unit; answers with a success or low-stock notice"""
    try:
        notice = order_entry.add_to_cart(request.product_id)
    except PosError as e:
        raise http_error(session, e)
    return {"notice": notice.to_dict(), "cart": cart_view(session)}


@router.put("/cart/items/{product_id}", response_model=CartView)
async def update_cart_item(
    product_id: int,
    request: UpdateCartItemRequest,
    session: TerminalSession = Depends(screen),
    order_entry: OrderEntry = Depends(get_order_entry),
):
    """Set a line's quantity; below 1 removes the line"""
    try:
        order_entry.update_quantity(product_id, request.quantity)
    except PosError as e:
        raise http_error(session, e)
    return cart_view(session)


@router.post("/cart/items/{product_id}/increment", response_model=CartView)
async def increment_cart_item(
    product_id: int,
    session: TerminalSession = Depends(screen),
    order_entry: OrderEntry = Depends(get_order_entry),
):
    try:
        order_entry.increment(product_id)
    except PosError as e:
        raise http_error(session, e)
    return cart_view(session)


@router.post("/cart/items/{product_id}/decrement", response_model=CartView)
async def decrement_cart_item(
    product_id: int,
    session: TerminalSession = Depends(screen),
    order_entry: OrderEntry = Depends(get_order_entry),
):
    try:
        order_entry.decrement(product_id)
    except PosError as e:
        raise http_error(session, e)
    return cart_view(session)


@router.delete("/cart/items/{product_id}", response_model=CartView)
async def remove_cart_item(
    product_id: int,
    session: TerminalSession = Depends(screen),
    order_entry: OrderEntry = Depends(get_order_entry),
):
    order_entry.remove_line(product_id)
    return cart_view(session)


@router.delete("/cart", response_model=CartView)
async def clear_cart(
    session: TerminalSession = Depends(screen),
    order_entry: OrderEntry = Depends(get_order_entry),
):
    order_entry.clear_cart()
    return cart_view(session)


@router.put("/payment", response_model=CartView)
async def select_payment(
    request: PaymentSelection,
    session: TerminalSession = Depends(screen),
    order_entry: OrderEntry = Depends(get_order_entry),
):
    try:
        order_entry.select_payment(request.payment_method, request.reference_no)
    except PosError as e:
        raise http_error(session, e)
    return cart_view(session)


@router.post("/checkout")
async def checkout(
    request: CheckoutRequest,
    session: TerminalSession = Depends(screen),
    order_entry: OrderEntry = Depends(get_order_entry),
):
    """Submit the cart as a sale"""
    try:
        sale = await order_entry.submit_checkout(request.payment_method, request.reference_no)
    except PosError as e:
        raise http_error(session, e)
    return {"sale": sale, "cart": cart_view(session)}
