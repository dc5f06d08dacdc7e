"""
Cart Routes for Kiosk Bot
=========================

Touch-screen cart operations. Voice ordering mutates the same cart through
the voice resolver; both paths end up in the shared kiosk store.

Endpoints:
----------
- GET /cart: Current cart with item count and total
- POST /cart/items: Add a menu item (merges with an existing line)
- PATCH /cart/items/{menu_item_id}: Set a line's quantity (<= 0 removes it)
- DELETE /cart/items/{menu_item_id}: Remove a line
- DELETE /cart: Empty the cart
"""

import logging

from fastapi import APIRouter, Depends, HTTPException

from ..context import KioskContext, get_context
from ..schemas.cart import CartItemAdd, CartItemUpdate, CartLineOut, CartOut
from ..store.models import CartLine
from .menu import serialize_menu_item


logger = logging.getLogger(__name__)

# Router definition
cart_router = APIRouter(prefix="/cart", tags=["Cart"])


# =============================================================================
# Helper Functions
# =============================================================================

def serialize_cart_line(line: CartLine) -> CartLineOut:
    return CartLineOut(
        menu_item=serialize_menu_item(line.menu_item),
        quantity=line.quantity,
        special_instructions=line.special_instructions,
        subtotal=line.subtotal,
    )


def serialize_cart(ctx: KioskContext) -> CartOut:
    cart = ctx.kiosk.cart
    return CartOut(
        items=[serialize_cart_line(line) for line in cart.lines],
        item_count=cart.item_count(),
        total=cart.subtotal(),
    )


# =============================================================================
# Cart Endpoints
# =============================================================================

@cart_router.get("", response_model=CartOut)
async def get_cart(ctx: KioskContext = Depends(get_context)) -> CartOut:
    return serialize_cart(ctx)


@cart_router.post("/items", response_model=CartOut)
async def add_cart_item(
    payload: CartItemAdd,
    ctx: KioskContext = Depends(get_context),
) -> CartOut:
    """Add a menu item to the cart. Sold-out items are rejected."""
    item = ctx.kiosk.catalog.get_item(payload.menu_item_id)
    if item is None:
        raise HTTPException(status_code=404, detail="Menu item not found")
    if not item.available:
        raise HTTPException(status_code=400, detail=f"{item.name} is sold out")

    ctx.kiosk.cart.add_item(item, payload.quantity, payload.special_instructions)
    return serialize_cart(ctx)


@cart_router.patch("/items/{menu_item_id}", response_model=CartOut)
async def update_cart_item(
    menu_item_id: str,
    payload: CartItemUpdate,
    ctx: KioskContext = Depends(get_context),
) -> CartOut:
    if ctx.kiosk.cart.get_line(menu_item_id) is None:
        raise HTTPException(status_code=404, detail="Item not in cart")
    ctx.kiosk.cart.update_quantity(menu_item_id, payload.quantity)
    return serialize_cart(ctx)


@cart_router.delete("/items/{menu_item_id}", response_model=CartOut)
async def remove_cart_item(
    menu_item_id: str,
    ctx: KioskContext = Depends(get_context),
) -> CartOut:
    if ctx.kiosk.cart.get_line(menu_item_id) is None:
        raise HTTPException(status_code=404, detail="Item not in cart")
    ctx.kiosk.cart.remove_item(menu_item_id)
    return serialize_cart(ctx)


@cart_router.delete("", response_model=CartOut)
async def clear_cart(ctx: KioskContext = Depends(get_context)) -> CartOut:
    ctx.kiosk.cart.clear()
    return serialize_cart(ctx)
