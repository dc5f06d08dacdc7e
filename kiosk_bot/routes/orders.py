"""
Order Routes for Kiosk Bot
==========================

Checkout and the simulated payment screen.

Endpoints:
----------
- POST /orders: Check out the cart into a pending order
- GET /orders/current: The order on the payment screen
- POST /orders/current/payment: Pay (simulated; takes a few seconds)
- DELETE /orders/current: Close the payment screen

Order Flow:
-----------
    cart --POST /orders--> pending --payment--> completed --DELETE--> (none)

Closing the payment screen frees the order slot whether or not the order
was paid. Nothing is sent to a payment gateway.
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException

from ..context import KioskContext, get_context
from ..payment import PaymentInProgressError
from ..schemas.orders import CheckoutRequest, OrderOut, PaymentRequest, PaymentResponse
from ..store.cart import EmptyCartError, NoActiveOrderError
from ..store.models import Order, PaymentMethod
from .cart import serialize_cart_line


logger = logging.getLogger(__name__)

# Router definition
orders_router = APIRouter(prefix="/orders", tags=["Orders"])


def serialize_order(order: Order) -> OrderOut:
    return OrderOut(
        id=order.id,
        items=[serialize_cart_line(line) for line in order.items],
        total_amount=order.total_amount,
        order_time=order.order_time,
        status=order.status,
        payment_method=order.payment_method,
    )


# =============================================================================
# Order Endpoints
# =============================================================================

@orders_router.post("", response_model=OrderOut, status_code=201)
async def checkout(
    payload: Optional[CheckoutRequest] = None,
    ctx: KioskContext = Depends(get_context),
) -> OrderOut:
    """Snapshot the cart into a pending order and empty the cart."""
    method = payload.payment_method if payload is not None else PaymentMethod.CARD
    try:
        order = ctx.kiosk.cart.create_order(method)
    except EmptyCartError:
        raise HTTPException(status_code=400, detail="Cart is empty")
    return serialize_order(order)


@orders_router.get("/current", response_model=OrderOut)
async def get_current_order(ctx: KioskContext = Depends(get_context)) -> OrderOut:
    order = ctx.kiosk.cart.current_order
    if order is None:
        raise HTTPException(status_code=404, detail="No current order")
    return serialize_order(order)


@orders_router.post("/current/payment", response_model=PaymentResponse)
async def pay_current_order(
    payload: PaymentRequest,
    ctx: KioskContext = Depends(get_context),
) -> PaymentResponse:
    """
    Pay for the current order.

    Responds once the simulated processing time has passed. The client
    shows the completion screen for `auto_close_seconds` and then calls
    DELETE /orders/current.
    """
    try:
        order = await ctx.payment.pay(payload.payment_method)
    except NoActiveOrderError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except PaymentInProgressError as e:
        raise HTTPException(status_code=409, detail=str(e))
    return PaymentResponse(
        order=serialize_order(order),
        auto_close_seconds=ctx.payment.auto_close_seconds,
    )


@orders_router.delete("/current", status_code=204)
async def close_current_order(ctx: KioskContext = Depends(get_context)) -> None:
    ctx.payment.close()
