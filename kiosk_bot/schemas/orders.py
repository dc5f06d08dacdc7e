"""
Order Schemas for Kiosk Bot
===========================

Checkout, current order and simulated payment models.
"""

from datetime import datetime

from pydantic import BaseModel

from ..store.models import OrderStatus, PaymentMethod
from .cart import CartLineOut


class OrderOut(BaseModel):
    id: str
    items: list[CartLineOut]
    total_amount: int
    order_time: datetime
    status: OrderStatus
    payment_method: PaymentMethod


class CheckoutRequest(BaseModel):
    payment_method: PaymentMethod = PaymentMethod.CARD


class PaymentRequest(BaseModel):
    payment_method: PaymentMethod


class PaymentResponse(BaseModel):
    order: OrderOut
    auto_close_seconds: float
