"""
Simulated payment flow.

No payment gateway is contacted. Paying waits a fixed processing time and
then marks the current order completed with the chosen method. Closing the
payment screen frees the order slot for the next customer, paid or not.
"""

import asyncio
import logging

from .config import PAYMENT_AUTO_CLOSE_SECONDS, PAYMENT_SIMULATION_SECONDS
from .store.cart import NoActiveOrderError
from .store.kiosk import KioskStore
from .store.models import Order, OrderStatus, PaymentMethod

logger = logging.getLogger(__name__)


class PaymentInProgressError(RuntimeError):
    """Raised when a second payment starts while one is processing."""


class PaymentService:
    def __init__(
        self,
        kiosk: KioskStore,
        processing_seconds: float = PAYMENT_SIMULATION_SECONDS,
        auto_close_seconds: float = PAYMENT_AUTO_CLOSE_SECONDS,
    ):
        self._kiosk = kiosk
        self.processing_seconds = processing_seconds
        self.auto_close_seconds = auto_close_seconds
        self._processing = False

    @property
    def is_processing(self) -> bool:
        return self._processing

    async def pay(self, method: PaymentMethod) -> Order:
        """
        Simulate paying for the current order.

        Raises NoActiveOrderError if there is no order, PaymentInProgressError
        if a payment is already being processed.
        """
        order = self._kiosk.cart.current_order
        if order is None:
            raise NoActiveOrderError("No order to pay for")
        if order.status == OrderStatus.COMPLETED:
            return order
        if self._processing:
            raise PaymentInProgressError(f"Payment for order {order.id} already in progress")

        self._processing = True
        logger.info("Processing %s payment for order %s (%d원)", method.value, order.id, order.total_amount)
        try:
            await asyncio.sleep(self.processing_seconds)
            if self._kiosk.cart.current_order is None:
                # Closed while processing
                raise NoActiveOrderError(f"Order {order.id} was closed during payment")
            return self._kiosk.cart.complete_order(method)
        finally:
            self._processing = False

    def close(self) -> None:
        """Leave the payment screen; the order slot is freed regardless of outcome."""
        order = self._kiosk.cart.current_order
        if order is not None:
            logger.info("Closing order %s (%s)", order.id, order.status.value)
        self._kiosk.cart.clear_order()
