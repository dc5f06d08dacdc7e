"""
Cart/Order Store.

Cart lines and the in-flight order for the current customer. Session data
only: none of it is persisted.
"""

import logging
from typing import TYPE_CHECKING

from .menu_lookup import MenuLookup
from .models import CartLine, MenuItem, Order, OrderStatus, PaymentMethod, generate_id
from .state import (
    AddToCart,
    ClearCart,
    ClearOrder,
    CompleteOrder,
    CreateOrder,
    RemoveFromCart,
    UpdateCartItem,
)

if TYPE_CHECKING:
    from .kiosk import KioskStore

logger = logging.getLogger(__name__)


class EmptyCartError(ValueError):
    """Raised when checking out with nothing in the cart."""


class NoActiveOrderError(LookupError):
    """Raised when an order operation needs a current order and there is none."""


class CartStore:
    """Cart and order facade over the shared KioskStore."""

    def __init__(self, kiosk: "KioskStore"):
        self._kiosk = kiosk

    @property
    def lines(self) -> list[CartLine]:
        return list(self._kiosk.state.cart)

    @property
    def current_order(self) -> Order | None:
        return self._kiosk.state.current_order

    def get_line(self, menu_item_id: str) -> CartLine | None:
        for line in self._kiosk.state.cart:
            if line.menu_item.id == menu_item_id:
                return line
        return None

    def find_line(self, text: str | None) -> CartLine | None:
        """Cart line whose item matches `text` by id or name, using catalog matching rules."""
        lookup = MenuLookup(
            [line.menu_item for line in self._kiosk.state.cart],
            self._kiosk.synonym_families,
        )
        item = lookup.find(text)
        return self.get_line(item.id) if item is not None else None

    def item_count(self) -> int:
        """Total number of units across all lines."""
        return sum(line.quantity for line in self._kiosk.state.cart)

    def subtotal(self) -> int:
        return sum(line.subtotal for line in self._kiosk.state.cart)

    # ------------------------------------------------------------------
    # Cart mutations
    # ------------------------------------------------------------------

    def add_item(
        self,
        item: MenuItem,
        quantity: int = 1,
        special_instructions: str | None = None,
    ) -> None:
        """Add to the cart, merging into an existing line for the same item."""
        self._kiosk.dispatch(AddToCart(item, quantity, special_instructions))
        logger.debug("Cart: +%d %s", quantity, item.name)

    def update_quantity(self, menu_item_id: str, quantity: int) -> None:
        """Set a line's quantity; zero or less removes the line."""
        self._kiosk.dispatch(UpdateCartItem(menu_item_id, quantity))

    def remove_item(self, menu_item_id: str) -> None:
        self._kiosk.dispatch(RemoveFromCart(menu_item_id))

    def clear(self) -> None:
        self._kiosk.dispatch(ClearCart())

    # ------------------------------------------------------------------
    # Orders
    # ------------------------------------------------------------------

    def create_order(self, payment_method: PaymentMethod = PaymentMethod.CARD) -> Order:
        """
        Check out: snapshot the cart into a pending order and clear the cart.

        Raises EmptyCartError if the cart is empty; no order is created then.
        """
        lines = self.lines
        if not lines:
            raise EmptyCartError("Cart is empty")

        order = Order(
            id=generate_id(),
            items=lines,
            total_amount=sum(line.subtotal for line in lines),
            status=OrderStatus.PENDING,
            payment_method=payment_method,
        )
        self._kiosk.dispatch(CreateOrder(order))
        logger.info("Order %s created: %d lines, total %d", order.id, len(lines), order.total_amount)
        return order

    def complete_order(self, payment_method: PaymentMethod) -> Order:
        if self.current_order is None:
            raise NoActiveOrderError("No current order")
        state = self._kiosk.dispatch(CompleteOrder(payment_method))
        logger.info("Order %s completed (%s)", state.current_order.id, payment_method.value)
        return state.current_order

    def clear_order(self) -> None:
        """Drop the current order reference, paid or not."""
        self._kiosk.dispatch(ClearOrder())
