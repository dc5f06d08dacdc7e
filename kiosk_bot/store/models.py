"""
Pydantic domain models for the kiosk.

The catalog (categories + menu items) is the long-lived data an administrator
maintains. Cart lines and the in-flight order are per-customer session data.

- Category
- MenuItem (references a Category by id)
- CartLine (snapshot of a MenuItem at add time + quantity)
- Order (snapshot of the cart at checkout)
"""

from datetime import datetime, timezone
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class KioskMode(str, Enum):
    """Which screen the kiosk is showing."""
    CUSTOMER = "customer"
    ADMIN = "admin"


class OrderStatus(str, Enum):
    """Order lifecycle. Progression is linear and forward-only."""
    PENDING = "pending"
    PREPARING = "preparing"
    READY = "ready"
    COMPLETED = "completed"


ORDER_STATUS_SEQUENCE = [
    OrderStatus.PENDING,
    OrderStatus.PREPARING,
    OrderStatus.READY,
    OrderStatus.COMPLETED,
]


class PaymentMethod(str, Enum):
    CARD = "card"
    CASH = "cash"
    DIGITAL = "digital"


class InvalidStatusTransition(ValueError):
    """Raised when an order status would move backwards."""


class Category(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    order: int = 0


class MenuItem(BaseModel):
    """A product on the menu. Prices are in the minor currency unit (원)."""
    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    name_en: str | None = None
    description: str = ""
    price: int = Field(ge=0)
    category: str
    available: bool = True
    image: str | None = None


class CartLine(BaseModel):
    """One line in the cart. The menu item is snapshotted, not owned."""
    model_config = ConfigDict(frozen=True)

    menu_item: MenuItem
    quantity: int = Field(gt=0)
    special_instructions: str | None = None

    @property
    def subtotal(self) -> int:
        return self.menu_item.price * self.quantity


class Order(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    items: list[CartLine]
    total_amount: int = Field(ge=0)
    order_time: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    status: OrderStatus = OrderStatus.PENDING
    payment_method: PaymentMethod = PaymentMethod.CARD

    def advance_to(self, status: OrderStatus, payment_method: PaymentMethod | None = None) -> "Order":
        """
        Return a copy of this order moved forward to `status`.

        Staying on the same status is allowed; moving backwards raises
        InvalidStatusTransition.
        """
        current = ORDER_STATUS_SEQUENCE.index(self.status)
        target = ORDER_STATUS_SEQUENCE.index(status)
        if target < current:
            raise InvalidStatusTransition(
                f"Cannot move order {self.id} from {self.status.value} back to {status.value}"
            )
        update: dict = {"status": status}
        if payment_method is not None:
            update["payment_method"] = payment_method
        return self.model_copy(update=update)


_last_generated_id = 0


def generate_id() -> str:
    """
    Kiosk ids are millisecond timestamps, as the admin screen creates them.

    Ids generated within the same millisecond are bumped so they stay unique.
    """
    global _last_generated_id
    candidate = int(datetime.now(timezone.utc).timestamp() * 1000)
    if candidate <= _last_generated_id:
        candidate = _last_generated_id + 1
    _last_generated_id = candidate
    return str(candidate)
