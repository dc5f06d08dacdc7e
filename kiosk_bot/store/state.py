"""
Kiosk State and Commands.

The whole kiosk is one immutable KioskState value. Every mutation is expressed
as a command object and applied by `reduce`, which returns a brand-new state.
Nothing is edited in place, so a reader holding the previous state never sees
a half-applied change.
"""

from dataclasses import dataclass
from typing import Union

from pydantic import BaseModel, ConfigDict, Field

from .models import (
    CartLine,
    Category,
    KioskMode,
    MenuItem,
    Order,
    OrderStatus,
    PaymentMethod,
)


class KioskState(BaseModel):
    model_config = ConfigDict(frozen=True)

    mode: KioskMode = KioskMode.CUSTOMER
    categories: list[Category] = Field(default_factory=list)
    menu_items: list[MenuItem] = Field(default_factory=list)
    cart: list[CartLine] = Field(default_factory=list)
    current_order: Order | None = None
    is_voice_mode: bool = False


# =============================================================================
# Commands
# =============================================================================

@dataclass(frozen=True)
class AddMenuItem:
    item: MenuItem


@dataclass(frozen=True)
class UpdateMenuItem:
    item: MenuItem


@dataclass(frozen=True)
class DeleteMenuItem:
    item_id: str


@dataclass(frozen=True)
class AddCategory:
    category: Category


@dataclass(frozen=True)
class UpdateCategory:
    category: Category


@dataclass(frozen=True)
class DeleteCategory:
    category_id: str


@dataclass(frozen=True)
class AddToCart:
    menu_item: MenuItem
    quantity: int
    special_instructions: str | None = None


@dataclass(frozen=True)
class RemoveFromCart:
    menu_item_id: str


@dataclass(frozen=True)
class UpdateCartItem:
    menu_item_id: str
    quantity: int


@dataclass(frozen=True)
class ClearCart:
    pass


@dataclass(frozen=True)
class SetMode:
    mode: KioskMode


@dataclass(frozen=True)
class SetVoiceMode:
    enabled: bool


@dataclass(frozen=True)
class CreateOrder:
    order: Order


@dataclass(frozen=True)
class ClearOrder:
    pass


@dataclass(frozen=True)
class CompleteOrder:
    payment_method: PaymentMethod


Action = Union[
    AddMenuItem,
    UpdateMenuItem,
    DeleteMenuItem,
    AddCategory,
    UpdateCategory,
    DeleteCategory,
    AddToCart,
    RemoveFromCart,
    UpdateCartItem,
    ClearCart,
    SetMode,
    SetVoiceMode,
    CreateOrder,
    ClearOrder,
    CompleteOrder,
]

# Actions after which the catalog snapshot must be persisted
CATALOG_ACTIONS = (
    AddMenuItem,
    UpdateMenuItem,
    DeleteMenuItem,
    AddCategory,
    UpdateCategory,
    DeleteCategory,
)


# =============================================================================
# Reducer
# =============================================================================

def _upsert(items: list, new_item) -> list:
    replaced = False
    result = []
    for existing in items:
        if existing.id == new_item.id:
            result.append(new_item)
            replaced = True
        else:
            result.append(existing)
    if not replaced:
        result.append(new_item)
    return result


def _add_to_cart(cart: list[CartLine], action: AddToCart) -> list[CartLine]:
    if action.quantity <= 0:
        return cart
    result = []
    merged = False
    for line in cart:
        if line.menu_item.id == action.menu_item.id:
            result.append(line.model_copy(update={"quantity": line.quantity + action.quantity}))
            merged = True
        else:
            result.append(line)
    if not merged:
        result.append(CartLine(
            menu_item=action.menu_item,
            quantity=action.quantity,
            special_instructions=action.special_instructions,
        ))
    return result


def _update_cart_item(cart: list[CartLine], action: UpdateCartItem) -> list[CartLine]:
    # Non-positive quantity means the line goes away
    if action.quantity <= 0:
        return [line for line in cart if line.menu_item.id != action.menu_item_id]
    return [
        line.model_copy(update={"quantity": action.quantity})
        if line.menu_item.id == action.menu_item_id else line
        for line in cart
    ]


def reduce(state: KioskState, action: Action) -> KioskState:
    """Apply one command and return the next state."""
    if isinstance(action, (AddMenuItem, UpdateMenuItem)):
        return state.model_copy(update={"menu_items": _upsert(state.menu_items, action.item)})

    if isinstance(action, DeleteMenuItem):
        return state.model_copy(update={
            "menu_items": [i for i in state.menu_items if i.id != action.item_id],
        })

    if isinstance(action, (AddCategory, UpdateCategory)):
        return state.model_copy(update={"categories": _upsert(state.categories, action.category)})

    if isinstance(action, DeleteCategory):
        # Cascades: every menu item in the category is deleted with it
        return state.model_copy(update={
            "categories": [c for c in state.categories if c.id != action.category_id],
            "menu_items": [i for i in state.menu_items if i.category != action.category_id],
        })

    if isinstance(action, AddToCart):
        return state.model_copy(update={"cart": _add_to_cart(state.cart, action)})

    if isinstance(action, RemoveFromCart):
        return state.model_copy(update={
            "cart": [line for line in state.cart if line.menu_item.id != action.menu_item_id],
        })

    if isinstance(action, UpdateCartItem):
        return state.model_copy(update={"cart": _update_cart_item(state.cart, action)})

    if isinstance(action, ClearCart):
        return state.model_copy(update={"cart": []})

    if isinstance(action, SetMode):
        return state.model_copy(update={"mode": action.mode})

    if isinstance(action, SetVoiceMode):
        return state.model_copy(update={"is_voice_mode": action.enabled})

    if isinstance(action, CreateOrder):
        return state.model_copy(update={"current_order": action.order, "cart": []})

    if isinstance(action, ClearOrder):
        return state.model_copy(update={"current_order": None})

    if isinstance(action, CompleteOrder):
        if state.current_order is None:
            return state
        completed = state.current_order.advance_to(OrderStatus.COMPLETED, action.payment_method)
        return state.model_copy(update={"current_order": completed})

    raise TypeError(f"Unknown kiosk action: {type(action).__name__}")
