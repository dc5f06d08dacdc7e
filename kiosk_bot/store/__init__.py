"""
Kiosk state: catalog, cart and the in-flight order behind one KioskStore.
"""

from .cart import CartStore, EmptyCartError, NoActiveOrderError
from .catalog import CatalogError, CatalogStore
from .kiosk import DEFAULT_CATEGORIES, DEFAULT_MENU_ITEMS, KioskStore, default_state
from .menu_lookup import (
    DEFAULT_SYNONYM_FAMILIES,
    MenuLookup,
    SynonymFamily,
    normalize_name,
)
from .models import (
    CartLine,
    Category,
    InvalidStatusTransition,
    KioskMode,
    MenuItem,
    Order,
    OrderStatus,
    PaymentMethod,
    generate_id,
)
from .state import KioskState, reduce

__all__ = [
    "CartStore",
    "EmptyCartError",
    "NoActiveOrderError",
    "CatalogError",
    "CatalogStore",
    "DEFAULT_CATEGORIES",
    "DEFAULT_MENU_ITEMS",
    "KioskStore",
    "default_state",
    "DEFAULT_SYNONYM_FAMILIES",
    "MenuLookup",
    "SynonymFamily",
    "normalize_name",
    "CartLine",
    "Category",
    "InvalidStatusTransition",
    "KioskMode",
    "MenuItem",
    "Order",
    "OrderStatus",
    "PaymentMethod",
    "generate_id",
    "KioskState",
    "reduce",
]
