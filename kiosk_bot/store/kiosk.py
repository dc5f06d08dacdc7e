"""
Kiosk Store - the single owner of kiosk state.

All mutations go through `dispatch`. The voice pipeline, the HTTP routes and
the payment flow all hold a reference to the same KioskStore, passed in
explicitly; there is no module-level global state.
"""

import logging
from typing import Callable, Sequence

from .cart import CartStore
from .catalog import CatalogStore
from .menu_lookup import DEFAULT_SYNONYM_FAMILIES, SynonymFamily
from .models import Category, MenuItem
from .state import CATALOG_ACTIONS, Action, KioskState, reduce

logger = logging.getLogger(__name__)


CatalogListener = Callable[[KioskState], None]


DEFAULT_CATEGORIES = [
    Category(id="1", name="메인 메뉴", order=1),
    Category(id="2", name="사이드 메뉴", order=2),
    Category(id="3", name="음료", order=3),
    Category(id="4", name="디저트", order=4),
]

DEFAULT_MENU_ITEMS = [
    MenuItem(
        id="1",
        name="치킨버거",
        name_en="Chicken Burger",
        description="바삭한 치킨 패티와 신선한 야채가 들어간 버거",
        price=8500,
        category="1",
        image="/chicken.png",
    ),
    MenuItem(
        id="2",
        name="비프버거",
        name_en="Beef Burger",
        description="100% 순쇠고기 패티로 만든 클래식 버거",
        price=9500,
        category="1",
        image="/beef.png",
    ),
    MenuItem(
        id="3",
        name="감자튀김",
        name_en="French Fries",
        description="바삭하고 고소한 감자튀김",
        price=3500,
        category="2",
        image="/potato.png",
    ),
    MenuItem(
        id="4",
        name="콜라",
        name_en="Cola",
        description="시원한 탄산음료",
        price=2000,
        category="3",
        image="/cola.png",
    ),
]


def default_state() -> KioskState:
    return KioskState(categories=list(DEFAULT_CATEGORIES), menu_items=list(DEFAULT_MENU_ITEMS))


class KioskStore:
    """
    Holds the current KioskState and applies commands to it.

    Single-writer: commands are applied one at a time, each replacing the
    whole state. Catalog listeners run after every catalog-changing command.
    """

    def __init__(
        self,
        state: KioskState | None = None,
        synonym_families: Sequence[SynonymFamily] = DEFAULT_SYNONYM_FAMILIES,
    ):
        self._state = state if state is not None else default_state()
        self.synonym_families = tuple(synonym_families)
        self._catalog_listeners: list[CatalogListener] = []

    @classmethod
    def from_snapshot(
        cls,
        categories: list[Category] | None,
        menu_items: list[MenuItem] | None,
        synonym_families: Sequence[SynonymFamily] = DEFAULT_SYNONYM_FAMILIES,
    ) -> "KioskStore":
        """
        Build a store from a persisted catalog.

        Missing parts fall back to the defaults. Session state (mode, cart,
        current order, voice mode) always starts fresh.
        """
        base = default_state()
        state = base.model_copy(update={
            "categories": categories if categories is not None else base.categories,
            "menu_items": menu_items if menu_items is not None else base.menu_items,
        })
        return cls(state, synonym_families)

    @property
    def state(self) -> KioskState:
        return self._state

    def subscribe_catalog(self, listener: CatalogListener) -> None:
        self._catalog_listeners.append(listener)

    def dispatch(self, action: Action) -> KioskState:
        """Apply `action` and return the resulting state."""
        self._state = reduce(self._state, action)
        logger.debug("Applied %s", type(action).__name__)

        if isinstance(action, CATALOG_ACTIONS):
            for listener in self._catalog_listeners:
                try:
                    listener(self._state)
                except Exception:
                    # A failing save must not undo an applied command
                    logger.exception("Catalog listener failed after %s", type(action).__name__)
        return self._state

    @property
    def catalog(self) -> CatalogStore:
        return CatalogStore(self)

    @property
    def cart(self) -> CartStore:
        return CartStore(self)

