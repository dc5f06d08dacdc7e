"""
Catalog Store.

Read and write access to categories and menu items. The catalog is the
source of truth for availability; the cart only snapshots items.
"""

import logging
from typing import TYPE_CHECKING

from .menu_lookup import MenuLookup, SynonymFamily
from .models import Category, MenuItem
from .state import (
    AddCategory,
    AddMenuItem,
    DeleteCategory,
    DeleteMenuItem,
    UpdateCategory,
    UpdateMenuItem,
)

if TYPE_CHECKING:
    from .kiosk import KioskStore

logger = logging.getLogger(__name__)


class CatalogError(LookupError):
    """Raised when a category or menu item id does not exist."""


class CatalogStore:
    """Catalog facade over the shared KioskStore."""

    def __init__(self, kiosk: "KioskStore"):
        self._kiosk = kiosk

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    def list_categories(self) -> list[Category]:
        """Categories by display order, then id. Equal keys keep insertion order."""
        return sorted(self._kiosk.state.categories, key=lambda c: (c.order, c.id))

    def list_menu_items(
        self,
        category_id: str | None = None,
        available_only: bool = False,
    ) -> list[MenuItem]:
        items = self._kiosk.state.menu_items
        if category_id is not None:
            items = [i for i in items if i.category == category_id]
        if available_only:
            items = [i for i in items if i.available]
        return list(items)

    def available_items(self) -> list[MenuItem]:
        return self.list_menu_items(available_only=True)

    def get_item(self, item_id: str) -> MenuItem | None:
        for item in self._kiosk.state.menu_items:
            if item.id == item_id:
                return item
        return None

    def get_category(self, category_id: str) -> Category | None:
        for category in self._kiosk.state.categories:
            if category.id == category_id:
                return category
        return None

    @property
    def synonym_families(self) -> tuple[SynonymFamily, ...]:
        return self._kiosk.synonym_families

    def lookup(self, available_only: bool = False) -> MenuLookup:
        return MenuLookup(
            self.list_menu_items(available_only=available_only),
            self.synonym_families,
        )

    def find_by_id_or_name(self, text: str | None) -> MenuItem | None:
        return self.lookup().find(text)

    # ------------------------------------------------------------------
    # Menu item mutations
    # ------------------------------------------------------------------

    def add_item(self, item: MenuItem) -> MenuItem:
        if self.get_category(item.category) is None:
            raise CatalogError(f"Category {item.category} not found")
        self._kiosk.dispatch(AddMenuItem(item))
        logger.info("Menu item added: %s (%s)", item.name, item.id)
        return item

    def update_item(self, item: MenuItem) -> MenuItem:
        if self.get_item(item.id) is None:
            raise CatalogError(f"Menu item {item.id} not found")
        if self.get_category(item.category) is None:
            raise CatalogError(f"Category {item.category} not found")
        self._kiosk.dispatch(UpdateMenuItem(item))
        logger.info("Menu item updated: %s (%s)", item.name, item.id)
        return item

    def set_availability(self, item_id: str, available: bool) -> MenuItem:
        item = self.get_item(item_id)
        if item is None:
            raise CatalogError(f"Menu item {item_id} not found")
        return self.update_item(item.model_copy(update={"available": available}))

    def delete_item(self, item_id: str) -> None:
        if self.get_item(item_id) is None:
            raise CatalogError(f"Menu item {item_id} not found")
        self._kiosk.dispatch(DeleteMenuItem(item_id))
        logger.info("Menu item deleted: %s", item_id)

    # ------------------------------------------------------------------
    # Category mutations
    # ------------------------------------------------------------------

    def add_category(self, category: Category) -> Category:
        self._kiosk.dispatch(AddCategory(category))
        logger.info("Category added: %s (%s)", category.name, category.id)
        return category

    def update_category(self, category: Category) -> Category:
        if self.get_category(category.id) is None:
            raise CatalogError(f"Category {category.id} not found")
        self._kiosk.dispatch(UpdateCategory(category))
        return category

    def delete_category(self, category_id: str) -> list[str]:
        """
        Delete a category and every menu item in it.

        Returns the ids of the menu items removed by the cascade.
        """
        if self.get_category(category_id) is None:
            raise CatalogError(f"Category {category_id} not found")
        removed = [i.id for i in self.list_menu_items(category_id=category_id)]
        self._kiosk.dispatch(DeleteCategory(category_id))
        logger.info("Category %s deleted, cascaded to %d menu items", category_id, len(removed))
        return removed
