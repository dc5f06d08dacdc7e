"""
Catalog persistence.

The catalog (categories + menu items) is saved as one JSON document under a
single namespaced key:

    {"categories": [...], "menuItems": [...]}

Session state (mode, cart, current order, voice-mode flag) is never written.
A missing or unreadable document means the built-in defaults are used.
"""

import json
import logging
from typing import Callable

from pydantic import TypeAdapter, ValidationError
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from .config import STORAGE_KEY
from .models import KeyValueEntry
from .store.kiosk import KioskStore
from .store.models import Category, MenuItem
from .store.state import KioskState

logger = logging.getLogger(__name__)

_categories_adapter = TypeAdapter(list[Category])
_menu_items_adapter = TypeAdapter(list[MenuItem])


class CatalogRepository:
    """Loads and saves the catalog snapshot through a SQLAlchemy session factory."""

    def __init__(self, session_factory: Callable[[], Session], key: str = STORAGE_KEY):
        self._session_factory = session_factory
        self.key = key

    def load(self) -> tuple[list[Category] | None, list[MenuItem] | None]:
        """
        Read the saved catalog.

        Returns (None, None) when nothing is saved or the document cannot be
        read; a part missing from the document comes back as None.
        """
        try:
            with self._session_factory() as db:
                entry = db.get(KeyValueEntry, self.key)
                raw = entry.value if entry is not None else None
        except SQLAlchemyError as e:
            logger.warning("Failed to read saved catalog: %s", e)
            return None, None

        if raw is None:
            logger.info("No saved catalog under '%s'; using defaults", self.key)
            return None, None

        try:
            data = json.loads(raw)
            categories = data.get("categories")
            menu_items = data.get("menuItems")
            return (
                _categories_adapter.validate_python(categories) if categories is not None else None,
                _menu_items_adapter.validate_python(menu_items) if menu_items is not None else None,
            )
        except (ValueError, AttributeError, ValidationError) as e:
            logger.warning("Saved catalog under '%s' is unreadable; using defaults: %s", self.key, e)
            return None, None

    def save(self, state: KioskState) -> None:
        """Write the catalog part of `state`."""
        document = json.dumps(
            {
                "categories": _categories_adapter.dump_python(state.categories, mode="json"),
                "menuItems": _menu_items_adapter.dump_python(state.menu_items, mode="json"),
            },
            ensure_ascii=False,
        )
        with self._session_factory() as db:
            entry = db.get(KeyValueEntry, self.key)
            if entry is None:
                db.add(KeyValueEntry(key=self.key, value=document))
            else:
                entry.value = document
            db.commit()
        logger.debug("Catalog saved under '%s' (%d items)", self.key, len(state.menu_items))

    def load_store(self) -> KioskStore:
        """Build a KioskStore from the saved catalog and keep it saved on every catalog change."""
        categories, menu_items = self.load()
        kiosk = KioskStore.from_snapshot(categories, menu_items)
        kiosk.subscribe_catalog(self.save)
        return kiosk
