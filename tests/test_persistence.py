"""
Tests for catalog persistence through the key-value table.
"""
import json

from kiosk_bot.models import KeyValueEntry
from kiosk_bot.persistence import CatalogRepository
from kiosk_bot.store.models import Category, MenuItem


def _stored(session_factory, key):
    with session_factory() as db:
        entry = db.get(KeyValueEntry, key)
        return json.loads(entry.value) if entry is not None else None


class TestCatalogRepository:

    def test_nothing_saved_uses_defaults(self, session_factory):
        repo = CatalogRepository(session_factory, key="test-kiosk")
        assert repo.load() == (None, None)

        kiosk = repo.load_store()
        assert len(kiosk.state.menu_items) == 4

    def test_catalog_change_is_saved(self, session_factory):
        repo = CatalogRepository(session_factory, key="test-kiosk")
        kiosk = repo.load_store()

        kiosk.catalog.add_item(MenuItem(id="9", name="새우버거", price=9000, category="1"))

        document = _stored(session_factory, "test-kiosk")
        assert set(document) == {"categories", "menuItems"}
        assert [i["id"] for i in document["menuItems"]] == ["1", "2", "3", "4", "9"]
        assert len(document["categories"]) == 4

    def test_session_state_never_saved(self, session_factory):
        repo = CatalogRepository(session_factory, key="test-kiosk")
        kiosk = repo.load_store()

        kiosk.cart.add_item(kiosk.catalog.get_item("1"))
        assert _stored(session_factory, "test-kiosk") is None

        kiosk.catalog.set_availability("4", False)
        document = _stored(session_factory, "test-kiosk")
        assert "cart" not in document
        assert "is_voice_mode" not in document

    def test_round_trip_through_new_store(self, session_factory):
        repo = CatalogRepository(session_factory, key="test-kiosk")
        kiosk = repo.load_store()
        kiosk.catalog.add_category(Category(id="5", name="세트 메뉴", order=5))
        kiosk.catalog.set_availability("4", False)
        kiosk.cart.add_item(kiosk.catalog.get_item("1"))

        reloaded = CatalogRepository(session_factory, key="test-kiosk").load_store()

        assert reloaded.catalog.get_category("5").name == "세트 메뉴"
        assert reloaded.catalog.get_item("4").available is False
        assert reloaded.state.cart == []

    def test_partial_document(self, session_factory):
        with session_factory() as db:
            db.add(KeyValueEntry(key="test-kiosk", value=json.dumps({
                "menuItems": [{"id": "7", "name": "김밥", "price": 3000, "category": "1"}],
            })))
            db.commit()

        categories, items = CatalogRepository(session_factory, key="test-kiosk").load()
        assert categories is None
        assert [i.name for i in items] == ["김밥"]

    def test_corrupt_document_falls_back(self, session_factory, caplog):
        with session_factory() as db:
            db.add(KeyValueEntry(key="test-kiosk", value="{not json"))
            db.commit()

        repo = CatalogRepository(session_factory, key="test-kiosk")
        assert repo.load() == (None, None)
        assert "unreadable" in caplog.text
        assert len(repo.load_store().state.menu_items) == 4

    def test_invalid_items_fall_back(self, session_factory):
        with session_factory() as db:
            db.add(KeyValueEntry(key="test-kiosk", value=json.dumps({
                "menuItems": [{"id": "7", "name": "김밥", "price": -1, "category": "1"}],
            })))
            db.commit()

        assert CatalogRepository(session_factory, key="test-kiosk").load() == (None, None)
