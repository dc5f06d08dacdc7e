"""
Tests for the catalog store and the shared menu lookup rules.
"""
import pytest

from kiosk_bot.store.catalog import CatalogError
from kiosk_bot.store.kiosk import KioskStore
from kiosk_bot.store.menu_lookup import MenuLookup, SynonymFamily, normalize_name
from kiosk_bot.store.models import Category, MenuItem


class TestCatalogReads:

    def test_categories_sorted_by_order_then_id(self, kiosk):
        kiosk.catalog.add_category(Category(id="0", name="추천", order=2))
        ids = [c.id for c in kiosk.catalog.list_categories()]
        assert ids == ["1", "0", "2", "3", "4"]

    def test_list_by_category_and_availability(self, kiosk):
        kiosk.catalog.set_availability("2", False)
        assert [i.id for i in kiosk.catalog.list_menu_items(category_id="1")] == ["1", "2"]
        assert [i.id for i in kiosk.catalog.list_menu_items(category_id="1", available_only=True)] == ["1"]
        assert "2" not in [i.id for i in kiosk.catalog.available_items()]


class TestCatalogMutations:

    def test_add_item_requires_category(self, kiosk):
        with pytest.raises(CatalogError):
            kiosk.catalog.add_item(MenuItem(id="9", name="팥빙수", price=6000, category="99"))

    def test_update_keeps_id(self, kiosk):
        item = kiosk.catalog.get_item("3")
        kiosk.catalog.update_item(item.model_copy(update={"price": 3800}))
        assert kiosk.catalog.get_item("3").price == 3800
        assert len(kiosk.state.menu_items) == 4

    def test_update_unknown_item_raises(self, kiosk):
        with pytest.raises(CatalogError):
            kiosk.catalog.update_item(MenuItem(id="404", name="없음", price=1, category="1"))

    def test_delete_unknown_item_raises(self, kiosk):
        with pytest.raises(CatalogError):
            kiosk.catalog.delete_item("404")

    def test_delete_category_returns_removed_items(self, kiosk):
        removed = kiosk.catalog.delete_category("1")
        assert removed == ["1", "2"]
        assert kiosk.catalog.get_category("1") is None
        assert kiosk.catalog.get_item("1") is None

    def test_sold_out_item_still_in_catalog(self, kiosk):
        kiosk.catalog.set_availability("4", False)
        assert kiosk.catalog.get_item("4").available is False


class TestFindByIdOrName:

    def test_by_id(self, kiosk):
        assert kiosk.catalog.find_by_id_or_name("3").name == "감자튀김"

    def test_exact_primary_name(self, kiosk):
        assert kiosk.catalog.find_by_id_or_name("콜라").id == "4"

    def test_english_name_ignores_case_and_spaces(self, kiosk):
        assert kiosk.catalog.find_by_id_or_name("chicken burger").id == "1"
        assert kiosk.catalog.find_by_id_or_name("FrenchFries").id == "3"

    def test_spaced_korean_name(self, kiosk):
        assert kiosk.catalog.find_by_id_or_name("감자 튀김").id == "3"

    def test_containment_prefers_shortest_name(self, kiosk):
        kiosk.catalog.add_item(MenuItem(id="8", name="치킨버거세트", price=11000, category="1"))
        assert kiosk.catalog.find_by_id_or_name("치킨").id == "1"

    def test_synonym_family_last_resort(self, kiosk):
        # "음료수" is in no item name; the beverage family maps it to 콜라
        assert kiosk.catalog.find_by_id_or_name("음료수").name == "콜라"

    def test_unknown_name(self, kiosk):
        assert kiosk.catalog.find_by_id_or_name("피자") is None
        assert kiosk.catalog.find_by_id_or_name("") is None
        assert kiosk.catalog.find_by_id_or_name(None) is None

    def test_injected_synonym_families(self):
        families = (SynonymFamily(keyword="디저트", triggers=("달달한거",), tokens=("아이스크림",)),)
        store = KioskStore(synonym_families=families)
        store.catalog.add_item(MenuItem(id="9", name="아이스크림", price=2500, category="4"))
        assert store.catalog.find_by_id_or_name("달달한거").id == "9"
        # The default beverage family is not configured here
        assert store.catalog.find_by_id_or_name("음료수") is None


class TestMenuLookup:

    def test_normalize_name(self):
        assert normalize_name("  Chicken \t Burger ") == "chickenburger"
        assert normalize_name(None) == ""

    def test_partial_matches_in_menu_order(self, burger_kiosk):
        lookup = MenuLookup(burger_kiosk.catalog.list_menu_items())
        assert [i.name for i in lookup.partial_matches("버거")] == ["치킨버거", "비프버거", "새우버거"]

    def test_family_in_text(self, kiosk):
        lookup = kiosk.catalog.lookup()
        assert lookup.family_in_text("햄버거 하나 주세요").keyword == "버거"
        assert lookup.family_in_text("아무거나") is None

    def test_family_members(self, kiosk):
        lookup = kiosk.catalog.lookup()
        family = lookup.family_for_entity("fries")
        assert [i.name for i in lookup.family_members(family)] == ["감자튀김"]
