"""
Menu Lookup Engine.

Name matching shared by the catalog, the cart and the voice pipeline.

Matching rules, in priority order:
1. Id equality
2. Exact name equality (primary or secondary name)
3. Containment: the spoken text is contained in an item name
4. Synonym families: a generic word such as "버거" matches any item whose
   name contains a token of that family

Every comparison is made on normalized text: all whitespace removed and
lowercased, so "치킨 버거" and "Chicken Burger" compare the way customers
expect. Synonym families are a last resort, only reached when no direct name
match exists.
"""

import logging
import re
from dataclasses import dataclass
from typing import Iterable, Sequence

from .models import MenuItem

logger = logging.getLogger(__name__)

_WHITESPACE = re.compile(r"\s+")


@dataclass(frozen=True)
class SynonymFamily:
    """
    A category-level synonym rule.

    `triggers` are words a customer says for the family; `tokens` are the
    substrings that mark a menu item as belonging to it.
    """
    keyword: str
    triggers: tuple[str, ...]
    tokens: tuple[str, ...]


DEFAULT_SYNONYM_FAMILIES: tuple[SynonymFamily, ...] = (
    SynonymFamily(
        keyword="버거",
        triggers=("햄버거", "버거", "burger"),
        tokens=("버거", "burger"),
    ),
    SynonymFamily(
        keyword="감자",
        triggers=("감자", "프라이", "fries"),
        tokens=("감자", "fries"),
    ),
    SynonymFamily(
        keyword="음료",
        triggers=("음료수", "음료", "마실거", "drink", "beverage"),
        tokens=("콜라", "사이다", "음료", "주스", "cola", "drink", "soda", "juice"),
    ),
)


def normalize_name(text: str | None) -> str:
    """Strip all whitespace and lowercase."""
    return _WHITESPACE.sub("", text or "").lower()


def item_names(item: MenuItem) -> list[str]:
    """Normalized primary and secondary names of an item (empty ones dropped)."""
    return [n for n in (normalize_name(item.name), normalize_name(item.name_en)) if n]


class MenuLookup:
    """
    Looks up menu items by id or spoken name within a fixed item list.

    The list is whatever the caller hands in: the whole catalog, only the
    available items, or the items currently in the cart.
    """

    def __init__(
        self,
        items: Iterable[MenuItem],
        synonym_families: Sequence[SynonymFamily] = DEFAULT_SYNONYM_FAMILIES,
    ):
        self._items = list(items)
        self._families = tuple(synonym_families)

    @property
    def items(self) -> list[MenuItem]:
        return list(self._items)

    def exact_match(self, text: str | None) -> MenuItem | None:
        """Item whose primary or secondary name equals `text` after normalization."""
        wanted = normalize_name(text)
        if not wanted:
            return None
        for item in self._items:
            if wanted in item_names(item):
                return item
        return None

    def is_known_name(self, text: str | None) -> bool:
        return self.exact_match(text) is not None

    def partial_matches(self, text: str | None) -> list[MenuItem]:
        """Items whose primary or secondary name contains `text`, in menu order."""
        wanted = normalize_name(text)
        if not wanted:
            return []
        return [
            item for item in self._items
            if any(wanted in name for name in item_names(item))
        ]

    def family_for_entity(self, text: str | None) -> SynonymFamily | None:
        """Family whose trigger word *is* the given entity."""
        wanted = normalize_name(text)
        if not wanted:
            return None
        for family in self._families:
            if wanted == normalize_name(family.keyword) or wanted in (normalize_name(t) for t in family.triggers):
                return family
        return None

    def family_in_text(self, text: str | None) -> SynonymFamily | None:
        """First family whose trigger word appears anywhere in `text`."""
        haystack = normalize_name(text)
        if not haystack:
            return None
        for family in self._families:
            if any(normalize_name(t) in haystack for t in family.triggers):
                return family
        return None

    def family_members(self, family: SynonymFamily) -> list[MenuItem]:
        tokens = [normalize_name(t) for t in family.tokens]
        return [
            item for item in self._items
            if any(token in name for token in tokens for name in item_names(item))
        ]

    def find(self, text: str | None) -> MenuItem | None:
        """
        Find one item by id or name.

        Exact matches win over containment; among several containment hits
        the shortest name (most specific) wins. Synonym families are only
        consulted when nothing matched directly.
        """
        if not text or not text.strip():
            return None

        for item in self._items:
            if item.id == text.strip():
                return item

        exact = self.exact_match(text)
        if exact is not None:
            return exact

        partial = self.partial_matches(text)
        if partial:
            return min(partial, key=lambda i: len(i.name))

        family = self.family_for_entity(text)
        if family is not None:
            members = self.family_members(family)
            if members:
                logger.debug("'%s' matched synonym family '%s'", text, family.keyword)
                return members[0]

        return None
