"""
Voice Menu Matcher.

Resolver-facing name matching: deciding whether a spoken entity is a real
menu name, which available items it could mean, and which candidate a
follow-up utterance picked. Built on the catalog's MenuLookup rules so the
voice pipeline and the store agree on what a name means.
"""

import logging

from ..store.catalog import CatalogStore
from ..store.menu_lookup import SynonymFamily, item_names, normalize_name
from ..store.models import MenuItem

logger = logging.getLogger(__name__)


class MenuMatcher:
    """Matches spoken text against the live catalog."""

    def __init__(self, catalog: CatalogStore):
        self._catalog = catalog

    def is_exact_name(self, entity: str | None) -> bool:
        """True if `entity` equals any known item's primary or secondary name."""
        return self._catalog.lookup().is_known_name(entity)

    def mentioned_item(self, transcript: str) -> MenuItem | None:
        """
        The catalog item named in full in the transcript, sold out or not.

        Longest name wins, so "새우버거" is not read as a shorter name it
        contains.
        """
        normalized = normalize_name(transcript)
        if not normalized:
            return None
        best: tuple[int, MenuItem] | None = None
        for item in self._catalog.list_menu_items():
            for n in item_names(item):
                if n in normalized and (best is None or len(n) > best[0]):
                    best = (len(n), item)
        return best[1] if best is not None else None

    def candidates_for(self, entity: str | None) -> list[str]:
        """Names of available items whose name contains `entity`."""
        return [item.name for item in self._catalog.lookup(available_only=True).partial_matches(entity)]

    def family_candidates(self, transcript: str) -> tuple[SynonymFamily, list[str]] | None:
        """
        Synonym-family recovery for an utterance nothing else matched.

        Returns the first family mentioned in the transcript that has at
        least one available member, with the member names.
        """
        lookup = self._catalog.lookup(available_only=True)
        normalized = normalize_name(transcript)
        for family in self._catalog.synonym_families:
            if not any(normalize_name(t) in normalized for t in family.triggers):
                continue
            members = [item.name for item in lookup.family_members(family)]
            if members:
                logger.debug("Family recovery '%s': %s", family.keyword, members)
                return family, members
        return None

    def match_candidate(self, transcript: str, candidates: list[str]) -> str | None:
        """
        Which candidate a follow-up utterance picked, if any.

        Normalized containment of the candidate's primary or secondary name
        in the transcript. When several candidates are contained, the longest
        matching name wins.
        """
        normalized = normalize_name(transcript)
        if not normalized:
            return None
        best: tuple[int, str] | None = None
        for name in candidates:
            item = self._item_named(name)
            names = item_names(item) if item is not None else [normalize_name(name)]
            for n in names:
                if n and n in normalized and (best is None or len(n) > best[0]):
                    best = (len(n), name)
        return best[1] if best is not None else None

    def _item_named(self, name: str) -> MenuItem | None:
        for item in self._catalog.list_menu_items():
            if item.name == name:
                return item
        return None
