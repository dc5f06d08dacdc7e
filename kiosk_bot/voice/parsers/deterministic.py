"""
Deterministic Parsing Functions (no LLM).

This module contains the keyword classifier used when the remote classifier
is unavailable, fails, or is not confident. It is fast, needs no network and
always gives the same answer for the same transcript and menu.
"""

import logging
from typing import Sequence

from ...store.menu_lookup import (
    DEFAULT_SYNONYM_FAMILIES,
    SynonymFamily,
    normalize_name,
)
from ...store.models import MenuItem
from ..schemas import VoiceCommand, VoiceIntent
from .constants import (
    ADD_TRIGGERS,
    CHECKOUT_TRIGGERS,
    DEFAULT_QUANTITY,
    DIGIT_QUANTITY_PATTERN,
    ENGLISH_WORD_QUANTITY_PATTERN,
    HELP_TRIGGERS,
    KOREAN_WORD_QUANTITY_PATTERN,
    REMOVE_TRIGGERS,
    SHOW_MENU_NOUNS,
    SHOW_MENU_VERBS,
    WORD_TO_NUM,
)

logger = logging.getLogger(__name__)


def _contains_any(text: str, words: Sequence[str]) -> bool:
    return any(word in text for word in words)


def extract_quantity(text: str) -> int | None:
    """
    Extract a quantity like '2개', '3 잔', '두 개', 'two'.

    Digits win over number words. Korean number words only count when a unit
    follows them, so "네" on its own is never read as four.
    """
    text = text.lower()

    match = DIGIT_QUANTITY_PATTERN.search(text)
    if match:
        quantity = int(match.group(1))
        return quantity if quantity > 0 else None

    match = KOREAN_WORD_QUANTITY_PATTERN.search(text)
    if match:
        return WORD_TO_NUM[match.group(1)]

    match = ENGLISH_WORD_QUANTITY_PATTERN.search(text)
    if match:
        return WORD_TO_NUM[match.group(1).lower()]

    return None


def _find_menu_name(
    text: str,
    available_menus: Sequence[MenuItem],
    synonym_families: Sequence[SynonymFamily],
) -> str | None:
    """
    Find which menu item the transcript mentions.

    Longest name first so "치킨버거" wins over a shorter name it contains.
    Returns the item's primary name, or a family keyword such as "버거"
    when only a generic word was said.
    """
    normalized = normalize_name(text)

    names: list[tuple[str, str]] = []
    for item in available_menus:
        for spoken in (item.name, item.name_en):
            key = normalize_name(spoken)
            if key:
                names.append((key, item.name))

    for key, primary in sorted(names, key=lambda pair: len(pair[0]), reverse=True):
        if key in normalized:
            return primary

    for family in synonym_families:
        if any(normalize_name(t) in normalized for t in family.triggers):
            return family.keyword

    return None


def parse_transcript_deterministic(
    transcript: str,
    available_menus: Sequence[MenuItem],
    synonym_families: Sequence[SynonymFamily] = DEFAULT_SYNONYM_FAMILIES,
) -> VoiceCommand | None:
    """
    Classify a transcript with trigger words.

    Returns None when no intent is recognized. Add and remove only match when
    a menu name (or family word) is also present; otherwise the later intents
    get their chance, so "주문완료" is a checkout.
    """
    text = transcript.lower().strip()
    if not text:
        return None

    if _contains_any(text, ADD_TRIGGERS):
        name = _find_menu_name(text, available_menus, synonym_families)
        if name:
            quantity = extract_quantity(text) or DEFAULT_QUANTITY
            logger.debug("Keyword parse: add %s x%d", name, quantity)
            return VoiceCommand(intent=VoiceIntent.ADD_ITEM, entity=name, quantity=quantity)

    if _contains_any(text, REMOVE_TRIGGERS):
        name = _find_menu_name(text, available_menus, synonym_families)
        if name:
            quantity = extract_quantity(text) or DEFAULT_QUANTITY
            logger.debug("Keyword parse: remove %s", name)
            return VoiceCommand(intent=VoiceIntent.REMOVE_ITEM, entity=name, quantity=quantity)

    if _contains_any(text, SHOW_MENU_NOUNS) and _contains_any(text, SHOW_MENU_VERBS):
        return VoiceCommand(intent=VoiceIntent.SHOW_MENU)

    if _contains_any(text, CHECKOUT_TRIGGERS):
        return VoiceCommand(intent=VoiceIntent.CHECKOUT)

    if _contains_any(text, HELP_TRIGGERS):
        return VoiceCommand(intent=VoiceIntent.HELP)

    return None
