"""
Parser Constants.

This module contains constants used by both the remote and the keyword
classifiers for recognizing kiosk voice commands: intent trigger words,
quantity units, spoken numbers, and the yes/no vocabularies used while a
confirmation is pending.
"""

import re

# =============================================================================
# Intent Trigger Words
# =============================================================================

# Checked in this order. Add/remove only fire when a menu name is also found,
# so "주문완료" falls through to checkout.
ADD_TRIGGERS = ("추가", "주문", "넣어", "담아", "add", "order")
REMOVE_TRIGGERS = ("빼", "제거", "삭제", "remove")

# show_menu needs the noun and one of the verbs
SHOW_MENU_NOUNS = ("메뉴", "menu")
SHOW_MENU_VERBS = ("보여", "알려", "뭐", "show", "what")

CHECKOUT_TRIGGERS = ("결제", "계산", "주문완료", "checkout", "pay")
HELP_TRIGGERS = ("도움", "help", "어떻게")

# =============================================================================
# Quantities
# =============================================================================

QUANTITY_UNITS = ("개", "잔", "번", "그릇")

# Spoken numbers 1-10. Native Korean counters come in a noun form (하나) and
# a prenominal form (한); both map to the same value.
WORD_TO_NUM = {
    "하나": 1, "한": 1, "one": 1,
    "둘": 2, "두": 2, "two": 2,
    "셋": 3, "세": 3, "three": 3,
    "넷": 4, "네": 4, "four": 4,
    "다섯": 5, "five": 5,
    "여섯": 6, "six": 6,
    "일곱": 7, "seven": 7,
    "여덟": 8, "eight": 8,
    "아홉": 9, "nine": 9,
    "열": 10, "ten": 10,
}

_UNITS = "|".join(QUANTITY_UNITS)
_KOREAN_NUMBER_WORDS = "|".join(
    sorted((w for w in WORD_TO_NUM if not w.isascii()), key=len, reverse=True)
)
_ENGLISH_NUMBER_WORDS = "|".join(w for w in WORD_TO_NUM if w.isascii())

# "2개", "3 잔"
DIGIT_QUANTITY_PATTERN = re.compile(rf"(\d+)\s*(?:{_UNITS})")
# "두 개", "하나 잔" - Korean number words only count with a unit after them
KOREAN_WORD_QUANTITY_PATTERN = re.compile(rf"({_KOREAN_NUMBER_WORDS})\s*(?:{_UNITS})")
# "two colas"
ENGLISH_WORD_QUANTITY_PATTERN = re.compile(rf"\b({_ENGLISH_NUMBER_WORDS})\b", re.IGNORECASE)

DEFAULT_QUANTITY = 1

# =============================================================================
# Confirmation Vocabulary
# =============================================================================

AFFIRMATIVE_WORDS = ("예", "네", "응", "맞아", "그래", "yes")

# Checked before the affirmative words: "아니예요" contains "예"
NEGATIVE_WORDS = ("아니오", "아니요", "아니", "아냐", "노", "no")
