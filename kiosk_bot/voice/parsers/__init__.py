"""
Parsers Package.

This package contains the parsing functions and constants used by the voice
pipeline for interpreting transcripts.

Exports:
- Constants: trigger words, quantity patterns, yes/no vocabularies
- Deterministic Parsers: keyword-based intent parsing
- LLM Parsers: OpenAI/instructor-based intent parsing
"""

from .constants import (
    AFFIRMATIVE_WORDS,
    NEGATIVE_WORDS,
    QUANTITY_UNITS,
    WORD_TO_NUM,
)

from .deterministic import (
    extract_quantity,
    parse_transcript_deterministic,
)

from .llm_parsers import (
    build_intent_prompt,
    format_menu_list,
    get_instructor_client,
    parse_intent,
)

__all__ = [
    # Constants
    "AFFIRMATIVE_WORDS",
    "NEGATIVE_WORDS",
    "QUANTITY_UNITS",
    "WORD_TO_NUM",
    # Deterministic
    "extract_quantity",
    "parse_transcript_deterministic",
    # LLM
    "build_intent_prompt",
    "format_menu_list",
    "get_instructor_client",
    "parse_intent",
]
