"""
LLM-Powered Parsers.

This module contains the remote intent parser, which uses instructor/OpenAI
to turn a kiosk transcript into an IntentClassificationResponse. The parser
itself raises on any failure; recovering from it is the classifier's job.
"""

import os
import logging
from typing import Sequence

import instructor
from openai import AsyncOpenAI

from ...config import OPENAI_MODEL
from ...store.models import MenuItem
from ..schemas import IntentClassificationResponse

logger = logging.getLogger(__name__)


def get_instructor_client(api_key: str | None = None):
    """Get instructor-wrapped async OpenAI client."""
    api_key = api_key or os.getenv("OPENAI_API_KEY")
    if not api_key:
        raise ValueError("OPENAI_API_KEY not set")
    return instructor.from_openai(AsyncOpenAI(api_key=api_key))


def format_menu_list(available_menus: Sequence[MenuItem]) -> str:
    """One line per available item: name, English name, price."""
    lines = []
    for item in available_menus:
        if item.name_en:
            lines.append(f"- {item.name} ({item.name_en}): {item.price}원")
        else:
            lines.append(f"- {item.name}: {item.price}원")
    return "\n".join(lines)


def build_intent_prompt(available_menus: Sequence[MenuItem]) -> str:
    return f"""You are a kiosk voice order expert. Analyze the customer's speech and extract the order intent. The customer may speak Korean or English.

Available menus:
{format_menu_list(available_menus)}

Rules:
1. If the customer speaks English, match the English menu name to the corresponding Korean menu name in the list and use the Korean name in the response.
2. Only use exact menu names from the list above.
3. If a menu is not in the list, do not include it.
4. If quantity is not specified, set it to 1.
5. For ambiguous expressions, set confidence low.
6. If the customer orders several menus at once (e.g., "치킨버거 하나, 콜라 두 개 주문"), return all of them in items.
7. intent is one of: add_item, remove_item, show_menu, checkout, help, unknown.

Examples:
- "치킨버거 두 개 주문해줘" -> intent: "add_item", items: [{{"name": "치킨버거", "quantity": 2}}], confidence: 0.95
- "one cola please" -> intent: "add_item", items: [{{"name": "콜라", "quantity": 1}}], confidence: 0.9
- "감자튀김 빼줘" -> intent: "remove_item", items: [{{"name": "감자튀김", "quantity": 1}}], confidence: 0.9
- "메뉴 뭐 있어?" -> intent: "show_menu", items: [], confidence: 0.9
- "결제할게요" -> intent: "checkout", items: [], confidence: 0.9
"""


async def parse_intent(
    transcript: str,
    available_menus: Sequence[MenuItem],
    model: str = OPENAI_MODEL,
    client=None,
) -> IntentClassificationResponse:
    """
    Classify one transcript with the remote model.

    Raises on missing credentials, transport errors and responses that do not
    fit IntentClassificationResponse exactly.
    """
    if client is None:
        client = get_instructor_client()

    return await client.chat.completions.create(
        model=model,
        response_model=IntentClassificationResponse,
        max_retries=0,
        temperature=0.3,
        max_tokens=300,
        messages=[
            {"role": "system", "content": build_intent_prompt(available_menus)},
            {"role": "user", "content": f'사용자 음성: "{transcript}"'},
        ],
    )
