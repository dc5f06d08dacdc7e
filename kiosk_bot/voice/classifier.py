"""
Intent Classifiers.

Two implementations behind one narrow interface:

- KeywordIntentClassifier: trigger words + menu names, no network.
- RemoteIntentClassifier: an instructor/OpenAI call validated against the
  live menu, falling back to keywords on any failure.

Neither raises. "No usable intent" is returned as None.
"""

import logging
from typing import Protocol, Sequence

from ..config import CONFIDENCE_THRESHOLD, OPENAI_API_KEY, OPENAI_MODEL
from ..store.menu_lookup import DEFAULT_SYNONYM_FAMILIES, SynonymFamily
from ..store.models import MenuItem
from .parsers import get_instructor_client, parse_intent, parse_transcript_deterministic
from .schemas import IntentClassificationResponse, OrderLine, VoiceCommand, VoiceIntent

logger = logging.getLogger(__name__)


class IntentClassifier(Protocol):
    async def classify(
        self,
        transcript: str,
        available_menus: Sequence[MenuItem],
    ) -> VoiceCommand | None:
        ...


class KeywordIntentClassifier:
    """Keyword fallback classifier."""

    def __init__(self, synonym_families: Sequence[SynonymFamily] = DEFAULT_SYNONYM_FAMILIES):
        self._synonym_families = tuple(synonym_families)

    async def classify(
        self,
        transcript: str,
        available_menus: Sequence[MenuItem],
    ) -> VoiceCommand | None:
        return parse_transcript_deterministic(transcript, available_menus, self._synonym_families)


def to_voice_command(
    response: IntentClassificationResponse,
    available_menus: Sequence[MenuItem],
) -> VoiceCommand | None:
    """
    Turn a remote response into a VoiceCommand, or None if it is not usable.

    Item names must exactly equal an available item's name; others are
    dropped. An add with no valid items left, an unknown intent and any
    response below the confidence threshold are all unusable.
    """
    if response.confidence < CONFIDENCE_THRESHOLD:
        logger.info("Remote classification below threshold (%.2f)", response.confidence)
        return None

    intent = response.intent
    if intent == "add_item":
        available_names = {item.name for item in available_menus}
        valid = [
            OrderLine(name=i.name, quantity=i.quantity)
            for i in response.items
            if i.name in available_names
        ]
        dropped = len(response.items) - len(valid)
        if dropped:
            logger.info("Dropped %d classified item(s) not on the available menu", dropped)
        if not valid:
            return None
        return VoiceCommand(intent=VoiceIntent.ADD_ITEM, items=valid, confidence=response.confidence)

    if intent == "remove_item":
        if not response.items:
            return None
        first = response.items[0]
        return VoiceCommand(
            intent=VoiceIntent.REMOVE_ITEM,
            entity=first.name,
            quantity=first.quantity,
            confidence=response.confidence,
        )

    if intent in ("show_menu", "checkout", "help"):
        return VoiceCommand(intent=VoiceIntent(intent), confidence=response.confidence)

    return None


class RemoteIntentClassifier:
    """
    Remote semantic classifier with a local keyword fallback.

    Missing credentials, transport errors, responses that break the strict
    JSON contract, unknown intents, low confidence and items that are not on
    the live menu all end in the keyword fallback.
    """

    def __init__(
        self,
        api_key: str | None = None,
        model: str = OPENAI_MODEL,
        fallback: IntentClassifier | None = None,
        client=None,
    ):
        self._api_key = api_key if api_key is not None else OPENAI_API_KEY
        self._model = model
        self._fallback = fallback or KeywordIntentClassifier()
        self._client = client
        if not self._api_key and client is None:
            logger.warning("OPENAI_API_KEY not set; voice commands use keyword matching only")

    def _get_client(self):
        if self._client is None:
            self._client = get_instructor_client(self._api_key)
        return self._client

    async def classify(
        self,
        transcript: str,
        available_menus: Sequence[MenuItem],
    ) -> VoiceCommand | None:
        if not self._api_key and self._client is None:
            return await self._fallback.classify(transcript, available_menus)

        try:
            response = await parse_intent(
                transcript,
                available_menus,
                model=self._model,
                client=self._get_client(),
            )
        except Exception as e:
            logger.warning("Remote intent classification failed, using keywords: %s", e)
            return await self._fallback.classify(transcript, available_menus)

        command = to_voice_command(response, available_menus)
        if command is None:
            logger.debug("Remote result unusable for '%s', using keywords", transcript)
            return await self._fallback.classify(transcript, available_menus)
        return command
