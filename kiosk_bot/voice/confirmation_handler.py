"""
Confirmation Handler for the Voice Resolver.

Answers a pending low-confidence add with a yes/no utterance.
"""

import logging
import re

from . import messages
from .executor import CommandExecutor
from .parsers.constants import AFFIRMATIVE_WORDS, NEGATIVE_WORDS
from .schemas import (
    ExecutionResult,
    FollowUpResult,
    PendingConfirmation,
    VoiceCommand,
    VoiceIntent,
)

logger = logging.getLogger(__name__)


def _says(text: str, word: str) -> bool:
    # English words only count as whole words: "know" is not "no"
    if word.isascii():
        return re.search(rf"\b{re.escape(word)}\b", text) is not None
    return word in text


def parse_yes_no(transcript: str) -> bool | None:
    """
    True for an affirmative answer, False for a negative one, None otherwise.

    Negative words are checked first: "아니예요" contains "예".
    """
    text = transcript.strip().lower()
    if any(_says(text, word) for word in NEGATIVE_WORDS):
        return False
    if any(_says(text, word) for word in AFFIRMATIVE_WORDS):
        return True
    return None


class ConfirmationHandler:
    """
    Resolves a PendingConfirmation.

    A yes adds the remembered item and quantity. A no, or anything that is
    not a yes, asks the customer to say the order again. In every case the
    confirmation is over.
    """

    def __init__(self, executor: CommandExecutor):
        self._executor = executor

    def handle(self, pending: PendingConfirmation, transcript: str) -> FollowUpResult:
        return self.answer(pending, parse_yes_no(transcript))

    def answer(self, pending: PendingConfirmation, confirmed: bool | None) -> FollowUpResult:
        if confirmed:
            logger.info("Confirmed: %s x%d", pending.entity, pending.quantity)
            result = self._executor.execute(VoiceCommand(
                intent=VoiceIntent.ADD_ITEM,
                entity=pending.entity,
                quantity=pending.quantity,
                confidence=1.0,
            ))
            return FollowUpResult(result=result, resolved_name=pending.entity)

        logger.info("Confirmation for '%s' declined or unclear", pending.entity)
        return FollowUpResult(result=ExecutionResult(message=messages.PLEASE_REPEAT))
