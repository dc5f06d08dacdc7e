"""
Disambiguation Handler for the Voice Resolver.

Resolves a MenuSelectionCandidates prompt ("어떤 버거를 주문하시겠습니까?")
from the customer's follow-up utterance or a direct pick.
"""

import logging

from . import messages
from .executor import CommandExecutor
from .menu_matcher import MenuMatcher
from .schemas import (
    ExecutionResult,
    FollowUpResult,
    MenuSelectionCandidates,
    VoiceCommand,
    VoiceIntent,
)

logger = logging.getLogger(__name__)


class DisambiguationHandler:
    """Picks one candidate and adds it with the remembered quantity."""

    def __init__(self, matcher: MenuMatcher, executor: CommandExecutor):
        self._matcher = matcher
        self._executor = executor

    def handle(self, selection: MenuSelectionCandidates, transcript: str) -> FollowUpResult:
        """
        Match the utterance against the candidates.

        No match re-prompts with the same list and keeps the selection pending.
        """
        name = self._matcher.match_candidate(transcript, selection.candidates)
        if name is None:
            logger.debug("No candidate in '%s'", transcript)
            return FollowUpResult(
                result=ExecutionResult(message=messages.choose_again(selection.candidates)),
                still_pending=True,
            )
        return self.select(selection, name)

    def select(self, selection: MenuSelectionCandidates, name: str) -> FollowUpResult:
        if name not in selection.candidates:
            return FollowUpResult(
                result=ExecutionResult(message=messages.choose_again(selection.candidates)),
                still_pending=True,
            )

        logger.info("Candidate selected: %s x%d", name, selection.quantity)
        result = self._executor.execute(VoiceCommand(
            intent=VoiceIntent.ADD_ITEM,
            entity=name,
            quantity=selection.quantity,
            confidence=1.0,
        ))
        return FollowUpResult(result=result, resolved_name=name)
