"""
State Machine for Voice Ordering.

This module turns free-form speech transcripts into cart mutations. Each
transcript is handled according to the resolver's phase:

- AWAITING_DISAMBIGUATION: the utterance can only pick one of the offered
  candidates. No classifier call is made.
- AWAITING_CONFIRMATION: the utterance can only be a yes or a no. No
  classifier call is made.
- Otherwise the classifier is asked, and its answer either runs straight
  through the executor or opens one of the two follow-up phases above.

Everything runs on one event loop. The only suspension points are the
classifier call and the quiet-window timer, so the resolver is the single
writer to the kiosk store.
"""

import asyncio
import logging
from typing import Optional

from ..config import CLASSIFIER_TIMEOUT_SECONDS, CONFIDENCE_THRESHOLD, QUIET_WINDOW_SECONDS
from ..speech import FATAL_CAPTURE_ERRORS, SpeechCapture, SpeechOutput
from ..store.kiosk import KioskStore
from ..store.state import SetVoiceMode
from . import messages
from .classifier import IntentClassifier, KeywordIntentClassifier
from .confirmation_handler import ConfirmationHandler
from .disambiguation_handler import DisambiguationHandler
from .executor import CommandExecutor
from .menu_matcher import MenuMatcher
from .schemas import (
    ExecutionResult,
    FollowUpResult,
    MenuSelectionCandidates,
    PendingConfirmation,
    VoiceCommand,
    VoiceIntent,
    VoicePhase,
    VoiceResult,
)

logger = logging.getLogger(__name__)


class VoiceCommandResolver:
    """
    Voice command state machine.

    Owns the processed-transcript memory, the pending follow-up (at most one
    of disambiguation or confirmation) and the quiet-window timer handle.
    """

    def __init__(
        self,
        kiosk: KioskStore,
        classifier: IntentClassifier,
        capture: SpeechCapture,
        output: SpeechOutput,
        fallback: IntentClassifier | None = None,
        quiet_window: float = QUIET_WINDOW_SECONDS,
        classifier_timeout: float = CLASSIFIER_TIMEOUT_SECONDS,
    ):
        self._kiosk = kiosk
        self._classifier = classifier
        self._fallback = fallback or KeywordIntentClassifier(kiosk.synonym_families)
        self._capture = capture
        self._output = output
        self._quiet_window = quiet_window
        self._classifier_timeout = classifier_timeout

        self.matcher = MenuMatcher(kiosk.catalog)
        self.executor = CommandExecutor(kiosk)
        self.confirmation_handler = ConfirmationHandler(self.executor)
        self.disambiguation_handler = DisambiguationHandler(self.matcher, self.executor)

        self._phase = VoicePhase.IDLE
        self._processing = False
        self._processed: set[str] = set()
        self._confirmation: Optional[PendingConfirmation] = None
        self._selection: Optional[MenuSelectionCandidates] = None
        self._quiet_timer: Optional[asyncio.TimerHandle] = None
        # Bumped on every stop so a classifier answer from an earlier
        # session is recognized as stale
        self._session = 0

        self.last_response: str = messages.GREETING
        self.show_help = False
        self.notice: Optional[str] = None
        self.disabled = False

    # ------------------------------------------------------------------
    # Read state
    # ------------------------------------------------------------------

    @property
    def phase(self) -> VoicePhase:
        return self._phase

    @property
    def is_active(self) -> bool:
        return self._kiosk.state.is_voice_mode

    @property
    def is_processing(self) -> bool:
        return self._processing

    @property
    def pending_confirmation(self) -> Optional[PendingConfirmation]:
        return self._confirmation

    @property
    def selection(self) -> Optional[MenuSelectionCandidates]:
        return self._selection

    @property
    def processed_transcripts(self) -> frozenset[str]:
        return frozenset(self._processed)

    @property
    def quiet_window_pending(self) -> bool:
        return self._quiet_timer is not None

    # ------------------------------------------------------------------
    # Start / stop
    # ------------------------------------------------------------------

    def start(self) -> VoiceResult:
        """Turn voice mode on and start capturing."""
        if not self._capture.is_supported or self.disabled:
            self.disabled = True
            self.notice = self.notice or messages.UNSUPPORTED
            self._phase = VoicePhase.IDLE
            return VoiceResult(message=self.notice, phase=self._phase)

        if not self.is_active:
            self._kiosk.dispatch(SetVoiceMode(True))
            self._respond(messages.ACTIVATED)

        if self._selection is not None:
            self._phase = VoicePhase.AWAITING_DISAMBIGUATION
        elif self._confirmation is not None:
            self._phase = VoicePhase.AWAITING_CONFIRMATION
        else:
            self._phase = VoicePhase.LISTENING
        self._capture.start()
        logger.info("Voice mode started")
        return self._result(self.last_response)

    def stop(self) -> VoiceResult:
        """
        Turn voice mode off.

        Cancels spoken output and the quiet window, halts capture and drops
        any pending follow-up. A classifier call still in flight is left to
        finish; its answer is discarded.
        """
        self._session += 1
        self._cancel_quiet_window()
        self._capture.stop()
        self._output.stop()
        self._capture.reset_transcript()
        self._processed.clear()
        self._selection = None
        self._confirmation = None
        self._phase = VoicePhase.IDLE
        if self.is_active:
            self._kiosk.dispatch(SetVoiceMode(False))
        logger.info("Voice mode stopped")
        return self._result(self.last_response)

    def toggle(self) -> VoiceResult:
        if self.is_active and self._phase != VoicePhase.IDLE:
            return self.stop()
        return self.start()

    def handle_capture_error(self) -> VoiceResult:
        """
        React to an error reported by the capture collaborator.

        Permission and device errors disable the pipeline and leave a
        persistent notice. Anything else just ends this capture session.
        """
        error = self._capture.error
        if error in FATAL_CAPTURE_ERRORS:
            logger.warning("Voice ordering disabled by capture error: %s", error)
            self.stop()
            self.disabled = True
            self.notice = messages.CAPTURE_ERROR
            return VoiceResult(message=self.notice, phase=self._phase)

        logger.info("Capture ended with '%s'", error)
        if self._phase == VoicePhase.LISTENING:
            self._phase = VoicePhase.IDLE
        return self._result(self.last_response)

    # ------------------------------------------------------------------
    # Transcripts
    # ------------------------------------------------------------------

    async def handle_transcript(self, transcript: str) -> VoiceResult | None:
        """
        Handle one final transcript delivered by capture.

        Returns None when the transcript is ignored: empty, voice mode off, a
        repeat within the current window, or arriving while a classifier call
        is in flight. In the last case the capture collaborator still holds
        it, and it is inspected once the running cycle completes.
        """
        if self._processing:
            logger.debug("Busy analyzing; '%s' left with capture", transcript)
            return None

        result = await self._process(transcript)

        # Inspect whatever capture received while we were analyzing
        while self.is_active and not self._processing:
            held = self._capture.transcript.strip()
            if not held or held in self._processed:
                break
            result = await self._process(held) or result

        return result

    async def select_candidate(self, name: str) -> VoiceResult:
        """Pick a disambiguation candidate directly (on-screen button)."""
        if self._selection is None:
            return self._result(self.last_response)
        self._cancel_quiet_window()
        return self._finish_selection(self.disambiguation_handler.select(self._selection, name))

    async def answer_confirmation(self, confirmed: bool) -> VoiceResult:
        """Answer a pending confirmation directly (on-screen yes/no)."""
        if self._confirmation is None:
            return self._result(self.last_response)
        self._cancel_quiet_window()
        return self._finish_confirmation(self.confirmation_handler.answer(self._confirmation, confirmed))

    def dismiss_help(self) -> None:
        self.show_help = False

    async def _process(self, transcript: str) -> VoiceResult | None:
        text = transcript.strip()
        if not text or not self.is_active:
            return None
        if text in self._processed:
            logger.debug("Duplicate transcript ignored: '%s'", text)
            return None
        self._processed.add(text)
        self._cancel_quiet_window()

        if self._selection is not None:
            return self._finish_selection(self.disambiguation_handler.handle(self._selection, text))

        if self._confirmation is not None:
            return self._finish_confirmation(self.confirmation_handler.handle(self._confirmation, text))

        return await self._analyze(text)

    async def _analyze(self, text: str) -> VoiceResult | None:
        session = self._session
        self._processing = True
        self._phase = VoicePhase.ANALYZING
        logger.info("Analyzing '%s'", text)

        try:
            available = self._kiosk.catalog.available_items()
            try:
                command = await asyncio.wait_for(
                    self._classifier.classify(text, available),
                    timeout=self._classifier_timeout,
                )
            except asyncio.TimeoutError:
                logger.warning("Classifier timed out after %.1fs", self._classifier_timeout)
                command = None
            except Exception as e:
                logger.warning("Classifier failed: %s", e)
                command = None

            if session != self._session or not self.is_active:
                logger.info("Voice mode stopped during analysis; discarding result for '%s'", text)
                return None

            try:
                result = await self._interpret(text, command)
            except Exception:
                logger.exception("Failed to handle '%s'", text)
                result = self._terminal(ExecutionResult(message=messages.ANALYSIS_FAILED))
        finally:
            self._processing = False

        self._schedule_quiet_window()
        return result

    async def _interpret(
        self,
        text: str,
        command: VoiceCommand | None,
        use_fallback: bool = True,
    ) -> VoiceResult:
        """Decide what to do with a classifier answer, in priority order."""
        if command is None:
            if use_fallback:
                # Whole catalog, so a sold-out name is recognized and the
                # executor can report it as sold out
                fallback = await self._fallback.classify(text, self._kiosk.catalog.list_menu_items())
                return await self._interpret(text, fallback, use_fallback=False)
            return self._terminal(ExecutionResult(message=messages.PLEASE_REPEAT))

        is_add = command.intent == VoiceIntent.ADD_ITEM

        # 1. Compound order: every item reported on its own
        if is_add and command.items:
            return self._execute(command)

        # 2-4. A spoken name that is not a real menu name
        if is_add and command.entity and not self.matcher.is_exact_name(command.entity):
            # A full menu name in the utterance beats partial and family
            # matches; a sold-out one is reported as sold out
            mentioned = self.matcher.mentioned_item(text)
            if mentioned is not None:
                return self._execute(VoiceCommand(
                    intent=VoiceIntent.ADD_ITEM,
                    entity=mentioned.name,
                    quantity=command.quantity,
                    confidence=1.0,
                ))
            candidates =self.matcher.candidates_for(command.entity)
            if len(candidates) > 1:
                return self._await_selection(
                    candidates,
                    command.quantity,
                    text,
                    messages.choose_candidate(command.entity, candidates),
                )
            if len(candidates) == 1:
                return self._execute(VoiceCommand(
                    intent=VoiceIntent.ADD_ITEM,
                    entity=candidates[0],
                    quantity=command.quantity,
                    confidence=1.0,
                ))
            family = self.matcher.family_candidates(text)
            if family is not None:
                synonym_family, members = family
                return self._await_selection(
                    members,
                    command.quantity,
                    text,
                    messages.family_candidates(synonym_family.keyword, members),
                )
            return self._terminal(ExecutionResult(message=messages.PLEASE_REPEAT))

        # 5. Not sure enough to add without asking
        if is_add and command.entity and command.confidence < CONFIDENCE_THRESHOLD:
            self._confirmation = PendingConfirmation(
                entity=command.entity,
                quantity=command.quantity,
                transcript=text,
            )
            self._phase = VoicePhase.AWAITING_CONFIRMATION
            logger.info("Awaiting confirmation for %s x%d (%.2f)", command.entity, command.quantity, command.confidence)
            self._respond(messages.confirm_order(command.entity, command.quantity))
            return self._result(self.last_response)

        # 6. Everything else runs now
        return self._execute(command)

    # ------------------------------------------------------------------
    # Transitions
    # ------------------------------------------------------------------

    def _execute(self, command: VoiceCommand) -> VoiceResult:
        self._phase = VoicePhase.EXECUTING
        return self._terminal(self.executor.execute(command))

    def _terminal(self, execution: ExecutionResult) -> VoiceResult:
        """A final response; listening resumes when the quiet window ends."""
        self._phase = VoicePhase.EXECUTING
        self.show_help = self.show_help or execution.show_help
        self._respond(execution.message)
        return self._result(execution.message, execution)

    def _await_selection(
        self,
        candidates: list[str],
        quantity: int,
        transcript: str,
        prompt: str,
    ) -> VoiceResult:
        self._selection = MenuSelectionCandidates(
            candidates=candidates,
            quantity=quantity,
            transcript=transcript,
        )
        self._confirmation = None
        self._phase = VoicePhase.AWAITING_DISAMBIGUATION
        logger.info("Awaiting disambiguation among %s", candidates)
        self._respond(prompt)
        return self._result(prompt)

    def _finish_selection(self, outcome: FollowUpResult) -> VoiceResult:
        if outcome.still_pending:
            self._respond(outcome.result.message)
            self._schedule_quiet_window()
            return self._result(outcome.result.message, outcome.result)
        self._selection = None
        return self._resume_after_follow_up(outcome)

    def _finish_confirmation(self, outcome: FollowUpResult) -> VoiceResult:
        self._confirmation = None
        return self._resume_after_follow_up(outcome)

    def _resume_after_follow_up(self, outcome: FollowUpResult) -> VoiceResult:
        self.show_help = self.show_help or outcome.result.show_help
        self._respond(outcome.result.message)
        self._capture.reset_transcript()
        self._phase = VoicePhase.LISTENING
        self._capture.start()
        self._schedule_quiet_window()
        return self._result(outcome.result.message, outcome.result)

    def _respond(self, message: str) -> None:
        if not message:
            return
        self.last_response = message
        self._output.speak(message)

    def _result(self, message: str, execution: ExecutionResult | None = None) -> VoiceResult:
        return VoiceResult(
            message=message,
            phase=self._phase,
            show_help=execution.show_help if execution is not None else False,
            candidates=list(self._selection.candidates) if self._selection is not None else [],
            cart_total=execution.cart_total if execution is not None else None,
        )

    # ------------------------------------------------------------------
    # Quiet window
    # ------------------------------------------------------------------

    def _schedule_quiet_window(self) -> None:
        self._cancel_quiet_window()
        if not self.is_active:
            return
        loop = asyncio.get_running_loop()
        self._quiet_timer = loop.call_later(self._quiet_window, self._on_quiet_window)

    def _cancel_quiet_window(self) -> None:
        if self._quiet_timer is not None:
            self._quiet_timer.cancel()
            self._quiet_timer = None

    def _on_quiet_window(self) -> None:
        """Clear transcript and processed memory; resume listening unless a follow-up is pending."""
        self._quiet_timer = None
        self._capture.reset_transcript()
        self._processed.clear()
        logger.debug("Quiet window elapsed")

        if not self.is_active or self._processing:
            return
        if self._selection is not None or self._confirmation is not None:
            return
        self._phase = VoicePhase.LISTENING
        self._capture.start()
