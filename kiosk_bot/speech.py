"""
Speech capture and speech output collaborators.

The voice resolver only talks to these two interfaces. On a kiosk the actual
microphone and speaker live in the browser (Web Speech API); the in-process
implementations here are what the HTTP API feeds and reads:

- BufferedSpeechCapture: final transcripts are pushed in by the client and
  held until the resolver inspects them.
- QueuedSpeechOutput: keeps every utterance the resolver spoke so the client
  can fetch and play them (in the browser, or via /tts/synthesize).
"""

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from datetime import datetime, timezone
from itertools import count
from typing import List, Optional

from .config import SPEECH_LANG

logger = logging.getLogger(__name__)


# Capture errors after which voice ordering cannot work at all
FATAL_CAPTURE_ERRORS = frozenset({"not-allowed", "service-not-allowed", "audio-capture"})


class SpeechCapture(ABC):
    """Source of final transcripts."""

    @property
    @abstractmethod
    def is_supported(self) -> bool:
        pass

    @property
    @abstractmethod
    def is_listening(self) -> bool:
        pass

    @property
    @abstractmethod
    def transcript(self) -> str:
        """The latest final transcript, or "" if none is held."""
        pass

    @property
    @abstractmethod
    def error(self) -> Optional[str]:
        pass

    @property
    @abstractmethod
    def lang(self) -> str:
        pass

    @abstractmethod
    def start(self) -> None:
        pass

    @abstractmethod
    def stop(self) -> None:
        pass

    @abstractmethod
    def reset_transcript(self) -> None:
        pass


class SpeechOutput(ABC):
    """Sink for spoken responses."""

    @property
    @abstractmethod
    def is_speaking(self) -> bool:
        pass

    @abstractmethod
    def speak(self, text: str) -> None:
        """Say `text`, cancelling whatever is being said."""
        pass

    @abstractmethod
    def stop(self) -> None:
        pass


class BufferedSpeechCapture(SpeechCapture):
    """
    Capture fed from outside the process.

    Starting clears the transcript and any error, like a fresh recognition
    session. Pushing while not listening is accepted; the resolver decides
    whether voice mode is active.
    """

    def __init__(self, lang: str = SPEECH_LANG, supported: bool = True):
        self._lang = lang
        self._supported = supported
        self._listening = False
        self._transcript = ""
        self._error: Optional[str] = None

    @property
    def is_supported(self) -> bool:
        return self._supported

    @property
    def is_listening(self) -> bool:
        return self._listening

    @property
    def transcript(self) -> str:
        return self._transcript

    @property
    def error(self) -> Optional[str]:
        return self._error

    @property
    def lang(self) -> str:
        return self._lang

    def start(self) -> None:
        if not self._supported or self._listening:
            return
        self._transcript = ""
        self._error = None
        self._listening = True
        logger.debug("Capture started (%s)", self._lang)

    def stop(self) -> None:
        if self._listening:
            logger.debug("Capture stopped")
        self._listening = False

    def set_lang(self, lang: str) -> None:
        """Locale for the next recognition session."""
        if lang != self._lang:
            logger.info("Speech locale set to %s", lang)
        self._lang = lang

    def reset_transcript(self) -> None:
        self._transcript = ""

    def push(self, transcript: str) -> None:
        """A final transcript arrived from the recognizer."""
        self._transcript = transcript.strip()

    def fail(self, error: str) -> None:
        """The recognizer reported an error; capture ends."""
        self._error = error
        self._listening = False
        logger.warning("Speech capture error: %s", error)

    @property
    def is_fatal_error(self) -> bool:
        return self._error in FATAL_CAPTURE_ERRORS


@dataclass
class Utterance:
    id: int
    text: str
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    cancelled: bool = False


class QueuedSpeechOutput(SpeechOutput):
    """
    Output that records utterances for the client to play.

    Only the newest utterance is ever "being spoken"; speaking again or
    stopping marks the previous one cancelled.
    """

    def __init__(self, max_history: int = 50):
        self._history: List[Utterance] = []
        self._max_history = max_history
        self._ids = count(1)
        self._current: Optional[Utterance] = None

    @property
    def is_speaking(self) -> bool:
        return self._current is not None

    def speak(self, text: str) -> None:
        if not text:
            return
        if self._current is not None:
            self._current.cancelled = True
        utterance = Utterance(id=next(self._ids), text=text)
        self._history.append(utterance)
        del self._history[:-self._max_history]
        self._current = utterance
        logger.debug("Speaking #%d: %s", utterance.id, text)

    def stop(self) -> None:
        if self._current is not None:
            self._current.cancelled = True
            self._current = None

    def finished(self, utterance_id: int) -> None:
        """The client finished playing an utterance."""
        if self._current is not None and self._current.id == utterance_id:
            self._current = None

    def history(self, after_id: int = 0) -> List[Utterance]:
        return [u for u in self._history if u.id > after_id]

    @property
    def last_text(self) -> Optional[str]:
        return self._history[-1].text if self._history else None
