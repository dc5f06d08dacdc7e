"""
Voice Schemas for Kiosk Bot
===========================

Models for the voice ordering endpoints. The kiosk browser does the actual
speech recognition and pushes final transcripts; responses come back as
text, and as queued utterances for the browser (or /tts) to speak.
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field, field_validator

from ..config import MAX_TRANSCRIPT_LENGTH, SUPPORTED_SPEECH_LANGS
from ..voice.schemas import VoicePhase


class VoiceStartRequest(BaseModel):
    """Optional locale picked on the kiosk's language screen."""
    lang: Optional[str] = None

    @field_validator("lang")
    @classmethod
    def check_lang(cls, value):
        if value is not None and value not in SUPPORTED_SPEECH_LANGS:
            raise ValueError(f"Unsupported language '{value}'")
        return value


class TranscriptRequest(BaseModel):
    transcript: str = Field(min_length=1, max_length=MAX_TRANSCRIPT_LENGTH)


class CaptureErrorRequest(BaseModel):
    """Error code reported by the browser recognizer (e.g. "not-allowed")."""
    error: str


class CandidateSelectRequest(BaseModel):
    name: str


class ConfirmationAnswerRequest(BaseModel):
    confirmed: bool


class PendingConfirmationOut(BaseModel):
    entity: str
    quantity: int


class VoiceStatusOut(BaseModel):
    is_active: bool
    phase: VoicePhase
    is_processing: bool
    is_supported: bool
    is_listening: bool
    is_speaking: bool
    lang: str
    last_response: str
    show_help: bool
    notice: Optional[str] = None
    candidates: list[str] = []
    pending_confirmation: Optional[PendingConfirmationOut] = None


class VoiceResultOut(BaseModel):
    """
    Response to a submitted transcript.

    `accepted` is False when the transcript was ignored (voice mode off,
    repeat, or a classifier call already in flight).
    """
    accepted: bool
    message: Optional[str] = None
    phase: VoicePhase
    show_help: bool = False
    candidates: list[str] = []
    cart_total: Optional[int] = None


class UtteranceOut(BaseModel):
    id: int
    text: str
    created_at: datetime
    cancelled: bool
