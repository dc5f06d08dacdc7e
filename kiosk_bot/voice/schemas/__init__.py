"""
Voice Pipeline Schemas.

This package contains the Pydantic models and data structures used by the
voice resolver for classifying transcripts and representing its phases.
"""

from .phases import VoicePhase
from .commands import (
    VoiceIntent,
    OrderLine,
    VoiceCommand,
    PendingConfirmation,
    MenuSelectionCandidates,
)
from .parser_responses import (
    ClassifiedItem,
    IntentClassificationResponse,
)
from .result import ExecutionResult, FollowUpResult, VoiceResult

__all__ = [
    # Phases
    "VoicePhase",
    # Commands
    "VoiceIntent",
    "OrderLine",
    "VoiceCommand",
    "PendingConfirmation",
    "MenuSelectionCandidates",
    # Parser responses
    "ClassifiedItem",
    "IntentClassificationResponse",
    # Results
    "ExecutionResult",
    "FollowUpResult",
    "VoiceResult",
]
