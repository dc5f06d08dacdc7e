"""
Voice Phase Definitions.

This module defines the VoicePhase enum representing where the voice
resolver is in its listen / analyze / respond cycle.
"""

from enum import Enum


class VoicePhase(str, Enum):
    """High-level phases of the voice resolver."""
    IDLE = "idle"  # Voice mode off, not capturing
    LISTENING = "listening"
    ANALYZING = "analyzing"  # Classifier call in flight
    EXECUTING = "executing"
    AWAITING_DISAMBIGUATION = "awaiting_disambiguation"  # Waiting for a pick among candidates
    AWAITING_CONFIRMATION = "awaiting_confirmation"  # Waiting for yes/no
