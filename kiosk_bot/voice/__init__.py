"""
Voice Ordering Pipeline.

Speech transcripts in, cart mutations and spoken responses out:

- classifier: remote (instructor/OpenAI) and keyword intent classifiers
- state_machine: VoiceCommandResolver, the listen/analyze/respond cycle
- executor: applies resolved commands to the kiosk store
"""

from .classifier import (
    IntentClassifier,
    KeywordIntentClassifier,
    RemoteIntentClassifier,
    to_voice_command,
)
from .executor import CommandExecutor
from .menu_matcher import MenuMatcher
from .schemas import (
    ExecutionResult,
    MenuSelectionCandidates,
    OrderLine,
    PendingConfirmation,
    VoiceCommand,
    VoiceIntent,
    VoicePhase,
    VoiceResult,
)
from .state_machine import VoiceCommandResolver

__all__ = [
    "IntentClassifier",
    "KeywordIntentClassifier",
    "RemoteIntentClassifier",
    "to_voice_command",
    "CommandExecutor",
    "MenuMatcher",
    "ExecutionResult",
    "MenuSelectionCandidates",
    "OrderLine",
    "PendingConfirmation",
    "VoiceCommand",
    "VoiceIntent",
    "VoicePhase",
    "VoiceResult",
    "VoiceCommandResolver",
]
