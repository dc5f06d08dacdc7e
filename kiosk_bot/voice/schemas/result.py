"""
Voice Pipeline Results.

Defines the result structures returned by the executor and the resolver.
"""

from dataclasses import dataclass, field

from .phases import VoicePhase


@dataclass
class ExecutionResult:
    """Result from executing one resolved command."""
    message: str
    show_help: bool = False
    cart_total: int | None = None


@dataclass
class VoiceResult:
    """Result from the resolver handling one transcript."""
    message: str
    phase: VoicePhase
    show_help: bool = False
    candidates: list[str] = field(default_factory=list)
    cart_total: int | None = None


@dataclass
class FollowUpResult:
    """Result from answering a pending disambiguation or confirmation."""
    result: ExecutionResult
    still_pending: bool = False
    resolved_name: str | None = None
