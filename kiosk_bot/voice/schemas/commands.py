"""
Voice Command Schemas.

Transient, pipeline-internal structures. A VoiceCommand is produced by a
classifier and consumed immediately by the resolver; the pending follow-up
records live only while the resolver waits on the customer.
"""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class VoiceIntent(str, Enum):
    ADD_ITEM = "add_item"
    REMOVE_ITEM = "remove_item"
    SHOW_MENU = "show_menu"
    CHECKOUT = "checkout"
    HELP = "help"
    UNKNOWN = "unknown"


class OrderLine(BaseModel):
    """One (name, quantity) pair from a compound utterance."""
    model_config = ConfigDict(frozen=True)

    name: str
    quantity: int = Field(default=1, ge=1)


class VoiceCommand(BaseModel):
    """A classified utterance."""
    model_config = ConfigDict(frozen=True)

    intent: VoiceIntent
    entity: str | None = None
    quantity: int = Field(default=1, ge=1)
    confidence: float = Field(default=1.0, ge=0.0, le=1.0)
    items: list[OrderLine] = Field(default_factory=list)

    @property
    def is_multi_item(self) -> bool:
        return bool(self.items)


class PendingConfirmation(BaseModel):
    """A low-confidence add waiting for yes/no."""
    model_config = ConfigDict(frozen=True)

    entity: str
    quantity: int = 1
    transcript: str = ""


class MenuSelectionCandidates(BaseModel):
    """Candidate item names waiting for the customer to pick one."""
    model_config = ConfigDict(frozen=True)

    candidates: list[str]
    quantity: int = 1
    transcript: str = ""
