"""
Remote Classifier Response Schema.

The strict contract the remote classifier must answer with. Any deviation
(extra keys, missing keys, unknown intent, confidence out of range) fails
validation and counts as a failed call.
"""

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field


class ClassifiedItem(BaseModel):
    model_config = ConfigDict(extra="forbid")

    name: str = Field(description="Menu item name, copied exactly from the available menu list")
    quantity: int = Field(default=1, ge=1, description="How many of this item (default 1)")


class IntentClassificationResponse(BaseModel):
    """Parser output for one kiosk utterance."""
    model_config = ConfigDict(extra="forbid")

    intent: Literal["add_item", "remove_item", "show_menu", "checkout", "help", "unknown"] = Field(
        description="What the customer wants to do"
    )
    items: list[ClassifiedItem] = Field(
        description="Menu items mentioned, with quantities. Empty for show_menu/checkout/help"
    )
    confidence: float = Field(
        ge=0.0,
        le=1.0,
        description="How certain the classification is, 0.0 to 1.0"
    )
