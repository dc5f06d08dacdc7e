"""
Schemas Package for Kiosk Bot
=============================

Pydantic models used for API request validation and response serialization.

Schema Organization:
--------------------
- **menu.py**: Menu item and category schemas (customer + admin)
- **cart.py**: Cart schemas
- **orders.py**: Checkout, order and payment schemas
- **voice.py**: Voice ordering schemas

Naming Conventions:
-------------------
- *Out: Response models
- *Create: Request models for POST
- *Update: Request models for PUT/PATCH
- *Request: Other request bodies
"""

from .menu import (
    CategoryOut,
    CategoryCreate,
    CategoryUpdate,
    CategoryDeleteResponse,
    MenuItemOut,
    MenuItemCreate,
    MenuItemUpdate,
)
from .cart import CartLineOut, CartOut, CartItemAdd, CartItemUpdate
from .orders import OrderOut, CheckoutRequest, PaymentRequest, PaymentResponse
from .voice import (
    VoiceStartRequest,
    TranscriptRequest,
    CaptureErrorRequest,
    CandidateSelectRequest,
    ConfirmationAnswerRequest,
    PendingConfirmationOut,
    VoiceStatusOut,
    VoiceResultOut,
    UtteranceOut,
)

__all__ = [
    # Menu
    "CategoryOut",
    "CategoryCreate",
    "CategoryUpdate",
    "CategoryDeleteResponse",
    "MenuItemOut",
    "MenuItemCreate",
    "MenuItemUpdate",
    # Cart
    "CartLineOut",
    "CartOut",
    "CartItemAdd",
    "CartItemUpdate",
    # Orders
    "OrderOut",
    "CheckoutRequest",
    "PaymentRequest",
    "PaymentResponse",
    # Voice
    "VoiceStartRequest",
    "TranscriptRequest",
    "CaptureErrorRequest",
    "CandidateSelectRequest",
    "ConfirmationAnswerRequest",
    "PendingConfirmationOut",
    "VoiceStatusOut",
    "VoiceResultOut",
    "UtteranceOut",
]
