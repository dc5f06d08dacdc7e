"""
Routes Package for Kiosk Bot
============================

This package contains all API route definitions organized by domain. Each
module defines a FastAPI APIRouter with related endpoints grouped together.

Architecture Overview:
----------------------
**Customer-Facing Routes:**
- menu.py: Menu and category listing
- cart.py: Touch-screen cart operations
- orders.py: Checkout and simulated payment
- voice.py: Voice ordering (transcripts in, spoken responses out)
- tts.py: Server-side text-to-speech

**Admin Routes (require authentication):**
- admin_menu.py: Menu item and category CRUD

Router Registration:
--------------------
All routers are registered by app_factory.create_app() under two prefixes:
1. /api/v1/* - Versioned API (recommended)
2. /* - Root paths

Route Dependencies:
-------------------
- get_context: The KioskContext (store, voice resolver, payment)
- verify_admin_credentials: Admin authentication
- limiter.limit(): Rate limiting on transcript submission

Handlers that touch the kiosk are async so they run on the event loop
alongside the voice resolver, which keeps the store single-writer.

Error Handling:
---------------
Domain errors are mapped to HTTPException:
- 400: Bad request (empty cart, sold-out item, unknown category)
- 401: Unauthorized (invalid credentials)
- 404: Not found (invalid ID, no current order)
- 409: Payment already in progress
- 429: Too many requests (rate limited)
- 503: Service unavailable (missing configuration)
"""

from .menu import menu_router
from .admin_menu import admin_menu_router
from .cart import cart_router
from .orders import orders_router
from .voice import voice_router, limiter
from .tts import tts_router

__all__ = [
    "menu_router",
    "admin_menu_router",
    "cart_router",
    "orders_router",
    "voice_router",
    "limiter",
    "tts_router",
]
