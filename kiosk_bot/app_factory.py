"""
Application factory for the kiosk FastAPI application.

create_app() wires the kiosk context (store, voice resolver, payment) into
app.state and registers every router. Tests pass a ready-made context so no
database file or API key is needed.
"""

import logging
from typing import Callable, Optional

from fastapi import APIRouter, FastAPI
from fastapi.middleware.cors import CORSMiddleware
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded
from sqlalchemy.orm import Session

from . import config
from .context import KioskContext, build_context
from .db import SessionLocal, init_db
from .logging_config import setup_logging
from .routes import (
    admin_menu_router,
    cart_router,
    limiter,
    menu_router,
    orders_router,
    tts_router,
    voice_router,
)

logger = logging.getLogger(__name__)

ROUTERS = (
    menu_router,
    admin_menu_router,
    cart_router,
    orders_router,
    voice_router,
    tts_router,
)


def create_app(
    context: Optional[KioskContext] = None,
    session_factory: Optional[Callable[[], Session]] = None,
) -> FastAPI:
    """
    Create a FastAPI application.

    Args:
        context: Kiosk context to serve. If None, one is built from
                 `session_factory` (default: the configured database).
        session_factory: SQLAlchemy session factory for catalog persistence.

    Returns:
        Configured FastAPI application
    """
    setup_logging()

    if context is None:
        if session_factory is None:
            init_db()
            session_factory = SessionLocal
        context = build_context(session_factory)

    app = FastAPI(
        title="Kiosk Bot API",
        description="Self-service ordering kiosk with voice ordering",
        version="1.0.0",
    )
    app.state.kiosk_context = context

    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Configure rate limiting
    app.state.limiter = limiter
    app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)

    # Include routers with API version prefix
    api_v1 = APIRouter(prefix="/api/v1")
    for router in ROUTERS:
        api_v1.include_router(router)
    app.include_router(api_v1)

    # Also mount at root
    for router in ROUTERS:
        app.include_router(router)

    @app.get("/health")
    def health_check():
        return {
            "status": "healthy",
            "menu_items": len(context.kiosk.state.menu_items),
            "voice_mode": context.kiosk.state.is_voice_mode,
        }

    logger.info("Application created (%d menu items)", len(context.kiosk.state.menu_items))
    return app
