"""
Configuration Module for Kiosk Bot
==================================

This module centralizes the configuration settings, environment variables, and
fixed design constants used throughout the kiosk backend. Everything that can
be tuned per deployment is read from the environment here, once, at import
time.

Configuration Categories:
-------------------------
- **Persistence**: Database URL and the single namespaced key under which the
  catalog (categories + menu items) is stored.

- **Voice Pipeline**: Classifier model/timeout, speech locale, and the quiet
  window after which the transcript buffer is cleared and listening resumes.

- **Payment**: Durations for the simulated payment flow.

- **Rate Limiting / Input Validation**: Protects the transcript endpoint.

- **CORS / Admin**: Frontend origins and HTTP Basic credentials.

Environment Variables:
----------------------
- DATABASE_URL: SQLAlchemy URL (default: "sqlite:///./kiosk.db")
- OPENAI_API_KEY: Enables the remote intent classifier (optional)
- OPENAI_MODEL: Model for intent classification (default: "gpt-4o-mini")
- CLASSIFIER_TIMEOUT_SECONDS: Upper bound on one classifier call (default: 8)
- SPEECH_LANG: Default speech capture/output locale (default: "ko-KR");
  a session may pick another supported locale when voice mode starts
  (a session may pick another supported locale when voice mode starts)
- TTS_PROVIDER: "openai" or "browser" (default: "browser")
- PAYMENT_SIMULATION_SECONDS: Simulated card processing time (default: 3)
- RATE_LIMIT_VOICE: Transcript endpoint rate limit (default: "60 per minute")
- RATE_LIMIT_ENABLED: Enable/disable rate limiting (default: "true")
- MAX_TRANSCRIPT_LENGTH: Max transcript length in characters (default: 500)
- CORS_ORIGINS: Comma-separated allowed origins (default: "*")
- ADMIN_USERNAME / ADMIN_PASSWORD: Admin API credentials

Usage:
------
    from kiosk_bot.config import (
        QUIET_WINDOW_SECONDS,
        CONFIDENCE_THRESHOLD,
        STORAGE_KEY,
    )
"""

import os
from pathlib import Path
from typing import List

from dotenv import load_dotenv

BASE_DIR = Path(__file__).resolve().parent.parent
load_dotenv(dotenv_path=BASE_DIR / ".env")


# =============================================================================
# Persistence Configuration
# =============================================================================
# Only the catalog is persisted. Session state (cart, mode, current order,
# voice-mode flag) is reset to defaults on every load.

DATABASE_URL: str = os.getenv("DATABASE_URL", "sqlite:///./kiosk.db")

# Single namespaced key the catalog snapshot lives under
STORAGE_KEY: str = os.getenv("KIOSK_STORAGE_KEY", "kiosk-system-data")


# =============================================================================
# Voice Pipeline Configuration
# =============================================================================

OPENAI_API_KEY: str = os.getenv("OPENAI_API_KEY", "")
OPENAI_MODEL: str = os.getenv("OPENAI_MODEL", "gpt-4o-mini")

# The classifier has no timeout of its own; the resolver bounds every call
# and treats expiry as a classifier failure.
CLASSIFIER_TIMEOUT_SECONDS: float = float(os.getenv("CLASSIFIER_TIMEOUT_SECONDS", "8"))

# Classifier results below this confidence are not auto-executed.
# Fixed design constant, not read from the environment.
CONFIDENCE_THRESHOLD: float = 0.6

# After a terminal response the transcript buffer and the processed-command
# memory are cleared and listening resumes. Fixed design constant.
QUIET_WINDOW_SECONDS: float = 5.0

SPEECH_LANG: str = os.getenv("SPEECH_LANG", "ko-KR")

# Locales a customer can pick for a voice session
SUPPORTED_SPEECH_LANGS: List[str] = [
    "ko-KR", "en-US", "zh-CN", "ja-JP", "es-ES",
    "fr-FR", "de-DE", "ru-RU", "vi-VN", "th-TH",
]

TTS_PROVIDER: str = os.getenv("TTS_PROVIDER", "browser").lower()


# =============================================================================
# Payment Configuration
# =============================================================================
# Payment is simulated; no gateway is contacted.

PAYMENT_SIMULATION_SECONDS: float = float(os.getenv("PAYMENT_SIMULATION_SECONDS", "3"))

# Seconds the completion screen stays up before the order slot is freed
PAYMENT_AUTO_CLOSE_SECONDS: int = 5


# =============================================================================
# Rate Limiting / Input Validation
# =============================================================================

RATE_LIMIT_VOICE: str = os.getenv("RATE_LIMIT_VOICE", "60 per minute")
RATE_LIMIT_ENABLED: bool = os.getenv("RATE_LIMIT_ENABLED", "true").lower() == "true"

MAX_TRANSCRIPT_LENGTH: int = int(os.getenv("MAX_TRANSCRIPT_LENGTH", "500"))


def get_rate_limit_voice() -> str:
    """
    Return the current transcript rate limit.

    Allows tests to override the limit without touching the module constant.
    """
    return RATE_LIMIT_VOICE


# =============================================================================
# CORS Configuration
# =============================================================================

_cors_origins_env = os.getenv("CORS_ORIGINS", "")
CORS_ORIGINS: List[str] = [
    origin.strip()
    for origin in _cors_origins_env.split(",")
    if origin.strip()
] or ["*"]


# =============================================================================
# Admin Authentication Configuration
# =============================================================================
# ADMIN_PASSWORD must be set for the admin endpoints to accept anyone.

ADMIN_USERNAME: str = os.getenv("ADMIN_USERNAME", "admin")
ADMIN_PASSWORD: str = os.getenv("ADMIN_PASSWORD", "")
