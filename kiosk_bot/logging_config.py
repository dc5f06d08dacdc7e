"""
Logging configuration for the kiosk bot application.

Every record is stamped with the kiosk it came from, so logs shipped from a
fleet of kiosks can be told apart. The voice pipeline logs each customer
transcript at INFO; its level can be set on its own to keep those out of
production logs or to trace one kiosk's classifier in detail.

Usage:
    from kiosk_bot.logging_config import setup_logging
    setup_logging()  # Call once at application startup

Environment variables:
    LOG_LEVEL: DEBUG, INFO, WARNING, ERROR, or CRITICAL (default: INFO)
    VOICE_LOG_LEVEL: Level for kiosk_bot.voice (default: LOG_LEVEL)
    KIOSK_ID: Name stamped on every record (default: "kiosk")
"""
import logging
import os
import sys
from typing import Optional

VALID_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")

LOG_FORMAT = "%(asctime)s - %(kiosk_id)s - %(name)s - %(levelname)s - %(message)s"

# Third-party clients are chatty below WARNING
NOISY_LOGGERS = ("httpx", "httpcore", "openai", "instructor", "sqlalchemy.engine")


class KioskIdFilter(logging.Filter):
    """Adds `kiosk_id` to every record passing through the handler."""

    def __init__(self, kiosk_id: str):
        super().__init__()
        self.kiosk_id = kiosk_id

    def filter(self, record: logging.LogRecord) -> bool:
        record.kiosk_id = self.kiosk_id
        return True


def _parse_level(level: Optional[str], default: str = "INFO") -> str:
    if not level:
        return default
    level = level.upper()
    return level if level in VALID_LEVELS else default


def setup_logging(
    level: Optional[str] = None,
    voice_level: Optional[str] = None,
    kiosk_id: Optional[str] = None,
) -> None:
    """
    Configure logging for the application.

    Args:
        level: Log level for kiosk_bot. Falls back to LOG_LEVEL, then INFO.
        voice_level: Log level for the voice pipeline. Falls back to
                     VOICE_LOG_LEVEL, then to `level`.
        kiosk_id: Kiosk name for the log lines. Falls back to KIOSK_ID.
    """
    level = _parse_level(level or os.getenv("LOG_LEVEL"))
    voice_level = _parse_level(voice_level or os.getenv("VOICE_LOG_LEVEL"), default=level)
    kiosk_id = kiosk_id or os.getenv("KIOSK_ID", "kiosk")

    numeric_level = getattr(logging, level)

    handler = logging.StreamHandler(sys.stdout)
    handler.addFilter(KioskIdFilter(kiosk_id))
    handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt="%Y-%m-%d %H:%M:%S"))
    logging.basicConfig(level=numeric_level, handlers=[handler])

    logging.getLogger("kiosk_bot").setLevel(numeric_level)
    logging.getLogger("kiosk_bot.voice").setLevel(getattr(logging, voice_level))

    if level != "DEBUG":
        for name in NOISY_LOGGERS:
            logging.getLogger(name).setLevel(logging.WARNING)

    logger = logging.getLogger(__name__)
    logger.debug("Logging configured at %s (voice %s) for %s", level, voice_level, kiosk_id)
