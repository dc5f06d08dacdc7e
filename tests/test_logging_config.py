"""
Tests for logging configuration.
"""
import asyncio
import logging
from unittest.mock import AsyncMock, MagicMock

import pytest

from kiosk_bot.store.kiosk import DEFAULT_MENU_ITEMS
from kiosk_bot.voice.classifier import RemoteIntentClassifier


@pytest.fixture(autouse=True)
def restore_level():
    """Put the package loggers back so later caplog assertions still see warnings."""
    loggers = [logging.getLogger("kiosk_bot"), logging.getLogger("kiosk_bot.voice")]
    original = [logger.level for logger in loggers]
    yield
    for logger, level in zip(loggers, original):
        logger.setLevel(level)


class TestLoggingConfiguration:
    """Test logging setup and configuration."""

    def test_setup_logging_default_level(self, monkeypatch):
        """Test that setup_logging defaults to INFO level."""
        monkeypatch.delenv("LOG_LEVEL", raising=False)

        from kiosk_bot.logging_config import setup_logging
        setup_logging()

        logger = logging.getLogger("kiosk_bot")
        assert logger.level == logging.INFO

    def test_setup_logging_respects_env_var(self, monkeypatch):
        """Test that LOG_LEVEL env var is respected."""
        monkeypatch.setenv("LOG_LEVEL", "warning")

        from kiosk_bot.logging_config import setup_logging
        setup_logging()

        logger = logging.getLogger("kiosk_bot")
        assert logger.level == logging.WARNING

    def test_setup_logging_explicit_level(self):
        from kiosk_bot.logging_config import setup_logging
        setup_logging(level="ERROR")

        logger = logging.getLogger("kiosk_bot")
        assert logger.level == logging.ERROR

    def test_setup_logging_invalid_level_defaults_to_info(self):
        from kiosk_bot.logging_config import setup_logging
        setup_logging(level="INVALID_LEVEL")

        logger = logging.getLogger("kiosk_bot")
        assert logger.level == logging.INFO

    def test_third_party_loggers_quieted(self):
        from kiosk_bot.logging_config import setup_logging
        setup_logging(level="INFO")

        assert logging.getLogger("openai").level == logging.WARNING
        assert logging.getLogger("httpx").level == logging.WARNING

    def test_voice_level_defaults_to_package_level(self, monkeypatch):
        monkeypatch.delenv("VOICE_LOG_LEVEL", raising=False)

        from kiosk_bot.logging_config import setup_logging
        setup_logging(level="WARNING")

        assert logging.getLogger("kiosk_bot.voice").level == logging.WARNING

    def test_voice_level_set_separately(self, monkeypatch):
        monkeypatch.setenv("VOICE_LOG_LEVEL", "debug")

        from kiosk_bot.logging_config import setup_logging
        setup_logging(level="WARNING")

        assert logging.getLogger("kiosk_bot").level == logging.WARNING
        assert logging.getLogger("kiosk_bot.voice").level == logging.DEBUG


class TestKioskIdFilter:
    """Test that records carry the kiosk they came from."""

    def test_filter_stamps_kiosk_id(self):
        from kiosk_bot.logging_config import KioskIdFilter

        record = logging.LogRecord("kiosk_bot", logging.INFO, __file__, 1, "hello", None, None)
        assert KioskIdFilter("lobby-2").filter(record) is True
        assert record.kiosk_id == "lobby-2"

    def test_format_includes_kiosk_id(self):
        from kiosk_bot.logging_config import LOG_FORMAT, KioskIdFilter

        record = logging.LogRecord("kiosk_bot.voice", logging.INFO, __file__, 1, "Analyzing '%s'", ("콜라",), None)
        KioskIdFilter("lobby-2").filter(record)

        line = logging.Formatter(LOG_FORMAT).format(record)
        assert "lobby-2 - kiosk_bot.voice - INFO - Analyzing '콜라'" in line


class TestNoSensitiveDataInLogs:
    """Test that sensitive data is not logged at INFO level or higher."""

    def test_api_key_not_logged_on_failure(self, caplog):
        client = MagicMock()
        client.chat.completions.create = AsyncMock(side_effect=RuntimeError("upstream 500"))
        classifier = RemoteIntentClassifier(api_key="sk-proj-secret", client=client)

        with caplog.at_level(logging.DEBUG):
            asyncio.run(classifier.classify("콜라 주문", DEFAULT_MENU_ITEMS))

        for record in caplog.records:
            assert "sk-proj" not in record.getMessage(), "API key found in logs"
