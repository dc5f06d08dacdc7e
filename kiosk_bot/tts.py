"""
Text-to-Speech provider abstraction layer.

Spoken responses are normally synthesized by the kiosk browser (Web Speech
API). When TTS_PROVIDER=openai the server can synthesize them instead, which
gives the same voice on every kiosk.

Usage:
    from kiosk_bot.tts import get_tts_provider

    provider = get_tts_provider()
    audio_bytes = await provider.synthesize("안녕하세요! 음성으로 주문을 도와드리겠습니다.")
"""

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from typing import List, Optional

from openai import AsyncOpenAI

from . import config

logger = logging.getLogger(__name__)


class TTSProvider(str, Enum):
    """Supported TTS providers."""
    OPENAI = "openai"
    BROWSER = "browser"  # Web Speech API (client-side only)


@dataclass
class Voice:
    """Represents a TTS voice option."""
    id: str
    name: str
    gender: Optional[str] = None
    description: Optional[str] = None


class BaseTTSProvider(ABC):
    """Abstract base class for TTS providers."""

    @property
    @abstractmethod
    def name(self) -> str:
        pass

    @property
    @abstractmethod
    def voices(self) -> List[Voice]:
        pass

    @abstractmethod
    async def synthesize(
        self,
        text: str,
        voice_id: Optional[str] = None,
        speed: float = 1.0,
    ) -> bytes:
        """
        Synthesize text to speech.

        Returns:
            Audio data as bytes (MP3 format)
        """
        pass


class OpenAITTSProvider(BaseTTSProvider):
    """OpenAI Text-to-Speech provider."""

    VOICES = [
        Voice("alloy", "Alloy", "neutral", "Neutral and balanced"),
        Voice("nova", "Nova", "female", "Friendly and upbeat"),
        Voice("shimmer", "Shimmer", "female", "Clear and pleasant"),
        Voice("echo", "Echo", "male", "Warm and confident"),
        Voice("onyx", "Onyx", "male", "Deep and authoritative"),
    ]

    def __init__(self, api_key: Optional[str] = None, model: str = "tts-1", client=None):
        self.api_key = api_key or config.OPENAI_API_KEY
        if not self.api_key and client is None:
            raise ValueError("OpenAI API key not found. Set OPENAI_API_KEY environment variable.")

        self.model = model
        self.default_voice = "nova"
        self.client = client or AsyncOpenAI(api_key=self.api_key)

        logger.debug("OpenAI TTS provider initialized with model: %s", model)

    @property
    def name(self) -> str:
        return "OpenAI"

    @property
    def voices(self) -> List[Voice]:
        return self.VOICES

    async def synthesize(
        self,
        text: str,
        voice_id: Optional[str] = None,
        speed: float = 1.0,
    ) -> bytes:
        voice = voice_id or self.default_voice

        valid_voices = [v.id for v in self.VOICES]
        if voice not in valid_voices:
            logger.warning("Invalid voice '%s', using default '%s'", voice, self.default_voice)
            voice = self.default_voice

        speed = max(0.25, min(4.0, speed))

        logger.debug("Synthesizing %d chars with voice '%s', speed %.1f", len(text), voice, speed)

        response = await self.client.audio.speech.create(
            model=self.model,
            voice=voice,
            input=text,
            speed=speed,
            response_format="mp3",
        )
        audio_bytes = response.content
        logger.debug("Generated %d bytes of audio", len(audio_bytes))
        return audio_bytes


_provider_instance: Optional[BaseTTSProvider] = None


def get_tts_provider(provider_type: Optional[TTSProvider] = None, **kwargs) -> BaseTTSProvider:
    """
    Get the server-side TTS provider (cached).

    Raises ValueError when the configured provider synthesizes in the browser
    or the provider cannot be initialized.
    """
    global _provider_instance

    if provider_type is None:
        try:
            provider_type = TTSProvider(config.TTS_PROVIDER)
        except ValueError:
            logger.warning("Unknown TTS provider '%s', using browser synthesis", config.TTS_PROVIDER)
            provider_type = TTSProvider.BROWSER

    if provider_type == TTSProvider.BROWSER:
        raise ValueError("TTS_PROVIDER is 'browser'; speech is synthesized on the kiosk")

    if _provider_instance is not None and not kwargs:
        return _provider_instance

    _provider_instance = OpenAITTSProvider(**kwargs)
    logger.info("Initialized TTS provider: %s", _provider_instance.name)
    return _provider_instance


def reset_tts_provider() -> None:
    global _provider_instance
    _provider_instance = None
