"""
TTS (Text-to-Speech) Routes for Kiosk Bot
=========================================

Server-side speech synthesis for the voice ordering responses. Only
available when TTS_PROVIDER=openai; with the default "browser" provider the
kiosk speaks responses itself and these endpoints return 503.

Endpoints:
----------
- GET /tts/voices: List available voices
- POST /tts/synthesize: Convert text to speech audio (audio/mpeg)

Usage:
------
    POST /tts/synthesize
    {
        "text": "치킨버거 1개를 장바구니에 추가했습니다.",
        "voice": "nova",
        "speed": 1.0
    }
    # Returns: audio/mpeg binary data
"""

import logging
from typing import Optional

from fastapi import APIRouter, HTTPException, Response
from pydantic import BaseModel, Field

from ..tts import get_tts_provider


logger = logging.getLogger(__name__)

# Router definition
tts_router = APIRouter(prefix="/tts", tags=["Text-to-Speech"])


# =============================================================================
# Request/Response Models
# =============================================================================

class SynthesizeRequest(BaseModel):
    """Request model for speech synthesis."""
    text: str = Field(min_length=1, max_length=1000)
    voice: Optional[str] = None
    speed: float = 1.0


class VoiceInfo(BaseModel):
    id: str
    name: str
    gender: Optional[str] = None
    description: Optional[str] = None


class VoicesResponse(BaseModel):
    provider: str
    voices: list[VoiceInfo]


# =============================================================================
# TTS Endpoints
# =============================================================================

@tts_router.get("/voices", response_model=VoicesResponse)
async def list_voices() -> VoicesResponse:
    try:
        provider = get_tts_provider()
    except ValueError as e:
        raise HTTPException(status_code=503, detail=str(e))

    return VoicesResponse(
        provider=provider.name,
        voices=[
            VoiceInfo(id=v.id, name=v.name, gender=v.gender, description=v.description)
            for v in provider.voices
        ],
    )


@tts_router.post("/synthesize")
async def synthesize_speech(req: SynthesizeRequest) -> Response:
    """Synthesize `text` and return MP3 audio."""
    try:
        provider = get_tts_provider()
    except ValueError as e:
        raise HTTPException(status_code=503, detail=str(e))

    try:
        audio = await provider.synthesize(req.text, voice_id=req.voice, speed=req.speed)
    except Exception as e:
        logger.error("TTS synthesis failed: %s", e)
        raise HTTPException(status_code=502, detail="Speech synthesis failed")

    return Response(content=audio, media_type="audio/mpeg")
