"""
Voice Ordering Routes for Kiosk Bot
===================================

Endpoints that connect the kiosk browser's speech recognition and speech
synthesis to the voice resolver running in this process.

Endpoints:
----------
- POST /voice/start, /voice/stop, /voice/toggle: Voice mode on/off
  (/voice/start may carry the session locale)
- POST /voice/transcript: Submit a final transcript (rate limited)
- POST /voice/select: Pick a disambiguation candidate (on-screen button)
- POST /voice/confirm: Answer a pending confirmation (on-screen yes/no)
- POST /voice/capture-error: Recognizer reported an error
- POST /voice/help/dismiss: Close the help panel
- GET /voice/status: Phase, last response, pending follow-up
- GET /voice/utterances: Responses to speak, newer than `after_id`
- POST /voice/utterances/{id}/finished: Client finished speaking one

Flow:
-----
1. Client calls /voice/start and begins recognition
2. Each final transcript is POSTed to /voice/transcript
3. The response (and /voice/utterances) carries what to say back
4. While the resolver is analyzing, further transcripts are held and
   picked up when the running cycle completes

All handlers are async so that every resolver call, and every store
mutation it makes, happens on the event loop.
"""

import logging

from typing import Optional

from fastapi import APIRouter, Depends, Query, Request
from slowapi import Limiter
from slowapi.util import get_remote_address

from ..config import RATE_LIMIT_ENABLED, get_rate_limit_voice
from ..context import KioskContext, get_context
from ..schemas.voice import (
    CandidateSelectRequest,
    CaptureErrorRequest,
    ConfirmationAnswerRequest,
    PendingConfirmationOut,
    TranscriptRequest,
    VoiceStartRequest,
    UtteranceOut,
    VoiceResultOut,
    VoiceStatusOut,
)
from ..voice.schemas import VoiceResult


logger = logging.getLogger(__name__)

# Router definition
voice_router = APIRouter(prefix="/voice", tags=["Voice"])

# Registered on app.state by create_app()
limiter = Limiter(key_func=get_remote_address, enabled=RATE_LIMIT_ENABLED)


# =============================================================================
# Helper Functions
# =============================================================================

def serialize_result(result: VoiceResult | None, ctx: KioskContext) -> VoiceResultOut:
    """Convert a resolver result; None means the input was ignored."""
    if result is None:
        return VoiceResultOut(accepted=False, phase=ctx.resolver.phase)
    return VoiceResultOut(
        accepted=True,
        message=result.message,
        phase=result.phase,
        show_help=result.show_help,
        candidates=result.candidates,
        cart_total=result.cart_total,
    )


def serialize_status(ctx: KioskContext) -> VoiceStatusOut:
    resolver = ctx.resolver
    pending = resolver.pending_confirmation
    return VoiceStatusOut(
        is_active=resolver.is_active,
        phase=resolver.phase,
        is_processing=resolver.is_processing,
        is_supported=ctx.capture.is_supported and not resolver.disabled,
        is_listening=ctx.capture.is_listening,
        is_speaking=ctx.output.is_speaking,
        lang=ctx.capture.lang,
        last_response=resolver.last_response,
        show_help=resolver.show_help,
        notice=resolver.notice,
        candidates=list(resolver.selection.candidates) if resolver.selection is not None else [],
        pending_confirmation=(
            PendingConfirmationOut(entity=pending.entity, quantity=pending.quantity)
            if pending is not None else None
        ),
    )


# =============================================================================
# Voice Mode Endpoints
# =============================================================================

@voice_router.post("/start", response_model=VoiceResultOut)
async def start_voice(
    req: Optional[VoiceStartRequest] = None,
    ctx: KioskContext = Depends(get_context),
) -> VoiceResultOut:
    """Turn voice mode on, optionally in the locale the customer picked."""
    if req is not None and req.lang:
        ctx.capture.set_lang(req.lang)
    return serialize_result(ctx.resolver.start(), ctx)


@voice_router.post("/stop", response_model=VoiceResultOut)
async def stop_voice(ctx: KioskContext = Depends(get_context)) -> VoiceResultOut:
    return serialize_result(ctx.resolver.stop(), ctx)


@voice_router.post("/toggle", response_model=VoiceResultOut)
async def toggle_voice(ctx: KioskContext = Depends(get_context)) -> VoiceResultOut:
    return serialize_result(ctx.resolver.toggle(), ctx)


@voice_router.get("/status", response_model=VoiceStatusOut)
async def voice_status(ctx: KioskContext = Depends(get_context)) -> VoiceStatusOut:
    return serialize_status(ctx)


# =============================================================================
# Transcript Endpoints
# =============================================================================

@voice_router.post("/transcript", response_model=VoiceResultOut)
@limiter.limit(get_rate_limit_voice)
async def submit_transcript(
    request: Request,
    req: TranscriptRequest,
    ctx: KioskContext = Depends(get_context),
) -> VoiceResultOut:
    """
    Submit one final transcript from the recognizer.

    Returns accepted=false when the transcript was not processed now (voice
    mode off, a repeat, or another transcript is being analyzed).
    """
    ctx.capture.push(req.transcript)
    result = await ctx.resolver.handle_transcript(req.transcript)
    return serialize_result(result, ctx)


@voice_router.post("/select", response_model=VoiceResultOut)
async def select_candidate(
    req: CandidateSelectRequest,
    ctx: KioskContext = Depends(get_context),
) -> VoiceResultOut:
    return serialize_result(await ctx.resolver.select_candidate(req.name), ctx)


@voice_router.post("/confirm", response_model=VoiceResultOut)
async def answer_confirmation(
    req: ConfirmationAnswerRequest,
    ctx: KioskContext = Depends(get_context),
) -> VoiceResultOut:
    return serialize_result(await ctx.resolver.answer_confirmation(req.confirmed), ctx)


@voice_router.post("/capture-error", response_model=VoiceResultOut)
async def report_capture_error(
    req: CaptureErrorRequest,
    ctx: KioskContext = Depends(get_context),
) -> VoiceResultOut:
    ctx.capture.fail(req.error)
    return serialize_result(ctx.resolver.handle_capture_error(), ctx)


@voice_router.post("/help/dismiss", response_model=VoiceStatusOut)
async def dismiss_help(ctx: KioskContext = Depends(get_context)) -> VoiceStatusOut:
    ctx.resolver.dismiss_help()
    return serialize_status(ctx)


# =============================================================================
# Spoken Output Endpoints
# =============================================================================

@voice_router.get("/utterances", response_model=list[UtteranceOut])
async def list_utterances(
    after_id: int = Query(0, ge=0, description="Only utterances newer than this id"),
    ctx: KioskContext = Depends(get_context),
) -> list[UtteranceOut]:
    return [
        UtteranceOut(id=u.id, text=u.text, created_at=u.created_at, cancelled=u.cancelled)
        for u in ctx.output.history(after_id)
    ]


@voice_router.post("/utterances/{utterance_id}/finished", status_code=204)
async def utterance_finished(
    utterance_id: int,
    ctx: KioskContext = Depends(get_context),
) -> None:
    ctx.output.finished(utterance_id)
