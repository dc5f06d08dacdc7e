"""
Kiosk application context.

Everything the routes need, built once per application and handed to
FastAPI handlers through `get_context`. There is no module-level kiosk
state: tests build their own context with a fake classifier and an
in-memory database.
"""

from dataclasses import dataclass
from typing import Callable, Optional

from fastapi import Request
from sqlalchemy.orm import Session

from .payment import PaymentService
from .persistence import CatalogRepository
from .speech import BufferedSpeechCapture, QueuedSpeechOutput
from .store.kiosk import KioskStore
from .voice.classifier import IntentClassifier, KeywordIntentClassifier, RemoteIntentClassifier
from .voice.state_machine import VoiceCommandResolver


@dataclass
class KioskContext:
    kiosk: KioskStore
    capture: BufferedSpeechCapture
    output: QueuedSpeechOutput
    resolver: VoiceCommandResolver
    payment: PaymentService
    repository: Optional[CatalogRepository] = None


def build_context(
    session_factory: Optional[Callable[[], Session]] = None,
    kiosk: Optional[KioskStore] = None,
    classifier: Optional[IntentClassifier] = None,
    capture: Optional[BufferedSpeechCapture] = None,
    output: Optional[QueuedSpeechOutput] = None,
    payment: Optional[PaymentService] = None,
    **resolver_options,
) -> KioskContext:
    """
    Wire up a kiosk.

    With a session factory the catalog is loaded from, and saved to, the
    database. A kiosk passed in explicitly is used as is.
    """
    repository = CatalogRepository(session_factory) if session_factory is not None else None
    if kiosk is None:
        kiosk = repository.load_store() if repository is not None else KioskStore()

    capture = capture or BufferedSpeechCapture()
    output = output or QueuedSpeechOutput()
    resolver = VoiceCommandResolver(
        kiosk,
        classifier or RemoteIntentClassifier(fallback=KeywordIntentClassifier(kiosk.synonym_families)),
        capture,
        output,
        **resolver_options,
    )
    return KioskContext(
        kiosk=kiosk,
        capture=capture,
        output=output,
        resolver=resolver,
        payment=payment or PaymentService(kiosk),
        repository=repository,
    )


def get_context(request: Request) -> KioskContext:
    """FastAPI dependency returning the application's KioskContext."""
    return request.app.state.kiosk_context
