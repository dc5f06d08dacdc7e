import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

import kiosk_bot.config as config_mod
from kiosk_bot.app_factory import create_app
from kiosk_bot.context import build_context
from kiosk_bot.models import Base
from kiosk_bot.routes import limiter
from kiosk_bot.speech import BufferedSpeechCapture, QueuedSpeechOutput
from kiosk_bot.store.kiosk import KioskStore
from kiosk_bot.store.models import MenuItem
from kiosk_bot.voice.classifier import KeywordIntentClassifier
from kiosk_bot.voice.schemas import VoiceCommand, VoiceIntent
from kiosk_bot.voice.state_machine import VoiceCommandResolver

# Test admin credentials
TEST_ADMIN_USERNAME = "testadmin"
TEST_ADMIN_PASSWORD = "testpassword123"


class ScriptedClassifier:
    """
    Classifier fake returning queued answers in order.

    An answer may be a VoiceCommand, None, an exception instance (raised),
    or a coroutine function (awaited, for slow/hanging classifiers). When the
    script runs out it answers None.
    """

    def __init__(self, *answers):
        self.answers = list(answers)
        self.calls = []

    async def classify(self, transcript, available_menus):
        self.calls.append(transcript)
        if not self.answers:
            return None
        answer = self.answers.pop(0)
        if isinstance(answer, Exception):
            raise answer
        if callable(answer):
            return await answer()
        return answer


def add(entity, quantity=1, confidence=0.95):
    return VoiceCommand(intent=VoiceIntent.ADD_ITEM, entity=entity, quantity=quantity, confidence=confidence)


@pytest.fixture
def kiosk():
    """Kiosk with the default seed catalog."""
    return KioskStore()


@pytest.fixture
def burger_kiosk():
    """Seed catalog plus a second chicken item and a shrimp burger."""
    store = KioskStore()
    store.catalog.add_item(MenuItem(
        id="5", name="새우버거", name_en="Shrimp Burger", price=9000, category="1",
    ))
    store.catalog.add_item(MenuItem(
        id="6", name="치킨너겟", name_en="Chicken Nuggets", price=4000, category="2",
    ))
    return store


@pytest.fixture
def make_resolver():
    """Build a voice resolver in voice mode around a kiosk and classifier."""
    def _make(kiosk, classifier, **options):
        capture = BufferedSpeechCapture()
        output = QueuedSpeechOutput()
        resolver = VoiceCommandResolver(kiosk, classifier, capture, output, **options)
        resolver.start()
        return resolver, capture, output
    return _make


@pytest.fixture
def session_factory():
    """In-memory SQLite session factory shared across connections (StaticPool)."""
    engine = create_engine(
        "sqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield sessionmaker(autocommit=False, autoflush=False, bind=engine)
    engine.dispose()


@pytest.fixture
def classifier():
    """Keyword classifier; the API tests never reach the network."""
    return KeywordIntentClassifier()


@pytest.fixture
def client(monkeypatch, session_factory, classifier):
    """FastAPI TestClient over an in-memory database and a keyword classifier."""
    monkeypatch.setattr(config_mod, "ADMIN_USERNAME", TEST_ADMIN_USERNAME)
    monkeypatch.setattr(config_mod, "ADMIN_PASSWORD", TEST_ADMIN_PASSWORD)
    monkeypatch.setattr(limiter, "enabled", False)

    context = build_context(session_factory, classifier=classifier)
    app = create_app(context=context)

    # Payments complete immediately in tests
    context.payment.processing_seconds = 0

    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def admin_auth():
    """Returns HTTP Basic Auth tuple for admin endpoints."""
    return (TEST_ADMIN_USERNAME, TEST_ADMIN_PASSWORD)

