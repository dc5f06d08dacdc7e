"""
Tests for the remote (instructor/OpenAI) intent classifier and its fallback.
"""
import asyncio
from unittest.mock import AsyncMock, MagicMock

import pytest

from kiosk_bot.store.kiosk import DEFAULT_MENU_ITEMS
from kiosk_bot.voice.classifier import RemoteIntentClassifier, to_voice_command
from kiosk_bot.voice.parsers import build_intent_prompt, get_instructor_client
from kiosk_bot.voice.schemas import (
    ClassifiedItem,
    IntentClassificationResponse,
    VoiceIntent,
)


def response(intent, items=(), confidence=0.9):
    return IntentClassificationResponse(
        intent=intent,
        items=[ClassifiedItem(name=n, quantity=q) for n, q in items],
        confidence=confidence,
    )


def mock_client(result=None, error=None):
    client = MagicMock()
    client.chat.completions.create = AsyncMock(return_value=result, side_effect=error)
    return client


def classify(classifier, text):
    return asyncio.run(classifier.classify(text, DEFAULT_MENU_ITEMS))


class TestToVoiceCommand:

    def test_multi_item_add(self):
        command = to_voice_command(response("add_item", [("치킨버거", 1), ("콜라", 2)]), DEFAULT_MENU_ITEMS)
        assert command.intent == VoiceIntent.ADD_ITEM
        assert [(i.name, i.quantity) for i in command.items] == [("치킨버거", 1), ("콜라", 2)]

    def test_unknown_names_dropped(self):
        command = to_voice_command(response("add_item", [("피자", 1), ("콜라", 1)]), DEFAULT_MENU_ITEMS)
        assert [i.name for i in command.items] == ["콜라"]

    def test_add_with_no_valid_names_unusable(self):
        assert to_voice_command(response("add_item", [("피자", 1)], 0.95), DEFAULT_MENU_ITEMS) is None

    def test_sold_out_name_is_not_valid(self):
        available = [i for i in DEFAULT_MENU_ITEMS if i.name != "콜라"]
        assert to_voice_command(response("add_item", [("콜라", 1)]), available) is None

    def test_below_threshold_unusable(self):
        assert to_voice_command(response("add_item", [("콜라", 1)], 0.59), DEFAULT_MENU_ITEMS) is None

    def test_threshold_is_inclusive(self):
        assert to_voice_command(response("checkout", confidence=0.6), DEFAULT_MENU_ITEMS) is not None

    def test_unknown_intent_unusable(self):
        assert to_voice_command(response("unknown", confidence=0.99), DEFAULT_MENU_ITEMS) is None

    def test_remove_uses_first_item(self):
        command = to_voice_command(response("remove_item", [("감자튀김", 1)]), DEFAULT_MENU_ITEMS)
        assert command.intent == VoiceIntent.REMOVE_ITEM
        assert command.entity == "감자튀김"

    def test_remove_without_items_unusable(self):
        assert to_voice_command(response("remove_item"), DEFAULT_MENU_ITEMS) is None


class TestResponseContract:

    def test_extra_keys_rejected(self):
        with pytest.raises(ValueError):
            IntentClassificationResponse.model_validate(
                {"intent": "help", "items": [], "confidence": 0.9, "reply": "hi"}
            )

    def test_unknown_intent_value_rejected(self):
        with pytest.raises(ValueError):
            IntentClassificationResponse.model_validate(
                {"intent": "dance", "items": [], "confidence": 0.9}
            )

    def test_confidence_range(self):
        with pytest.raises(ValueError):
            IntentClassificationResponse.model_validate(
                {"intent": "help", "items": [], "confidence": 1.5}
            )


class TestRemoteIntentClassifier:

    def test_uses_remote_result(self):
        client = mock_client(response("add_item", [("콜라", 2)], 0.95))
        classifier = RemoteIntentClassifier(api_key="sk-test", client=client)

        command = classify(classifier, "콜라 두 잔이요")

        assert command.items[0].name == "콜라"
        assert command.items[0].quantity == 2
        kwargs = client.chat.completions.create.call_args.kwargs
        assert kwargs["response_model"] is IntentClassificationResponse
        assert kwargs["temperature"] == 0.3
        assert kwargs["max_tokens"] == 300
        assert kwargs["max_retries"] == 0
        assert '사용자 음성: "콜라 두 잔이요"' in kwargs["messages"][1]["content"]

    def test_invalid_name_falls_back_to_keywords(self):
        client = mock_client(response("add_item", [("치즈버거", 1)], 0.95))
        classifier = RemoteIntentClassifier(api_key="sk-test", client=client)

        command = classify(classifier, "감자튀김 추가")

        assert command.intent == VoiceIntent.ADD_ITEM
        assert command.entity == "감자튀김"
        assert command.items == []

    def test_low_confidence_falls_back(self):
        client = mock_client(response("checkout", confidence=0.3))
        classifier = RemoteIntentClassifier(api_key="sk-test", client=client)
        assert classify(classifier, "메뉴 보여줘").intent == VoiceIntent.SHOW_MENU

    def test_exception_falls_back(self, caplog):
        client = mock_client(error=RuntimeError("connection reset"))
        classifier = RemoteIntentClassifier(api_key="sk-test", client=client)

        command = classify(classifier, "결제할게요")

        assert command.intent == VoiceIntent.CHECKOUT
        assert "Remote intent classification failed" in caplog.text

    def test_fallback_may_find_nothing(self):
        client = mock_client(response("unknown", confidence=0.9))
        classifier = RemoteIntentClassifier(api_key="sk-test", client=client)
        assert classify(classifier, "오늘 날씨 어때") is None

    def test_no_api_key_never_calls_remote(self, caplog):
        classifier = RemoteIntentClassifier(api_key="")
        assert "OPENAI_API_KEY not set" in caplog.text
        assert classify(classifier, "콜라 주문").entity == "콜라"


class TestPrompt:

    def test_menu_listed_with_english_names(self):
        prompt = build_intent_prompt(DEFAULT_MENU_ITEMS)
        assert "- 치킨버거 (Chicken Burger): 8500원" in prompt
        assert "add_item, remove_item, show_menu, checkout, help, unknown" in prompt

    def test_client_requires_key(self, monkeypatch):
        monkeypatch.delenv("OPENAI_API_KEY", raising=False)
        with pytest.raises(ValueError):
            get_instructor_client("")
