"""
Tests for the keyword (deterministic) intent parser.
"""
import pytest

from kiosk_bot.store.kiosk import DEFAULT_MENU_ITEMS
from kiosk_bot.voice.confirmation_handler import parse_yes_no
from kiosk_bot.voice.parsers import extract_quantity, parse_transcript_deterministic
from kiosk_bot.voice.schemas import VoiceIntent


def parse(text):
    return parse_transcript_deterministic(text, DEFAULT_MENU_ITEMS)


class TestExtractQuantity:

    @pytest.mark.parametrize("text,expected", [
        ("콜라 2개", 2),
        ("콜라 3 잔", 3),
        ("콜라 두 개", 2),
        ("감자튀김 하나 개", 1),
        ("치킨버거 한개", 1),
        ("two colas", 2),
        ("Three Cola", 3),
        ("콜라 열 잔", 10),
    ])
    def test_quantities(self, text, expected):
        assert extract_quantity(text) == expected

    def test_korean_word_needs_unit(self):
        assert extract_quantity("네 콜라 주세요") is None

    def test_no_quantity(self):
        assert extract_quantity("콜라 주세요") is None

    def test_digits_win(self):
        assert extract_quantity("두 개 말고 3개") == 3

    def test_english_word_boundary(self):
        # "someone" must not read as one
        assert extract_quantity("someone ordered") is None


class TestParseTranscript:

    def test_add_with_quantity(self):
        command = parse("치킨버거 2개 추가해줘")
        assert command.intent == VoiceIntent.ADD_ITEM
        assert command.entity == "치킨버거"
        assert command.quantity == 2
        assert command.confidence == 1.0

    def test_add_english_name_resolves_primary(self):
        command = parse("add two cola")
        assert command.intent == VoiceIntent.ADD_ITEM
        assert command.entity == "콜라"
        assert command.quantity == 2

    def test_add_spaced_name(self):
        command = parse("감자 튀김 주문할게요")
        assert command.entity == "감자튀김"

    def test_add_generic_word_gives_family_keyword(self):
        command = parse("햄버거 주문해줘")
        assert command.intent == VoiceIntent.ADD_ITEM
        assert command.entity == "버거"

    def test_remove(self):
        command = parse("콜라 빼줘")
        assert command.intent == VoiceIntent.REMOVE_ITEM
        assert command.entity == "콜라"

    def test_show_menu(self):
        assert parse("메뉴 보여줘").intent == VoiceIntent.SHOW_MENU
        assert parse("what is on the menu").intent == VoiceIntent.SHOW_MENU

    def test_order_complete_is_checkout(self):
        # contains the add trigger 주문 but no menu name
        assert parse("주문완료").intent == VoiceIntent.CHECKOUT

    def test_checkout(self):
        assert parse("결제할게요").intent == VoiceIntent.CHECKOUT

    def test_help(self):
        assert parse("도움말").intent == VoiceIntent.HELP

    def test_unrecognized(self):
        assert parse("오늘 날씨 어때") is None
        assert parse("   ") is None


class TestYesNo:

    @pytest.mark.parametrize("text", ["네", "예 맞아요", "응", "yes please", "그래"])
    def test_affirmative(self, text):
        assert parse_yes_no(text) is True

    @pytest.mark.parametrize("text", ["아니요", "아니예요", "아냐", "no"])
    def test_negative(self, text):
        assert parse_yes_no(text) is False

    def test_unclear(self):
        assert parse_yes_no("글쎄") is None

    @pytest.mark.parametrize("text", ["yes I know", "yes, now", "yes please, nothing else"])
    def test_english_no_only_as_whole_word(self, text):
        assert parse_yes_no(text) is True

    def test_english_no_with_punctuation(self):
        assert parse_yes_no("no, thanks") is False
