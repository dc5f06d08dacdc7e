"""
Tests for the in-process speech capture and speech output collaborators.
"""
from kiosk_bot.speech import BufferedSpeechCapture, QueuedSpeechOutput


class TestBufferedSpeechCapture:

    def test_start_clears_transcript_and_error(self):
        capture = BufferedSpeechCapture()
        capture.push(" 콜라 주문 ")
        capture.fail("network")
        assert capture.transcript == "콜라 주문"
        assert not capture.is_listening

        capture.start()

        assert capture.is_listening
        assert capture.transcript == ""
        assert capture.error is None

    def test_unsupported_never_listens(self):
        capture = BufferedSpeechCapture(supported=False)
        capture.start()
        assert not capture.is_listening

    def test_fatal_errors(self):
        capture = BufferedSpeechCapture()
        capture.fail("audio-capture")
        assert capture.is_fatal_error
        capture.fail("no-speech")
        assert not capture.is_fatal_error

    def test_default_language(self):
        assert BufferedSpeechCapture().lang == "ko-KR"

    def test_session_language(self):
        capture = BufferedSpeechCapture()
        capture.set_lang("ja-JP")
        capture.start()
        assert capture.lang == "ja-JP"


class TestQueuedSpeechOutput:

    def test_speaking_cancels_previous(self):
        output = QueuedSpeechOutput()
        output.speak("첫 번째")
        output.speak("두 번째")

        first, second = output.history()
        assert first.cancelled
        assert not second.cancelled
        assert output.is_speaking
        assert output.last_text == "두 번째"

    def test_finished_and_stop(self):
        output = QueuedSpeechOutput()
        output.speak("안내")
        utterance = output.history()[-1]

        output.finished(utterance.id)
        assert not output.is_speaking
        assert not utterance.cancelled

        output.speak("다시")
        output.stop()
        assert not output.is_speaking
        assert output.history()[-1].cancelled

    def test_history_after_id_and_limit(self):
        output = QueuedSpeechOutput(max_history=3)
        for i in range(5):
            output.speak(f"응답 {i}")
        assert [u.text for u in output.history()] == ["응답 2", "응답 3", "응답 4"]
        assert [u.text for u in output.history(after_id=4)] == ["응답 4"]

    def test_empty_text_ignored(self):
        output = QueuedSpeechOutput()
        output.speak("")
        assert output.history() == []
