# tests/test_flows.py
import pytest
import requests
from unittest.mock import MagicMock

from simple_talk.errors import AudioLoadError, AudioPlaybackError, RemoteServiceError, ValidationError
from simple_talk.flows import PlaybackFlow, TranslationFlow, validate_sentence
from simple_talk.models import ResultPayload, SimplificationResult
from simple_talk.render import NO_EASY_PRONUNCIATION, NO_INPUT_PRONUNCIATION, render_dictionary_text
from tests.conftest import SAMPLE_TRANSLATION, SAMPLE_TTS_URL, make_response

RESULT = SimplificationResult.from_json(SAMPLE_TRANSLATION)


def make_translation_flow(alerts, navigate, translate=None, speak=None):
    return TranslationFlow(
        alert=alerts,
        navigate=navigate,
        translate=translate or MagicMock(return_value=RESULT),
        speak=speak or MagicMock(return_value=SAMPLE_TTS_URL),
    )


class TestValidateSentence:

    def test_strips_whitespace(self):
        assert validate_sentence("  나는 밥을 먹었다\n") == "나는 밥을 먹었다"

    @pytest.mark.parametrize("text", ["", "   ", "\n\t", None])
    def test_rejects_blank(self, text):
        with pytest.raises(ValidationError):
            validate_sentence(text)


class TestTranslationFlow:

    @pytest.mark.parametrize("text", ["", "   ", "\n", "\t \n"])
    def test_blank_input_alerts_without_network(self, alerts, navigate, text):
        translate, speak = MagicMock(), MagicMock()
        flow = make_translation_flow(alerts, navigate, translate, speak)

        assert flow.submit(text) is None

        translate.assert_not_called()
        speak.assert_not_called()
        navigate.assert_not_called()
        assert alerts.calls == [("알림", "문장을 입력해주세요.")]

    def test_success_navigates_with_full_payload(self, alerts, navigate):
        speak = MagicMock(return_value=SAMPLE_TTS_URL)
        flow = make_translation_flow(alerts, navigate, speak=speak)

        payload = flow.submit("나는 밥을 먹었다")

        speak.assert_called_once_with("나는 밥 먹었어")
        navigate.assert_called_once_with(payload)
        assert payload.tts_url == SAMPLE_TTS_URL
        assert payload.input_english == ""
        assert alerts.calls == []

    def test_trimmed_sentence_is_sent(self, alerts, navigate):
        translate = MagicMock(return_value=RESULT)
        flow = make_translation_flow(alerts, navigate, translate=translate)

        flow.submit("  나는 밥을 먹었다  \n")

        translate.assert_called_once_with("나는 밥을 먹었다")

    @pytest.mark.parametrize("status", [400, 401, 404, 422, 500, 502])
    def test_simplification_failure_never_navigates(self, alerts, navigate, status):
        translate = MagicMock(side_effect=RemoteServiceError(status, "boom", f"상태 코드: {status}"))
        speak = MagicMock()
        flow = make_translation_flow(alerts, navigate, translate, speak)

        assert flow.submit("문장") is None

        navigate.assert_not_called()
        speak.assert_not_called()
        assert alerts.titles == ["오류"]
        assert alerts.messages[0].startswith("서버와 통신 중 문제가 발생했습니다: ")
        assert f"상태 코드: {status}" in alerts.messages[0]

    @pytest.mark.parametrize("error", [requests.ConnectionError("Network is unreachable"), ValueError("bad json")])
    def test_transport_or_parse_failure_alerts_with_message(self, alerts, navigate, error):
        flow = make_translation_flow(alerts, navigate, translate=MagicMock(side_effect=error))

        assert flow.submit("문장") is None

        navigate.assert_not_called()
        assert str(error) in alerts.messages[0]

    @pytest.mark.parametrize("error", [
        RemoteServiceError(500, "TTS down"),
        requests.Timeout("slow"),
    ])
    def test_speech_failure_still_navigates_with_empty_url(self, alerts, navigate, error):
        flow = make_translation_flow(alerts, navigate, speak=MagicMock(side_effect=error))

        payload = flow.submit("나는 밥을 먹었다")

        navigate.assert_called_once()
        assert payload.tts_url == ""
        assert payload.easy_english == "I ate rice"
        assert alerts.calls == [("TTS 오류", "음성 재생 기능을 사용할 수 없습니다.")]

    def test_speech_without_url_yields_empty_string(self, alerts, navigate):
        flow = make_translation_flow(alerts, navigate, speak=MagicMock(return_value=None))

        assert flow.submit("문장").tts_url == ""
        assert alerts.calls == []

    def test_missing_simplified_text_sends_empty_speech_request(self, alerts, navigate):
        speak = MagicMock(return_value=None)
        flow = make_translation_flow(
            alerts, navigate, translate=MagicMock(return_value=SimplificationResult()), speak=speak)

        flow.submit("문장")

        speak.assert_called_once_with("")

    def test_second_submit_while_busy_is_rejected(self, alerts, navigate):
        nested = []
        flow = None

        def translate(text):
            nested.append(flow.submit("다른 문장"))
            return RESULT

        flow = make_translation_flow(alerts, navigate, translate=MagicMock(side_effect=translate))

        assert flow.submit("문장") is not None
        assert nested == [None]
        assert navigate.call_count == 1
        assert not flow.busy


class TestPlaybackFlow:

    def test_plays_fetched_url_once(self, alerts, mock_player):
        speak = MagicMock(return_value=SAMPLE_TTS_URL)
        flow = PlaybackFlow(alert=alerts, player=mock_player, speak=speak)

        assert flow.play_from_text("naneun bap meogeosseo") is True

        speak.assert_called_once_with("naneun bap meogeosseo")
        mock_player.load.assert_called_once_with(SAMPLE_TTS_URL)
        mock_player.play.assert_called_once_with()
        assert alerts.calls == []

    def test_remote_error_is_alerted_not_raised(self, alerts, mock_player):
        speak = MagicMock(side_effect=RemoteServiceError(503, '{"error":"quota"}', "quota"))
        flow = PlaybackFlow(alert=alerts, player=mock_player, speak=speak)

        assert flow.play_from_text("text") is False

        assert alerts.calls == [("오류", "TTS 요청 실패: quota")]
        mock_player.load.assert_not_called()

    def test_missing_url_alerts_and_skips_playback(self, alerts, mock_player):
        flow = PlaybackFlow(alert=alerts, player=mock_player, speak=MagicMock(return_value=None))

        assert flow.play_from_text("text") is False

        assert alerts.calls == [("오류", "TTS URL을 가져오지 못했습니다.")]
        mock_player.load.assert_not_called()

    def test_load_failure_alerts_and_does_not_play(self, alerts, mock_player):
        mock_player.load.side_effect = AudioLoadError("decoder")
        flow = PlaybackFlow(alert=alerts, player=mock_player, speak=MagicMock(return_value=SAMPLE_TTS_URL))

        assert flow.play_from_text("text") is False

        assert alerts.calls == [("오류", "음성 재생에 실패했습니다.")]
        mock_player.play.assert_not_called()

    def test_playback_failure_is_logged_only(self, alerts, mock_player):
        mock_player.play.side_effect = AudioPlaybackError("device lost")
        flow = PlaybackFlow(alert=alerts, player=mock_player, speak=MagicMock(return_value=SAMPLE_TTS_URL))

        assert flow.play_from_text("text") is False
        assert alerts.calls == []

    @pytest.mark.parametrize("pronunciation", [None, "", NO_INPUT_PRONUNCIATION])
    def test_play_original_guard_skips_network(self, alerts, mock_player, pronunciation):
        speak = MagicMock()
        flow = PlaybackFlow(alert=alerts, player=mock_player, speak=speak)

        assert flow.play_original(ResultPayload(input_pronunciation=pronunciation)) is False

        speak.assert_not_called()
        assert alerts.calls == [("알림", "입력 문장의 발음 정보가 없습니다.")]

    @pytest.mark.parametrize("pronunciation", [None, "", NO_EASY_PRONUNCIATION])
    def test_play_simplified_guard_skips_network(self, alerts, mock_player, pronunciation):
        speak = MagicMock()
        flow = PlaybackFlow(alert=alerts, player=mock_player, speak=speak)

        assert flow.play_simplified(ResultPayload(easy_pronunciation=pronunciation)) is False

        speak.assert_not_called()
        assert alerts.calls == [("알림", "쉬운 문장의 발음 정보가 없습니다.")]

    def test_play_original_and_simplified_use_their_own_pronunciation(self, alerts, mock_player):
        speak = MagicMock(return_value=SAMPLE_TTS_URL)
        flow = PlaybackFlow(alert=alerts, player=mock_player, speak=speak)
        payload = ResultPayload.from_result(RESULT, SAMPLE_TTS_URL)

        flow.play_original(payload)
        flow.play_simplified(payload)

        assert [c.args[0] for c in speak.call_args_list] == [
            "naneun babeul meogeotda",
            "naneun bap meogeosseo",
        ]

    def test_second_play_while_busy_is_rejected(self, alerts, mock_player):
        nested = []
        flow = None

        def speak(text):
            nested.append(flow.play_from_text("again"))
            return SAMPLE_TTS_URL

        flow = PlaybackFlow(alert=alerts, player=mock_player, speak=MagicMock(side_effect=speak))

        assert flow.play_from_text("text") is True
        assert nested == [False]
        mock_player.load.assert_called_once()


def test_round_trip_through_the_wire(alerts, navigate, mock_session):
    """Input sentence → backend JSON → payload → rendered dictionary."""
    mock_session.post.side_effect = [
        make_response(200, SAMPLE_TRANSLATION),
        make_response(200, {"tts_url": SAMPLE_TTS_URL}),
    ]
    flow = TranslationFlow(alert=alerts, navigate=navigate)

    payload = flow.submit("나는 밥을 먹었다")

    navigate.assert_called_once_with(payload)
    assert payload.easy_english == "I ate rice"
    assert payload.tts_url == SAMPLE_TTS_URL

    translate_call, speak_call = mock_session.post.call_args_list
    assert translate_call.args[0].endswith("/translate-to-easy-korean")
    assert translate_call.kwargs == {"json": {"text": "나는 밥을 먹었다"}}
    assert speak_call.args[0].endswith("/speak")
    assert speak_call.kwargs == {"data": {"text": "나는 밥 먹었어"}}

    rendered = render_dictionary_text(payload.dictionary).split("\n")
    assert rendered[0] == "밥 (noun)"
    assert "cooked rice" in rendered
