"""
User-action handlers for the two cards, independent of Tkinter.

Both flows are synchronous and are meant to run on a worker thread. They
report to the user only through the injected `alert(title, message)` callable
and, for the input card, hand the finished ResultPayload to `navigate`.
Each flow accepts one request chain at a time; a trigger that arrives while a
chain is still running is logged and dropped.
"""

import threading
from typing import Callable, Optional

import requests

from . import api
from .audio import AudioPlayer
from .errors import AudioLoadError, AudioPlaybackError, RemoteServiceError, ValidationError
from .logger import logger
from .models import ResultPayload, SimplificationResult
from .render import NO_EASY_PRONUNCIATION, NO_INPUT_PRONUNCIATION

AlertFn = Callable[[str, str], None]
NavigateFn = Callable[[ResultPayload], None]

# Alert texts
NOTICE_TITLE = "알림"
ERROR_TITLE = "오류"
TTS_ERROR_TITLE = "TTS 오류"
EMPTY_INPUT_MESSAGE = "문장을 입력해주세요."
SERVER_ERROR_MESSAGE = "서버와 통신 중 문제가 발생했습니다: {error}"
TTS_UNAVAILABLE_MESSAGE = "음성 재생 기능을 사용할 수 없습니다."
TTS_REQUEST_FAILED_MESSAGE = "TTS 요청 실패: {error}"
TTS_URL_MISSING_MESSAGE = "TTS URL을 가져오지 못했습니다."
AUDIO_LOAD_FAILED_MESSAGE = "음성 재생에 실패했습니다."
NO_INPUT_PRONUNCIATION_MESSAGE = "입력 문장의 발음 정보가 없습니다."
NO_EASY_PRONUNCIATION_MESSAGE = "쉬운 문장의 발음 정보가 없습니다."

REQUEST_ERRORS = (RemoteServiceError, requests.RequestException, ValueError)


def validate_sentence(text: Optional[str]) -> str:
    """Return the trimmed sentence, or raise ValidationError if nothing is left."""
    sentence = (text or "").strip()
    if not sentence:
        raise ValidationError(EMPTY_INPUT_MESSAGE)
    return sentence


class TranslationFlow:
    """Input card: simplify the sentence, synthesize speech, navigate."""

    def __init__(
        self,
        alert: AlertFn,
        navigate: NavigateFn,
        translate: Callable[[str], SimplificationResult] = api.translate_to_easy_korean,
        speak: Callable[[str], Optional[str]] = api.request_speech_url,
    ) -> None:
        self._alert = alert
        self._navigate = navigate
        self._translate = translate
        self._speak = speak
        self._in_flight = threading.Lock()

    @property
    def busy(self) -> bool:
        return self._in_flight.locked()

    def submit(self, text: Optional[str]) -> Optional[ResultPayload]:
        """
        Run the whole chain for one tap of the Translate button.

        Returns the payload handed to `navigate`, or None when the chain was
        blocked (empty input, busy) or the simplification call failed.
        """
        try:
            sentence = validate_sentence(text)
        except ValidationError as e:
            logger.ui(f"Rejected input: {e}")
            self._alert(NOTICE_TITLE, str(e))
            return None

        if not self._in_flight.acquire(blocking=False):
            logger.warning("Translation already in progress, ignoring request")
            return None

        try:
            try:
                result = self._translate(sentence)
            except REQUEST_ERRORS as e:
                logger.error(f"Simplification request failed: {e}")
                self._alert(ERROR_TITLE, SERVER_ERROR_MESSAGE.format(error=e))
                return None

            tts_url = self._synthesize(result.simplified_text or "")
            payload = ResultPayload.from_result(result, tts_url)
            self._navigate(payload)
            return payload
        finally:
            self._in_flight.release()

    def _synthesize(self, text: str) -> str:
        """Speech for the simplified sentence; any failure degrades to ""."""
        try:
            return self._speak(text) or ""
        except REQUEST_ERRORS as e:
            logger.error(f"TTS request failed: {e}")
            self._alert(TTS_ERROR_TITLE, TTS_UNAVAILABLE_MESSAGE)
            return ""


class PlaybackFlow:
    """Result card: fetch a fresh tts_url for a pronunciation and play it once."""

    def __init__(
        self,
        alert: AlertFn,
        player: AudioPlayer,
        speak: Callable[[str], Optional[str]] = api.request_speech_url,
    ) -> None:
        self._alert = alert
        self._player = player
        self._speak = speak
        self._in_flight = threading.Lock()

    @property
    def busy(self) -> bool:
        return self._in_flight.locked()

    def play_from_text(self, text: str) -> bool:
        """Returns True once playback has started."""
        if not self._in_flight.acquire(blocking=False):
            logger.warning("Playback request already in progress, ignoring request")
            return False

        try:
            try:
                url = self._speak(text)
            except REQUEST_ERRORS as e:
                logger.error(f"TTS request error: {e}")
                self._alert(ERROR_TITLE, TTS_REQUEST_FAILED_MESSAGE.format(error=e))
                return False

            if not url:
                self._alert(ERROR_TITLE, TTS_URL_MISSING_MESSAGE)
                return False

            try:
                self._player.load(url)
            except AudioLoadError as e:
                logger.audio_error(f"Sound load error: {e}")
                self._alert(ERROR_TITLE, AUDIO_LOAD_FAILED_MESSAGE)
                return False

            try:
                self._player.play()
            except AudioPlaybackError as e:
                logger.audio_error(f"Sound playback error: {e}")
                return False
            return True
        finally:
            self._in_flight.release()

    def _play_guarded(self, pronunciation: Optional[str], placeholder: str, missing_message: str) -> bool:
        if pronunciation and pronunciation != placeholder:
            return self.play_from_text(pronunciation)
        self._alert(NOTICE_TITLE, missing_message)
        return False

    def play_original(self, payload: ResultPayload) -> bool:
        return self._play_guarded(
            payload.input_pronunciation, NO_INPUT_PRONUNCIATION, NO_INPUT_PRONUNCIATION_MESSAGE)

    def play_simplified(self, payload: ResultPayload) -> bool:
        return self._play_guarded(
            payload.easy_pronunciation, NO_EASY_PRONUNCIATION, NO_EASY_PRONUNCIATION_MESSAGE)
