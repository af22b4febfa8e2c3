# tests/conftest.py
import json

import pytest
from unittest.mock import MagicMock

from simple_talk.audio import AudioPlayer

# Backend body for the "나는 밥을 먹었다" walkthrough
SAMPLE_TRANSLATION = {
    "original_text": "나는 밥을 먹었다",
    "original_romanized_pronunciation": "naneun babeul meogeotda",
    "translated_text": "나는 밥 먹었어",
    "translated_romanized_pronunciation": "naneun bap meogeosseo",
    "translated_english_translation": "I ate rice",
    "keyword_dictionary": [
        {"word": "밥", "pos": "noun", "definitions": [{"definition": "cooked rice"}]},
    ],
}

SAMPLE_TTS_URL = "https://x/a.mp3"


def make_response(status_code=200, json_data=None, text=None, content=b""):
    """A stand-in for requests.Response."""
    response = MagicMock()
    response.status_code = status_code
    if json_data is not None:
        response.json.return_value = json_data
        response.text = json.dumps(json_data, ensure_ascii=False)
    else:
        response.json.side_effect = ValueError("Expecting value")
        response.text = text or ""
    response.content = content
    return response


class AlertRecorder:
    """Collects (title, message) pairs instead of opening message boxes."""

    def __init__(self):
        self.calls = []

    def __call__(self, title, message):
        self.calls.append((title, message))

    @property
    def titles(self):
        return [title for title, _ in self.calls]

    @property
    def messages(self):
        return [message for _, message in self.calls]


@pytest.fixture
def alerts():
    return AlertRecorder()


@pytest.fixture
def navigate():
    return MagicMock()


@pytest.fixture
def mock_player():
    """AudioPlayer double; load/play succeed unless a test says otherwise."""
    player = MagicMock(spec=AudioPlayer)
    player.load.return_value = "/tmp/simple_talk_tts_test.mp3"
    return player


@pytest.fixture
def mock_session(monkeypatch):
    """Replaces the module-level requests.Session used by simple_talk.api."""
    session = MagicMock()
    monkeypatch.setattr("simple_talk.api._session", session)
    return session
