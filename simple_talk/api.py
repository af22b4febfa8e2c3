"""
HTTP client for the Simple Talk backend.

This module handles:
- Sentence simplification (POST /translate-to-easy-korean, JSON body)
- Speech synthesis (POST /speak, form body) returning a tts_url
- Downloading the synthesized audio for local playback

Every function blocks; callers on the UI thread should run them in a worker.
Non-2xx responses raise RemoteServiceError; transport failures propagate as
requests.RequestException. No retries and no timeouts are applied.
"""

import json
from typing import Any, Optional

import requests

from .config import API_BASE_URL
from .errors import RemoteServiceError
from .logger import logger, Timer
from .models import SimplificationResult

TRANSLATE_ENDPOINT = "/translate-to-easy-korean"
SPEAK_ENDPOINT = "/speak"

# Module-level session for connection reuse
_session = requests.Session()


def _is_success(response: requests.Response) -> bool:
    return 200 <= response.status_code < 300


def _url(base_url: Optional[str], endpoint: str) -> str:
    return f"{(base_url or API_BASE_URL).rstrip('/')}{endpoint}"


# ---------------------------------------------------------------------------
# Simplification
# ---------------------------------------------------------------------------

def translate_to_easy_korean(text: str, base_url: Optional[str] = None) -> SimplificationResult:
    """
    Send a sentence to the simplification service.

    Returns the parsed SimplificationResult. Raises RemoteServiceError carrying
    the status code and the raw body when the backend answers non-2xx, and
    ValueError when a 2xx body is not JSON.
    """
    url = _url(base_url, TRANSLATE_ENDPOINT)
    logger.api(f"translate_to_easy_korean() - {len(text)} chars")
    logger.api_call(TRANSLATE_ENDPOINT)

    with Timer() as timer:
        response = _session.post(url, json={"text": text})
    logger.api_response(TRANSLATE_ENDPOINT, status=response.status_code, duration_ms=timer.duration_ms)

    if not _is_success(response):
        error_text = response.text
        logger.api_error(f"Simplification API error response: {error_text}")
        raise RemoteServiceError(
            response.status_code,
            error_text,
            f"쉬운 한국어 변환 API 오류! 상태 코드: {response.status_code}. 상세: {error_text}",
        )

    result = SimplificationResult.from_json(response.json())
    logger.success(f"Simplified sentence: {result.simplified_text!r} "
                   f"({len(result.dictionary)} dictionary entries)")
    return result


# ---------------------------------------------------------------------------
# Speech synthesis
# ---------------------------------------------------------------------------

def _speak_error_message(raw: str) -> str:
    """Prefer the JSON "error" field, then the JSON itself, then the raw body."""
    try:
        parsed: Any = json.loads(raw)
    except ValueError:
        return raw
    if isinstance(parsed, dict) and parsed.get("error"):
        return str(parsed["error"])
    return json.dumps(parsed, ensure_ascii=False, separators=(",", ":"))


def request_speech_url(text: str, base_url: Optional[str] = None) -> Optional[str]:
    """
    Ask the speech service to synthesize `text`.

    Returns the tts_url from the response, or None when the 2xx body does not
    carry one. Non-2xx raises RemoteServiceError whose message is the backend's
    "error" field when the body is JSON, otherwise the body verbatim.
    """
    url = _url(base_url, SPEAK_ENDPOINT)
    logger.api(f"request_speech_url() - {len(text)} chars")
    logger.api_call(SPEAK_ENDPOINT)

    with Timer() as timer:
        response = _session.post(url, data={"text": text})
    logger.api_response(SPEAK_ENDPOINT, status=response.status_code, duration_ms=timer.duration_ms)

    if not _is_success(response):
        raw = response.text
        raise RemoteServiceError(response.status_code, raw, _speak_error_message(raw))

    data = response.json()
    tts_url = data.get("tts_url") if isinstance(data, dict) else None
    if not tts_url:
        logger.warning("Speech response did not include a tts_url")
        return None
    return str(tts_url)


def fetch_audio(url: str) -> bytes:
    """Download the audio resource behind a tts_url."""
    logger.audio(f"Downloading audio: {url}")
    with Timer() as timer:
        response = _session.get(url)
    if not _is_success(response):
        raise RemoteServiceError(response.status_code, response.text)
    logger.audio(f"Downloaded {len(response.content)} bytes ({timer.duration_ms:.0f}ms)")
    return response.content
