"""
Playback of synthesized speech.

AudioPlayer owns at most one loaded track. Loading a new tts_url first
releases the previous one (stop, unload, delete its downloaded file), so
handles never pile up across repeated taps.
"""

import os
import tempfile
import threading
from typing import Callable, Optional

os.environ.setdefault("PYGAME_HIDE_SUPPORT_PROMPT", "1")
import pygame
import requests

from .api import fetch_audio
from .errors import AudioLoadError, AudioPlaybackError, RemoteServiceError
from .logger import logger


class AudioPlayer:
    """Single-track player backed by pygame.mixer.music."""

    def __init__(self, fetch: Callable[[str], bytes] = fetch_audio) -> None:
        self._fetch = fetch
        self._lock = threading.Lock()
        self._audio_path: Optional[str] = None
        self._is_loaded: bool = False

    @property
    def audio_path(self) -> Optional[str]:
        return self._audio_path

    @property
    def is_loaded(self) -> bool:
        return self._is_loaded

    def _ensure_mixer(self) -> None:
        if pygame.mixer.get_init():
            return
        try:
            pygame.mixer.init()
        except pygame.error as e:
            raise AudioLoadError(f"Audio device unavailable: {e}") from e

    def load(self, url: str) -> str:
        """
        Download `url` and load it into the mixer.

        Returns the local file path. Raises AudioLoadError when the download
        or the decoder fails; nothing stays loaded in that case.
        """
        # Download and write unlocked so release() never waits on the network
        try:
            data = self._fetch(url)
        except (requests.RequestException, RemoteServiceError) as e:
            raise AudioLoadError(f"Failed to download audio: {e}") from e

        suffix = os.path.splitext(url.split("?", 1)[0])[1] or ".mp3"
        try:
            fd, path = tempfile.mkstemp(suffix=suffix, prefix="simple_talk_tts_")
        except OSError as e:
            raise AudioLoadError(f"Failed to create audio file: {e}") from e
        try:
            with os.fdopen(fd, "wb") as f:
                f.write(data)
        except OSError as e:
            _remove_file(path)
            raise AudioLoadError(f"Failed to write audio file: {e}") from e

        with self._lock:
            self._release_locked()
            try:
                self._ensure_mixer()
                pygame.mixer.music.load(path)
            except AudioLoadError:
                _remove_file(path)
                raise
            except pygame.error as e:
                _remove_file(path)
                raise AudioLoadError(f"Failed to load audio: {e}") from e

            self._audio_path = path
            self._is_loaded = True
            logger.audio(f"Audio loaded: {path}")
            return path

    def play(self) -> None:
        """Start the loaded track once. Raises AudioPlaybackError."""
        with self._lock:
            if not self._is_loaded:
                raise AudioPlaybackError("No audio loaded")
            try:
                pygame.mixer.music.play()
            except pygame.error as e:
                raise AudioPlaybackError(str(e)) from e
        logger.audio("Playing...")

    def is_playing(self) -> bool:
        return self._is_loaded and bool(pygame.mixer.music.get_busy())

    def release(self) -> None:
        """Stop playback and drop the current track, if any."""
        with self._lock:
            self._release_locked()

    def _release_locked(self) -> None:
        if self._is_loaded:
            try:
                pygame.mixer.music.stop()
                pygame.mixer.music.unload()
            except pygame.error as e:
                logger.audio_error(f"Failed to unload audio: {e}")
            self._is_loaded = False
        if self._audio_path:
            _remove_file(self._audio_path)
            logger.debug(f"Released audio: {self._audio_path}")
            self._audio_path = None


def _remove_file(path: str) -> None:
    try:
        os.remove(path)
    except OSError as e:
        logger.warning(f"Could not delete {path}: {e}")
