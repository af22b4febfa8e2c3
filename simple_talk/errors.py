"""Exceptions raised by the Simple Talk client."""


class SimpleTalkError(Exception):
    """Base class for every error the client reports."""


class ValidationError(SimpleTalkError):
    """User input rejected before any network call."""


class RemoteServiceError(SimpleTalkError):
    """The backend answered with a non-2xx status."""

    def __init__(self, status_code: int, body: str, message: str = "") -> None:
        self.status_code = status_code
        self.body = body
        super().__init__(message or f"HTTP {status_code}: {body}")


class AudioLoadError(SimpleTalkError):
    """The audio resource could not be downloaded or opened."""


class AudioPlaybackError(SimpleTalkError):
    """The mixer refused to start playback."""
