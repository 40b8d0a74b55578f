from typing import Dict, Iterable, Optional


class AzureTTSError(Exception):
    """Base class for errors raised by this package."""


class ValidationError(AzureTTSError, ValueError):
    """Raised when a request is rejected before anything is sent."""


class VoiceNotFoundError(ValidationError):
    """Raised when a voice name is not present in the voice list."""

    def __init__(self, name: str, available: Iterable[str] = ()) -> None:
        super().__init__(f"Voice {name!r} is not available in this region.")
        self.name = name
        self.available = list(available)


class SpeechServiceError(AzureTTSError):
    """Raised when the Azure Speech REST API returns an error response."""

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        details: Optional[dict] = None,
        body: str = "",
        request_id: Optional[str] = None,
    ) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.details: Dict = details or {}
        self.body = body
        self.request_id = request_id

    def __str__(self) -> str:
        message = super().__str__()
        if self.status_code is None:
            return message
        return f"{self.status_code}: {message}"
