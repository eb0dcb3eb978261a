"""
Watson Text to Speech SDK Exceptions.

All exceptions raised by the SDK derive from TextToSpeechError.
"""

from __future__ import annotations

from typing import Any


class TextToSpeechError(Exception):
    """Base exception for all SDK errors."""

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        response_data: Any = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.response_data = response_data

    def __str__(self) -> str:
        if self.status_code is not None:
            return f"[{self.status_code}] {self.message}"
        return self.message


class ValidationError(TextToSpeechError):
    """Raised when arguments are rejected locally, before any request is sent."""
    pass


class MissingRequiredParameter(ValidationError):
    """Raised when a required parameter is absent, None or empty."""

    def __init__(self, missing: list[str] | tuple[str, ...]) -> None:
        self.missing = tuple(missing)
        super().__init__(f"Missing required parameters: {', '.join(self.missing)}")


class AuthenticationError(TextToSpeechError):
    """Raised when no service credentials are configured."""
    pass


class ClientError(TextToSpeechError):
    """Raised for 4xx responses; the request needs to be corrected by the caller."""
    pass


class ServerError(TextToSpeechError):
    """Raised for 5xx responses and undecodable success payloads."""
    pass


class TransportError(TextToSpeechError):
    """Raised when the request never produced an HTTP response (DNS, refused, timeout)."""

    def __init__(self, message: str, original_error: Exception | None = None) -> None:
        super().__init__(message)
        self.original_error = original_error
