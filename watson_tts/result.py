"""
Watson Text to Speech Call Results.

Every client operation returns a ClientResult: either Success carrying the
decoded payload or Failure describing what went wrong.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Any, Union

from .exceptions import ClientError, ServerError, TextToSpeechError, TransportError


class FailureKind(enum.Enum):
    """Category of a failed call."""

    CLIENT_ERROR = "client_error"
    SERVER_ERROR = "server_error"
    TRANSPORT_ERROR = "transport_error"


_EXCEPTIONS: dict[FailureKind, type[TextToSpeechError]] = {
    FailureKind.CLIENT_ERROR: ClientError,
    FailureKind.SERVER_ERROR: ServerError,
}


@dataclass(frozen=True)
class Success:
    """A completed call. ``payload`` is bytes, decoded JSON, or None."""

    payload: Any
    status_code: int

    @property
    def ok(self) -> bool:
        return True

    def unwrap(self) -> Any:
        """Return the payload."""
        return self.payload


@dataclass(frozen=True)
class Failure:
    """A failed call."""

    kind: FailureKind
    message: str
    status_code: int | None = None
    response_data: Any = None

    @property
    def ok(self) -> bool:
        return False

    def to_exception(self) -> TextToSpeechError:
        """Build the exception matching this failure's kind."""
        if self.kind is FailureKind.TRANSPORT_ERROR:
            return TransportError(self.message)
        return _EXCEPTIONS[self.kind](
            self.message,
            status_code=self.status_code,
            response_data=self.response_data,
        )

    def unwrap(self) -> Any:
        """
        Raise the exception matching this failure.

        Raises:
            ClientError: For CLIENT_ERROR.
            ServerError: For SERVER_ERROR.
            TransportError: For TRANSPORT_ERROR.
        """
        raise self.to_exception()


ClientResult = Union[Success, Failure]
"""Outcome of one API call."""
