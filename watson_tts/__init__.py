"""
watson_tts - Python SDK for the Watson Text to Speech v1 API.

Synchronous and asynchronous clients for speech synthesis, voice listing,
pronunciation lookup and custom pronunciation models.

Quick Start:
    >>> import watson_tts
    >>> watson_tts.set_credentials("username", "password")
    >>> audio = watson_tts.synthesize("Hello, world!", accept="audio/wav")

Async Usage:
    >>> audio = await watson_tts.asynthesize("Hello, world!")

Advanced Usage (Client Classes):
    >>> from watson_tts import TextToSpeechClient
    >>> with TextToSpeechClient(username="u", password="p") as client:
    ...     result = client.list_customizations(language="en-US")
    ...     if result.ok:
    ...         print(result.payload["customizations"])
"""

from __future__ import annotations

from .config import SDK_VERSION as __version__

# =============================================================================
# Public API Exports
# =============================================================================

__all__ = [
    # Version
    "__version__",
    # Configuration functions
    "set_credentials",
    "set_base_url",
    # Synchronous API
    "synthesize",
    "synthesize_to_file",
    "voices",
    "pronunciation",
    # Asynchronous API
    "asynthesize",
    "asynthesize_to_file",
    "avoices",
    "apronunciation",
    # Client classes
    "TextToSpeechClient",
    "AsyncTextToSpeechClient",
    # Request building blocks
    "ENDPOINTS",
    "EndpointDescriptor",
    "ResponseMode",
    "BuiltRequest",
    "build_request",
    "get_endpoint",
    "invoke",
    "ainvoke",
    # Transports
    "RequestsTransport",
    "AiohttpTransport",
    "TransportResponse",
    # Results
    "ClientResult",
    "Success",
    "Failure",
    "FailureKind",
    # Exceptions
    "TextToSpeechError",
    "ValidationError",
    "MissingRequiredParameter",
    "AuthenticationError",
    "ClientError",
    "ServerError",
    "TransportError",
]

# =============================================================================
# Imports
# =============================================================================

# Client classes
from .client import TextToSpeechClient
from .async_client import AsyncTextToSpeechClient

# Request building blocks
from .endpoints import ENDPOINTS, EndpointDescriptor, ResponseMode, get_endpoint
from .request import BuiltRequest, build_request
from .invoker import ainvoke, invoke
from .transport import AiohttpTransport, RequestsTransport, TransportResponse
from .result import ClientResult, Failure, FailureKind, Success

# Exceptions
from .exceptions import (
    TextToSpeechError,
    ValidationError,
    MissingRequiredParameter,
    AuthenticationError,
    ClientError,
    ServerError,
    TransportError,
)

# Module-level API functions
from ._api import (
    set_credentials,
    set_base_url,
    # Sync
    synthesize,
    synthesize_to_file,
    voices,
    pronunciation,
    # Async
    asynthesize,
    asynthesize_to_file,
    avoices,
    apronunciation,
)
