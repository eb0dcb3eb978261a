"""
Watson Text to Speech Module-Level API Functions.

Convenience functions that use global configuration and default clients.
Unlike the client methods, these return the payload directly and raise
ClientError, ServerError or TransportError on failure.
"""

from __future__ import annotations

import asyncio
from pathlib import Path
from typing import Any, Literal

from .async_client import AsyncTextToSpeechClient
from .client import TextToSpeechClient
from .config import set_base_url as _set_base_url
from .config import set_credentials as _set_credentials

Alphabet = Literal["ipa", "spr"]

# =============================================================================
# Default Client Singletons
# =============================================================================

_default_client: TextToSpeechClient | None = None
_default_async_client: AsyncTextToSpeechClient | None = None
_closing: set[asyncio.Task] = set()


def _get_default_client() -> TextToSpeechClient:
    """Get or create the default synchronous client."""
    global _default_client
    if _default_client is None:
        _default_client = TextToSpeechClient()
    return _default_client


def _get_default_async_client() -> AsyncTextToSpeechClient:
    """Get or create the default asynchronous client."""
    global _default_async_client
    if _default_async_client is None:
        _default_async_client = AsyncTextToSpeechClient()
    return _default_async_client


def _close_async_client(client: AsyncTextToSpeechClient) -> None:
    try:
        loop = asyncio.get_running_loop()
    except RuntimeError:
        asyncio.run(client.close())
        return
    task = loop.create_task(client.close())
    _closing.add(task)
    task.add_done_callback(_closing.discard)


def reset_default_clients() -> None:
    """
    Close and drop the default clients so the next call picks up new
    global settings.

    Inside a running event loop the async client is closed by a task
    scheduled on that loop.
    """
    global _default_client, _default_async_client
    if _default_client is not None:
        _default_client.close()
    if _default_async_client is not None:
        _close_async_client(_default_async_client)
    _default_client = None
    _default_async_client = None


def set_credentials(username: str, password: str) -> None:
    """
    Set the global service credentials for module-level functions.

    Example:
        >>> import watson_tts
        >>> watson_tts.set_credentials("user", "secret")
    """
    _set_credentials(username, password)
    reset_default_clients()


def set_base_url(base_url: str) -> None:
    """Set the global service URL (without the ``/v1`` suffix)."""
    _set_base_url(base_url)
    reset_default_clients()


# =============================================================================
# Synchronous API Functions
# =============================================================================

def synthesize(
    text: str,
    voice: str | None = None,
    accept: str | None = None,
) -> bytes:
    """
    Synthesize text to audio (synchronous).

    Returns:
        The audio bytes.

    Example:
        >>> import watson_tts
        >>> watson_tts.set_credentials("user", "secret")
        >>> audio = watson_tts.synthesize("Hello, world!", accept="audio/wav")
    """
    return _get_default_client().synthesize(text, voice=voice, accept=accept).unwrap()


def synthesize_to_file(
    text: str,
    filepath: str | Path,
    voice: str | None = None,
    accept: str | None = None,
) -> str:
    """
    Synthesize text and save it to a file (synchronous).

    Returns:
        The path to the saved audio file.

    Example:
        >>> watson_tts.synthesize_to_file("Hello!", "hello.wav", accept="audio/wav")
    """
    return _get_default_client().synthesize_to_file(
        text, filepath, voice=voice, accept=accept
    ).unwrap()


def voices() -> list[dict[str, Any]]:
    """
    List available voices (synchronous).

    Example:
        >>> for v in watson_tts.voices():
        ...     print(v["name"], v["language"])
    """
    response = _get_default_client().voices().unwrap() or {}
    return response.get("voices", [])


def pronunciation(
    text: str,
    voice: str | None = None,
    format: Alphabet | None = None,
) -> str:
    """
    Get the phonetic pronunciation of a word (synchronous).

    Example:
        >>> watson_tts.pronunciation("tomato", format="ipa")
    """
    response = _get_default_client().pronunciation(
        text, voice=voice, format=format
    ).unwrap() or {}
    return response.get("pronunciation", "")


# =============================================================================
# Asynchronous API Functions
# =============================================================================

async def asynthesize(
    text: str,
    voice: str | None = None,
    accept: str | None = None,
) -> bytes:
    """Synthesize text to audio (asynchronous)."""
    result = await _get_default_async_client().synthesize(text, voice=voice, accept=accept)
    return result.unwrap()


async def asynthesize_to_file(
    text: str,
    filepath: str | Path,
    voice: str | None = None,
    accept: str | None = None,
) -> str:
    """Synthesize text and save it to a file (asynchronous)."""
    result = await _get_default_async_client().synthesize_to_file(
        text, filepath, voice=voice, accept=accept
    )
    return result.unwrap()


async def avoices() -> list[dict[str, Any]]:
    """List available voices (asynchronous)."""
    result = await _get_default_async_client().voices()
    return (result.unwrap() or {}).get("voices", [])


async def apronunciation(
    text: str,
    voice: str | None = None,
    format: Alphabet | None = None,
) -> str:
    """Get the phonetic pronunciation of a word (asynchronous)."""
    result = await _get_default_async_client().pronunciation(
        text, voice=voice, format=format
    )
    return (result.unwrap() or {}).get("pronunciation", "")
