"""
Watson Text to Speech SDK Configuration Module.

Centralized configuration for API settings, audio formats, and defaults.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field

# =============================================================================
# SDK Version
# =============================================================================

SDK_VERSION: str = "1.0.0"
"""Current SDK version."""

# =============================================================================
# Audio Format Configuration
# =============================================================================
# To add a new output format:
# 1. Add its MIME type to ACCEPT_TYPES under a short format name
# 2. Add the file extension to FORMAT_EXTENSIONS

ACCEPT_TYPES: dict[str, str] = {
    "ogg": "audio/ogg; codecs=opus",
    "wav": "audio/wav",
    "flac": "audio/flac",
    "webm": "audio/webm",
    "l16": "audio/l16",
    "basic": "audio/basic",
    "mp3": "audio/mp3",
}
"""MIME types accepted by the synthesize endpoint, keyed by format name."""

FORMAT_EXTENSIONS: dict[str, str] = {
    "ogg": ".ogg",
    "wav": ".wav",
    "flac": ".flac",
    "webm": ".webm",
    "l16": ".raw",
    "basic": ".au",
    "mp3": ".mp3",
}
"""File extensions for each supported format."""

DEFAULT_ACCEPT: str = ACCEPT_TYPES["ogg"]
"""Audio type requested when the caller does not pass ``accept``."""

SUPPORTED_ALPHABETS: tuple[str, ...] = ("ipa", "spr")
"""Phonetic alphabets understood by the customization and pronunciation endpoints."""


# =============================================================================
# API Configuration
# =============================================================================

DEFAULT_BASE_URL: str = "https://stream.watsonplatform.net/text-to-speech/api"
"""Default service URL (no version suffix)."""

DEFAULT_TIMEOUT: float = 30.0
"""Default HTTP request timeout in seconds."""

DEFAULT_MAX_CONCURRENCY: int = 10
"""Default maximum concurrent requests for async client."""

LEARNING_OPT_OUT_HEADER: str = "X-Watson-Learning-Opt-Out"
"""Header that asks the service not to log the request for training."""

ENV_USERNAME: str = "TEXT_TO_SPEECH_USERNAME"
ENV_PASSWORD: str = "TEXT_TO_SPEECH_PASSWORD"
ENV_URL: str = "TEXT_TO_SPEECH_URL"


# =============================================================================
# Global Configuration State
# =============================================================================

@dataclass
class GlobalConfig:
    """
    Global configuration for module-level API functions.

    Clients constructed with explicit arguments never read this object
    except as a fallback for arguments left as None.

    Attributes:
        username: Service username. Falls back to TEXT_TO_SPEECH_USERNAME.
        password: Service password. Falls back to TEXT_TO_SPEECH_PASSWORD.
        base_url: Service URL. TEXT_TO_SPEECH_URL overrides the default.
        timeout: Default request timeout.
        max_concurrency: Semaphore limit for the async client.
    """
    username: str | None = field(default=None)
    password: str | None = field(default=None)
    base_url: str | None = field(default=None)
    timeout: float = field(default=DEFAULT_TIMEOUT)
    max_concurrency: int = field(default=DEFAULT_MAX_CONCURRENCY)

    def get_credentials(self) -> tuple[str, str] | None:
        """Get (username, password), falling back to environment variables."""
        username = self.username or os.environ.get(ENV_USERNAME)
        password = self.password or os.environ.get(ENV_PASSWORD)
        if username and password:
            return username, password
        return None

    def get_base_url(self) -> str:
        """Get the base URL, falling back to the environment, then the default."""
        return (self.base_url or os.environ.get(ENV_URL) or DEFAULT_BASE_URL).rstrip("/")


# Global configuration instance
_config = GlobalConfig()


def get_config() -> GlobalConfig:
    """Get the global configuration instance."""
    return _config


def set_credentials(username: str, password: str) -> None:
    """
    Set the global service credentials for module-level functions.

    Args:
        username: Service username.
        password: Service password.

    Example:
        >>> import watson_tts
        >>> watson_tts.set_credentials("user", "secret")
    """
    _config.username = username
    _config.password = password


def set_base_url(base_url: str) -> None:
    """
    Set the global service URL.

    Args:
        base_url: The service URL, without the ``/v1`` suffix.

    Example:
        >>> import watson_tts
        >>> watson_tts.set_base_url("https://stream.watsonplatform.net/text-to-speech/api")
    """
    _config.base_url = base_url.rstrip("/")


def format_for_accept(accept: str) -> str | None:
    """
    Map an ``accept`` MIME type to its short format name.

    Parameters such as ``;rate=22050`` are ignored, so ``audio/l16;rate=16000``
    maps to ``l16``.

    Returns:
        The format name, or None if the MIME type is not recognised.
    """
    base = accept.split(";", 1)[0].strip().lower()
    for name, mime in ACCEPT_TYPES.items():
        if mime.split(";", 1)[0] == base:
            return name
    return None


def get_format_extension(format_name: str) -> str:
    """
    Get the file extension for a given audio format.

    Args:
        format_name: The audio format (e.g., "wav").

    Returns:
        The file extension including the dot (e.g., ".wav").

    Raises:
        ValueError: If the format is not supported.
    """
    ext = FORMAT_EXTENSIONS.get(format_name.lower())
    if ext is None:
        raise ValueError(
            f"Unsupported format: {format_name}. "
            f"Supported formats: {', '.join(FORMAT_EXTENSIONS)}"
        )
    return ext
