"""
Watson Text to Speech SDK Utilities.

Logging, argument validation and audio file helpers shared by the clients.
"""

from __future__ import annotations

import logging
from pathlib import Path

from .config import FORMAT_EXTENSIONS, format_for_accept
from .exceptions import MissingRequiredParameter, ValidationError

logger = logging.getLogger("watson_tts")
logger.addHandler(logging.NullHandler())


def validate_text(text: str) -> str:
    """
    Validate text passed for synthesis or pronunciation.

    Args:
        text: The input text.

    Returns:
        The text, unchanged.

    Raises:
        MissingRequiredParameter: If text is None or empty.
        ValidationError: If text is not a string or is only whitespace.
    """
    if text is None or text == "":
        raise MissingRequiredParameter(["text"])
    if not isinstance(text, str):
        raise ValidationError(f"text must be a string, got {type(text).__name__}")
    if not text.strip():
        raise ValidationError("text must not be empty")
    return text


def validate_output_filepath(filepath: str | Path, accept: str) -> Path:
    """
    Check that an output path matches the requested audio type.

    Args:
        filepath: Destination file path.
        accept: The MIME type that will be requested from the service.

    Returns:
        The path as a Path object.

    Raises:
        ValidationError: If the extension does not match ``accept``.
    """
    path = Path(filepath)
    format_name = format_for_accept(accept)
    if format_name is None:
        raise ValidationError(f"Unsupported audio type: {accept}")
    expected = FORMAT_EXTENSIONS[format_name]
    if path.suffix.lower() != expected:
        raise ValidationError(
            f"File extension '{path.suffix}' does not match audio type '{accept}'; "
            f"expected '{expected}'"
        )
    return path


def write_audio_file(path: Path, audio: bytes) -> Path:
    """Write synthesized audio to disk, creating parent directories."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(audio)
    logger.info(f"Wrote {len(audio)} bytes of audio to {path}")
    return path
