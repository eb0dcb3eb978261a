"""
Watson Text to Speech Asynchronous Client.

Provides the AsyncTextToSpeechClient class for async API interactions (v1).
"""

from __future__ import annotations

import asyncio
from pathlib import Path
from typing import Any, Literal, Mapping

from .config import (
    DEFAULT_ACCEPT,
    DEFAULT_MAX_CONCURRENCY,
    DEFAULT_TIMEOUT,
    LEARNING_OPT_OUT_HEADER,
    get_config,
)
from .endpoints import get_endpoint
from .exceptions import AuthenticationError
from .invoker import ainvoke
from .request import BuiltRequest, build_request
from .result import ClientResult, Success
from .transport import AiohttpTransport, AsyncTransport
from .utils import logger, validate_output_filepath, validate_text, write_audio_file

# Type aliases
Alphabet = Literal["ipa", "spr"]
Word = Mapping[str, str]


class AsyncTextToSpeechClient:
    """
    Asynchronous client for the Watson Text to Speech API.

    Mirrors TextToSpeechClient; every operation is a coroutine resolving to
    a ClientResult. Requests are built (and validated) before the first
    await, so a MissingRequiredParameter is raised when the coroutine is
    awaited without anything having been sent.

    Args:
        username: Service username. Falls back to TEXT_TO_SPEECH_USERNAME
            or the global config.
        password: Service password. Falls back to TEXT_TO_SPEECH_PASSWORD
            or the global config.
        base_url: Service URL. Defaults to the public Watson endpoint.
        timeout: Request timeout in seconds for the default transport.
        max_concurrency: Maximum requests in flight (semaphore limit).
        transport: Optional async transport.

    Example:
        >>> async with AsyncTextToSpeechClient(username="u", password="p") as client:
        ...     result = await client.synthesize("Hello!", accept="audio/wav")
        ...     audio = result.unwrap()

    Example (concurrent lookups):
        >>> async with AsyncTextToSpeechClient() as client:
        ...     results = await asyncio.gather(
        ...         *(client.pronunciation(word) for word in words)
        ...     )
    """

    def __init__(
        self,
        username: str | None = None,
        password: str | None = None,
        base_url: str | None = None,
        timeout: float = DEFAULT_TIMEOUT,
        max_concurrency: int = DEFAULT_MAX_CONCURRENCY,
        transport: AsyncTransport | None = None,
    ) -> None:
        """Initialize the async client."""
        config = get_config()
        if username and password:
            self._credentials: tuple[str, str] | None = (username, password)
        else:
            self._credentials = config.get_credentials()
        self._base_url = (base_url or config.get_base_url()).rstrip("/")
        self._timeout = timeout
        self._max_concurrency = max_concurrency
        self._semaphore: asyncio.Semaphore | None = None
        self._semaphore_loop: asyncio.AbstractEventLoop | None = None
        self._transport = transport
        self._owns_transport = transport is None

    @property
    def base_url(self) -> str:
        """Get the service URL."""
        return self._base_url

    def _get_transport(self) -> AsyncTransport:
        """Get or create the default aiohttp transport."""
        if self._transport is None:
            if self._credentials is None:
                raise AuthenticationError(
                    "No credentials provided. Set them via "
                    "AsyncTextToSpeechClient(username=..., password=...), "
                    "watson_tts.set_credentials(...), or the TEXT_TO_SPEECH_USERNAME "
                    "and TEXT_TO_SPEECH_PASSWORD environment variables."
                )
            self._transport = AiohttpTransport(
                auth=self._credentials, timeout=self._timeout
            )
            self._owns_transport = True
        return self._transport

    def _get_semaphore(self) -> asyncio.Semaphore:
        """Get the concurrency limiter for the running event loop."""
        loop = asyncio.get_running_loop()
        if self._semaphore is None or self._semaphore_loop is not loop:
            self._semaphore = asyncio.Semaphore(self._max_concurrency)
            self._semaphore_loop = loop
        return self._semaphore

    def prepare(self, endpoint: str, params: Mapping[str, Any] | None = None) -> BuiltRequest:
        """Build the request for an operation without sending it."""
        return build_request(get_endpoint(endpoint), params)

    async def call(
        self,
        endpoint: str,
        params: Mapping[str, Any] | None = None,
        **kwargs: Any,
    ) -> ClientResult:
        """
        Invoke an operation by name with a parameter bag.

        Args:
            endpoint: Operation name, e.g. "synthesize" or "list_words".
            params: Parameter bag. Keyword arguments are merged over it.
        """
        bag = dict(params or {})
        bag.update(kwargs)
        request = self.prepare(endpoint, bag)
        transport = self._get_transport()
        async with self._get_semaphore():
            return await ainvoke(request, transport, self._base_url)

    async def synthesize(
        self,
        text: str,
        voice: str | None = None,
        accept: str | None = None,
        learning_opt_out: bool | None = None,
    ) -> ClientResult:
        """
        Synthesize text to audio asynchronously.

        Args:
            text: The text to speak. May contain SSML.
            voice: Voice name. Service default if None.
            accept: Audio MIME type. Defaults to "audio/ogg; codecs=opus".
            learning_opt_out: If True, ask the service not to log this request.

        Returns:
            Success with the audio bytes, or Failure.
        """
        text = validate_text(text)
        logger.debug(f"Synthesizing text asynchronously: {text[:50]}...")
        result = await self.call(
            "synthesize",
            {
                "text": text,
                "voice": voice,
                "accept": accept,
                LEARNING_OPT_OUT_HEADER: learning_opt_out,
            },
        )
        if result.ok:
            logger.info(f"Synthesized {len(result.payload)} bytes of audio")
        return result

    async def synthesize_to_file(
        self,
        text: str,
        filepath: str | Path,
        voice: str | None = None,
        accept: str | None = None,
        learning_opt_out: bool | None = None,
    ) -> ClientResult:
        """
        Synthesize text and save the audio to a file.

        Returns:
            Success with the output path as a string, or the synthesis Failure.

        Raises:
            ValidationError: If the extension does not match the audio type.
        """
        output_path = validate_output_filepath(filepath, accept or DEFAULT_ACCEPT)
        result = await self.synthesize(
            text, voice=voice, accept=accept, learning_opt_out=learning_opt_out
        )
        if not result.ok:
            return result
        await asyncio.to_thread(write_audio_file, output_path, result.payload)
        return Success(payload=str(output_path), status_code=result.status_code)

    async def voices(self) -> ClientResult:
        """List the voices available for synthesis."""
        return await self.call("voices")

    async def pronunciation(
        self,
        text: str,
        voice: str | None = None,
        format: Alphabet | None = None,
    ) -> ClientResult:
        """Get the phonetic pronunciation of a word ("ipa" or "spr")."""
        text = validate_text(text)
        return await self.call("pronunciation", text=text, voice=voice, format=format)

    async def create_customization(
        self,
        name: str,
        language: str | None = None,
        description: str | None = None,
        learning_opt_out: bool | None = None,
    ) -> ClientResult:
        """Create an empty custom model."""
        return await self.call(
            "create_customization",
            {
                "name": name,
                "language": language,
                "description": description,
                LEARNING_OPT_OUT_HEADER: learning_opt_out,
            },
        )

    async def list_customizations(self, language: str | None = None) -> ClientResult:
        """List the caller's custom models, optionally for one language."""
        return await self.call("list_customizations", language=language)

    async def get_customization(
        self,
        customization_id: str,
        alphabet: Alphabet | None = None,
    ) -> ClientResult:
        """Get a custom model and its words."""
        return await self.call(
            "get_customization", customization_id=customization_id, alphabet=alphabet
        )

    async def update_customization(
        self,
        customization_id: str,
        name: str | None = None,
        description: str | None = None,
        words: list[Word] | None = None,
    ) -> ClientResult:
        """Update a custom model; fields left as None are not changed."""
        return await self.call(
            "update_customization",
            customization_id=customization_id,
            name=name,
            description=description,
            words=[dict(w) for w in words] if words is not None else None,
        )

    async def delete_customization(self, customization_id: str) -> ClientResult:
        """Delete a custom model."""
        return await self.call("delete_customization", customization_id=customization_id)

    async def add_word(
        self, customization_id: str, word: str, translation: str
    ) -> ClientResult:
        """Add or replace a single word in a custom model."""
        return await self.call(
            "add_word",
            customization_id=customization_id,
            word=word,
            translation=translation,
        )

    async def add_words(self, customization_id: str, words: list[Word]) -> ClientResult:
        """Add or replace several words in a custom model."""
        return await self.call(
            "add_words",
            customization_id=customization_id,
            words=[dict(w) for w in words],
        )

    async def get_word(self, customization_id: str, word: str) -> ClientResult:
        """Get the translation of one word in a custom model."""
        return await self.call("get_word", customization_id=customization_id, word=word)

    async def list_words(self, customization_id: str) -> ClientResult:
        """List the words in a custom model."""
        return await self.call("list_words", customization_id=customization_id)

    async def delete_word(self, customization_id: str, word: str) -> ClientResult:
        """Delete one word from a custom model."""
        return await self.call("delete_word", customization_id=customization_id, word=word)

    async def close(self) -> None:
        """Close the default transport, if this client created it."""
        if self._transport is not None and self._owns_transport:
            await self._transport.close()
            self._transport = None

    async def __aenter__(self) -> "AsyncTextToSpeechClient":
        """Async context manager entry."""
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        """Async context manager exit."""
        await self.close()
