"""
Watson Text to Speech Synchronous Client.

Provides the TextToSpeechClient class for synchronous API interactions (v1).
"""

from __future__ import annotations

import threading
from pathlib import Path
from typing import Any, Literal, Mapping

from .config import DEFAULT_ACCEPT, DEFAULT_TIMEOUT, LEARNING_OPT_OUT_HEADER, get_config
from .endpoints import get_endpoint
from .exceptions import AuthenticationError
from .invoker import invoke
from .request import BuiltRequest, build_request
from .result import ClientResult, Success
from .transport import RequestsTransport, Transport
from .utils import logger, validate_output_filepath, validate_text, write_audio_file

# Type aliases
Alphabet = Literal["ipa", "spr"]
Word = Mapping[str, str]


class TextToSpeechClient:
    """
    Synchronous client for the Watson Text to Speech API.

    Every operation returns a ClientResult. Missing required parameters are
    raised as MissingRequiredParameter before any request is sent; HTTP and
    network failures come back as Failure values. Call ``.unwrap()`` on a
    result to get the payload or raise.

    Args:
        username: Service username. Falls back to TEXT_TO_SPEECH_USERNAME
            or the global config.
        password: Service password. Falls back to TEXT_TO_SPEECH_PASSWORD
            or the global config.
        base_url: Service URL. Defaults to the public Watson endpoint.
        timeout: Request timeout in seconds for the default transport.
        transport: Optional transport. When given, credentials and timeout
            are the transport's concern and are not checked here.

    Example:
        >>> client = TextToSpeechClient(username="user", password="secret")
        >>> result = client.synthesize("Hello, world!", accept="audio/wav")
        >>> audio = result.unwrap()

    Example (custom model):
        >>> with TextToSpeechClient() as client:
        ...     created = client.create_customization("medical terms").unwrap()
        ...     client.add_word(
        ...         created["customization_id"],
        ...         "gastroenteritis",
        ...         '<phoneme alphabet="ibm" ph="1gAstroEntxrYFXs"></phoneme>',
        ...     )
    """

    def __init__(
        self,
        username: str | None = None,
        password: str | None = None,
        base_url: str | None = None,
        timeout: float = DEFAULT_TIMEOUT,
        transport: Transport | None = None,
    ) -> None:
        """Initialize the client."""
        config = get_config()
        if username and password:
            self._credentials: tuple[str, str] | None = (username, password)
        else:
            self._credentials = config.get_credentials()
        self._base_url = (base_url or config.get_base_url()).rstrip("/")
        self._timeout = timeout
        self._transport = transport
        self._owns_transport = transport is None
        self._lock = threading.Lock()

    @property
    def base_url(self) -> str:
        """Get the service URL."""
        return self._base_url

    def _get_transport(self) -> Transport:
        """Get or create the default requests transport."""
        with self._lock:
            if self._transport is None:
                if self._credentials is None:
                    raise AuthenticationError(
                        "No credentials provided. Set them via "
                        "TextToSpeechClient(username=..., password=...), "
                        "watson_tts.set_credentials(...), or the TEXT_TO_SPEECH_USERNAME "
                        "and TEXT_TO_SPEECH_PASSWORD environment variables."
                    )
                self._transport = RequestsTransport(
                    auth=self._credentials, timeout=self._timeout
                )
                self._owns_transport = True
            return self._transport

    def prepare(self, endpoint: str, params: Mapping[str, Any] | None = None) -> BuiltRequest:
        """
        Build the request for an operation without sending it.

        Raises:
            ValidationError: If the endpoint name is unknown.
            MissingRequiredParameter: If a required parameter is missing.
        """
        return build_request(get_endpoint(endpoint), params)

    def call(
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

        Returns:
            The call result.

        Example:
            >>> client.call("get_word", customization_id="74f4...", word="tomato")
        """
        bag = dict(params or {})
        bag.update(kwargs)
        request = self.prepare(endpoint, bag)
        return invoke(request, self._get_transport(), self._base_url)

    # ------------------------------------------------------------------
    # Synthesis
    # ------------------------------------------------------------------

    def synthesize(
        self,
        text: str,
        voice: str | None = None,
        accept: str | None = None,
        learning_opt_out: bool | None = None,
    ) -> ClientResult:
        """
        Synthesize text to audio.

        Args:
            text: The text to speak. May contain SSML.
            voice: Voice name, e.g. "en-US_MichaelVoice". Service default if None.
            accept: Audio MIME type. Defaults to "audio/ogg; codecs=opus".
            learning_opt_out: If True, ask the service not to log this request.

        Returns:
            Success with the audio bytes, or Failure.
        """
        text = validate_text(text)
        logger.debug(f"Synthesizing text: {text[:50]}...")
        result = self.call(
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

    def synthesize_to_file(
        self,
        text: str,
        filepath: str | Path,
        voice: str | None = None,
        accept: str | None = None,
        learning_opt_out: bool | None = None,
    ) -> ClientResult:
        """
        Synthesize text and save the audio to a file.

        The file extension must match ``accept`` (".ogg" for the default).

        Returns:
            Success with the output path as a string, or the synthesis Failure.

        Raises:
            ValidationError: If the extension does not match the audio type.
        """
        output_path = validate_output_filepath(filepath, accept or DEFAULT_ACCEPT)
        result = self.synthesize(
            text, voice=voice, accept=accept, learning_opt_out=learning_opt_out
        )
        if not result.ok:
            return result
        write_audio_file(output_path, result.payload)
        return Success(payload=str(output_path), status_code=result.status_code)

    def voices(self) -> ClientResult:
        """
        List the voices available for synthesis.

        Returns:
            Success with ``{"voices": [{"name", "language", "gender", "url"}, ...]}``.
        """
        return self.call("voices")

    def pronunciation(
        self,
        text: str,
        voice: str | None = None,
        format: Alphabet | None = None,
    ) -> ClientResult:
        """
        Get the phonetic pronunciation of a word.

        Args:
            text: The word to look up.
            voice: Voice whose language is used. Service default if None.
            format: "ipa" (default on the service) or "spr".

        Returns:
            Success with ``{"pronunciation": "..."}``.
        """
        text = validate_text(text)
        return self.call("pronunciation", text=text, voice=voice, format=format)

    # ------------------------------------------------------------------
    # Custom models
    # ------------------------------------------------------------------

    def create_customization(
        self,
        name: str,
        language: str | None = None,
        description: str | None = None,
        learning_opt_out: bool | None = None,
    ) -> ClientResult:
        """
        Create an empty custom model.

        Args:
            name: Model name.
            language: Language of the model. The service assumes "en-US" if None.
            description: Free-text description.

        Returns:
            Success with ``{"customization_id": "..."}``.
        """
        return self.call(
            "create_customization",
            {
                "name": name,
                "language": language,
                "description": description,
                LEARNING_OPT_OUT_HEADER: learning_opt_out,
            },
        )

    def list_customizations(self, language: str | None = None) -> ClientResult:
        """List the caller's custom models, optionally for one language."""
        return self.call("list_customizations", language=language)

    def get_customization(
        self,
        customization_id: str,
        alphabet: Alphabet | None = None,
    ) -> ClientResult:
        """
        Get a custom model and its words.

        Args:
            customization_id: The model's GUID.
            alphabet: If "spr", phonetic translations are converted to SPR.
        """
        return self.call(
            "get_customization", customization_id=customization_id, alphabet=alphabet
        )

    def update_customization(
        self,
        customization_id: str,
        name: str | None = None,
        description: str | None = None,
        words: list[Word] | None = None,
    ) -> ClientResult:
        """
        Update a custom model's name or description and/or add words to it.

        Fields left as None are not changed.

        Args:
            customization_id: The model's GUID.
            words: ``[{"word": ..., "translation": ...}, ...]``.
        """
        return self.call(
            "update_customization",
            customization_id=customization_id,
            name=name,
            description=description,
            words=[dict(w) for w in words] if words is not None else None,
        )

    def delete_customization(self, customization_id: str) -> ClientResult:
        """Delete a custom model. Success payload is None."""
        return self.call("delete_customization", customization_id=customization_id)

    # ------------------------------------------------------------------
    # Words
    # ------------------------------------------------------------------

    def add_word(self, customization_id: str, word: str, translation: str) -> ClientResult:
        """
        Add or replace a single word in a custom model.

        Args:
            translation: An SSML ``<phoneme>`` element or a sounds-like spelling.
        """
        return self.call(
            "add_word",
            customization_id=customization_id,
            word=word,
            translation=translation,
        )

    def add_words(self, customization_id: str, words: list[Word]) -> ClientResult:
        """Add or replace several words in a custom model."""
        return self.call(
            "add_words",
            customization_id=customization_id,
            words=[dict(w) for w in words],
        )

    def get_word(self, customization_id: str, word: str) -> ClientResult:
        """Get the translation of one word in a custom model."""
        return self.call("get_word", customization_id=customization_id, word=word)

    def list_words(self, customization_id: str) -> ClientResult:
        """List the words in a custom model."""
        return self.call("list_words", customization_id=customization_id)

    def delete_word(self, customization_id: str, word: str) -> ClientResult:
        """Delete one word from a custom model."""
        return self.call("delete_word", customization_id=customization_id, word=word)

    def close(self) -> None:
        """Close the default transport, if this client created it."""
        if self._transport is not None and self._owns_transport:
            self._transport.close()
            self._transport = None

    def __enter__(self) -> "TextToSpeechClient":
        """Context manager entry."""
        return self

    def __exit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        """Context manager exit."""
        self.close()
