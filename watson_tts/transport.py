"""
Watson Text to Speech HTTP Transports.

A transport executes one HTTP request and returns the raw response. It owns
connection pooling, TLS, authentication and timeouts; it never retries and
never interprets status codes. Connectivity failures are raised as
TransportError.
"""

from __future__ import annotations

import asyncio
import threading
from dataclasses import dataclass, field
from typing import Mapping, Protocol

import aiohttp
import requests

from .config import DEFAULT_TIMEOUT, SDK_VERSION
from .endpoints import ResponseMode
from .exceptions import TransportError
from .utils import logger

USER_AGENT = f"watson-tts-python/{SDK_VERSION}"


@dataclass(frozen=True)
class TransportResponse:
    """Raw HTTP response as seen by the transport."""

    status_code: int
    content: bytes = b""
    headers: Mapping[str, str] = field(default_factory=dict)

    @property
    def text(self) -> str:
        return self.content.decode("utf-8", errors="replace")


class Transport(Protocol):
    """Synchronous transport contract."""

    def execute(
        self,
        method: str,
        url: str,
        query: Mapping[str, str],
        headers: Mapping[str, str],
        body: bytes | None,
        response_mode: ResponseMode,
    ) -> TransportResponse:
        ...


class AsyncTransport(Protocol):
    """Asynchronous transport contract."""

    async def execute(
        self,
        method: str,
        url: str,
        query: Mapping[str, str],
        headers: Mapping[str, str],
        body: bytes | None,
        response_mode: ResponseMode,
    ) -> TransportResponse:
        ...


def _default_headers(headers: Mapping[str, str], response_mode: ResponseMode) -> dict[str, str]:
    merged = {"User-Agent": USER_AGENT}
    if response_mode is not ResponseMode.BINARY:
        merged["Accept"] = "application/json"
    merged.update(headers)
    return merged


class RequestsTransport:
    """
    Transport backed by a requests Session.

    Args:
        auth: Optional (username, password) for HTTP basic auth.
        timeout: Request timeout in seconds.
        session: Optional pre-configured session. Sessions passed in are
            not closed by close().
    """

    def __init__(
        self,
        auth: tuple[str, str] | None = None,
        timeout: float = DEFAULT_TIMEOUT,
        session: requests.Session | None = None,
    ) -> None:
        self._auth = auth
        self._timeout = timeout
        self._session = session
        self._owns_session = session is None
        self._lock = threading.Lock()

    def _get_session(self) -> requests.Session:
        """Get or create the requests session."""
        with self._lock:
            if self._session is None:
                self._session = requests.Session()
                self._owns_session = True
            return self._session

    def execute(
        self,
        method: str,
        url: str,
        query: Mapping[str, str],
        headers: Mapping[str, str],
        body: bytes | None,
        response_mode: ResponseMode,
    ) -> TransportResponse:
        session = self._get_session()
        try:
            response = session.request(
                method=method,
                url=url,
                params=dict(query),
                headers=_default_headers(headers, response_mode),
                data=body,
                auth=self._auth,
                timeout=self._timeout,
            )
        except requests.exceptions.Timeout as e:
            raise TransportError(
                f"Request timed out after {self._timeout}s", original_error=e
            ) from e
        except requests.exceptions.RequestException as e:
            raise TransportError(f"Network error: {e}", original_error=e) from e

        return TransportResponse(
            status_code=response.status_code,
            content=response.content,
            headers=dict(response.headers),
        )

    def close(self) -> None:
        """Close the HTTP session if this transport created it."""
        with self._lock:
            if self._session is not None and self._owns_session:
                self._session.close()
                self._session = None


class AiohttpTransport:
    """
    Transport backed by an aiohttp ClientSession.

    A ClientSession is bound to the event loop it was created on. Sessions
    this transport creates are rebuilt when it is used from a different
    loop, so one transport can serve successive ``asyncio.run`` calls.

    Args:
        auth: Optional (username, password) for HTTP basic auth.
        timeout: Total request timeout in seconds.
        session: Optional pre-configured session. Sessions passed in are
            not closed by close().
    """

    def __init__(
        self,
        auth: tuple[str, str] | None = None,
        timeout: float = DEFAULT_TIMEOUT,
        session: aiohttp.ClientSession | None = None,
    ) -> None:
        self._authorization = aiohttp.BasicAuth(*auth).encode() if auth else None
        self._timeout = timeout
        self._session = session
        self._owns_session = session is None

    def _on_other_loop(self) -> bool:
        loop = getattr(self._session, "_loop", None)
        return loop is not None and loop is not asyncio.get_running_loop()

    def _discard_session(self) -> None:
        # The owning loop is gone or not ours; release the connector without
        # awaiting anything on it.
        if self._owns_session and not self._session.closed:
            self._session.detach()
        self._session = None

    async def _get_session(self) -> aiohttp.ClientSession:
        """Get or create the aiohttp session for the running loop."""
        if self._session is not None and self._owns_session and self._on_other_loop():
            logger.debug("aiohttp session belongs to another event loop, recreating")
            self._discard_session()
        if self._session is None or self._session.closed:
            timeout = aiohttp.ClientTimeout(total=self._timeout)
            self._session = aiohttp.ClientSession(timeout=timeout)
            self._owns_session = True
        return self._session

    async def execute(
        self,
        method: str,
        url: str,
        query: Mapping[str, str],
        headers: Mapping[str, str],
        body: bytes | None,
        response_mode: ResponseMode,
    ) -> TransportResponse:
        session = await self._get_session()
        request_headers = _default_headers(headers, response_mode)
        if self._authorization is not None:
            request_headers["Authorization"] = self._authorization
        try:
            async with session.request(
                method=method,
                url=url,
                params=dict(query),
                headers=request_headers,
                data=body,
            ) as response:
                content = await response.read()
                return TransportResponse(
                    status_code=response.status,
                    content=content,
                    headers=dict(response.headers),
                )
        except asyncio.TimeoutError as e:
            raise TransportError(
                f"Request timed out after {self._timeout}s", original_error=e
            ) from e
        except aiohttp.ClientError as e:
            raise TransportError(f"Network error: {e}", original_error=e) from e

    async def close(self) -> None:
        """Close the HTTP session if this transport created it."""
        if self._session is not None and self._owns_session:
            if self._on_other_loop():
                self._discard_session()
                return
            await self._session.close()
            self._session = None
