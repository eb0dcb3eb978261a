"""
Watson Text to Speech Transport Invoker.

Hands a BuiltRequest to a transport exactly once and maps the outcome to a
ClientResult. Network-originated problems never escape as exceptions from
here; they come back as Failure values.
"""

from __future__ import annotations

import json
from typing import Any

from .endpoints import ResponseMode
from .exceptions import TransportError
from .request import BuiltRequest
from .result import ClientResult, Failure, FailureKind, Success
from .transport import AsyncTransport, Transport, TransportResponse
from .utils import logger


def _build_url(base_url: str, path: str) -> str:
    return f"{base_url.rstrip('/')}{path}"


def _decode_json(response: TransportResponse) -> Any:
    if not response.content.strip():
        return None
    return json.loads(response.content.decode("utf-8"))


def _error_message(response: TransportResponse) -> tuple[str, Any]:
    """
    Extract a message from the error envelope ``{code, error, code_description}``.

    Returns:
        (message, response_data) where response_data is the decoded envelope,
        or the raw text when the body is not JSON.
    """
    try:
        data = _decode_json(response)
    except ValueError:
        data = response.text or None

    if isinstance(data, dict):
        message = data.get("error") or data.get("code_description")
        if message:
            return str(message), data
    if isinstance(data, str) and data.strip():
        return data.strip(), data
    return f"HTTP {response.status_code}", data


def _to_result(request: BuiltRequest, response: TransportResponse) -> ClientResult:
    status = response.status_code

    if 200 <= status < 300:
        if request.response_mode is ResponseMode.BINARY:
            return Success(payload=response.content, status_code=status)
        try:
            return Success(payload=_decode_json(response), status_code=status)
        except ValueError:
            if request.response_mode is ResponseMode.EMPTY:
                return Success(payload=None, status_code=status)
            logger.warning(f"{request.endpoint}: response is not valid JSON")
            return Failure(
                kind=FailureKind.SERVER_ERROR,
                message="Invalid JSON in response",
                status_code=status,
                response_data=response.text,
            )

    if 400 <= status < 500:
        kind = FailureKind.CLIENT_ERROR
        message, data = _error_message(response)
    elif 500 <= status < 600:
        kind = FailureKind.SERVER_ERROR
        message, data = _error_message(response)
    else:
        kind = FailureKind.SERVER_ERROR
        message, data = f"Unexpected HTTP status {status}", response.text or None

    logger.warning(f"{request.endpoint} failed with HTTP {status}: {message}")
    return Failure(kind=kind, message=message, status_code=status, response_data=data)


def _transport_failure(request: BuiltRequest, error: TransportError) -> Failure:
    logger.warning(f"{request.endpoint} failed before a response: {error.message}")
    return Failure(kind=FailureKind.TRANSPORT_ERROR, message=error.message)


def invoke(request: BuiltRequest, transport: Transport, base_url: str) -> ClientResult:
    """
    Execute a built request with a synchronous transport.

    Args:
        request: The request to send.
        transport: The transport that performs the HTTP call.
        base_url: Service URL the request path is appended to.

    Returns:
        Success with the decoded payload, or Failure.
    """
    url = _build_url(base_url, request.path)
    logger.debug(f"Request: {request.method} {url}")
    try:
        response = transport.execute(
            request.method,
            url,
            request.query,
            request.headers,
            request.body,
            request.response_mode,
        )
    except TransportError as e:
        return _transport_failure(request, e)
    return _to_result(request, response)


async def ainvoke(
    request: BuiltRequest,
    transport: AsyncTransport,
    base_url: str,
) -> ClientResult:
    """Execute a built request with an asynchronous transport. See invoke()."""
    url = _build_url(base_url, request.path)
    logger.debug(f"Async request: {request.method} {url}")
    try:
        response = await transport.execute(
            request.method,
            url,
            request.query,
            request.headers,
            request.body,
            request.response_mode,
        )
    except TransportError as e:
        return _transport_failure(request, e)
    return _to_result(request, response)
