"""
Watson Text to Speech Request Builder.

Turns an EndpointDescriptor and a caller's parameter bag into an immutable
BuiltRequest. Building is pure: no I/O, and the same inputs always give an
equal request.
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from types import MappingProxyType
from typing import Any, Mapping
from urllib.parse import quote

from .endpoints import EndpointDescriptor, ResponseMode
from .exceptions import MissingRequiredParameter
from .utils import logger

JSON_CONTENT_TYPE = "application/json"


@dataclass(frozen=True)
class BuiltRequest:
    """
    A fully shaped HTTP request, ready to hand to a transport.

    Attributes:
        method: HTTP verb.
        path: Path with placeholders substituted, relative to the base URL.
        query: Query string parameters.
        headers: Request headers.
        body: UTF-8 encoded JSON body, or None.
        response_mode: How the response body should be decoded.
        endpoint: Name of the descriptor this request was built from.
    """
    method: str
    path: str
    query: Mapping[str, str]
    headers: Mapping[str, str]
    body: bytes | None
    response_mode: ResponseMode
    endpoint: str

    @property
    def json_body(self) -> Any:
        """The decoded JSON body, or None if there is no body."""
        if self.body is None:
            return None
        return json.loads(self.body.decode("utf-8"))


def _is_missing(value: Any) -> bool:
    return value is None or value == ""


def _to_wire_string(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def build_request(
    descriptor: EndpointDescriptor,
    params: Mapping[str, Any] | None = None,
) -> BuiltRequest:
    """
    Validate a parameter bag against a descriptor and shape the request.

    Args:
        descriptor: The endpoint being called.
        params: Caller parameters. Keys the descriptor does not declare are
            dropped; keys whose value is None are treated as absent.

    Returns:
        The built request.

    Raises:
        MissingRequiredParameter: If a required parameter or path
            placeholder is absent, None or empty.
    """
    merged: dict[str, Any] = dict(descriptor.defaults)
    merged.update(
        (key, value) for key, value in (params or {}).items() if value is not None
    )

    required = descriptor.required_params | frozenset(descriptor.path_params)
    missing = sorted(name for name in required if _is_missing(merged.get(name)))
    if missing:
        raise MissingRequiredParameter(missing)

    dropped = sorted(set(merged) - descriptor.known_params)
    if dropped:
        logger.debug(f"Ignoring unknown parameters for {descriptor.name}: {dropped}")

    path = descriptor.path_template.format(
        **{
            name: quote(_to_wire_string(merged[name]), safe="")
            for name in descriptor.path_params
        }
    )

    query = {
        name: _to_wire_string(merged[name])
        for name in sorted(descriptor.query_params)
        if name in merged
    }
    headers = {
        name: _to_wire_string(merged[name])
        for name in sorted(descriptor.header_params)
        if name in merged
    }

    body: bytes | None = None
    payload = {
        name: merged[name]
        for name in sorted(descriptor.body_params)
        if name in merged
    }
    if descriptor.body_params:
        body = json.dumps(
            payload, ensure_ascii=False, separators=(",", ":"), sort_keys=True
        ).encode("utf-8")
        headers["Content-Type"] = JSON_CONTENT_TYPE

    return BuiltRequest(
        method=descriptor.http_method,
        path=path,
        query=MappingProxyType(query),
        headers=MappingProxyType(headers),
        body=body,
        response_mode=descriptor.response_mode,
        endpoint=descriptor.name,
    )
