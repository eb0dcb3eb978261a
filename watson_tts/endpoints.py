"""
Watson Text to Speech Endpoint Descriptors.

Each remote operation is declared once as an immutable EndpointDescriptor.
The request builder reads these to decide which parameters are required
and whether each one travels in the path, query string, headers or body.
"""

from __future__ import annotations

import enum
import string
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Mapping

from .config import DEFAULT_ACCEPT, LEARNING_OPT_OUT_HEADER
from .exceptions import ValidationError


class ResponseMode(enum.Enum):
    """How a successful response body is decoded."""

    JSON = "json"
    BINARY = "binary"
    EMPTY = "empty"


@dataclass(frozen=True)
class EndpointDescriptor:
    """Static shape of one remote operation."""

    name: str
    http_method: str
    path_template: str
    required_params: frozenset[str] = frozenset()
    query_params: frozenset[str] = frozenset()
    header_params: frozenset[str] = frozenset()
    body_params: frozenset[str] = frozenset()
    response_mode: ResponseMode = ResponseMode.JSON
    defaults: Mapping[str, Any] = field(default_factory=lambda: MappingProxyType({}))

    @property
    def path_params(self) -> tuple[str, ...]:
        """Placeholder names in the path template, in order of appearance."""
        return tuple(
            name
            for _, name, _, _ in string.Formatter().parse(self.path_template)
            if name
        )

    @property
    def known_params(self) -> frozenset[str]:
        """Every parameter name this endpoint accepts."""
        return (
            frozenset(self.path_params)
            | self.query_params
            | self.header_params
            | self.body_params
        )


def _endpoint(
    name: str,
    method: str,
    path: str,
    required: tuple[str, ...] = (),
    query: tuple[str, ...] = (),
    headers: tuple[str, ...] = (),
    body: tuple[str, ...] = (),
    mode: ResponseMode = ResponseMode.JSON,
    defaults: dict[str, Any] | None = None,
) -> EndpointDescriptor:
    return EndpointDescriptor(
        name=name,
        http_method=method,
        path_template=path,
        required_params=frozenset(required),
        query_params=frozenset(query),
        header_params=frozenset(headers),
        body_params=frozenset(body),
        response_mode=mode,
        defaults=MappingProxyType(dict(defaults or {})),
    )


_CUSTOMIZATION = "/v1/customizations/{customization_id}"
_WORD = _CUSTOMIZATION + "/words/{word}"

_DESCRIPTORS: tuple[EndpointDescriptor, ...] = (
    _endpoint(
        "synthesize", "POST", "/v1/synthesize",
        required=("text",),
        query=("accept", "voice"),
        headers=(LEARNING_OPT_OUT_HEADER,),
        body=("text",),
        mode=ResponseMode.BINARY,
        defaults={"accept": DEFAULT_ACCEPT},
    ),
    _endpoint("voices", "GET", "/v1/voices"),
    _endpoint(
        "create_customization", "POST", "/v1/customizations",
        required=("name",),
        headers=(LEARNING_OPT_OUT_HEADER,),
        body=("name", "language", "description"),
    ),
    _endpoint(
        "list_customizations", "GET", "/v1/customizations",
        query=("language",),
    ),
    _endpoint(
        "delete_customization", "DELETE", _CUSTOMIZATION,
        required=("customization_id",),
        mode=ResponseMode.EMPTY,
    ),
    _endpoint(
        "get_customization", "GET", _CUSTOMIZATION,
        required=("customization_id",),
        query=("alphabet",),
    ),
    _endpoint(
        "update_customization", "POST", _CUSTOMIZATION,
        required=("customization_id",),
        body=("name", "description", "words"),
        mode=ResponseMode.EMPTY,
    ),
    _endpoint(
        "add_word", "PUT", _WORD,
        required=("customization_id", "word", "translation"),
        body=("translation",),
        mode=ResponseMode.EMPTY,
    ),
    _endpoint(
        "add_words", "POST", _CUSTOMIZATION + "/words",
        required=("customization_id", "words"),
        body=("words",),
        mode=ResponseMode.EMPTY,
    ),
    _endpoint(
        "get_word", "GET", _WORD,
        required=("customization_id", "word"),
    ),
    _endpoint(
        "list_words", "GET", _CUSTOMIZATION + "/words",
        required=("customization_id",),
    ),
    _endpoint(
        "delete_word", "DELETE", _WORD,
        required=("customization_id", "word"),
        mode=ResponseMode.EMPTY,
    ),
    _endpoint(
        "pronunciation", "GET", "/v1/pronunciation",
        required=("text",),
        query=("text", "voice", "format"),
    ),
)

ENDPOINTS: Mapping[str, EndpointDescriptor] = MappingProxyType(
    {descriptor.name: descriptor for descriptor in _DESCRIPTORS}
)
"""All endpoint descriptors, keyed by operation name."""


def get_endpoint(name: str) -> EndpointDescriptor:
    """
    Look up an endpoint descriptor by operation name.

    Raises:
        ValidationError: If no operation has that name.
    """
    try:
        return ENDPOINTS[name]
    except KeyError:
        raise ValidationError(
            f"Unknown endpoint: {name}. Known endpoints: {', '.join(ENDPOINTS)}"
        ) from None
