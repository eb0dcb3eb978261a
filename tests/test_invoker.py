"""Tests for mapping transport outcomes to ClientResult values."""

import pytest

from conftest import FakeAsyncTransport, FakeTransport, json_response
from watson_tts.endpoints import ENDPOINTS
from watson_tts.exceptions import TransportError
from watson_tts.invoker import ainvoke, invoke
from watson_tts.request import build_request
from watson_tts.result import Failure, FailureKind, Success
from watson_tts.transport import TransportResponse

BASE_URL = "https://tts.example.com/api"


def _request(name, /, **params):
    return build_request(ENDPOINTS[name], params)


def test_request_is_forwarded_once():
    transport = FakeTransport(response=TransportResponse(200, b"OggS..."))
    request = _request("synthesize", text="hello")

    invoke(request, transport, BASE_URL + "/")

    assert len(transport.calls) == 1
    call = transport.calls[0]
    assert call["method"] == "POST"
    assert call["url"] == "https://tts.example.com/api/v1/synthesize"
    assert call["query"] == {"accept": "audio/ogg; codecs=opus"}
    assert call["body"] == b'{"text":"hello"}'
    assert call["response_mode"] is request.response_mode


def test_binary_success_returns_raw_bytes():
    audio = b"RIFF\x00\x01\x02not json"
    transport = FakeTransport(response=TransportResponse(200, audio))

    result = invoke(_request("synthesize", text="hello"), transport, BASE_URL)

    assert result == Success(payload=audio, status_code=200)


def test_json_success_is_decoded():
    voices = {"voices": [{"name": "en-US_MichaelVoice", "language": "en-US"}]}
    transport = FakeTransport(response=json_response(200, voices))

    result = invoke(_request("voices"), transport, BASE_URL)

    assert result.ok
    assert result.payload == voices


def test_no_content_is_success_none():
    transport = FakeTransport(response=TransportResponse(204, b""))

    result = invoke(
        _request("delete_customization", customization_id="abc"), transport, BASE_URL
    )

    assert result == Success(payload=None, status_code=204)


def test_invalid_json_success_is_server_error():
    transport = FakeTransport(response=TransportResponse(200, b"<html>"))

    result = invoke(_request("voices"), transport, BASE_URL)

    assert isinstance(result, Failure)
    assert result.kind is FailureKind.SERVER_ERROR


def test_client_error_uses_envelope_message():
    envelope = {
        "code": 400,
        "error": "Invalid value for 'language'.",
        "code_description": "Bad Request",
    }
    transport = FakeTransport(response=json_response(400, envelope))

    result = invoke(
        _request("create_customization", name="x", language="xx-XX"),
        transport,
        BASE_URL,
    )

    assert result == Failure(
        kind=FailureKind.CLIENT_ERROR,
        message="Invalid value for 'language'.",
        status_code=400,
        response_data=envelope,
    )


def test_envelope_without_error_falls_back_to_description():
    transport = FakeTransport(
        response=json_response(404, {"code": 404, "code_description": "Not Found"})
    )

    result = invoke(_request("get_word", customization_id="a", word="b"), transport, BASE_URL)

    assert result.kind is FailureKind.CLIENT_ERROR
    assert result.message == "Not Found"


def test_server_error_with_plain_text_body():
    transport = FakeTransport(response=TransportResponse(503, b"Service Unavailable"))

    result = invoke(_request("voices"), transport, BASE_URL)

    assert result.kind is FailureKind.SERVER_ERROR
    assert result.message == "Service Unavailable"
    assert result.status_code == 503


def test_server_error_with_empty_body():
    transport = FakeTransport(response=TransportResponse(500, b""))

    result = invoke(_request("voices"), transport, BASE_URL)

    assert result.kind is FailureKind.SERVER_ERROR
    assert result.message == "HTTP 500"


def test_unexpected_status_is_server_error():
    transport = FakeTransport(response=TransportResponse(302, b""))

    result = invoke(_request("voices"), transport, BASE_URL)

    assert result.kind is FailureKind.SERVER_ERROR
    assert "302" in result.message


def test_transport_error_becomes_failure():
    transport = FakeTransport(error=TransportError("Network error: connection refused"))

    result = invoke(_request("voices"), transport, BASE_URL)

    assert result == Failure(
        kind=FailureKind.TRANSPORT_ERROR,
        message="Network error: connection refused",
    )
    assert len(transport.calls) == 1


@pytest.mark.asyncio
async def test_ainvoke_matches_invoke():
    transport = FakeAsyncTransport(
        response=json_response(200, {"pronunciation": "təmˈɑto"})
    )

    result = await ainvoke(_request("pronunciation", text="tomato"), transport, BASE_URL)

    assert result.payload == {"pronunciation": "təmˈɑto"}
    assert transport.calls[0]["url"] == BASE_URL + "/v1/pronunciation"


@pytest.mark.asyncio
async def test_ainvoke_transport_error():
    transport = FakeAsyncTransport(error=TransportError("Request timed out after 30.0s"))

    result = await ainvoke(_request("voices"), transport, BASE_URL)

    assert result.kind is FailureKind.TRANSPORT_ERROR
    assert "timed out" in result.message


def test_empty_mode_ignores_non_json_body():
    transport = FakeTransport(response=TransportResponse(201, b"Created"))

    result = invoke(
        _request("add_word", customization_id="abc", word="tomato", translation="x"),
        transport,
        BASE_URL,
    )

    assert result == Success(payload=None, status_code=201)
