"""Tests for the asynchronous AsyncTextToSpeechClient."""

import asyncio
import logging

import pytest

from conftest import FakeAsyncTransport, json_response
from watson_tts.async_client import AsyncTextToSpeechClient
from watson_tts.exceptions import (
    AuthenticationError,
    MissingRequiredParameter,
    TransportError,
)
from watson_tts.result import FailureKind, Success
from watson_tts.transport import AiohttpTransport, TransportResponse

BASE_URL = "https://tts.example.com/api"


@pytest.fixture
def client(async_transport):
    return AsyncTextToSpeechClient(base_url=BASE_URL, transport=async_transport)


@pytest.mark.asyncio
async def test_synthesize(client, async_transport):
    async_transport.response = TransportResponse(200, b"OggS")

    result = await client.synthesize("hello")

    assert result == Success(payload=b"OggS", status_code=200)
    call = async_transport.calls[0]
    assert call["query"] == {"accept": "audio/ogg; codecs=opus"}
    assert call["body"] == b'{"text":"hello"}'


@pytest.mark.asyncio
async def test_missing_text_sends_nothing(client, async_transport):
    with pytest.raises(MissingRequiredParameter):
        await client.synthesize("")
    assert async_transport.calls == []


@pytest.mark.asyncio
async def test_client_error(client, async_transport):
    async_transport.response = json_response(
        400,
        {
            "code": 400,
            "error": "Invalid value for 'language'.",
            "code_description": "Bad Request",
        },
    )

    result = await client.create_customization("voice", language="xx-XX")

    assert result.kind is FailureKind.CLIENT_ERROR
    assert result.message == "Invalid value for 'language'."


@pytest.mark.asyncio
async def test_transport_error(async_transport):
    async_transport.error = TransportError("Network error: connection refused")
    client = AsyncTextToSpeechClient(base_url=BASE_URL, transport=async_transport)

    result = await client.voices()

    assert result.kind is FailureKind.TRANSPORT_ERROR


@pytest.mark.asyncio
async def test_word_operations(client, async_transport):
    await client.add_word("abc", "tomato", "tuh may toe")
    await client.add_words("abc", [{"word": "div.", "translation": "division"}])
    await client.get_word("abc", "tomato")
    await client.list_words("abc")
    await client.delete_word("abc", "tomato")
    await client.update_customization("abc", name="renamed")
    await client.get_customization("abc", alphabet="ipa")
    await client.list_customizations(language="en-US")
    await client.delete_customization("abc")

    assert [c["method"] for c in async_transport.calls] == [
        "PUT", "POST", "GET", "GET", "DELETE", "POST", "GET", "GET", "DELETE",
    ]


@pytest.mark.asyncio
async def test_concurrent_pronunciations(client, async_transport):
    async_transport.response = json_response(200, {"pronunciation": "x"})

    results = await asyncio.gather(
        *(client.pronunciation(word) for word in ["one", "two", "three"])
    )

    assert all(r.ok for r in results)
    assert sorted(c["query"]["text"] for c in async_transport.calls) == [
        "one", "three", "two",
    ]


@pytest.mark.asyncio
async def test_synthesize_to_file(client, async_transport, tmp_path):
    async_transport.response = TransportResponse(200, b"fLaC")
    target = tmp_path / "hello.flac"

    result = await client.synthesize_to_file("hello", target, accept="audio/flac")

    assert result.unwrap() == str(target)
    assert target.read_bytes() == b"fLaC"


@pytest.mark.asyncio
async def test_missing_credentials():
    client = AsyncTextToSpeechClient(base_url=BASE_URL)
    with pytest.raises(AuthenticationError):
        await client.voices()


@pytest.mark.asyncio
async def test_default_transport_is_aiohttp():
    client = AsyncTextToSpeechClient(username="u", password="p", base_url=BASE_URL)
    transport = client._get_transport()
    assert isinstance(transport, AiohttpTransport)
    await client.close()


@pytest.mark.asyncio
async def test_injected_transport_is_not_closed(async_transport):
    async with AsyncTextToSpeechClient(base_url=BASE_URL, transport=async_transport):
        pass
    assert not async_transport.closed


@pytest.mark.asyncio
async def test_successful_synthesis_is_logged(client, async_transport, caplog):
    async_transport.response = TransportResponse(200, b"OggS")

    with caplog.at_level(logging.INFO, logger="watson_tts"):
        await client.synthesize("hello")

    assert "Synthesized 4 bytes of audio" in caplog.text


class _SlowAsyncTransport(FakeAsyncTransport):
    async def execute(self, method, url, query, headers, body, response_mode):
        await asyncio.sleep(0.01)
        return await super().execute(method, url, query, headers, body, response_mode)


def test_client_is_usable_from_successive_event_loops():
    transport = _SlowAsyncTransport(response=json_response(200, {"voices": []}))
    client = AsyncTextToSpeechClient(
        base_url=BASE_URL, max_concurrency=1, transport=transport
    )

    async def lookups():
        return await asyncio.gather(client.voices(), client.voices())

    first = asyncio.run(lookups())
    second = asyncio.run(lookups())

    assert all(r.ok for r in first + second)
    assert len(transport.calls) == 4
