"""Shared fixtures: in-memory transports and a clean global config."""

import json

import pytest

import watson_tts._api as api_module
from watson_tts import config as config_module
from watson_tts.transport import TransportResponse


def json_response(status_code, data):
    return TransportResponse(
        status_code=status_code,
        content=json.dumps(data).encode("utf-8"),
        headers={"Content-Type": "application/json"},
    )


class FakeTransport:
    """Records every execute() call and replays a canned response or error."""

    def __init__(self, response=None, error=None):
        self.response = response or TransportResponse(status_code=200, content=b"{}")
        self.error = error
        self.calls = []
        self.closed = False

    def execute(self, method, url, query, headers, body, response_mode):
        self.calls.append(
            {
                "method": method,
                "url": url,
                "query": dict(query),
                "headers": dict(headers),
                "body": body,
                "response_mode": response_mode,
            }
        )
        if self.error is not None:
            raise self.error
        return self.response

    def close(self):
        self.closed = True


class FakeAsyncTransport(FakeTransport):
    async def execute(self, method, url, query, headers, body, response_mode):
        return FakeTransport.execute(
            self, method, url, query, headers, body, response_mode
        )

    async def close(self):
        self.closed = True


@pytest.fixture(autouse=True)
def clean_config(monkeypatch):
    """Isolate each test from the environment and module-level state."""
    for name in (
        config_module.ENV_USERNAME,
        config_module.ENV_PASSWORD,
        config_module.ENV_URL,
    ):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setattr(config_module, "_config", config_module.GlobalConfig())
    monkeypatch.setattr(api_module, "_default_client", None)
    monkeypatch.setattr(api_module, "_default_async_client", None)


@pytest.fixture
def transport():
    return FakeTransport()


@pytest.fixture
def async_transport():
    return FakeAsyncTransport()
