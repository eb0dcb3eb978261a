"""Tests for ClientResult helpers."""

import pytest

from watson_tts.exceptions import ClientError, ServerError, TransportError
from watson_tts.result import Failure, FailureKind, Success


def test_success_unwrap():
    result = Success(payload={"voices": []}, status_code=200)
    assert result.ok
    assert result.unwrap() == {"voices": []}


@pytest.mark.parametrize(
    "kind, exc_type",
    [
        (FailureKind.CLIENT_ERROR, ClientError),
        (FailureKind.SERVER_ERROR, ServerError),
        (FailureKind.TRANSPORT_ERROR, TransportError),
    ],
)
def test_failure_unwrap_raises_matching_exception(kind, exc_type):
    result = Failure(kind=kind, message="boom", status_code=None)
    assert not result.ok
    with pytest.raises(exc_type, match="boom"):
        result.unwrap()


def test_failure_exception_carries_response_data():
    envelope = {"code": 401, "error": "Invalid customization_id (XXX) for user."}
    failure = Failure(
        kind=FailureKind.CLIENT_ERROR,
        message=envelope["error"],
        status_code=401,
        response_data=envelope,
    )

    error = failure.to_exception()

    assert error.status_code == 401
    assert error.response_data == envelope
    assert str(error) == "[401] Invalid customization_id (XXX) for user."
