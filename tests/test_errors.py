from __future__ import annotations

import httpx
import pytest

from clean_client.core.errors import (
    BadRequestError,
    ErrorCode,
    NetworkError,
    NotFoundError,
    ServerError,
    UnauthorizedError,
    UnknownApiError,
    classify_http_error,
    translate_http_errors,
)


def _status_error(status_code: int, **kwargs) -> httpx.HTTPStatusError:
    request = httpx.Request("GET", "https://api.example.com/users/1")
    response = httpx.Response(status_code, request=request, **kwargs)
    return httpx.HTTPStatusError("boom", request=request, response=response)


@pytest.mark.parametrize(
    ("status_code", "expected"),
    [
        (400, BadRequestError),
        (401, UnauthorizedError),
        (403, UnauthorizedError),
        (404, NotFoundError),
        (409, BadRequestError),
        (422, BadRequestError),
        (418, UnknownApiError),
        (500, ServerError),
        (503, ServerError),
    ],
)
def test_status_codes_map_to_taxonomy(status_code: int, expected: type) -> None:
    error = classify_http_error(_status_error(status_code))

    assert isinstance(error, expected)
    assert error.status_code == status_code


def test_message_prefers_json_detail() -> None:
    error = classify_http_error(_status_error(404, json={"detail": "No such user"}))

    assert error.message == "No such user"
    assert error.code is ErrorCode.NOT_FOUND


def test_transport_failures_are_network_errors() -> None:
    request = httpx.Request("GET", "https://api.example.com/")

    error = classify_http_error(httpx.ConnectError("refused", request=request))
    timeout = classify_http_error(httpx.ReadTimeout("slow", request=request))

    assert isinstance(error, NetworkError)
    assert isinstance(timeout, NetworkError)
    assert error.status_code is None


def test_translate_reraises_typed_error_with_cause() -> None:
    original = _status_error(500, text="upstream exploded")

    with pytest.raises(ServerError) as excinfo:
        with translate_http_errors():
            raise original

    assert excinfo.value.__cause__ is original
    assert excinfo.value.message == "upstream exploded"


def test_translate_maps_malformed_payloads_to_unknown() -> None:
    with pytest.raises(UnknownApiError):
        with translate_http_errors():
            raise ValueError("Expecting value")


def test_translate_leaves_other_exceptions_alone() -> None:
    with pytest.raises(KeyError):
        with translate_http_errors():
            raise KeyError("not a remote failure")
