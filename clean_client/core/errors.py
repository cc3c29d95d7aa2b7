"""Typed error taxonomy shared by the remote data sources and repositories."""

from __future__ import annotations

from contextlib import contextmanager
from enum import Enum
from typing import Iterator, Optional

import httpx


class ErrorCode(str, Enum):
    """Categories surfaced to the presentation layer."""

    NETWORK = "network"
    SERVER = "server"
    UNAUTHORIZED = "unauthorized"
    BAD_REQUEST = "bad_request"
    NOT_FOUND = "not_found"
    UNKNOWN = "unknown"


class ApiError(Exception):
    """Base class for every classified remote-call failure."""

    code: ErrorCode = ErrorCode.UNKNOWN

    def __init__(self, message: str, *, status_code: Optional[int] = None) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = status_code

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.message!r}, status_code={self.status_code})"


class NetworkError(ApiError):
    """The request never produced a response (connectivity, DNS, timeout)."""

    code = ErrorCode.NETWORK


class ServerError(ApiError):
    """The backend answered with a 5xx status."""

    code = ErrorCode.SERVER


class UnauthorizedError(ApiError):
    """The credential is missing, expired or was rejected."""

    code = ErrorCode.UNAUTHORIZED


class BadRequestError(ApiError):
    """The backend rejected the payload as invalid."""

    code = ErrorCode.BAD_REQUEST


class NotFoundError(ApiError):
    """The requested resource does not exist."""

    code = ErrorCode.NOT_FOUND


class UnknownApiError(ApiError):
    """Anything that does not fit the other categories."""

    code = ErrorCode.UNKNOWN


class RefreshTokenError(Exception):
    """Raised when the refresh endpoint cannot issue a new credential pair."""


_BAD_REQUEST_STATUSES = frozenset({400, 409, 422})
_UNAUTHORIZED_STATUSES = frozenset({401, 403})


def _response_message(response: httpx.Response) -> str:
    try:
        payload = response.json()
    except ValueError:
        payload = None
    if isinstance(payload, dict):
        for key in ("message", "detail", "error"):
            value = payload.get(key)
            if isinstance(value, str) and value:
                return value
    return response.text or response.reason_phrase or f"HTTP {response.status_code}"


def error_for_response(response: httpx.Response) -> ApiError:
    """Map a non-successful response onto the error taxonomy."""
    status_code = response.status_code
    message = _response_message(response)
    if status_code in _UNAUTHORIZED_STATUSES:
        return UnauthorizedError(message, status_code=status_code)
    if status_code == 404:
        return NotFoundError(message, status_code=status_code)
    if status_code in _BAD_REQUEST_STATUSES:
        return BadRequestError(message, status_code=status_code)
    if status_code >= 500:
        return ServerError(message, status_code=status_code)
    return UnknownApiError(message, status_code=status_code)


def classify_http_error(exc: Exception) -> ApiError:
    """Translate an httpx or decoding failure into a typed ``ApiError``."""
    if isinstance(exc, ApiError):
        return exc
    if isinstance(exc, httpx.HTTPStatusError):
        return error_for_response(exc.response)
    if isinstance(exc, httpx.TransportError):
        return NetworkError(str(exc) or type(exc).__name__)
    if isinstance(exc, ValueError):
        return UnknownApiError(f"Malformed response payload: {exc}")
    return UnknownApiError(str(exc) or type(exc).__name__)


@contextmanager
def translate_http_errors() -> Iterator[None]:
    """Re-raise remote-call failures inside the block as typed errors."""
    try:
        yield
    except ApiError:
        raise
    except (httpx.HTTPError, ValueError) as exc:
        raise classify_http_error(exc) from exc


__all__ = [
    "ApiError",
    "BadRequestError",
    "ErrorCode",
    "NetworkError",
    "NotFoundError",
    "RefreshTokenError",
    "ServerError",
    "UnauthorizedError",
    "UnknownApiError",
    "classify_http_error",
    "error_for_response",
    "translate_http_errors",
]
