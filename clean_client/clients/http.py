"""
HTTP plumbing shared by the remote data sources.

``OAuth2Auth`` attaches the bearer token to outbound requests and performs a
single refresh-and-retry when the backend reports an expired credential.
``ApiClient`` wraps ``httpx.AsyncClient`` with the flavor base URL, the auth
flow and request logging.
"""

from __future__ import annotations

import json
import logging
from typing import TYPE_CHECKING, Any, Dict, Generator, Optional

import httpx
from pydantic import ValidationError

from clean_client.core.errors import RefreshTokenError
from clean_client.mappers import credential_from_dto
from clean_client.schemas import AuthenticationDto, RefreshTokenRequestDto

if TYPE_CHECKING:  # pragma: no cover - type hints only
    from clean_client.models import Credential
    from clean_client.services.credentials import CredentialManager

logger = logging.getLogger(__name__)

_SENSITIVE_KEYS = frozenset({"password", "accessToken", "refreshToken"})


def join_url(base_url: str, path: str) -> str:
    return f"{base_url.rstrip('/')}/{path.lstrip('/')}"


def _redacted_body(content: bytes) -> str:
    if not content:
        return ""
    try:
        payload = json.loads(content)
    except ValueError:
        return f"<{len(content)} bytes>"
    if isinstance(payload, dict):
        payload = {
            key: "***" if key in _SENSITIVE_KEYS else value
            for key, value in payload.items()
        }
    return json.dumps(payload)


class OAuth2Auth(httpx.Auth):
    """Bearer-token auth with one refresh-and-retry on HTTP 401."""

    requires_response_body = True

    def __init__(self, token_provider: "CredentialManager", *, refresh_url: str) -> None:
        self._tokens = token_provider
        self._refresh_url = refresh_url

    def auth_flow(
        self, request: httpx.Request
    ) -> Generator[httpx.Request, httpx.Response, None]:
        credential = self._tokens.current()
        if credential is None:
            yield request
            return

        self._authorize(request, credential)
        response = yield request
        if response.status_code != httpx.codes.UNAUTHORIZED:
            return

        latest = self._rotated_since(credential)
        if latest is not None:
            logger.debug("Retrying %s with the already refreshed credential", request.url)
            self._authorize(request, latest)
            yield request
            return

        try:
            refreshed = yield from self._refresh(credential)
        except RefreshTokenError as exc:
            # A concurrent refresh may have won with the same refresh token.
            latest = self._rotated_since(credential)
            if latest is not None:
                logger.debug("Refresh lost to a concurrent one; retrying %s", request.url)
                self._authorize(request, latest)
                yield request
                return
            logger.warning("Credential refresh failed; signing out: %s", exc)
            self._tokens.update(None)
            return

        self._tokens.update(refreshed)
        self._authorize(request, refreshed)
        yield request

    def _refresh(
        self, credential: "Credential"
    ) -> Generator[httpx.Request, httpx.Response, "Credential"]:
        if not credential.refresh_token:
            raise RefreshTokenError("No refresh token available.")

        body = RefreshTokenRequestDto(refresh_token=credential.refresh_token)
        logger.info("Access token rejected; requesting a new credential pair")
        response = yield httpx.Request(
            "POST", self._refresh_url, json=body.model_dump(by_alias=True)
        )
        if not response.is_success:
            raise RefreshTokenError(
                f"Refresh endpoint answered {response.status_code}."
            )
        try:
            dto = AuthenticationDto.model_validate(response.json())
        except (ValueError, ValidationError) as exc:
            raise RefreshTokenError("Refresh endpoint returned a malformed payload.") from exc
        return credential_from_dto(dto)

    def _rotated_since(self, credential: "Credential") -> Optional["Credential"]:
        """Return the stored credential when it replaced ``credential``."""
        latest = self._tokens.current()
        if latest is None or latest.access_token == credential.access_token:
            return None
        return latest

    @staticmethod
    def _authorize(request: httpx.Request, credential: "Credential") -> None:
        request.headers["Authorization"] = f"Bearer {credential.access_token}"


def build_logging_hooks(*, log_bodies: bool = False) -> Dict[str, list]:
    """Event hooks that log each request and response, never their tokens."""

    async def log_request(request: httpx.Request) -> None:
        logger.info("--> %s %s", request.method, request.url)
        if log_bodies and logger.isEnabledFor(logging.DEBUG):
            logger.debug("--> body %s", _redacted_body(request.content))

    async def log_response(response: httpx.Response) -> None:
        request = response.request
        logger.info("<-- %s %s %s", response.status_code, request.method, request.url)
        if log_bodies and logger.isEnabledFor(logging.DEBUG):
            await response.aread()
            logger.debug("<-- body %s", _redacted_body(response.content))

    return {"request": [log_request], "response": [log_response]}


class ApiClient:
    """JSON REST client bound to one backend."""

    def __init__(
        self,
        *,
        base_url: str,
        token_provider: "CredentialManager",
        refresh_path: str = "auth/refresh-token",
        timeout: float = 10.0,
        log_bodies: bool = False,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self._base_url = base_url
        self._auth = OAuth2Auth(token_provider, refresh_url=join_url(base_url, refresh_path))
        self._client = httpx.AsyncClient(
            base_url=base_url,
            timeout=timeout,
            auth=self._auth,
            event_hooks=build_logging_hooks(log_bodies=log_bodies),
            transport=transport,
        )

    @property
    def base_url(self) -> str:
        return self._base_url

    async def request(
        self,
        method: str,
        path: str,
        *,
        json: Any = None,
        params: Optional[Dict[str, Any]] = None,
        authenticated: bool = True,
    ) -> Any:
        """Send a request and return the decoded JSON body (``None`` when empty).

        Non-2xx responses raise ``httpx.HTTPStatusError``; transport failures
        raise ``httpx.TransportError``. Callers classify both.
        """
        extra: Dict[str, Any] = {} if authenticated else {"auth": None}
        response = await self._client.request(
            method, path, json=json, params=params, **extra
        )
        response.raise_for_status()
        if not response.content:
            return None
        return response.json()

    async def get(self, path: str, **kwargs: Any) -> Any:
        return await self.request("GET", path, **kwargs)

    async def post(self, path: str, **kwargs: Any) -> Any:
        return await self.request("POST", path, **kwargs)

    async def put(self, path: str, **kwargs: Any) -> Any:
        return await self.request("PUT", path, **kwargs)

    async def delete(self, path: str, **kwargs: Any) -> Any:
        return await self.request("DELETE", path, **kwargs)

    async def aclose(self) -> None:
        await self._client.aclose()

    async def __aenter__(self) -> "ApiClient":
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()


__all__ = ["ApiClient", "OAuth2Auth", "build_logging_hooks", "join_url"]
