"""Remote data source for the authentication endpoints."""

from __future__ import annotations

from typing import Any

from clean_client.clients.http import ApiClient
from clean_client.schemas import AuthenticationDto, LoginRequestDto, ProfileDto


class AuthApiService:
    """Calls login, logout and profile on the configured backend."""

    def __init__(
        self,
        api_client: ApiClient,
        *,
        login_path: str = "auth/login",
        logout_path: str = "auth/logout",
        profile_path: str = "auth/profile",
    ) -> None:
        self._api = api_client
        self._login_path = login_path
        self._logout_path = logout_path
        self._profile_path = profile_path

    async def login(self, username: str, password: str) -> AuthenticationDto:
        body = LoginRequestDto(user_name=username, password=password)
        payload = await self._api.post(
            self._login_path,
            json=body.model_dump(by_alias=True),
            authenticated=False,
        )
        return AuthenticationDto.model_validate(_unwrap(payload))

    async def logout(self) -> None:
        await self._api.post(self._logout_path)

    async def profile(self) -> ProfileDto:
        payload = await self._api.get(self._profile_path)
        return ProfileDto.model_validate(_unwrap(payload))


def _unwrap(payload: Any) -> Any:
    """Accept both bare objects and ``{"data": {...}}`` envelopes."""
    if isinstance(payload, dict) and isinstance(payload.get("data"), dict):
        return payload["data"]
    return payload


__all__ = ["AuthApiService"]
