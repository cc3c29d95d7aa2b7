"""Repository over the authentication data source."""

from __future__ import annotations

from clean_client.clients.auth_api import AuthApiService
from clean_client.core.errors import translate_http_errors
from clean_client.mappers import credential_from_dto, profile_from_dto
from clean_client.models import Credential, Profile


class AuthRepository:
    """Exposes login, logout and profile as entities with typed errors."""

    def __init__(self, auth_api: AuthApiService) -> None:
        self._api = auth_api

    async def login(self, username: str, password: str) -> Credential:
        with translate_http_errors():
            dto = await self._api.login(username, password)
        return credential_from_dto(dto)

    async def logout(self) -> None:
        with translate_http_errors():
            await self._api.logout()

    async def profile(self) -> Profile:
        with translate_http_errors():
            dto = await self._api.profile()
        return profile_from_dto(dto)


__all__ = ["AuthRepository"]
