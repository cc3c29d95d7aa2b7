"""
User repository: the contract application code depends on, and the
implementation backed by the remote API and the local cache.
"""

from __future__ import annotations

import logging
from typing import List, Protocol

from pydantic import ValidationError

from clean_client.clients.user_api import UserApiService
from clean_client.core.errors import translate_http_errors
from clean_client.mappers import user_from_dto, user_to_write_dto
from clean_client.models import User
from clean_client.schemas import UserDto
from clean_client.services.cache import ResourceCache

logger = logging.getLogger(__name__)

USER_LIST_KEY = "users/list"


def user_cache_key(user_id: str) -> str:
    return f"users/{user_id}"


class UserRepository(Protocol):
    """Technology-agnostic read/write contract for users."""

    async def get_user(self, user_id: str) -> User:
        ...

    async def list_users(self) -> List[User]:
        ...

    async def create_user(self, user: User) -> User:
        ...

    async def update_user(self, user: User) -> User:
        ...

    async def delete_user(self, user_id: str) -> None:
        ...


class CachedUserRepository:
    """Read-through, write-invalidate repository.

    Reads are served from the cache while the entry is inside the expiry
    window; writes go to the backend first and only touch the cache once the
    backend accepted them.
    """

    def __init__(self, remote: UserApiService, cache: ResourceCache) -> None:
        self._remote = remote
        self._cache = cache

    async def get_user(self, user_id: str) -> User:
        key = user_cache_key(user_id)
        cached = self._cache.get(key)
        if isinstance(cached, dict):
            try:
                return user_from_dto(UserDto.model_validate(cached))
            except ValidationError:
                logger.warning("Cached user %s is unreadable; refetching", user_id)
                self._cache.invalidate(key)

        with translate_http_errors():
            dto = await self._remote.get_user(user_id)
        self._cache.put(key, dto.model_dump(by_alias=True))
        return user_from_dto(dto)

    async def list_users(self) -> List[User]:
        cached = self._cache.get(USER_LIST_KEY)
        if isinstance(cached, list):
            try:
                return [user_from_dto(UserDto.model_validate(item)) for item in cached]
            except ValidationError:
                logger.warning("Cached user list is unreadable; refetching")
                self._cache.invalidate(USER_LIST_KEY)

        with translate_http_errors():
            dtos = await self._remote.list_users()
        self._cache.put(USER_LIST_KEY, [dto.model_dump(by_alias=True) for dto in dtos])
        return [user_from_dto(dto) for dto in dtos]

    async def create_user(self, user: User) -> User:
        with translate_http_errors():
            dto = await self._remote.create_user(user_to_write_dto(user))
        self._store(dto)
        return user_from_dto(dto)

    async def update_user(self, user: User) -> User:
        with translate_http_errors():
            dto = await self._remote.update_user(user.id, user_to_write_dto(user))
        self._store(dto)
        return user_from_dto(dto)

    async def delete_user(self, user_id: str) -> None:
        with translate_http_errors():
            await self._remote.delete_user(user_id)
        self._cache.invalidate(user_cache_key(user_id))
        self._cache.invalidate(USER_LIST_KEY)

    def _store(self, dto: UserDto) -> None:
        self._cache.put(user_cache_key(dto.id), dto.model_dump(by_alias=True))
        self._cache.invalidate(USER_LIST_KEY)


__all__ = [
    "CachedUserRepository",
    "USER_LIST_KEY",
    "UserRepository",
    "user_cache_key",
]
