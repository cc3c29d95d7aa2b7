"""Remote data source for the ``users`` resource."""

from __future__ import annotations

from typing import List
from urllib.parse import quote

from clean_client.clients.http import ApiClient
from clean_client.schemas import BaseDataDto, BaseDataListDto, UserDto, UserWriteDto


class EmptyEnvelopeError(ValueError):
    """Raised when the backend answers with ``{"data": null}`` where a record is required."""


class UserApiService:
    """CRUD calls against ``users`` and ``users/{id}``."""

    def __init__(self, api_client: ApiClient, *, path: str = "users") -> None:
        self._api = api_client
        self._path = path.strip("/")

    def _item_path(self, user_id: str) -> str:
        return f"{self._path}/{quote(user_id, safe='')}"

    async def get_user(self, user_id: str) -> UserDto:
        payload = await self._api.get(self._item_path(user_id))
        return _require(BaseDataDto[UserDto].model_validate(payload))

    async def list_users(self) -> List[UserDto]:
        payload = await self._api.get(self._path)
        return BaseDataListDto[UserDto].model_validate(payload).data or []

    async def create_user(self, body: UserWriteDto) -> UserDto:
        payload = await self._api.post(self._path, json=body.to_payload())
        return _require(BaseDataDto[UserDto].model_validate(payload))

    async def update_user(self, user_id: str, body: UserWriteDto) -> UserDto:
        payload = await self._api.put(self._item_path(user_id), json=body.to_payload())
        return _require(BaseDataDto[UserDto].model_validate(payload))

    async def delete_user(self, user_id: str) -> None:
        await self._api.delete(self._item_path(user_id))


def _require(envelope: BaseDataDto[UserDto]) -> UserDto:
    if envelope.data is None:
        raise EmptyEnvelopeError("Response envelope carried no user record.")
    return envelope.data


__all__ = ["EmptyEnvelopeError", "UserApiService"]
