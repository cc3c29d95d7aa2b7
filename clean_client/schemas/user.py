"""Transfer records for the user resource."""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class UserDto(BaseModel):
    """User record as served by ``/users``."""

    model_config = ConfigDict(populate_by_name=True)

    id: str
    user_name: str = Field(..., alias="userName")
    display_name: Optional[str] = Field(None, alias="displayName")
    email: Optional[str] = None
    avatar_url: Optional[str] = Field(
        None,
        alias="avatarUrl",
        description="Server-managed; never sent back on writes.",
    )


class UserWriteDto(BaseModel):
    """Body for creating or updating a user."""

    model_config = ConfigDict(populate_by_name=True)

    user_name: str = Field(..., alias="userName")
    display_name: Optional[str] = Field(None, alias="displayName")
    email: Optional[str] = None

    def to_payload(self) -> dict:
        return self.model_dump(by_alias=True)


__all__ = ["UserDto", "UserWriteDto"]
