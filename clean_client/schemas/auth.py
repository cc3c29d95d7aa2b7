"""Transfer records exchanged with the authentication endpoints."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class AuthenticationDto(BaseModel):
    """Credential pair as returned by the login and refresh endpoints."""

    model_config = ConfigDict(populate_by_name=True)

    access_token: str = Field(..., alias="accessToken", min_length=1)
    refresh_token: str = Field(..., alias="refreshToken", min_length=1)


class LoginRequestDto(BaseModel):
    """Body posted to the login endpoint."""

    model_config = ConfigDict(populate_by_name=True)

    user_name: str = Field(..., alias="userName")
    password: str


class RefreshTokenRequestDto(BaseModel):
    """Body posted to the refresh endpoint."""

    model_config = ConfigDict(populate_by_name=True)

    refresh_token: str = Field(..., alias="refreshToken")


class ProfileDto(BaseModel):
    """Profile of the signed-in user."""

    model_config = ConfigDict(populate_by_name=True)

    user_name: str = Field(..., alias="userName")


__all__ = [
    "AuthenticationDto",
    "LoginRequestDto",
    "ProfileDto",
    "RefreshTokenRequestDto",
]
