"""
Domain models for the authenticated session.
"""

from __future__ import annotations

from enum import Enum
from typing import Literal, Union

from pydantic import BaseModel, ConfigDict, Field


class Credential(BaseModel):
    """Access/refresh token pair representing an authenticated session."""

    model_config = ConfigDict(frozen=True)

    # Tokens stay out of logs and tracebacks.
    access_token: str = Field(repr=False)
    refresh_token: str = Field(repr=False)


class Profile(BaseModel):
    """Display identity of the signed-in user."""

    model_config = ConfigDict(frozen=True)

    username: str


class AuthStatus(str, Enum):
    """Navigation signal consumed by the presentation layer."""

    AUTHORIZED = "authorized"
    UNAUTHORIZED = "unauthorized"
    LOADING = "loading"


class Authorized(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: Literal["authorized"] = "authorized"
    profile: Profile

    @property
    def status(self) -> AuthStatus:
        return AuthStatus.AUTHORIZED


class Unauthorized(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: Literal["unauthorized"] = "unauthorized"

    @property
    def status(self) -> AuthStatus:
        return AuthStatus.UNAUTHORIZED


class Loading(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: Literal["loading"] = "loading"

    @property
    def status(self) -> AuthStatus:
        return AuthStatus.LOADING


AuthState = Union[Authorized, Unauthorized, Loading]


__all__ = [
    "AuthState",
    "AuthStatus",
    "Authorized",
    "Credential",
    "Loading",
    "Profile",
    "Unauthorized",
]
