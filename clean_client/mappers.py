"""
Mapping between transfer records and domain entities.

Every function is pure: no I/O and no shared state.
"""

from __future__ import annotations

from clean_client.models import Credential, Profile, User
from clean_client.schemas import AuthenticationDto, ProfileDto, UserDto, UserWriteDto


def credential_from_dto(dto: AuthenticationDto) -> Credential:
    return Credential(access_token=dto.access_token, refresh_token=dto.refresh_token)


def credential_to_dto(credential: Credential) -> AuthenticationDto:
    return AuthenticationDto(
        access_token=credential.access_token,
        refresh_token=credential.refresh_token,
    )


def profile_from_dto(dto: ProfileDto) -> Profile:
    return Profile(username=dto.user_name)


def user_from_dto(dto: UserDto) -> User:
    return User(
        id=dto.id,
        username=dto.user_name,
        display_name=dto.display_name,
        email=dto.email,
        avatar_url=dto.avatar_url,
    )


def user_to_dto(user: User) -> UserDto:
    """Map back to the read record, e.g. for writing through to the cache."""
    return UserDto(
        id=user.id,
        user_name=user.username,
        display_name=user.display_name,
        email=user.email,
        avatar_url=user.avatar_url,
    )


def user_to_write_dto(user: User) -> UserWriteDto:
    """Build the write body; ``id`` travels in the URL and ``avatar_url`` is server-owned."""
    return UserWriteDto(
        user_name=user.username,
        display_name=user.display_name,
        email=user.email,
    )


__all__ = [
    "credential_from_dto",
    "credential_to_dto",
    "profile_from_dto",
    "user_from_dto",
    "user_to_dto",
    "user_to_write_dto",
]
