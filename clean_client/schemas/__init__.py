"""Public schema exports."""

from .auth import (
    AuthenticationDto,
    LoginRequestDto,
    ProfileDto,
    RefreshTokenRequestDto,
)
from .envelope import BaseDataDto, BaseDataListDto
from .user import UserDto, UserWriteDto

__all__ = [
    "AuthenticationDto",
    "BaseDataDto",
    "BaseDataListDto",
    "LoginRequestDto",
    "ProfileDto",
    "RefreshTokenRequestDto",
    "UserDto",
    "UserWriteDto",
]
