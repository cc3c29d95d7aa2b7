"""Domain entities exposed to application code."""

from .session import (
    AuthState,
    AuthStatus,
    Authorized,
    Credential,
    Loading,
    Profile,
    Unauthorized,
)
from .user import User

__all__ = [
    "AuthState",
    "AuthStatus",
    "Authorized",
    "Credential",
    "Loading",
    "Profile",
    "Unauthorized",
    "User",
]
