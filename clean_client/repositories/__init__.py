"""Repository layer exports."""

from .auth import AuthRepository
from .users import CachedUserRepository, UserRepository

__all__ = ["AuthRepository", "CachedUserRepository", "UserRepository"]
