"""Expose constructed client wrappers."""

from .auth_api import AuthApiService
from .http import ApiClient, OAuth2Auth
from .local_store import InMemoryKeyValueStore, KeyValueStore, SQLiteKeyValueStore
from .user_api import UserApiService

__all__ = [
    "ApiClient",
    "AuthApiService",
    "InMemoryKeyValueStore",
    "KeyValueStore",
    "OAuth2Auth",
    "SQLiteKeyValueStore",
    "UserApiService",
]
