"""
Explicit wiring of the client's collaborators.

Everything is built once by ``build_app_context`` and handed down through
constructors; nothing is looked up from a global registry.
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from typing import Callable, Optional

import httpx

from clean_client.clients import (
    ApiClient,
    AuthApiService,
    KeyValueStore,
    SQLiteKeyValueStore,
    UserApiService,
)
from clean_client.core.config import AppSettings
from clean_client.repositories import AuthRepository, CachedUserRepository
from clean_client.services import (
    CredentialManager,
    CredentialStore,
    ResourceCache,
    SessionManager,
    TokenCipherService,
)

logger = logging.getLogger(__name__)


@dataclass
class AppContext:
    """Application-wide collaborators, built once per process."""

    settings: AppSettings
    store: KeyValueStore
    credential_store: CredentialStore
    credentials: CredentialManager
    api_client: ApiClient
    auth_api: AuthApiService
    user_api: UserApiService
    cache: ResourceCache
    auth_repository: AuthRepository
    users: CachedUserRepository
    session: SessionManager

    async def aclose(self) -> None:
        await self.api_client.aclose()

    async def __aenter__(self) -> "AppContext":
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()


def build_token_cipher(settings: AppSettings) -> Optional[TokenCipherService]:
    """Return a cipher when an encryption secret is configured."""
    secret = settings.security.token_encryption_secret
    if not secret:
        return None
    return TokenCipherService(secret=secret)


def build_app_context(
    settings: AppSettings,
    *,
    store: Optional[KeyValueStore] = None,
    transport: Optional[httpx.AsyncBaseTransport] = None,
    clock: Callable[[], float] = time.time,
) -> AppContext:
    """Construct the full object graph for ``settings``.

    ``store`` and ``transport`` replace the SQLite store and the network
    transport, which is how tests run the graph in-process.
    """
    store = store if store is not None else SQLiteKeyValueStore(settings.storage.db_path)
    credential_store = CredentialStore(
        store,
        key=settings.storage.auth_key,
        cipher=build_token_cipher(settings),
    )
    credentials = CredentialManager(credential_store)

    api = settings.api
    api_client = ApiClient(
        base_url=settings.base_url,
        token_provider=credentials,
        refresh_path=api.refresh_path,
        timeout=api.timeout_seconds,
        log_bodies=api.log_bodies,
        transport=transport,
    )
    auth_api = AuthApiService(
        api_client,
        login_path=api.login_path,
        logout_path=api.logout_path,
        profile_path=api.profile_path,
    )
    user_api = UserApiService(api_client)

    cache = ResourceCache(
        store, ttl_seconds=settings.storage.cache_ttl_seconds, clock=clock
    )
    auth_repository = AuthRepository(auth_api)
    users = CachedUserRepository(user_api, cache)
    session = SessionManager(auth_repository, credentials, cache=cache)

    logger.info(
        "Client context ready (flavor=%s, base_url=%s)",
        settings.flavor.value,
        settings.base_url,
    )
    return AppContext(
        settings=settings,
        store=store,
        credential_store=credential_store,
        credentials=credentials,
        api_client=api_client,
        auth_api=auth_api,
        user_api=user_api,
        cache=cache,
        auth_repository=auth_repository,
        users=users,
        session=session,
    )


__all__ = ["AppContext", "build_app_context", "build_token_cipher"]
