"""
Persistence and in-memory ownership of the session credential.
"""

from __future__ import annotations

import logging
from typing import Callable, Optional

from pydantic import ValidationError

from clean_client.clients.local_store import KeyValueStore
from clean_client.mappers import credential_from_dto, credential_to_dto
from clean_client.models import AuthStatus, Credential
from clean_client.schemas import AuthenticationDto
from clean_client.services.notifier import StateNotifier
from clean_client.services.token_cipher import CredentialDecryptionError, TokenCipherService

logger = logging.getLogger(__name__)

DEFAULT_AUTH_KEY = "key_auth"


class CredentialStore:
    """Keeps the credential pair as one serialized blob under a fixed key.

    Presence of the key means the user is authorized. When a cipher is
    supplied the blob is encrypted at rest.
    """

    def __init__(
        self,
        store: KeyValueStore,
        *,
        key: str = DEFAULT_AUTH_KEY,
        cipher: Optional[TokenCipherService] = None,
    ) -> None:
        self._store = store
        self._key = key
        self._cipher = cipher

    @property
    def key(self) -> str:
        return self._key

    def is_authorized(self) -> bool:
        return self._store.contains(self._key)

    def load(self) -> Optional[Credential]:
        raw = self._store.get(self._key)
        if raw is None:
            return None
        try:
            if self._cipher is not None:
                raw = self._cipher.decrypt(raw)
            dto = AuthenticationDto.model_validate_json(raw)
        except (CredentialDecryptionError, ValidationError) as exc:
            logger.warning("Discarding unreadable stored credential: %s", exc)
            self._store.delete(self._key)
            return None
        return credential_from_dto(dto)

    def save(self, credential: Optional[Credential]) -> None:
        if credential is None:
            self.clear()
            return
        blob = credential_to_dto(credential).model_dump_json(by_alias=True)
        if self._cipher is not None:
            blob = self._cipher.encrypt(blob)
        self._store.set(self._key, blob)

    def clear(self) -> None:
        self._store.delete(self._key)


class CredentialManager:
    """Token provider consulted by the HTTP layer.

    Seeds itself from the credential store, writes every change back to it and
    broadcasts ``authorized``/``unauthorized`` as the credential appears or
    disappears.
    """

    def __init__(self, credential_store: CredentialStore) -> None:
        self._credential_store = credential_store
        self._current = credential_store.load()
        self._status: StateNotifier[AuthStatus] = StateNotifier(
            AuthStatus.AUTHORIZED if self._current else AuthStatus.UNAUTHORIZED
        )

    def current(self) -> Optional[Credential]:
        return self._current

    @property
    def status(self) -> StateNotifier[AuthStatus]:
        return self._status

    def update(self, credential: Optional[Credential]) -> None:
        """Replace the credential, persist it and notify observers."""
        self._current = credential
        self._credential_store.save(credential)
        if credential is None:
            logger.info("Session credential cleared")
            self._status.emit(AuthStatus.UNAUTHORIZED)
        else:
            logger.info("Session credential stored")
            self._status.emit(AuthStatus.AUTHORIZED)

    def subscribe(self, callback: Callable[[AuthStatus], None]) -> Callable[[], None]:
        return self._status.subscribe(callback)


__all__ = ["CredentialManager", "CredentialStore", "DEFAULT_AUTH_KEY"]
