"""
Session lifecycle: sign-in, sign-out and the state the presentation layer
navigates on.
"""

from __future__ import annotations

import logging
from typing import Callable, Optional

from clean_client.core.errors import ApiError, UnauthorizedError
from clean_client.models import (
    AuthState,
    AuthStatus,
    Authorized,
    Credential,
    Loading,
    Profile,
    Unauthorized,
)
from clean_client.repositories.auth import AuthRepository
from clean_client.services.cache import ResourceCache
from clean_client.services.credentials import CredentialManager
from clean_client.services.notifier import StateNotifier, Subscription

logger = logging.getLogger(__name__)


class SessionManager:
    """Coordinates the auth repository with the stored credential.

    ``state`` moves between ``Unauthorized``, ``Loading`` and
    ``Authorized(profile)``. A credential revoked underneath the session (for
    example a failed token refresh) moves it to ``Unauthorized``.
    """

    def __init__(
        self,
        auth_repository: AuthRepository,
        credential_manager: CredentialManager,
        *,
        cache: Optional[ResourceCache] = None,
    ) -> None:
        self._auth = auth_repository
        self._credentials = credential_manager
        self._cache = cache
        self._states: StateNotifier[AuthState] = StateNotifier(Unauthorized())
        credential_manager.subscribe(self._on_credential_status)

    @property
    def state(self) -> AuthState:
        return self._states.value

    @property
    def status(self) -> AuthStatus:
        return self._states.value.status

    @property
    def states(self) -> StateNotifier[AuthState]:
        return self._states

    def subscribe(self, callback: Callable[[AuthState], None]) -> Callable[[], None]:
        return self._states.subscribe(callback)

    def listen(self) -> Subscription[AuthState]:
        return self._states.listen()

    def current_credential(self) -> Optional[Credential]:
        return self._credentials.current()

    async def initialize(self) -> AuthState:
        """Restore the session from storage, as done once at start-up.

        Errors other than a rejected credential put the state back where it
        was and keep the stored credential, so the call can be retried.
        """
        if self._credentials.current() is None:
            self._states.emit(Unauthorized())
            return self.state

        previous_state = self.state
        self._states.emit(Loading())
        try:
            profile = await self._auth.profile()
        except UnauthorizedError:
            logger.info("Stored credential rejected during start-up")
            self._credentials.update(None)
            self._states.emit(Unauthorized())
            return self.state
        except ApiError:
            self._states.emit(previous_state)
            raise
        self._states.emit(Authorized(profile=profile))
        return self.state

    async def login(self, username: str, password: str) -> Profile:
        """Authenticate, store the credential pair and load the profile.

        Any failure re-raises the typed error with the previous credential and
        state restored.
        """
        previous_state = self.state
        previous_credential = self._credentials.current()
        self._states.emit(Loading())

        try:
            credential = await self._auth.login(username, password)
        except ApiError:
            self._states.emit(previous_state)
            raise

        self._credentials.update(credential)
        try:
            profile = await self._auth.profile()
        except ApiError:
            logger.warning("Profile fetch after login failed; rolling back session")
            self._credentials.update(previous_credential)
            self._states.emit(previous_state)
            raise

        logger.info("Signed in as %s", profile.username)
        self._states.emit(Authorized(profile=profile))
        return profile

    async def logout(self) -> None:
        """Sign out locally; the remote call is best-effort."""
        try:
            await self._auth.logout()
        except ApiError as exc:
            logger.warning("Remote logout failed, continuing locally: %s", exc)

        self._credentials.update(None)
        if self._cache is not None:
            self._cache.clear()
        self._states.emit(Unauthorized())

    def _on_credential_status(self, status: AuthStatus) -> None:
        if status is AuthStatus.UNAUTHORIZED and not isinstance(self.state, Loading):
            self._states.emit(Unauthorized())


__all__ = ["SessionManager"]
