from __future__ import annotations

import pytest

from clean_client.clients import InMemoryKeyValueStore, SQLiteKeyValueStore
from clean_client.core.config import AppSettings
from clean_client.dependencies import build_app_context
from clean_client.main import create_application
from clean_client.models import AuthStatus, Credential


@pytest.mark.asyncio
async def test_session_survives_restart_with_encrypted_storage(
    monkeypatch: pytest.MonkeyPatch, tmp_path, transport, backend
) -> None:
    monkeypatch.setenv("API_BASE_URL", "http://testserver")
    monkeypatch.setenv("LOCAL_STORE_PATH", str(tmp_path / "client.db"))
    monkeypatch.setenv("TOKEN_ENCRYPTION_SECRET", "s3cret")
    backend.scripted_pairs.append(("t1", "r1"))

    async with build_app_context(AppSettings(), transport=transport) as first:
        await first.session.login("bob", "pw")
        assert isinstance(first.store, SQLiteKeyValueStore)
        assert "t1" not in first.store.get("key_auth")

    async with build_app_context(AppSettings(), transport=transport) as second:
        assert second.credentials.status.value is AuthStatus.AUTHORIZED
        assert second.session.current_credential() == Credential(
            access_token="t1", refresh_token="r1"
        )
        state = await second.session.initialize()
        assert state.status is AuthStatus.AUTHORIZED


@pytest.mark.asyncio
async def test_create_application_uses_given_settings(settings, transport) -> None:
    context = create_application(
        settings, store=InMemoryKeyValueStore(), transport=transport
    )
    try:
        assert context.api_client.base_url == "http://testserver"
        assert context.cache.ttl_seconds == settings.storage.cache_ttl_seconds
    finally:
        await context.aclose()
