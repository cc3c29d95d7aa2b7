from __future__ import annotations

import pytest
from pydantic import ValidationError

from clean_client.core.config import AppSettings, Flavor


@pytest.mark.parametrize(
    ("flavor", "expected_url"),
    [
        ("production", "https://production.endpoint.com"),
        ("staging", "https://staging.endpoint.com"),
        ("development", "https://developement.endpoint.com"),
        ("  Staging ", "https://staging.endpoint.com"),
    ],
)
def test_base_url_follows_flavor(
    monkeypatch: pytest.MonkeyPatch, flavor: str, expected_url: str
) -> None:
    monkeypatch.setenv("APP_FLAVOR", flavor)

    settings = AppSettings()

    assert settings.base_url == expected_url


def test_defaults_to_development() -> None:
    settings = AppSettings()

    assert settings.flavor is Flavor.DEVELOPMENT
    assert settings.storage.cache_ttl_seconds == 300
    assert settings.storage.auth_key == "key_auth"
    assert settings.api.refresh_path == "auth/refresh-token"
    assert settings.security.token_encryption_secret is None


def test_explicit_base_url_overrides_flavor(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("APP_FLAVOR", "production")
    monkeypatch.setenv("API_BASE_URL", "http://localhost:8080/api")

    assert AppSettings().base_url == "http://localhost:8080/api"


def test_unknown_flavor_is_rejected(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("APP_FLAVOR", "qa")

    with pytest.raises(ValidationError):
        AppSettings()


def test_negative_cache_ttl_is_rejected(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("CACHE_TTL_SECONDS", "-1")

    with pytest.raises(ValidationError):
        AppSettings()


def test_from_env_file_reads_every_group(tmp_path) -> None:
    env_file = tmp_path / ".env.staging"
    env_file.write_text(
        "APP_FLAVOR=staging\n"
        "API_BASE_URL_STAGING=https://staging.example.com\n"
        "CACHE_TTL_SECONDS=60\n"
        "TOKEN_ENCRYPTION_SECRET=s3cret\n",
        encoding="utf-8",
    )

    settings = AppSettings.from_env_file(env_file)

    assert settings.flavor is Flavor.STAGING
    assert settings.base_url == "https://staging.example.com"
    assert settings.storage.cache_ttl_seconds == 60
    assert settings.security.token_encryption_secret == "s3cret"
