"""Pytest configuration shared across the suite."""

from __future__ import annotations

import httpx
import pytest
import pytest_asyncio

try:
    from . import _bootstrap  # noqa: F401
except ImportError:  # pragma: no cover - fallback for direct execution
    import _bootstrap  # type: ignore # noqa: F401

from clean_client.clients import InMemoryKeyValueStore
from clean_client.core.config import AppSettings
from clean_client.dependencies import AppContext, build_app_context

from fake_backend import BASE_URL, BackendState, create_backend


class FakeClock:
    """Manually advanced replacement for ``time.time``."""

    def __init__(self, start: float = 1_700_000_000.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def backend() -> BackendState:
    return BackendState()


@pytest.fixture
def transport(backend: BackendState) -> httpx.ASGITransport:
    return httpx.ASGITransport(app=create_backend(backend))


@pytest.fixture
def settings(monkeypatch: pytest.MonkeyPatch) -> AppSettings:
    monkeypatch.setenv("API_BASE_URL", BASE_URL)
    return AppSettings()


@pytest_asyncio.fixture
async def context(settings, transport, clock):
    ctx: AppContext = build_app_context(
        settings,
        store=InMemoryKeyValueStore(),
        transport=transport,
        clock=clock,
    )
    yield ctx
    await ctx.aclose()
