"""
Entrypoint for embedding the client core in an application shell.
"""

from __future__ import annotations

from typing import Optional

from clean_client.core.config import AppSettings, get_settings
from clean_client.core.logging import configure_logging
from clean_client.dependencies import AppContext, build_app_context


def create_application(settings: Optional[AppSettings] = None, **overrides) -> AppContext:
    """Factory for the client context; ``overrides`` go to ``build_app_context``."""
    settings = settings or get_settings()
    configure_logging(settings.log_level)
    return build_app_context(settings, **overrides)


__all__ = ["create_application"]
