"""Expose the application context builders."""

from .context import AppContext, build_app_context, build_token_cipher

__all__ = ["AppContext", "build_app_context", "build_token_cipher"]
