"""Service layer exports."""

from .cache import ResourceCache
from .credentials import CredentialManager, CredentialStore
from .notifier import StateNotifier, Subscription
from .session import SessionManager
from .token_cipher import CredentialDecryptionError, TokenCipherService

__all__ = [
    "CredentialDecryptionError",
    "CredentialManager",
    "CredentialStore",
    "ResourceCache",
    "SessionManager",
    "StateNotifier",
    "Subscription",
    "TokenCipherService",
]
