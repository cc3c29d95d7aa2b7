"""Symmetric encryption for the credential blob kept in local storage."""

from __future__ import annotations

import base64
import hashlib

from cryptography.fernet import Fernet, InvalidToken


class CredentialDecryptionError(ValueError):
    """Raised when a stored blob cannot be decrypted with the configured secret."""


class TokenCipherService:
    """Encrypt and decrypt serialized credentials using a Fernet key derived from a secret."""

    def __init__(self, *, secret: str) -> None:
        if not secret:
            raise ValueError("Token encryption secret must be provided.")
        key = base64.urlsafe_b64encode(hashlib.sha256(secret.encode("utf-8")).digest())
        self._fernet = Fernet(key)

    def encrypt(self, plaintext: str) -> str:
        return self._fernet.encrypt(plaintext.encode("utf-8")).decode("utf-8")

    def decrypt(self, ciphertext: str) -> str:
        try:
            plaintext = self._fernet.decrypt(ciphertext.encode("utf-8"))
        except InvalidToken as exc:
            raise CredentialDecryptionError(
                "Stored credential could not be decrypted; the secret may have changed."
            ) from exc
        return plaintext.decode("utf-8")


__all__ = ["CredentialDecryptionError", "TokenCipherService"]
