"""
storage/crypto.py

Fernet-based encryption for persisted collections.

Key lifecycle
-------------
The Fernet key comes from APP_DATA_KEY (see hospital.config).  It must be a
URL-safe base64-encoded 32-byte key as produced by ``Fernet.generate_key()``.
When no key is configured the console stores collections in the clear and
logs a warning at startup.

Public API
----------
build_fernet(raw_key: str) -> Fernet
EncryptedKeyValueStore(inner, fernet)
"""

import logging
from typing import Iterator, Optional

from cryptography.fernet import Fernet, InvalidToken

from storage.kv import KeyValueStore

logger = logging.getLogger(__name__)


class DecryptionError(ValueError):
    """A stored value could not be decrypted with the configured key."""


def build_fernet(raw_key: str) -> Fernet:
    """
    Return a Fernet instance for *raw_key*.

    Raises:
        ValueError: If *raw_key* is not a valid Fernet key.
    """
    key = raw_key.encode() if isinstance(raw_key, str) else raw_key
    return Fernet(key)


def encrypt_text(fernet: Fernet, text: str) -> str:
    """Encrypt *text* and return the Fernet token as a UTF-8 string."""
    return fernet.encrypt(text.encode("utf-8")).decode("utf-8")


def decrypt_text(fernet: Fernet, token: str) -> str:
    """
    Decrypt a token produced by :func:`encrypt_text`.

    Raises:
        DecryptionError: If *token* is invalid or was encrypted with a
            different key.
    """
    try:
        plaintext: bytes = fernet.decrypt(token.encode("utf-8"))
    except InvalidToken as exc:
        logger.error("Fernet decryption failed - wrong key or corrupted token.")
        raise DecryptionError("invalid Fernet token") from exc
    return plaintext.decode("utf-8")


class EncryptedKeyValueStore(KeyValueStore):
    """Wraps another backend, encrypting every value at rest."""

    def __init__(self, inner: KeyValueStore, fernet: Fernet):
        self.inner = inner
        self._fernet = fernet

    def get(self, key: str) -> Optional[str]:
        token = self.inner.get(key)
        if token is None:
            return None
        return decrypt_text(self._fernet, token)

    def set(self, key: str, value: str) -> None:
        self.inner.set(key, encrypt_text(self._fernet, value))

    def keys(self) -> Iterator[str]:
        return self.inner.keys()

    def close(self) -> None:
        self.inner.close()
