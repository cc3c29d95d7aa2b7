"""
Time-based cache for repository records.

Entries live in the key-value store as ``{"stored_at": <epoch>, "value": ...}``
under ``cache:<resource key>``. An entry older than the window is a miss and
is removed on read.
"""

from __future__ import annotations

import json
import logging
import time
from typing import Any, Callable, Optional

from clean_client.clients.local_store import KeyValueStore

logger = logging.getLogger(__name__)

CACHE_PREFIX = "cache:"
DEFAULT_TTL_SECONDS = 300.0


class ResourceCache:
    """Fixed-window expiry cache over a ``KeyValueStore``."""

    def __init__(
        self,
        store: KeyValueStore,
        *,
        ttl_seconds: float = DEFAULT_TTL_SECONDS,
        clock: Callable[[], float] = time.time,
    ) -> None:
        if ttl_seconds < 0:
            raise ValueError("ttl_seconds must not be negative")
        self._store = store
        self._ttl = ttl_seconds
        self._clock = clock

    @property
    def ttl_seconds(self) -> float:
        return self._ttl

    @staticmethod
    def storage_key(key: str) -> str:
        return f"{CACHE_PREFIX}{key}"

    def get(self, key: str) -> Optional[Any]:
        """Return the cached value, or ``None`` on a miss or an expired entry."""
        storage_key = self.storage_key(key)
        raw = self._store.get(storage_key)
        if raw is None:
            logger.debug("Cache miss for %s", key)
            return None
        try:
            entry = json.loads(raw)
            stored_at = float(entry["stored_at"])
            value = entry["value"]
        except (ValueError, KeyError, TypeError):
            logger.warning("Dropping corrupt cache entry %s", key)
            self._store.delete(storage_key)
            return None
        if self._clock() - stored_at >= self._ttl:
            logger.debug("Cache entry %s expired", key)
            self._store.delete(storage_key)
            return None
        logger.debug("Cache hit for %s", key)
        return value

    def put(self, key: str, value: Any) -> None:
        entry = {"stored_at": self._clock(), "value": value}
        self._store.set(self.storage_key(key), json.dumps(entry))

    def stored_at(self, key: str) -> Optional[float]:
        """Timestamp of the entry regardless of expiry; ``None`` when absent."""
        raw = self._store.get(self.storage_key(key))
        if raw is None:
            return None
        try:
            return float(json.loads(raw)["stored_at"])
        except (ValueError, KeyError, TypeError):
            return None

    def invalidate(self, key: str) -> None:
        self._store.delete(self.storage_key(key))

    def clear(self) -> None:
        for storage_key in self._store.keys(CACHE_PREFIX):
            self._store.delete(storage_key)


__all__ = ["CACHE_PREFIX", "DEFAULT_TTL_SECONDS", "ResourceCache"]
