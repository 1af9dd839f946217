"""In-memory token cache shared by all acquisitions of a test process.

Entries are keyed by :class:`~acceptance_helpers.oidc.models.CacheKey` and are
never evicted on their own: an expired record stays in place until the
service refreshes it, or until a caller invalidates it explicitly.
"""

from __future__ import annotations

import threading

from acceptance_helpers.oidc.models import CacheKey, CredentialRecord


class TokenCache:
    """Thread-safe mapping ``CacheKey -> CredentialRecord``."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._entries: dict[CacheKey, CredentialRecord] = {}

    def get(self, key: CacheKey) -> CredentialRecord | None:
        with self._lock:
            return self._entries.get(key)

    def put(self, key: CacheKey, record: CredentialRecord) -> None:
        """Store *record*, replacing whatever was cached for *key*."""
        with self._lock:
            self._entries[key] = record

    def invalidate(self, key: CacheKey) -> None:
        with self._lock:
            self._entries.pop(key, None)

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def __contains__(self, key: object) -> bool:
        with self._lock:
            return key in self._entries


_default_cache: TokenCache | None = None
_default_cache_lock = threading.Lock()


def default_cache() -> TokenCache:
    """Return the process-wide :class:`TokenCache`."""
    global _default_cache  # noqa: PLW0603
    with _default_cache_lock:
        if _default_cache is None:
            _default_cache = TokenCache()
        return _default_cache
