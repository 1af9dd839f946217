"""
Unit tests for TokenCache.

Coverage:
* put/get round trip returns an equal record
* invalidate removes only its own key and tolerates absent keys
* clear empties the cache
* concurrent writers never corrupt the mapping
"""

from __future__ import annotations

import threading

from acceptance_helpers.oidc.cache import TokenCache, default_cache
from acceptance_helpers.oidc.models import CacheKey, CredentialRecord

ALICE = CacheKey("alice", "https://a.test")
BOB = CacheKey("bob", "https://a.test")
ALICE_FED = CacheKey("alice", "https://b.test")


def _record(n: int = 1) -> CredentialRecord:
    return CredentialRecord(access_token=f"at-{n}", refresh_token=f"rt-{n}", expires_at=1_000 + n)


def test_put_then_get_returns_equal_record() -> None:
    cache = TokenCache()
    rec = _record()
    cache.put(ALICE, rec)
    got = cache.get(ALICE)
    assert got == rec
    assert (got.access_token, got.refresh_token, got.expires_at) == ("at-1", "rt-1", 1_001)


def test_get_missing_returns_none() -> None:
    assert TokenCache().get(ALICE) is None


def test_put_overwrites() -> None:
    cache = TokenCache()
    cache.put(ALICE, _record(1))
    cache.put(ALICE, _record(2))
    assert cache.get(ALICE) == _record(2)
    assert len(cache) == 1


def test_keys_do_not_collide() -> None:
    cache = TokenCache()
    cache.put(ALICE, _record(1))
    cache.put(BOB, _record(2))
    cache.put(ALICE_FED, _record(3))
    assert len(cache) == 3
    assert cache.get(ALICE_FED) == _record(3)


def test_invalidate_only_removes_one_entry() -> None:
    cache = TokenCache()
    cache.put(ALICE, _record(1))
    cache.put(BOB, _record(2))
    cache.invalidate(ALICE)
    assert ALICE not in cache
    assert cache.get(BOB) == _record(2)
    # absent key is a no-op
    cache.invalidate(ALICE)


def test_clear() -> None:
    cache = TokenCache()
    cache.put(ALICE, _record(1))
    cache.put(BOB, _record(2))
    cache.clear()
    assert len(cache) == 0


def test_concurrent_puts() -> None:
    cache = TokenCache()

    def _writer(i: int) -> None:
        for j in range(200):
            cache.put(CacheKey(f"user{i}", "https://a.test"), _record(j))

    threads = [threading.Thread(target=_writer, args=(i,)) for i in range(8)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert len(cache) == 8
    assert cache.get(CacheKey("user3", "https://a.test")) == _record(199)


def test_default_cache_is_singleton() -> None:
    assert default_cache() is default_cache()
