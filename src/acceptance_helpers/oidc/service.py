"""TokenService – bearer tokens for simulated users of the acceptance tests.

The service composes the cache, the refresh grant and the three-step
interactive flow into one decision:

1. a cached, unexpired record is returned as is (no network call);
2. an expired record is refreshed **once**; a failed refresh is fatal and
   never falls back to an interactive login;
3. a missing record triggers logon → authorize → exchange.

Records are cached for ``config.expiry_margin`` seconds, which is shorter
than the provider's real token lifetime.  Errors from any step propagate
unchanged and leave the cache untouched.
"""

from __future__ import annotations

import logging
import threading

from acceptance_helpers.oidc.cache import TokenCache, default_cache
from acceptance_helpers.oidc.clock import Clock, default_clock
from acceptance_helpers.oidc.config import OidcClientConfig
from acceptance_helpers.oidc.log_utils import get_flow_logger
from acceptance_helpers.oidc.models import (
    CacheKey,
    CredentialRecord,
    FlowSession,
    TokenPair,
)
from acceptance_helpers.oidc.refresh import refresh_tokens
from acceptance_helpers.oidc.steps import authorize, exchange, logon
from acceptance_helpers.oidc.transport import RequestsTransport, Transport
from acceptance_helpers.oidc.urls import extract_base_url
from acceptance_helpers.utils.logging import mask_sensitive

_LOG = logging.getLogger("acceptance-helpers.oidc.service")


def cache_key(username: str, url: str) -> CacheKey:
    """Return the cache key for *username* on the server hosting *url*."""
    return CacheKey(username=username, server=extract_base_url(url))


# --------------------------------------------------------------------------- #
# Public service                                                              #
# --------------------------------------------------------------------------- #
class TokenService:
    """Acquire, cache and refresh OIDC credentials per (user, server)."""

    def __init__(
        self,
        *,
        cache: TokenCache | None = None,
        transport: Transport | None = None,
        config: OidcClientConfig | None = None,
        clock: Clock = default_clock,
    ) -> None:
        self.config = config or OidcClientConfig.from_env()
        self.cache = cache if cache is not None else default_cache()
        self.transport = transport or RequestsTransport.from_config(self.config)
        self.clock = clock

    # ------------------------------------------------------------------ #
    # Token access                                                       #
    # ------------------------------------------------------------------ #
    def get_token(self, username: str, password: str, url: str) -> CredentialRecord:
        """Return a usable credential for *username* on the server of *url*.

        *url* may point at any path of the target server; only its base is
        used, which keeps users on different servers apart.

        Raises
        ------
        AuthenticationError
            Any subclass, straight from the failing step.
        """
        key = cache_key(username, url)
        log = get_flow_logger(username=username, server=key.server)

        cached = self.cache.get(key)
        if cached is not None:
            if not cached.is_expired(clock=self.clock):
                log.debug("Using cached token (expires_at=%s)", cached.expires_at)
                return cached
            return self._refresh(key, cached)

        return self._acquire(key, password)

    def invalidate(self, username: str, url: str) -> None:
        """Forget the cached credential of *username* on the server of *url*."""
        key = cache_key(username, url)
        self.cache.invalidate(key)
        _LOG.debug("Cleared cached tokens for %s", key)

    def clear_all(self) -> None:
        self.cache.clear()
        _LOG.debug("Cleared all cached tokens")

    # ---------------- internal helpers --------------------------------- #
    def _record(self, pair: TokenPair) -> CredentialRecord:
        return CredentialRecord.from_pair(
            pair, expires_at=int(self.clock()) + self.config.expiry_margin
        )

    def _refresh(self, key: CacheKey, cached: CredentialRecord) -> CredentialRecord:
        log = get_flow_logger(username=key.username, server=key.server, step="refresh")
        log.info("Cached token expired, refreshing")
        pair = refresh_tokens(self.transport, key.server, self.config, cached.refresh_token)
        record = self._record(pair)
        self.cache.put(key, record)
        log.info(
            "Refreshed token %s (expires in %ss)",
            mask_sensitive(record.access_token, 6),
            self.config.expiry_margin,
        )
        return record

    def _acquire(self, key: CacheKey, password: str) -> CredentialRecord:
        log = get_flow_logger(username=key.username, server=key.server)
        flow = FlowSession(base_url=key.server)
        try:
            log.bind(step="logon").info("Starting interactive logon")
            continue_uri = logon(self.transport, flow, self.config, key.username, password)
            log.bind(step="authorize").debug("Authorizing client %s", self.config.client_id)
            code = authorize(self.transport, flow, self.config, continue_uri)
            log.bind(step="exchange").debug("Exchanging authorization code")
            pair = exchange(self.transport, flow, self.config, code)
        except Exception:
            reached = flow.state
            flow.fail()
            log.warning("Token acquisition failed after state %s", reached.value)
            raise
        record = self._record(pair)
        self.cache.put(key, record)
        log.info("Acquired new token (expires in %ss)", self.config.expiry_margin)
        return record


# --------------------------------------------------------------------------- #
# Convenience – default singleton                                            #
# --------------------------------------------------------------------------- #

_default_service: TokenService | None = None
_default_service_lock = threading.Lock()


def default_service() -> TokenService:
    """Return a process-wide :class:`TokenService` backed by ``default_cache()``."""
    global _default_service  # noqa: PLW0603
    with _default_service_lock:
        if _default_service is None:
            _default_service = TokenService()
        return _default_service


def get_tokens(username: str, password: str, url: str) -> dict[str, str | int]:
    """Return ``{"access_token", "refresh_token", "expires_at"}`` for *username*."""
    return default_service().get_token(username, password, url).to_dict()


def clear_user_tokens(username: str, url: str) -> None:
    default_service().invalidate(username, url)


def clear_all_tokens() -> None:
    default_service().clear_all()
