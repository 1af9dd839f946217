"""OIDC token acquisition for simulated users.

This namespace hosts the building blocks used by the acceptance tests to get
bearer tokens from the identity provider of the server under test.

Sub-modules
-----------
clock
    Test-friendly time abstraction.
config
    Client descriptor, endpoint paths and expiry policy.
models
    Credential records, cache keys and per-flow session state.
errors
    Typed failures: transport, unexpected status, malformed response,
    provider rejection.
transport
    ``requests``-based HTTP transport (no redirects, explicit cookie jar).
steps
    Logon, authorize and code exchange.
refresh
    Refresh-token grant.
cache
    Thread-safe in-memory token cache.
service
    ``TokenService`` tying everything together.
log_utils
    Logging adapter that only carries non-secret flow context.

All public objects are re-exported here for convenience.
"""

from __future__ import annotations

from .cache import TokenCache, default_cache  # noqa: F401
from .clock import Clock, default_clock  # noqa: F401
from .config import OidcClientConfig  # noqa: F401
from .errors import (  # noqa: F401
    AuthenticationError,
    MalformedResponseError,
    ProviderRejectedError,
    TransportError,
    UnexpectedStatusError,
)
from .log_utils import get_flow_logger  # noqa: F401
from .models import CacheKey, CredentialRecord, FlowSession, FlowState, TokenPair  # noqa: F401
from .service import (  # noqa: F401
    TokenService,
    clear_all_tokens,
    clear_user_tokens,
    default_service,
    get_tokens,
)
from .transport import RequestsTransport, Transport  # noqa: F401
from .urls import extract_base_url  # noqa: F401

__all__ = [
    # cache
    "TokenCache",
    "default_cache",
    # clock
    "Clock",
    "default_clock",
    # config
    "OidcClientConfig",
    # errors
    "AuthenticationError",
    "MalformedResponseError",
    "ProviderRejectedError",
    "TransportError",
    "UnexpectedStatusError",
    # models
    "CacheKey",
    "CredentialRecord",
    "FlowSession",
    "FlowState",
    "TokenPair",
    # service
    "TokenService",
    "default_service",
    "get_tokens",
    "clear_user_tokens",
    "clear_all_tokens",
    # transport
    "RequestsTransport",
    "Transport",
    # urls
    "extract_base_url",
    # logging helpers
    "get_flow_logger",
]
