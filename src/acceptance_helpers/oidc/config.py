"""Client descriptor and HTTP settings for the OIDC token flow."""

from __future__ import annotations

import os
from dataclasses import dataclass

from acceptance_helpers.constants import HTTP_REQUEST_TIMEOUT
from acceptance_helpers.utils.environment import get_env_flag, get_env_int

LOGON_PATH = "/signin/v1/identifier/_/logon"
TOKEN_PATH = "/konnect/v1/token"
DEFAULT_REDIRECT_PATH = "/oidc-callback.html"
DEFAULT_CLIENT_ID = "web"
DEFAULT_SCOPE = "openid profile offline_access email"
XSRF_HEADER = "Kopano-Konnect-XSRF"

# The provider issues access tokens valid for 5 minutes; cached records are
# treated as expired after 4 so a token is never handed out about to lapse.
DEFAULT_TOKEN_LIFETIME = 300
DEFAULT_EXPIRY_MARGIN = 240


@dataclass(frozen=True)
class OidcClientConfig:
    """Settings shared by every step of the flow.

    ``expiry_margin`` is the number of seconds a freshly obtained token is
    cached for.  It must stay strictly below ``token_lifetime``.
    """

    client_id: str = DEFAULT_CLIENT_ID
    scope: str = DEFAULT_SCOPE
    redirect_path: str = DEFAULT_REDIRECT_PATH
    verify_tls: bool = False
    timeout: float = HTTP_REQUEST_TIMEOUT
    token_lifetime: int = DEFAULT_TOKEN_LIFETIME
    expiry_margin: int = DEFAULT_EXPIRY_MARGIN

    def __post_init__(self) -> None:
        if not self.client_id:
            raise ValueError("client_id must not be empty")
        if self.expiry_margin <= 0:
            raise ValueError("expiry_margin must be positive")
        if self.expiry_margin >= self.token_lifetime:
            raise ValueError(
                f"expiry_margin ({self.expiry_margin}s) must be shorter than "
                f"token_lifetime ({self.token_lifetime}s)"
            )
        if self.timeout <= 0:
            raise ValueError("timeout must be positive")

    @classmethod
    def from_env(cls, prefix: str = "OIDC_") -> OidcClientConfig:
        """Build a config from ``{prefix}*`` environment variables."""
        return cls(
            client_id=os.getenv(f"{prefix}CLIENT_ID") or DEFAULT_CLIENT_ID,
            scope=os.getenv(f"{prefix}SCOPE") or DEFAULT_SCOPE,
            redirect_path=os.getenv(f"{prefix}REDIRECT_PATH") or DEFAULT_REDIRECT_PATH,
            verify_tls=get_env_flag(f"{prefix}VERIFY_TLS", default=False),
            timeout=get_env_int("HTTP_REQUEST_TIMEOUT", HTTP_REQUEST_TIMEOUT),
            token_lifetime=get_env_int(f"{prefix}TOKEN_LIFETIME", DEFAULT_TOKEN_LIFETIME),
            expiry_margin=get_env_int(f"{prefix}EXPIRY_MARGIN", DEFAULT_EXPIRY_MARGIN),
        )

    def redirect_uri(self, base_url: str) -> str:
        return f"{base_url}{self.redirect_path}"
