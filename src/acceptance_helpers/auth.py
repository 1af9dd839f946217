"""Authentication selection for harness HTTP requests.

``USE_BEARER_TOKEN=true`` switches the harness from basic auth to OIDC bearer
tokens.  :func:`build_auth` hides that choice behind a ``requests`` auth
object, so request code stays the same in both modes.
"""

from __future__ import annotations

import logging

import requests
from requests.auth import AuthBase, HTTPBasicAuth

from acceptance_helpers.oidc.service import TokenService, default_service
from acceptance_helpers.utils.environment import use_bearer_token

logger = logging.getLogger("acceptance-helpers.auth")


class BearerTokenAuth(AuthBase):
    """Attach ``Authorization: Bearer`` for *username* on the request's server.

    The token is resolved on every request, so an expired cache entry is
    refreshed transparently and requests to different servers get their
    own tokens.
    """

    def __init__(
        self, username: str, password: str, service: TokenService | None = None
    ) -> None:
        self.username = username
        self.password = password
        self._service = service

    @property
    def service(self) -> TokenService:
        return self._service or default_service()

    def __call__(self, r: requests.PreparedRequest) -> requests.PreparedRequest:
        record = self.service.get_token(self.username, self.password, r.url or "")
        r.headers["Authorization"] = f"Bearer {record.access_token}"
        return r

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, BearerTokenAuth):
            return NotImplemented
        return (self.username, self.password) == (other.username, other.password)


def build_auth(
    username: str, password: str, service: TokenService | None = None
) -> AuthBase:
    """Return bearer auth when ``USE_BEARER_TOKEN`` is ``true``, basic auth otherwise."""
    if use_bearer_token():
        logger.debug("Using bearer token auth for %s", username)
        return BearerTokenAuth(username, password, service)
    return HTTPBasicAuth(username, password)
