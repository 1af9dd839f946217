"""Refresh-token grant against the token endpoint."""

from __future__ import annotations

import logging

from acceptance_helpers.oidc.config import TOKEN_PATH, OidcClientConfig
from acceptance_helpers.oidc.models import TokenPair
from acceptance_helpers.oidc.steps import expect_status, json_object, parse_token_pair
from acceptance_helpers.oidc.transport import Transport
from acceptance_helpers.utils.logging import mask_sensitive

_LOG = logging.getLogger("acceptance-helpers.oidc.refresh")


def refresh_tokens(
    transport: Transport,
    base_url: str,
    config: OidcClientConfig,
    refresh_token: str,
) -> TokenPair:
    """Return a new token pair for *refresh_token*.

    No cookie jar is involved; the refresh token alone identifies the grant.
    Fails exactly like the code exchange does.
    """
    _LOG.debug("Refreshing with token %s", mask_sensitive(refresh_token, 4))
    resp = transport.request(
        "POST",
        base_url + TOKEN_PATH,
        step="refresh",
        data={
            "client_id": config.client_id,
            "refresh_token": refresh_token,
            "grant_type": "refresh_token",
        },
    )
    expect_status(resp, 200, step="refresh")
    return parse_token_pair(json_object(resp, step="refresh"), step="refresh")
