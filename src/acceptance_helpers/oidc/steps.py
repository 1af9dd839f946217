"""The three hops of the interactive authorization-code flow.

``logon`` → ``authorize`` → ``exchange``: each function sends exactly one
request through the injected :class:`~acceptance_helpers.oidc.transport.Transport`,
validates the response against the fields it needs and advances the
:class:`~acceptance_helpers.oidc.models.FlowSession`.  Any deviation raises
one of the errors from :mod:`acceptance_helpers.oidc.errors`; nothing is
retried here.
"""

from __future__ import annotations

import logging
from typing import Any
from urllib.parse import parse_qs, urlsplit

import requests

from acceptance_helpers.oidc.config import (
    LOGON_PATH,
    TOKEN_PATH,
    XSRF_HEADER,
    OidcClientConfig,
)
from acceptance_helpers.oidc.errors import (
    MalformedResponseError,
    ProviderRejectedError,
    Step,
    UnexpectedStatusError,
)
from acceptance_helpers.oidc.models import FlowSession, FlowState, TokenPair
from acceptance_helpers.oidc.transport import Transport
from acceptance_helpers.utils.logging import mask_sensitive

_LOG = logging.getLogger("acceptance-helpers.oidc.steps")

_BODY_SNIPPET = 200


# --------------------------------------------------------------------------- #
# Response validation                                                         #
# --------------------------------------------------------------------------- #
def expect_status(
    resp: requests.Response, expected: int, *, step: Step, include_body: bool = False
) -> None:
    if resp.status_code != expected:
        raise UnexpectedStatusError(
            step=step,
            expected=expected,
            status_code=resp.status_code,
            reason=resp.reason or "",
            body=(resp.text or "")[:_BODY_SNIPPET] if include_body else "",
        )


def json_object(resp: requests.Response, *, step: Step) -> dict[str, Any]:
    """Decode the body as a JSON object or raise ``MalformedResponseError``."""
    try:
        data = resp.json()
    except ValueError:
        raise MalformedResponseError(
            step=step, field="body", message=f"{step} response is not valid JSON"
        ) from None
    if not isinstance(data, dict):
        raise MalformedResponseError(
            step=step, field="body", message=f"{step} response is not a JSON object"
        )
    return data


def _require_str(data: dict[str, Any], key: str, *, step: Step, field: str) -> str:
    value = data.get(key)
    if not isinstance(value, str) or not value:
        raise MalformedResponseError(step=step, field=field)
    return value


def parse_token_pair(data: dict[str, Any], *, step: Step) -> TokenPair:
    """Validate a token-endpoint body: both tokens must be non-empty strings."""
    access = data.get("access_token")
    refresh = data.get("refresh_token")
    if not isinstance(access, str) or not access:
        raise MalformedResponseError(
            step=step, field="access_token", message=f"Missing tokens in {step} response"
        )
    if not isinstance(refresh, str) or not refresh:
        raise MalformedResponseError(
            step=step, field="refresh_token", message=f"Missing tokens in {step} response"
        )
    return TokenPair(access_token=access, refresh_token=refresh)


# --------------------------------------------------------------------------- #
# Steps                                                                       #
# --------------------------------------------------------------------------- #
def logon(
    transport: Transport,
    flow: FlowSession,
    config: OidcClientConfig,
    username: str,
    password: str,
) -> str:
    """Sign in at the identifier endpoint and return the ``continue_uri``."""
    resp = transport.request(
        "POST",
        flow.base_url + LOGON_PATH,
        step="logon",
        cookies=flow.cookies,
        headers={
            XSRF_HEADER: "1",
            "Referer": flow.base_url,
            "Content-Type": "application/json",
        },
        json={
            "params": [username, password, "1"],
            "hello": {
                "scope": config.scope,
                "client_id": config.client_id,
                "redirect_uri": config.redirect_uri(flow.base_url),
                "flow": "oidc",
            },
        },
    )
    expect_status(resp, 200, step="logon")

    hello = json_object(resp, step="logon").get("hello")
    if not isinstance(hello, dict):
        raise MalformedResponseError(
            step="logon",
            field="hello.continue_uri",
            message="Missing continue_uri in logon response",
        )
    continue_uri = _require_str(hello, "continue_uri", step="logon", field="hello.continue_uri")

    flow.advance(FlowState.START, FlowState.LOGGED_IN)
    _LOG.debug("Logon succeeded, %d session cookie(s) captured", len(flow.cookies))
    return continue_uri


def authorize(
    transport: Transport,
    flow: FlowSession,
    config: OidcClientConfig,
    continue_uri: str,
) -> str:
    """Follow ``continue_uri`` silently and return the authorization code."""
    resp = transport.request(
        "GET",
        continue_uri,
        step="authorize",
        cookies=flow.cookies,
        params={
            "client_id": config.client_id,
            "prompt": "none",
            "redirect_uri": config.redirect_uri(flow.base_url),
            "response_mode": "query",
            "response_type": "code",
            "scope": config.scope,
        },
    )
    expect_status(resp, 302, step="authorize", include_body=True)

    location = resp.headers.get("Location") or ""
    if not location:
        raise MalformedResponseError(
            step="authorize",
            field="Location",
            message="Missing Location header in authorization response",
        )

    # parse_qs already percent-decodes values; a blank error still counts
    query = parse_qs(urlsplit(location).query, keep_blank_values=True)
    if "error" in query:
        raise ProviderRejectedError(
            error=query["error"][0],
            description=query.get("error_description", ["No description"])[0],
        )

    code = query.get("code", [""])[0]
    if not code:
        raise MalformedResponseError(
            step="authorize",
            field="code",
            message=f"Missing auth code in redirect URL. Location: {location}",
        )

    flow.advance(FlowState.LOGGED_IN, FlowState.AUTHORIZED)
    _LOG.debug("Authorization code received: %s", mask_sensitive(code, 4))
    return code


def exchange(
    transport: Transport,
    flow: FlowSession,
    config: OidcClientConfig,
    code: str,
) -> TokenPair:
    """Trade the authorization code for an access/refresh token pair."""
    resp = transport.request(
        "POST",
        flow.base_url + TOKEN_PATH,
        step="exchange",
        cookies=flow.cookies,
        data={
            "client_id": config.client_id,
            "code": code,
            "redirect_uri": config.redirect_uri(flow.base_url),
            "grant_type": "authorization_code",
        },
    )
    expect_status(resp, 200, step="exchange")
    pair = parse_token_pair(json_object(resp, step="exchange"), step="exchange")

    flow.advance(FlowState.AUTHORIZED, FlowState.EXCHANGED)
    return pair
