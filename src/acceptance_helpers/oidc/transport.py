"""HTTP transport for the OIDC flow, built on :mod:`requests`.

Every call runs on a fresh :class:`requests.Session` so that no cookie ever
outlives the flow that received it; the only cookie state is the jar the
caller passes in, which is updated in place with the response cookies.
Redirects are never followed because the authorization step has to inspect
the ``Location`` header itself.
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Protocol, runtime_checkable

import requests
from requests.cookies import RequestsCookieJar

from acceptance_helpers.constants import HTTP_REQUEST_TIMEOUT
from acceptance_helpers.oidc.config import OidcClientConfig
from acceptance_helpers.oidc.errors import Step, TransportError

_LOG = logging.getLogger("acceptance-helpers.oidc.transport")


@runtime_checkable
class Transport(Protocol):
    """Minimal HTTP contract the flow steps depend on."""

    def request(
        self,
        method: str,
        url: str,
        *,
        step: Step,
        cookies: RequestsCookieJar | None = None,
        **kwargs: Any,
    ) -> requests.Response: ...


class RequestsTransport:
    """:class:`Transport` implementation on top of ``requests``."""

    def __init__(
        self,
        *,
        verify_tls: bool = False,
        timeout: float = HTTP_REQUEST_TIMEOUT,
        session_factory: Callable[[], requests.Session] = requests.Session,
    ) -> None:
        self.verify_tls = verify_tls
        self.timeout = timeout
        self._session_factory = session_factory

    @classmethod
    def from_config(cls, config: OidcClientConfig) -> RequestsTransport:
        return cls(verify_tls=config.verify_tls, timeout=config.timeout)

    def request(
        self,
        method: str,
        url: str,
        *,
        step: Step,
        cookies: RequestsCookieJar | None = None,
        **kwargs: Any,
    ) -> requests.Response:
        """Send one request without following redirects.

        Raises
        ------
        TransportError
            On connection errors, timeouts or any other ``RequestException``.
        """
        _LOG.debug("%s %s (step=%s)", method, url, step)
        with self._session_factory() as http:
            try:
                resp = http.request(
                    method,
                    url,
                    cookies=cookies,
                    allow_redirects=False,
                    verify=self.verify_tls,
                    timeout=self.timeout,
                    **kwargs,
                )
            except requests.RequestException as exc:
                raise TransportError(
                    f"{method} {url} failed during {step}: {exc}", step=step
                ) from exc
        if cookies is not None:
            cookies.update(resp.cookies)
        _LOG.debug("%s %s -> %s", method, url, resp.status_code)
        return resp
