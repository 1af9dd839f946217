"""Read and delete test email through the Inbucket REST API.

A mailbox is created automatically by the mail store for every unique
sender or receiver; its name is the local part of the address.
"""

from __future__ import annotations

import logging
import quopri
from typing import Any

import requests

from acceptance_helpers.constants import HTTP_REQUEST_TIMEOUT
from acceptance_helpers.utils.environment import get_local_email_url

logger = logging.getLogger("acceptance-helpers.mail")


def mailbox_from_email(address: str) -> str:
    """Return the mailbox name for *address* (``alice@example.org`` → ``alice``)."""
    return address.split("@", 1)[0]


class MailboxClient:
    """Thin client for the ``/api/v1/mailbox`` endpoints."""

    def __init__(
        self,
        base_url: str | None = None,
        *,
        timeout: float = HTTP_REQUEST_TIMEOUT,
        session: requests.Session | None = None,
    ) -> None:
        self.base_url = (base_url or get_local_email_url()).rstrip("/")
        self.timeout = timeout
        self._session = session or requests.Session()

    def _request(
        self, method: str, path: str, x_request_id: str | None = None
    ) -> requests.Response:
        headers = {"Content-Type": "application/json"}
        if x_request_id:
            headers["X-Request-ID"] = x_request_id
        url = f"{self.base_url}/api/v1/mailbox/{path}"
        logger.debug("%s %s", method, url)
        resp = self._session.request(method, url, headers=headers, timeout=self.timeout)
        resp.raise_for_status()
        return resp

    def get_mailbox(
        self, mailbox: str, x_request_id: str | None = None
    ) -> list[dict[str, Any]]:
        """Return the message headers of *mailbox*, oldest first."""
        return self._request("GET", mailbox, x_request_id).json() or []

    def get_message(
        self, mailbox: str, message_id: str, x_request_id: str | None = None
    ) -> dict[str, Any]:
        return self._request("GET", f"{mailbox}/{message_id}", x_request_id).json()

    def get_last_email_body(self, address: str, x_request_id: str | None = None) -> str:
        """Return text and html of the newest email to *address*, or ``""``.

        Both parts are quoted-printable decoded and joined by a newline;
        CRLF line endings are normalized to LF.
        """
        mailbox = mailbox_from_email(address)
        messages = self.get_mailbox(mailbox, x_request_id)
        if not messages:
            return ""
        message = self.get_message(mailbox, messages[-1]["id"], x_request_id)
        body = message.get("body") or {}
        raw = f"{body.get('text', '')}\n{body.get('html', '')}"
        decoded = quopri.decodestring(raw.encode("utf-8")).decode("utf-8", errors="replace")
        return decoded.replace("\r\n", "\n")

    def delete_all(self, mailbox: str, x_request_id: str | None = None) -> requests.Response:
        """Delete every message in *mailbox*."""
        return self._request("DELETE", mailbox, x_request_id)
