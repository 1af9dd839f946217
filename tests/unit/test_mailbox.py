"""MailboxClient against a stubbed requests session."""

from __future__ import annotations

from types import SimpleNamespace
from typing import Any

import pytest
import requests

from acceptance_helpers.mail import MailboxClient, mailbox_from_email


class _StubSession:
    """Serves canned JSON per (method, url) and records requests."""

    def __init__(self, routes: dict[tuple[str, str], Any]) -> None:
        self.routes = routes
        self.requests: list[dict[str, Any]] = []

    def request(self, method: str, url: str, **kwargs: Any) -> SimpleNamespace:
        self.requests.append({"method": method, "url": url, **kwargs})
        payload = self.routes.get((method, url))
        status = 404 if payload is None else 200

        def _raise_for_status() -> None:
            if status >= 400:
                raise requests.HTTPError(f"{status} for {url}")

        return SimpleNamespace(
            status_code=status, json=lambda: payload, raise_for_status=_raise_for_status
        )


BASE = "http://mail.test:9000"


def test_mailbox_from_email() -> None:
    assert mailbox_from_email("brian@example.org") == "brian"


def test_default_base_url_from_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("LOCAL_EMAIL_HOST", raising=False)
    monkeypatch.setenv("EMAIL_HOST", "inbucket")
    monkeypatch.setenv("EMAIL_PORT", "9100")
    assert MailboxClient().base_url == "http://inbucket:9100"


def test_last_email_body_decodes_newest_message() -> None:
    session = _StubSession(
        {
            ("GET", f"{BASE}/api/v1/mailbox/brian"): [{"id": "1"}, {"id": "2"}],
            ("GET", f"{BASE}/api/v1/mailbox/brian/2"): {
                "body": {"text": "Hello=20Brian,\r\nclick here", "html": "<p>caf=C3=A9</p>"}
            },
        }
    )
    client = MailboxClient(BASE, session=session)

    body = client.get_last_email_body("brian@example.org", x_request_id="req-1")

    assert body == "Hello Brian,\nclick here\n<p>café</p>"
    assert session.requests[0]["headers"]["X-Request-ID"] == "req-1"
    assert session.requests[1]["url"].endswith("/brian/2")


def test_last_email_body_empty_mailbox() -> None:
    session = _StubSession({("GET", f"{BASE}/api/v1/mailbox/nobody"): []})
    assert MailboxClient(BASE, session=session).get_last_email_body("nobody@x") == ""
    assert len(session.requests) == 1


def test_delete_all() -> None:
    session = _StubSession({("DELETE", f"{BASE}/api/v1/mailbox/brian"): "OK"})
    resp = MailboxClient(BASE, session=session).delete_all("brian", "req-2")
    assert resp.status_code == 200
    assert session.requests[0]["method"] == "DELETE"


def test_http_errors_raise() -> None:
    client = MailboxClient(BASE, session=_StubSession({}))
    with pytest.raises(requests.HTTPError):
        client.get_mailbox("missing")
