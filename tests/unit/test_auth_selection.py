"""Bearer vs. basic auth selection driven by USE_BEARER_TOKEN."""

from __future__ import annotations

from unittest.mock import MagicMock

import pytest
import requests
from requests.auth import HTTPBasicAuth

from acceptance_helpers.auth import BearerTokenAuth, build_auth
from acceptance_helpers.oidc.models import CredentialRecord


def _service() -> MagicMock:
    svc = MagicMock()
    svc.get_token.return_value = CredentialRecord("access-xyz", "refresh-xyz", 9_999)
    return svc


def test_basic_auth_by_default() -> None:
    auth = build_auth("alice", "pw")
    assert isinstance(auth, HTTPBasicAuth)
    assert (auth.username, auth.password) == ("alice", "pw")


@pytest.mark.parametrize("value", ["TRUE", "1", "yes", "false"])
def test_only_literal_true_enables_bearer(monkeypatch: pytest.MonkeyPatch, value: str) -> None:
    monkeypatch.setenv("USE_BEARER_TOKEN", value)
    assert isinstance(build_auth("alice", "pw"), HTTPBasicAuth)


def test_bearer_auth_when_enabled(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("USE_BEARER_TOKEN", "true")
    svc = _service()
    auth = build_auth("alice", "pw", service=svc)
    assert isinstance(auth, BearerTokenAuth)
    assert auth.service is svc


def test_bearer_auth_sets_header_for_request_server() -> None:
    svc = _service()
    auth = BearerTokenAuth("alice", "pw", service=svc)
    url = "https://localhost:9200/graph/v1.0/me/drives"

    prepared = requests.Request("GET", url, auth=auth).prepare()

    assert prepared.headers["Authorization"] == "Bearer access-xyz"
    svc.get_token.assert_called_once_with("alice", "pw", url)


def test_bearer_auth_equality() -> None:
    assert BearerTokenAuth("a", "p") == BearerTokenAuth("a", "p")
    assert BearerTokenAuth("a", "p") != BearerTokenAuth("b", "p")
