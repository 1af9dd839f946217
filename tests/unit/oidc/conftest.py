"""Fixtures for the OIDC unit tests."""

from __future__ import annotations

import pytest

from acceptance_helpers.oidc.config import OidcClientConfig
from oidc_fakes import FakeTransport


@pytest.fixture()
def transport() -> FakeTransport:
    return FakeTransport()


@pytest.fixture()
def config() -> OidcClientConfig:
    return OidcClientConfig()
