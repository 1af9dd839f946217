"""Shared pytest configuration for the acceptance helpers.

Markers
-------
* ``integration`` – exercises the token flow across a real HTTP stack;
  skipped unless ``--integration`` is given.
* ``ci_safe`` – an integration test that only talks to in-process fakes or
  a local socket, so it runs even without ``--integration``.
* ``live`` – talks to a running server; additionally gated by ``OIDC_LIVE=1``.
"""

import pytest

_HARNESS_ENV = (
    "USE_BEARER_TOKEN",
    "OIDC_CLIENT_ID",
    "OIDC_SCOPE",
    "OIDC_EXPIRY_MARGIN",
    "OIDC_TOKEN_LIFETIME",
    "OIDC_VERIFY_TLS",
    "OIDC_REDIRECT_PATH",
    "HTTP_REQUEST_TIMEOUT",
)


def pytest_addoption(parser):
    parser.addoption(
        "--integration",
        action="store_true",
        default=False,
        help="run integration tests that are not marked ci_safe",
    )


def pytest_collection_modifyitems(config, items):
    """Skip non-ci_safe integration tests unless ``--integration`` is set."""
    if config.getoption("--integration"):
        return
    skip = pytest.mark.skip(reason="needs --integration")
    for item in items:
        if "integration" in item.keywords and "ci_safe" not in item.keywords:
            item.add_marker(skip)


@pytest.fixture(autouse=True)
def _no_harness_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep the developer's shell from leaking harness flags into tests."""
    for name in _HARNESS_ENV:
        monkeypatch.delenv(name, raising=False)
