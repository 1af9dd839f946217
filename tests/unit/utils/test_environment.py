"""Environment helpers."""

from __future__ import annotations

import pytest

from acceptance_helpers.utils.environment import (
    get_env_flag,
    get_env_int,
    get_local_email_url,
    use_bearer_token,
)


def test_use_bearer_token(monkeypatch: pytest.MonkeyPatch) -> None:
    assert use_bearer_token() is False
    monkeypatch.setenv("USE_BEARER_TOKEN", "true")
    assert use_bearer_token() is True
    monkeypatch.setenv("USE_BEARER_TOKEN", "True")
    assert use_bearer_token() is False


@pytest.mark.parametrize(
    ("raw", "expected"),
    [("yes", True), ("ON", True), ("0", False), ("off", False), ("", True), ("maybe", True)],
)
def test_get_env_flag(monkeypatch: pytest.MonkeyPatch, raw: str, expected: bool) -> None:
    monkeypatch.setenv("SOME_FLAG", raw)
    assert get_env_flag("SOME_FLAG", default=True) is expected


def test_get_env_int(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("SOME_INT", raising=False)
    assert get_env_int("SOME_INT", 7) == 7
    monkeypatch.setenv("SOME_INT", " 42 ")
    assert get_env_int("SOME_INT", 7) == 42
    monkeypatch.setenv("SOME_INT", "abc")
    with pytest.raises(ValueError, match="SOME_INT"):
        get_env_int("SOME_INT", 7)


def test_local_email_url_fallbacks(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in ("EMAIL_HOST", "LOCAL_EMAIL_HOST", "EMAIL_PORT"):
        monkeypatch.delenv(name, raising=False)
    assert get_local_email_url() == "http://127.0.0.1:9000"
    monkeypatch.setenv("EMAIL_HOST", "mail")
    assert get_local_email_url() == "http://mail:9000"
    monkeypatch.setenv("LOCAL_EMAIL_HOST", "localhost")
    monkeypatch.setenv("EMAIL_PORT", "9100")
    assert get_local_email_url() == "http://localhost:9100"
