"""Utility functions related to environment checking."""

import logging
import os
from typing import Final, Tuple

logger = logging.getLogger("acceptance-helpers.utils.environment")

_TRUTHY: Final[Tuple[str, ...]] = ("true", "1", "yes", "y", "on")
_FALSY: Final[Tuple[str, ...]] = ("false", "0", "no", "n", "off")


def get_env_flag(name: str, *, default: bool = False) -> bool:
    """
    Return the boolean value of environment variable *name*.

    Unset or empty variables yield *default*; unrecognised values are logged
    and also yield *default*.
    """
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    value = raw.strip().lower()
    if value in _TRUTHY:
        return True
    if value in _FALSY:
        return False
    logger.warning("Ignoring unrecognised boolean value for %s: %r", name, raw)
    return default


def get_env_int(name: str, default: int) -> int:
    """Return environment variable *name* as ``int`` or raise ``ValueError``."""
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return int(raw.strip())
    except ValueError:
        raise ValueError(f"{name} must be an integer, got {raw!r}") from None


def use_bearer_token() -> bool:
    """
    Return True if the harness should authenticate with OIDC bearer tokens.

    Only the literal value ``true`` of ``USE_BEARER_TOKEN`` enables bearer
    mode; anything else keeps the default basic-auth / session mode.
    """
    return os.getenv("USE_BEARER_TOKEN") == "true"


def get_email_host() -> str:
    """Host of the mail store as seen from the system under test."""
    return os.getenv("EMAIL_HOST") or "127.0.0.1"


def get_local_email_host() -> str:
    """Host of the mail store as seen from the test runner."""
    return os.getenv("LOCAL_EMAIL_HOST") or get_email_host()


def get_local_email_url() -> str:
    """Base URL where the test runner can read and delete test email."""
    port = os.getenv("EMAIL_PORT") or "9000"
    return f"http://{get_local_email_host()}:{port}"
