"""Logging helpers: secret masking and one-shot configuration."""

from __future__ import annotations

import logging
import os

_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s"


def mask_sensitive(value: str | None, keep_chars: int = 4) -> str:
    """Return a short masked form of *value* keeping its last *keep_chars* characters.

    Values too short to hide anything meaningful are masked completely.
    """
    if not value:
        return ""
    if len(value) <= keep_chars * 2:
        return "****"
    return "****" + value[-keep_chars:]


def setup_logging(level: int | str | None = None) -> logging.Logger:
    """Configure the ``acceptance-helpers`` logger hierarchy.

    The level comes from *level*, then ``ACCEPTANCE_LOG_LEVEL``, then WARNING.
    """
    resolved = level or os.getenv("ACCEPTANCE_LOG_LEVEL") or "WARNING"
    if isinstance(resolved, str):
        resolved = resolved.strip().upper()
    logger = logging.getLogger("acceptance-helpers")
    logger.setLevel(resolved)
    if not logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(_FORMAT))
        logger.addHandler(handler)
    return logger
