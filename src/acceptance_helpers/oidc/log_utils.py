"""Structured logging helpers for the OIDC token flow.

Only the following *non-sensitive* fields are ever attached to log records:

- ``username`` – the simulated user the token is acquired for
- ``server``   – normalized base URL of the identity provider
- ``step``     – flow step (``logon``, ``authorize``, ``exchange``, ``refresh``)

Passwords, tokens and authorization codes are never part of the context;
call sites that need to mention them go through
:func:`acceptance_helpers.utils.logging.mask_sensitive`.

Usage
-----
>>> from acceptance_helpers.oidc.log_utils import get_flow_logger
>>> log = get_flow_logger(username="alice", server="https://localhost:9200")
>>> log.info("Starting logon")
INFO acceptance-helpers.oidc username=alice server=https://localhost:9200 ...
"""

from __future__ import annotations

import logging
from typing import Any, Mapping, MutableMapping


class _FlowLoggerAdapter(logging.LoggerAdapter):
    """Inject whitelisted flow context into log records."""

    extra_keys = ("username", "server", "step")

    def __init__(self, logger: logging.Logger, extra: Mapping[str, Any] | None = None):
        extra_clean: MutableMapping[str, Any] = {}
        for k in self.extra_keys:
            if extra and k in extra and extra[k] is not None:
                extra_clean[k] = extra[k]
        super().__init__(logger, extra_clean)

    def process(self, msg: str, kwargs: MutableMapping[str, Any]):
        if "extra" not in kwargs or kwargs["extra"] is None:
            kwargs["extra"] = {}
        # call-site extras win
        for k, v in self.extra.items():
            kwargs["extra"].setdefault(k, v)
        return msg, kwargs

    def bind(self, **context: Any) -> _FlowLoggerAdapter:
        """Return a new adapter with *context* merged over the current one."""
        merged = {**self.extra, **context}
        return _FlowLoggerAdapter(self.logger, merged)


def get_flow_logger(
    *,
    base_logger_name: str = "acceptance-helpers.oidc",
    username: str | None = None,
    server: str | None = None,
    step: str | None = None,
) -> _FlowLoggerAdapter:
    """Return a LoggerAdapter pre-filled with flow context."""
    logger = logging.getLogger(base_logger_name)
    return _FlowLoggerAdapter(
        logger,
        {"username": username, "server": server, "step": step},
    )
