"""Clock abstraction for expiry decisions in the OIDC token helpers.

Every time-based decision inside :mod:`acceptance_helpers.oidc` (cache hit vs.
refresh, computation of ``expires_at``) depends on an injected ``Clock``
instead of calling ``time.time()`` directly, so tests can freeze time.

Example
-------
>>> from acceptance_helpers.oidc.clock import default_clock
>>> isinstance(default_clock(), float)
True
"""

from __future__ import annotations

import time
from typing import Protocol, runtime_checkable


@runtime_checkable
class Clock(Protocol):
    """Callable protocol returning *seconds* since the UNIX epoch."""

    def __call__(self) -> float: ...


def default_clock() -> float:
    """Return ``time.time()``."""
    return time.time()
