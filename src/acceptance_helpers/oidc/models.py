"""Typed records used by the OIDC token helpers."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field

from requests.cookies import RequestsCookieJar

from acceptance_helpers.oidc.clock import Clock, default_clock


@dataclass(frozen=True, slots=True)
class TokenPair:
    """Access/refresh token pair as returned by the token endpoint."""

    access_token: str
    refresh_token: str


@dataclass(frozen=True, slots=True)
class CredentialRecord:
    """Cached bearer credential for one (user, server) pair."""

    access_token: str
    refresh_token: str
    expires_at: int

    @classmethod
    def from_pair(cls, pair: TokenPair, *, expires_at: int) -> CredentialRecord:
        return cls(
            access_token=pair.access_token,
            refresh_token=pair.refresh_token,
            expires_at=expires_at,
        )

    def is_expired(self, *, clock: Clock = default_clock) -> bool:
        """Return *True* once ``now`` reached ``expires_at``."""
        return clock() >= self.expires_at

    def to_dict(self) -> dict[str, str | int]:
        return {
            "access_token": self.access_token,
            "refresh_token": self.refresh_token,
            "expires_at": self.expires_at,
        }


@dataclass(frozen=True, slots=True)
class CacheKey:
    """Cache partition: the simulated user and the normalized server URL."""

    username: str
    server: str

    def __str__(self) -> str:
        return f"{self.username}|{self.server}"


class FlowState(enum.Enum):
    """Progress of a single interactive acquisition."""

    START = "start"
    LOGGED_IN = "logged_in"
    AUTHORIZED = "authorized"
    EXCHANGED = "exchanged"
    FAILED = "failed"


@dataclass
class FlowSession:
    """Ephemeral state of one logon → authorize → exchange run.

    The cookie jar collects the provider's session cookies and is handed to
    every step explicitly; it is discarded together with the session.
    """

    base_url: str
    cookies: RequestsCookieJar = field(default_factory=RequestsCookieJar)
    state: FlowState = FlowState.START

    def advance(self, expected: FlowState, new: FlowState) -> None:
        """Move from *expected* to *new*, refusing out-of-order steps."""
        if self.state is not expected:
            raise RuntimeError(
                f"flow is in state {self.state.value!r}, expected {expected.value!r}"
            )
        self.state = new

    def fail(self) -> None:
        if self.state is not FlowState.EXCHANGED:
            self.state = FlowState.FAILED
