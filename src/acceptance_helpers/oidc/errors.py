"""Exception types raised while acquiring or refreshing OIDC tokens.

Only lightweight, **data-carrying** exceptions live here so that callers can
branch on the failure kind without matching message strings.  None of them
ever carries a password, token or authorization code.
"""

from __future__ import annotations

from typing import Any, Literal

Step = Literal["logon", "authorize", "exchange", "refresh"]


class AuthenticationError(RuntimeError):
    """Base class: a token could not be obtained for a simulated user."""

    def __init__(self, message: str, *, step: Step) -> None:
        super().__init__(message)
        self.step: Step = step

    def to_payload(self) -> dict[str, Any]:
        """Return a JSON-serialisable payload **without secrets**."""
        return {
            "error": "authentication_failed",
            "kind": type(self).__name__,
            "step": self.step,
            "message": str(self),
        }


class TransportError(AuthenticationError):
    """Network failure or timeout while talking to the identity provider."""


class UnexpectedStatusError(AuthenticationError):
    """The provider answered with a status code the step does not accept."""

    def __init__(
        self,
        *,
        step: Step,
        expected: int,
        status_code: int,
        reason: str = "",
        body: str = "",
    ) -> None:
        message = (
            f"{_STEP_TITLES[step]} failed: Expected status code {expected} "
            f"but received {status_code}. Message: {reason}"
        )
        if body:
            message += f". Body: {body}"
        super().__init__(message, step=step)
        self.expected = expected
        self.status_code = status_code
        self.reason = reason
        self.body = body

    def to_payload(self) -> dict[str, Any]:
        payload = super().to_payload()
        payload.update(expected=self.expected, status_code=self.status_code)
        return payload


class MalformedResponseError(AuthenticationError):
    """A required JSON field, header or query parameter is missing."""

    def __init__(self, *, step: Step, field: str, message: str | None = None) -> None:
        super().__init__(message or f"Missing {field} in {step} response", step=step)
        self.field = field

    def to_payload(self) -> dict[str, Any]:
        payload = super().to_payload()
        payload["field"] = self.field
        return payload


class ProviderRejectedError(AuthenticationError):
    """The authorization redirect carried an explicit ``error`` parameter."""

    def __init__(self, *, error: str, description: str) -> None:
        super().__init__(f"Authorization error: {error} - {description}", step="authorize")
        self.error = error
        self.description = description

    def to_payload(self) -> dict[str, Any]:
        payload = super().to_payload()
        payload.update(provider_error=self.error, description=self.description)
        return payload


_STEP_TITLES: dict[Step, str] = {
    "logon": "Logon",
    "authorize": "Authorization",
    "exchange": "Token request",
    "refresh": "Token refresh",
}
