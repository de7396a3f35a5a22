"""Error taxonomy for the capacity service.

Each error knows the HTTP status it maps to and the extra fields it adds to
the ``{success: false, error, message}`` failure body.
"""

from __future__ import annotations

from typing import Any


class FlightCapacityError(Exception):
    """Base class for errors surfaced to API callers."""

    status_code: int = 500
    # Short title for the ``error`` field; None lets the endpoint choose one.
    title: str | None = None

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    def details(self) -> dict[str, Any]:
        return {}


class ValidationError(FlightCapacityError):
    """Malformed caller input, rejected before any upstream call."""

    status_code = 400

    def __init__(
        self,
        title: str,
        *,
        expected: Any = None,
        received: Any = None,
        extra: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(title)
        self.title = title
        self.expected = expected
        self.received = received
        self.extra = extra or {}

    def details(self) -> dict[str, Any]:
        body: dict[str, Any] = dict(self.extra)
        if self.expected is not None:
            body["expected"] = self.expected
        if self.received is not None:
            body["received"] = self.received
        return body


class AuthError(FlightCapacityError):
    """The OAuth2 client-credentials exchange failed."""

    status_code = 500

    def __init__(
        self,
        message: str,
        *,
        status: int | None = None,
        provider_body: Any = None,
    ) -> None:
        super().__init__(message)
        self.status = status
        self.provider_body = provider_body

    def details(self) -> dict[str, Any]:
        return {"upstreamStatus": self.status, "upstreamBody": self.provider_body}


class UpstreamError(FlightCapacityError):
    """A provider call returned non-2xx or an unparseable body."""

    status_code = 500

    def __init__(
        self,
        message: str,
        *,
        status: int | None,
        provider_body: Any = None,
    ) -> None:
        super().__init__(message)
        self.status = status
        self.provider_body = provider_body

    def details(self) -> dict[str, Any]:
        return {"upstreamStatus": self.status, "upstreamBody": self.provider_body}


class RouteNotFoundError(FlightCapacityError):
    """The schedule exists but holds no usable origin/destination."""

    status_code = 404
    title = "Could not determine flight route"
