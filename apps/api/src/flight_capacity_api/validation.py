"""Input validation shared by the HTTP routes.

Every check runs before any upstream call and raises
:class:`~flight_capacity_api.errors.ValidationError` with what was expected
and what was received.
"""

from __future__ import annotations

import re
from datetime import date

from flight_capacity_api.errors import ValidationError

_DATE_RE = re.compile(r"\d{4}-\d{2}-\d{2}")
_CARRIER_RE = re.compile(r"[A-Za-z]{2}")
_FLIGHT_NUMBER_RE = re.compile(r"\d{1,4}")
_AIRPORT_RE = re.compile(r"[A-Za-z]{3}")


def require_params(example: str, **params: str | None) -> None:
    """Reject the request when any named parameter is missing or blank."""
    if any(not value for value in params.values()):
        raise ValidationError(
            "Missing required parameters",
            extra={"required": list(params), "example": example},
        )


def parse_date(value: str) -> date:
    if not _DATE_RE.fullmatch(value):
        raise ValidationError(
            "Invalid date format", expected="YYYY-MM-DD", received=value
        )
    try:
        return date.fromisoformat(value)
    except ValueError:
        raise ValidationError(
            "Invalid date format", expected="YYYY-MM-DD", received=value
        ) from None


def parse_carrier(value: str) -> str:
    if not _CARRIER_RE.fullmatch(value):
        raise ValidationError(
            "Invalid carrier code",
            expected="2-letter airline code (e.g., MH, QF)",
            received=value,
        )
    return value.upper()


def parse_flight_number(value: str) -> str:
    if not _FLIGHT_NUMBER_RE.fullmatch(value):
        raise ValidationError(
            "Invalid flight number",
            expected="1-4 digits (e.g., 124, 7)",
            received=value,
        )
    return value


def parse_airports(origin: str, destination: str) -> tuple[str, str]:
    if not _AIRPORT_RE.fullmatch(origin) or not _AIRPORT_RE.fullmatch(destination):
        raise ValidationError(
            "Invalid airport code",
            expected="3-letter IATA code (e.g., PER, KUL)",
            received={"origin": origin, "destination": destination},
        )
    return origin.upper(), destination.upper()


def parse_airport(value: str) -> str:
    if not _AIRPORT_RE.fullmatch(value):
        raise ValidationError(
            "Invalid airport code",
            expected="3-letter IATA code (e.g., PER, KUL)",
            received=value,
        )
    return value.upper()
