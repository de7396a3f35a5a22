"""Pydantic-compatible enums shared across the service."""

from enum import StrEnum


class CabinClass(StrEnum):
    """Cabin (fare class grouping) reported per segment by the provider."""

    ECONOMY = "ECONOMY"
    PREMIUM_ECONOMY = "PREMIUM_ECONOMY"
    BUSINESS = "BUSINESS"
    FIRST = "FIRST"


class AmadeusEnvironment(StrEnum):
    """Amadeus Self-Service environment selector."""

    TEST = "test"
    PRODUCTION = "production"
