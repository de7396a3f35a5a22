"""Amadeus Self-Service API access."""

from .client import AmadeusGateway
from .token_cache import TokenCache

__all__ = ["AmadeusGateway", "TokenCache"]
