"""Core schemas for Flight Capacity."""

from .enums import AmadeusEnvironment, CabinClass
from .flight import FareTrendPoint, FlightQuery, SeatSummary

__all__ = [
    "AmadeusEnvironment",
    "CabinClass",
    "FareTrendPoint",
    "FlightQuery",
    "SeatSummary",
]
