"""Derive a flight's origin and destination from its schedule."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from flight_capacity_api.amadeus.response_parser import route_endpoints

if TYPE_CHECKING:
    from datetime import date

    from flight_capacity_api.amadeus import AmadeusGateway

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class ResolvedRoute:
    """Overall endpoints of a flight plus the schedule they were read from."""

    origin: str
    destination: str
    schedule: dict[str, Any]


class RouteResolver:
    """Looks up the schedule and takes its first and last flight points."""

    def __init__(self, gateway: AmadeusGateway) -> None:
        self._gateway = gateway

    async def resolve(
        self, carrier_code: str, flight_number: str, departure_date: date
    ) -> ResolvedRoute:
        logger.info(
            "Getting schedule to extract route for %s%s on %s",
            carrier_code,
            flight_number,
            departure_date,
        )
        schedule = await self._gateway.schedule_lookup(
            carrier_code, flight_number, departure_date
        )
        origin, destination = route_endpoints(schedule)
        logger.info("Route extracted: %s -> %s", origin, destination)
        return ResolvedRoute(origin, destination, schedule)
