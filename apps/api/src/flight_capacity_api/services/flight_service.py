"""Pass-through flight offer search and flight status lookups."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from flight_capacity_api.errors import ValidationError
from flight_capacity_api.validation import (
    parse_airports,
    parse_carrier,
    parse_date,
    parse_flight_number,
    require_params,
)

if TYPE_CHECKING:
    from flight_capacity_api.amadeus import AmadeusGateway

logger = logging.getLogger(__name__)

FLIGHTS_EXAMPLE = "/api/flights?origin=PER&destination=KUL&date=2025-12-15"
STATUS_EXAMPLE = "/api/flight-status?carrier=MH&number=124&date=2025-10-31"


def _parse_adults(value: str | None) -> int:
    if not value:
        return 1
    try:
        adults = int(value)
    except ValueError:
        adults = 0
    if not 1 <= adults <= 9:
        raise ValidationError(
            "Invalid passenger count", expected="1-9 adults", received=value
        )
    return adults


class FlightService:
    """Validates caller input and relays the provider payload unchanged."""

    def __init__(self, gateway: AmadeusGateway) -> None:
        self._gateway = gateway

    async def search_flights(
        self,
        origin: str | None,
        destination: str | None,
        date: str | None,
        adults: str | None = None,
    ) -> dict[str, Any]:
        require_params(
            FLIGHTS_EXAMPLE, origin=origin, destination=destination, date=date
        )
        assert origin and destination and date
        departure_date = parse_date(date)
        origin, destination = parse_airports(origin, destination)
        passengers = _parse_adults(adults)

        logger.info("Searching flights: %s -> %s on %s", origin, destination, date)
        data = await self._gateway.search_flight_offers(
            origin, destination, departure_date, adults=passengers
        )
        return {
            "success": True,
            "query": {
                "origin": origin,
                "destination": destination,
                "date": departure_date.isoformat(),
                "adults": passengers,
            },
            "data": data,
        }

    async def flight_status(
        self,
        carrier: str | None,
        number: str | None,
        date: str | None,
    ) -> dict[str, Any]:
        require_params(STATUS_EXAMPLE, carrier=carrier, number=number, date=date)
        assert carrier and number and date
        departure_date = parse_date(date)
        carrier_code = parse_carrier(carrier)
        flight_number = parse_flight_number(number)

        logger.info(
            "Getting flight status: %s%s on %s", carrier_code, flight_number, date
        )
        data = await self._gateway.schedule_lookup(
            carrier_code, flight_number, departure_date
        )
        return {
            "success": True,
            "query": {
                "carrier": carrier_code,
                "number": flight_number,
                "flightCode": f"{carrier_code}{flight_number}",
                "date": departure_date.isoformat(),
            },
            "data": data,
        }
