"""Flight capacity aggregation.

Schedule and availability are required: they are fetched concurrently and
the first failure aborts the request.  Airline, aircraft, delay prediction
and fare trend are enrichment: they run concurrently afterwards, and any
failure only leaves its field out of the response.
"""

from __future__ import annotations

import asyncio
import logging
from typing import TYPE_CHECKING, Any

from flight_capacity_api.amadeus.reference_data import aircraft_name, legroom_for
from flight_capacity_api.amadeus.response_parser import (
    aircraft_code,
    delay_inputs,
    summarize_seats,
)
from flight_capacity_api.schemas.capacity import CapacityQuery, CapacityResponse
from flight_capacity_api.services.best_effort import Outcome, attempt
from flight_capacity_api.services.fare_trend import FareTrendSampler
from flight_capacity_api.services.route_resolver import RouteResolver
from flight_capacity_api.validation import (
    parse_airport,
    parse_carrier,
    parse_date,
    parse_flight_number,
    require_params,
)
from flight_capacity_core.schemas import FlightQuery

if TYPE_CHECKING:
    from flight_capacity_api.amadeus import AmadeusGateway

logger = logging.getLogger(__name__)

CAPACITY_EXAMPLE = "/api/flight-capacity?carrier=LH&number=400&date=2025-11-10"


async def _skipped(reason: str) -> Outcome[Any]:
    return Outcome.skipped(reason)


class CapacityService:
    """Orchestrates route resolution, required lookups and enrichment."""

    def __init__(
        self,
        gateway: AmadeusGateway,
        *,
        resolver: RouteResolver | None = None,
        fare_sampler: FareTrendSampler | None = None,
    ) -> None:
        self._gateway = gateway
        self._resolver = resolver or RouteResolver(gateway)
        self._fare_sampler = fare_sampler or FareTrendSampler(
            gateway,
            timeout=gateway.settings.fare_trend_timeout,
            window=gateway.settings.fare_trend_window,
        )

    @staticmethod
    def build_query(
        carrier: str | None,
        number: str | None,
        date: str | None,
        origin: str | None = None,
        destination: str | None = None,
    ) -> FlightQuery:
        """Validate raw inputs into a :class:`FlightQuery`."""
        require_params(CAPACITY_EXAMPLE, carrier=carrier, number=number, date=date)
        assert carrier and number and date
        return FlightQuery(
            carrier_code=parse_carrier(carrier),
            flight_number=parse_flight_number(number),
            date=parse_date(date),
            origin=parse_airport(origin) if origin else None,
            destination=parse_airport(destination) if destination else None,
        )

    async def get_capacity(
        self,
        carrier: str | None,
        number: str | None,
        date: str | None,
        origin: str | None = None,
        destination: str | None = None,
    ) -> CapacityResponse:
        query = self.build_query(carrier, number, date, origin, destination)

        schedule: Any = None
        if not query.origin or not query.destination:
            resolved = await self._resolver.resolve(
                query.carrier_code, query.flight_number, query.date
            )
            query = query.with_route(resolved.origin, resolved.destination)
            schedule = resolved.schedule

        logger.info(
            "Getting flight capacity: %s from %s to %s on %s",
            query.flight_code,
            query.origin,
            query.destination,
            query.date,
        )
        schedule, offers = await self._fetch_required(query, schedule)

        airline, aircraft, delay, trend = await self._fetch_enrichment(
            query, schedule, offers
        )
        equipment = aircraft_code(schedule, offers)

        assert query.origin and query.destination and query.route
        return CapacityResponse(
            query=CapacityQuery(
                carrier=query.carrier_code,
                number=query.flight_number,
                flight_code=query.flight_code,
                route=query.route,
                origin=query.origin,
                destination=query.destination,
                date=query.date.isoformat(),
            ),
            schedule=schedule,
            availability=offers,
            seat_summary=summarize_seats(
                offers, query.carrier_code, query.flight_number
            ),
            airline=airline.value if airline.ok else None,
            aircraft=aircraft.value if aircraft.ok else None,
            aircraft_name=aircraft_name(equipment),
            legroom=legroom_for(query.carrier_code),
            delay_prediction=delay.value if delay.ok else None,
            fare_trend=trend.value if trend.ok else None,
        )

    async def _fetch_required(
        self, query: FlightQuery, schedule: Any
    ) -> tuple[Any, list[dict[str, Any]]]:
        assert query.origin and query.destination
        availability = self._gateway.availability_search(
            query.origin,
            query.destination,
            query.date,
            carrier_code=query.carrier_code,
            flight_number=query.flight_number,
        )
        if schedule is not None:
            # Already fetched while resolving the route.
            return schedule, await availability

        tasks = [
            asyncio.ensure_future(
                self._gateway.schedule_lookup(
                    query.carrier_code, query.flight_number, query.date
                )
            ),
            asyncio.ensure_future(availability),
        ]
        try:
            schedule, offers = await asyncio.gather(*tasks)
        except Exception:
            for task in tasks:
                task.cancel()
            raise
        return schedule, offers

    async def _fetch_enrichment(
        self,
        query: FlightQuery,
        schedule: Any,
        offers: list[dict[str, Any]],
    ) -> tuple[Outcome[Any], Outcome[Any], Outcome[Any], Outcome[Any]]:
        assert query.origin and query.destination
        equipment = aircraft_code(schedule, offers)
        inputs = delay_inputs(schedule) if isinstance(schedule, dict) else None

        return await asyncio.gather(
            attempt("airline lookup", self._gateway.airline_lookup(query.carrier_code)),
            attempt("aircraft lookup", self._gateway.aircraft_lookup(equipment))
            if equipment
            else _skipped("no aircraft code"),
            attempt(
                "delay prediction",
                self._gateway.delay_prediction(
                    query.carrier_code, query.flight_number, inputs
                ),
            )
            if inputs
            else _skipped("schedule lacks delay model inputs"),
            attempt(
                "fare trend",
                self._fare_sampler.sample(
                    query.origin, query.destination, query.date, query.carrier_code
                ),
            ),
        )
