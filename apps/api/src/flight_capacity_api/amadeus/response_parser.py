"""Read fields out of raw Amadeus schedule and flight-offers payloads.

The gateway passes provider JSON through untouched; everything the service
derives from it (route endpoints, matching offers, seat roll-ups, delay
model inputs) is extracted here.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Any

from flight_capacity_api.errors import RouteNotFoundError
from flight_capacity_core.schemas import CabinClass, SeatSummary

logger = logging.getLogger(__name__)

_CABIN_NAMES = frozenset(c.value for c in CabinClass)

# ISO-8601 duration → minutes (e.g. "PT2H30M" → 150)
_DURATION_RE = re.compile(r"PT(?:(\d+)H)?(?:(\d+)M)?")


@dataclass(frozen=True, slots=True)
class DelayInputs:
    """Itinerary fields required by the flight-delay prediction model."""

    origin: str
    destination: str
    departure_date: str
    departure_time: str
    arrival_date: str
    arrival_time: str
    aircraft_code: str
    duration: str


def parse_duration(iso_dur: str) -> int:
    """Convert ISO-8601 duration string to minutes."""
    m = _DURATION_RE.match(iso_dur or "")
    if not m:
        return 0
    hours = int(m.group(1) or 0)
    minutes = int(m.group(2) or 0)
    return hours * 60 + minutes


def format_duration(delta: timedelta) -> str:
    """Render a positive timedelta as ``PT#H#M``."""
    total_minutes = int(delta.total_seconds() // 60)
    hours, minutes = divmod(total_minutes, 60)
    return f"PT{hours}H{minutes}M"


def _normalize_number(number: Any) -> str:
    return str(number).lstrip("0") or "0"


def first_dated_flight(schedule: dict[str, Any]) -> dict[str, Any]:
    data = schedule.get("data") if isinstance(schedule, dict) else None
    if not data or not isinstance(data, list):
        return {}
    return data[0] if isinstance(data[0], dict) else {}


def route_endpoints(schedule: dict[str, Any]) -> tuple[str, str]:
    """Return (origin, destination) from the first and last flight points.

    Intermediate stops are ignored.
    """
    points = first_dated_flight(schedule).get("flightPoints") or []
    if len(points) < 2:
        raise RouteNotFoundError(
            "Flight schedule does not contain route information"
        )
    origin = points[0].get("iataCode")
    destination = points[-1].get("iataCode")
    if not origin or not destination:
        raise RouteNotFoundError("Could not extract route from flight data")
    return origin.upper(), destination.upper()


def matching_segments(
    offer: dict[str, Any], carrier_code: str, flight_number: str
) -> list[dict[str, Any]]:
    """Segments of ``offer`` flown under ``carrier_code`` + ``flight_number``."""
    wanted = _normalize_number(flight_number)
    return [
        seg
        for itin in offer.get("itineraries", [])
        for seg in itin.get("segments", [])
        if seg.get("carrierCode") == carrier_code
        and _normalize_number(seg.get("number", "")) == wanted
    ]


def filter_offers(
    offers: list[dict[str, Any]],
    carrier_code: str,
    flight_number: str | None = None,
) -> list[dict[str, Any]]:
    """Keep offers containing the carrier (and flight number, when given)."""
    if flight_number is not None:
        return [o for o in offers if matching_segments(o, carrier_code, flight_number)]
    return [
        o
        for o in offers
        if any(
            seg.get("carrierCode") == carrier_code
            for itin in o.get("itineraries", [])
            for seg in itin.get("segments", [])
        )
    ]


def offer_total(offer: dict[str, Any]) -> float | None:
    price = offer.get("price") or {}
    total = price.get("grandTotal") or price.get("total")
    if total is None:
        return None
    try:
        return float(total)
    except (TypeError, ValueError):
        return None


def cheapest_total(offers: list[dict[str, Any]]) -> float | None:
    """Lowest offer total, or None when no offer carries a price."""
    totals = [t for t in (offer_total(o) for o in offers) if t is not None]
    return min(totals, default=None)


def _offer_cabin(offer: dict[str, Any], segment_ids: set[str]) -> str | None:
    traveler_pricings = offer.get("travelerPricings") or []
    if not traveler_pricings:
        return None
    fare_details = traveler_pricings[0].get("fareDetailsBySegment") or []
    for detail in fare_details:
        if detail.get("segmentId") in segment_ids:
            return detail.get("cabin")
    if fare_details:
        return fare_details[0].get("cabin")
    return None


def summarize_seats(
    offers: list[dict[str, Any]], carrier_code: str, flight_number: str
) -> SeatSummary:
    """Roll bookable-seat counts up per cabin.

    ``bookable_seats`` sums every offer; each cabin keeps the highest count
    quoted for it since offers for the same cabin overlap.
    """
    total = 0
    cabins: dict[str, int] = {}
    for offer in offers:
        seats = offer.get("numberOfBookableSeats") or 0
        if not isinstance(seats, int):
            continue
        total += seats
        segment_ids = {
            str(seg.get("id"))
            for seg in matching_segments(offer, carrier_code, flight_number)
        }
        cabin = _offer_cabin(offer, segment_ids)
        if cabin in _CABIN_NAMES:
            cabins[cabin] = max(cabins.get(cabin, 0), seats)
    return SeatSummary(offer_count=len(offers), bookable_seats=total, cabins=cabins)


def aircraft_code(
    schedule: dict[str, Any], offers: list[dict[str, Any]] | None = None
) -> str | None:
    """Equipment code from the schedule legs, else from the first offer."""
    for leg in first_dated_flight(schedule).get("legs") or []:
        code = (leg.get("aircraftEquipment") or {}).get("aircraftType")
        if code:
            return str(code)
    for offer in offers or []:
        for itin in offer.get("itineraries", []):
            for seg in itin.get("segments", []):
                code = (seg.get("aircraft") or {}).get("code")
                if code:
                    return str(code)
    return None


def _timing(point: dict[str, Any], key: str) -> datetime | None:
    timings = (point.get(key) or {}).get("timings") or []
    for timing in timings:
        value = timing.get("value")
        if not value:
            continue
        try:
            return datetime.fromisoformat(value)
        except ValueError:
            logger.debug("Unparseable %s timing %r", key, value)
    return None


def delay_inputs(schedule: dict[str, Any]) -> DelayInputs | None:
    """Build delay-model inputs from a schedule, or None if fields are missing."""
    flight = first_dated_flight(schedule)
    points = flight.get("flightPoints") or []
    if len(points) < 2:
        return None
    first, last = points[0], points[-1]
    departure = _timing(first, "departure")
    arrival = _timing(last, "arrival")
    equipment = aircraft_code(schedule)
    if (
        departure is None
        or arrival is None
        or equipment is None
        or not first.get("iataCode")
        or not last.get("iataCode")
    ):
        return None

    if departure.tzinfo is not None and arrival.tzinfo is not None:
        elapsed = arrival - departure
    else:
        elapsed = timedelta(
            minutes=sum(
                parse_duration(leg.get("scheduledLegDuration", ""))
                for leg in flight.get("legs") or []
            )
        )
    if elapsed <= timedelta(0):
        return None

    return DelayInputs(
        origin=first["iataCode"],
        destination=last["iataCode"],
        departure_date=departure.date().isoformat(),
        departure_time=departure.strftime("%H:%M:%S"),
        arrival_date=arrival.date().isoformat(),
        arrival_time=arrival.strftime("%H:%M:%S"),
        aircraft_code=equipment,
        duration=format_duration(elapsed),
    )
