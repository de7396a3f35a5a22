"""Cheapest-fare sampling over a window of dates around a flight."""

from __future__ import annotations

import asyncio
import logging
from datetime import date, timedelta
from typing import TYPE_CHECKING, Any

import httpx

from flight_capacity_api.amadeus.response_parser import cheapest_total, filter_offers
from flight_capacity_api.errors import FlightCapacityError
from flight_capacity_core.schemas import FareTrendPoint

if TYPE_CHECKING:
    from flight_capacity_api.amadeus import AmadeusGateway

logger = logging.getLogger(__name__)


class FareTrendSampler:
    """Samples one cheapest fare per day, centre date ± ``window`` days.

    Every date is looked up concurrently under its own timeout, so a hung
    upstream call only blanks its own point.
    """

    def __init__(
        self,
        gateway: AmadeusGateway,
        *,
        timeout: float = 5.0,
        window: int = 3,
    ) -> None:
        self._gateway = gateway
        self._timeout = timeout
        self._window = window

    def dates(self, center_date: date) -> list[date]:
        return [
            center_date + timedelta(days=offset)
            for offset in range(-self._window, self._window + 1)
        ]

    async def sample(
        self,
        origin: str,
        destination: str,
        center_date: date,
        carrier_code: str | None = None,
    ) -> list[FareTrendPoint]:
        """Return one point per date in ascending order; failures price as None."""
        return list(
            await asyncio.gather(
                *(
                    self._sample_one(origin, destination, day, carrier_code)
                    for day in self.dates(center_date)
                )
            )
        )

    async def _sample_one(
        self,
        origin: str,
        destination: str,
        day: date,
        carrier_code: str | None,
    ) -> FareTrendPoint:
        try:
            payload = await asyncio.wait_for(
                self._gateway.fare_sample(
                    origin, destination, day, carrier_code=carrier_code
                ),
                timeout=self._timeout,
            )
        except TimeoutError:
            logger.warning(
                "Fare sample %s-%s on %s timed out", origin, destination, day
            )
            return FareTrendPoint(date=day)
        except (FlightCapacityError, httpx.HTTPError) as exc:
            logger.warning(
                "Fare sample %s-%s on %s failed: %s", origin, destination, day, exc
            )
            return FareTrendPoint(date=day)

        try:
            price = _cheapest(payload, carrier_code)
        except (AttributeError, KeyError, TypeError, ValueError) as exc:
            logger.warning(
                "Fare sample %s-%s on %s returned an unusable body: %s",
                origin,
                destination,
                day,
                exc,
            )
            return FareTrendPoint(date=day)
        return FareTrendPoint(date=day, price=price)


def _cheapest(payload: Any, carrier_code: str | None) -> float | None:
    offers = (payload.get("data") or []) if isinstance(payload, dict) else []
    if carrier_code:
        offers = filter_offers(offers, carrier_code)
    return cheapest_total(offers)
