"""Async HTTP gateway to the Amadeus Self-Service API.

One method per upstream capability.  Each obtains a bearer token from the
shared :class:`TokenCache`, performs a single GET and returns the parsed JSON
body unmodified.  Non-2xx responses raise :class:`UpstreamError` carrying the
provider status and body.  Nothing is retried here.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

import httpx

from flight_capacity_api.config import settings as default_settings
from flight_capacity_api.errors import UpstreamError

from .response_parser import filter_offers
from .token_cache import TokenCache

if TYPE_CHECKING:
    from datetime import date

    from flight_capacity_api.config import ApiSettings

    from .response_parser import DelayInputs

logger = logging.getLogger(__name__)


class AmadeusGateway:
    """Authenticated access to schedule, offers, reference and delay APIs."""

    def __init__(
        self,
        settings: ApiSettings | None = None,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._settings = settings or default_settings
        self._http = httpx.AsyncClient(
            base_url=self._settings.amadeus_base_url,
            timeout=httpx.Timeout(
                self._settings.http_timeout, connect=self._settings.connect_timeout
            ),
            transport=transport,
        )
        self.tokens = TokenCache(
            self._http,
            self._settings.amadeus_client_id,
            self._settings.amadeus_client_secret,
            refresh_margin=self._settings.token_refresh_margin,
        )

    @property
    def settings(self) -> ApiSettings:
        return self._settings

    # ------------------------------------------------------------------
    # Transport helpers
    # ------------------------------------------------------------------

    async def _get(self, operation: str, path: str, params: dict[str, Any]) -> Any:
        token = await self.tokens.get_token()
        try:
            resp = await self._http.get(
                path,
                params=params,
                headers={
                    "Authorization": f"Bearer {token}",
                    "Accept": "application/json",
                },
            )
        except httpx.HTTPError as exc:
            logger.error("Amadeus %s request failed: %s", operation, exc)
            raise UpstreamError(
                f"{operation} request failed: {exc}", status=None
            ) from exc

        if not resp.is_success:
            body = _body_of(resp)
            logger.error(
                "Amadeus %s failed: %d %s", operation, resp.status_code, resp.text
            )
            raise UpstreamError(
                f"{operation} failed: {resp.status_code} - {resp.text}",
                status=resp.status_code,
                provider_body=body,
            )

        try:
            return resp.json()
        except ValueError as exc:
            raise UpstreamError(
                f"{operation} returned a malformed body",
                status=resp.status_code,
                provider_body=resp.text,
            ) from exc

    # ------------------------------------------------------------------
    # API methods
    # ------------------------------------------------------------------

    async def schedule_lookup(
        self, carrier_code: str, flight_number: str, departure_date: date
    ) -> dict[str, Any]:
        """Fetch the dated flight via GET /v2/schedule/flights."""
        return await self._get(
            "Flight status",
            "/v2/schedule/flights",
            {
                "carrierCode": carrier_code,
                "flightNumber": flight_number,
                "scheduledDepartureDate": departure_date.isoformat(),
            },
        )

    async def search_flight_offers(
        self,
        origin: str,
        destination: str,
        departure_date: date,
        *,
        adults: int = 1,
        max_results: int | None = None,
        included_airline: str | None = None,
    ) -> dict[str, Any]:
        """Search for flight offers using GET /v2/shopping/flight-offers.

        Parameters
        ----------
        origin:
            IATA origin code (e.g. ``PER``).
        destination:
            IATA destination code (e.g. ``KUL``).
        departure_date:
            Departure date.
        adults:
            Number of adult passengers (1-9).
        max_results:
            Maximum number of offers; defaults to ``OFFERS_MAX``.
        included_airline:
            Restrict the search to one carrier.
        """
        params: dict[str, Any] = {
            "originLocationCode": origin,
            "destinationLocationCode": destination,
            "departureDate": departure_date.isoformat(),
            "adults": str(adults),
            "max": str(max_results or self._settings.offers_max),
            "currencyCode": self._settings.currency_code,
        }
        if included_airline:
            params["includedAirlineCodes"] = included_airline
        return await self._get(
            "Flight search", "/v2/shopping/flight-offers", params
        )

    async def availability_search(
        self,
        origin: str,
        destination: str,
        departure_date: date,
        *,
        carrier_code: str | None = None,
        flight_number: str | None = None,
    ) -> list[dict[str, Any]]:
        """Offers for the route, narrowed to one flight when carrier+number given."""
        payload = await self.search_flight_offers(
            origin,
            destination,
            departure_date,
            included_airline=carrier_code,
        )
        offers: list[dict[str, Any]] = payload.get("data") or []
        if carrier_code and flight_number:
            offers = filter_offers(offers, carrier_code, flight_number)
        logger.info(
            "Availability %s-%s on %s: %d offer(s)",
            origin,
            destination,
            departure_date,
            len(offers),
        )
        return offers

    async def airline_lookup(self, airline_code: str) -> dict[str, Any]:
        """Look up airline reference data by IATA code."""
        return await self._get(
            "Airline lookup",
            "/v1/reference-data/airlines",
            {"airlineCodes": airline_code},
        )

    async def aircraft_lookup(self, aircraft_code: str) -> dict[str, Any]:
        """Look up aircraft reference data by IATA equipment code."""
        return await self._get(
            "Aircraft lookup",
            self._settings.aircraft_reference_path,
            {"aircraftCode": aircraft_code},
        )

    async def delay_prediction(
        self, carrier_code: str, flight_number: str, inputs: DelayInputs
    ) -> dict[str, Any]:
        """Query the flight-delay prediction model.

        Test-tier keys are often rejected with 403; callers treat this as
        best-effort.
        """
        return await self._get(
            "Delay prediction",
            "/v1/travel/predictions/flight-delay",
            {
                "originLocationCode": inputs.origin,
                "destinationLocationCode": inputs.destination,
                "departureDate": inputs.departure_date,
                "departureTime": inputs.departure_time,
                "arrivalDate": inputs.arrival_date,
                "arrivalTime": inputs.arrival_time,
                "aircraftCode": inputs.aircraft_code,
                "carrierCode": carrier_code,
                "flightNumber": flight_number,
                "duration": inputs.duration,
            },
        )

    async def fare_sample(
        self,
        origin: str,
        destination: str,
        departure_date: date,
        *,
        carrier_code: str | None = None,
    ) -> dict[str, Any]:
        """Small offers search used to find the cheapest fare for one date."""
        return await self.search_flight_offers(
            origin,
            destination,
            departure_date,
            max_results=self._settings.fare_sample_max,
            included_airline=carrier_code,
        )

    async def close(self) -> None:
        """Close the underlying HTTP client and forget the token."""
        await self._http.aclose()
        self.tokens.invalidate()


def _body_of(resp: httpx.Response) -> Any:
    try:
        return resp.json()
    except ValueError:
        return resp.text
