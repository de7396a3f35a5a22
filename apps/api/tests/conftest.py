"""Shared fixtures and stub payloads for API tests."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

import httpx
import pytest

from flight_capacity_api.amadeus import AmadeusGateway
from flight_capacity_api.amadeus.token_cache import TOKEN_PATH
from flight_capacity_api.config import ApiSettings
from flight_capacity_api.dependencies import get_gateway
from flight_capacity_api.main import create_app

if TYPE_CHECKING:
    from collections.abc import AsyncIterator, Callable

SCHEDULE_PATH = "/v2/schedule/flights"
OFFERS_PATH = "/v2/shopping/flight-offers"
AIRLINES_PATH = "/v1/reference-data/airlines"
AIRCRAFT_PATH = "/v1/reference-data/aircraft"
DELAY_PATH = "/v1/travel/predictions/flight-delay"


class FakeAmadeus:
    """In-process stand-in for the Amadeus API, served via MockTransport."""

    def __init__(self) -> None:
        self.requests: list[httpx.Request] = []
        self.token_lifetime = 1799
        self._issued = 0
        self._routes: dict[str, Callable[[httpx.Request], httpx.Response]] = {}

    def on(
        self,
        path: str,
        status_code: int = 200,
        json: Any = None,
        handler: Callable[[httpx.Request], httpx.Response] | None = None,
    ) -> None:
        if handler is None:

            def handler(_: httpx.Request) -> httpx.Response:
                return httpx.Response(status_code, json=json)

        self._routes[path] = handler

    def count(self, path: str) -> int:
        return sum(1 for r in self.requests if r.url.path == path)

    def last(self, path: str) -> httpx.Request:
        return [r for r in self.requests if r.url.path == path][-1]

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if request.url.path == TOKEN_PATH:
            self._issued += 1
            return httpx.Response(
                200,
                json={
                    "type": "amadeusOAuth2Token",
                    "access_token": f"token-{self._issued}",
                    "expires_in": self.token_lifetime,
                },
            )
        handler = self._routes.get(request.url.path)
        if handler is None:
            return httpx.Response(
                404, json={"errors": [{"status": 404, "title": "NOT FOUND"}]}
            )
        return handler(request)

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self)


def schedule_payload(
    points: list[str],
    *,
    carrier: str = "LH",
    number: int = 400,
    departure: str = "2025-12-01T10:30+01:00",
    arrival: str = "2025-12-01T13:20-05:00",
    aircraft: str | None = "744",
) -> dict[str, Any]:
    flight_points: list[dict[str, Any]] = [{"iataCode": code} for code in points]
    if flight_points:
        flight_points[0]["departure"] = {
            "timings": [{"qualifier": "STD", "value": departure}]
        }
        flight_points[-1]["arrival"] = {
            "timings": [{"qualifier": "STA", "value": arrival}]
        }
    legs = []
    if aircraft and len(points) >= 2:
        legs.append(
            {
                "boardPointIataCode": points[0],
                "offPointIataCode": points[-1],
                "aircraftEquipment": {"aircraftType": aircraft},
                "scheduledLegDuration": "PT8H50M",
            }
        )
    return {
        "meta": {"count": 1},
        "data": [
            {
                "type": "DatedFlight",
                "scheduledDepartureDate": departure[:10],
                "flightDesignator": {"carrierCode": carrier, "flightNumber": number},
                "flightPoints": flight_points,
                "legs": legs,
            }
        ],
    }


def offer(
    *,
    offer_id: str = "1",
    carrier: str = "LH",
    number: str = "400",
    seats: int = 9,
    cabin: str = "ECONOMY",
    total: str = "512.30",
    origin: str = "FRA",
    destination: str = "JFK",
) -> dict[str, Any]:
    return {
        "type": "flight-offer",
        "id": offer_id,
        "numberOfBookableSeats": seats,
        "itineraries": [
            {
                "duration": "PT8H50M",
                "segments": [
                    {
                        "id": "1",
                        "departure": {"iataCode": origin},
                        "arrival": {"iataCode": destination},
                        "carrierCode": carrier,
                        "number": number,
                        "aircraft": {"code": "744"},
                    }
                ],
            }
        ],
        "price": {"currency": "USD", "total": total, "grandTotal": total},
        "travelerPricings": [
            {
                "travelerId": "1",
                "fareDetailsBySegment": [{"segmentId": "1", "cabin": cabin}],
            }
        ],
    }


@pytest.fixture
def settings() -> ApiSettings:
    return ApiSettings(
        _env_file=None,
        amadeus_client_id="test-id",
        amadeus_client_secret="test-secret",
    )


@pytest.fixture
def fake_amadeus() -> FakeAmadeus:
    return FakeAmadeus()


@pytest.fixture
async def gateway(
    settings: ApiSettings, fake_amadeus: FakeAmadeus
) -> AsyncIterator[AmadeusGateway]:
    gw = AmadeusGateway(settings, transport=fake_amadeus.transport)
    yield gw
    await gw.close()


@pytest.fixture
async def client(gateway: AmadeusGateway) -> AsyncIterator[httpx.AsyncClient]:
    app = create_app()
    app.dependency_overrides[get_gateway] = lambda: gateway
    async with httpx.AsyncClient(
        transport=httpx.ASGITransport(app=app), base_url="http://test"
    ) as http:
        yield http
