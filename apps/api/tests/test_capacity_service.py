"""Capacity aggregation: required vs best-effort calls."""

from __future__ import annotations

from datetime import date

import pytest
from conftest import (
    AIRCRAFT_PATH,
    AIRLINES_PATH,
    DELAY_PATH,
    OFFERS_PATH,
    SCHEDULE_PATH,
    offer,
    schedule_payload,
)

from flight_capacity_api.amadeus import AmadeusGateway
from flight_capacity_api.amadeus.token_cache import TOKEN_PATH
from flight_capacity_api.errors import (
    RouteNotFoundError,
    UpstreamError,
    ValidationError,
)
from flight_capacity_api.schemas.capacity import CapacityQuery, CapacityResponse
from flight_capacity_api.services.capacity_service import CapacityService
from flight_capacity_api.services.fare_trend import FareTrendSampler
from flight_capacity_api.services.route_resolver import RouteResolver
from flight_capacity_core.schemas import SeatSummary


@pytest.fixture
def service(gateway) -> CapacityService:
    return CapacityService(gateway, fare_sampler=FareTrendSampler(gateway, timeout=1.0))


def _stub_all(fake_amadeus, points=("FRA", "JFK"), offers=None) -> None:
    fake_amadeus.on(SCHEDULE_PATH, json=schedule_payload(list(points)))
    fake_amadeus.on(
        OFFERS_PATH, json={"data": offers if offers is not None else [offer()]}
    )
    fake_amadeus.on(
        AIRLINES_PATH,
        json={"data": [{"iataCode": "LH", "businessName": "LUFTHANSA"}]},
    )
    fake_amadeus.on(AIRCRAFT_PATH, json={"data": [{"code": "744"}]})
    fake_amadeus.on(
        DELAY_PATH,
        json={"data": [{"result": "LESS_THAN_30_MINUTES", "probability": "0.72"}]},
    )


async def test_route_resolver_ignores_stopovers(gateway, fake_amadeus):
    fake_amadeus.on(SCHEDULE_PATH, json=schedule_payload(["DXB", "DOH", "LHR"]))

    route = await RouteResolver(gateway).resolve("QR", "1", date(2025, 12, 1))

    assert (route.origin, route.destination) == ("DXB", "LHR")
    assert route.schedule["data"][0]["flightPoints"][1]["iataCode"] == "DOH"


async def test_resolved_schedule_is_not_fetched_twice(service, fake_amadeus):
    _stub_all(fake_amadeus)

    response = await service.get_capacity("lh", "400", "2025-12-01")

    assert response.query.route == "FRA-JFK"
    assert response.query.carrier == "LH"
    assert fake_amadeus.count(SCHEDULE_PATH) == 1
    availability_request = [
        r
        for r in fake_amadeus.requests
        if r.url.path == OFFERS_PATH and r.url.params["max"] != "5"
    ][0]
    assert availability_request.url.params["originLocationCode"] == "FRA"
    assert availability_request.url.params["destinationLocationCode"] == "JFK"


async def test_supplied_route_skips_resolution(service, fake_amadeus):
    _stub_all(fake_amadeus, points=("MUC", "EWR"))

    response = await service.get_capacity("LH", "400", "2025-12-01", "fra", "jfk")

    # Caller's route wins over the schedule's endpoints.
    assert response.query.route == "FRA-JFK"
    assert fake_amadeus.count(SCHEDULE_PATH) == 1


async def test_all_enrichment_present_on_success(service, fake_amadeus):
    _stub_all(fake_amadeus)

    payload = (await service.get_capacity("LH", "400", "2025-12-01")).to_payload()

    assert payload["airline"]["data"][0]["businessName"] == "LUFTHANSA"
    assert payload["aircraft"] == {"data": [{"code": "744"}]}
    assert payload["aircraftName"] == "Boeing 747-400"
    assert payload["delayPrediction"]["data"][0]["probability"] == "0.72"
    assert len(payload["fareTrend"]) == 7
    assert payload["legroom"]["ECONOMY"] == "31"
    assert payload["seatSummary"]["bookableSeats"] == 9
    assert fake_amadeus.count(TOKEN_PATH) == 1


async def test_enrichment_failures_leave_fields_absent(service, fake_amadeus):
    _stub_all(fake_amadeus)
    fake_amadeus.on(AIRLINES_PATH, status_code=500, json={"errors": []})
    fake_amadeus.on(AIRCRAFT_PATH, status_code=404, json={"errors": []})
    fake_amadeus.on(DELAY_PATH, status_code=403, json={"errors": [{"status": 403}]})

    payload = (await service.get_capacity("LH", "400", "2025-12-01")).to_payload()

    assert "airline" not in payload
    assert "aircraft" not in payload
    assert "delayPrediction" not in payload
    assert payload["schedule"]["data"]
    assert payload["availability"]


async def test_equipment_calls_skipped_without_aircraft_code(service, fake_amadeus):
    _stub_all(fake_amadeus)
    schedule = schedule_payload(["FRA", "JFK"], aircraft=None)
    fake_amadeus.on(SCHEDULE_PATH, json=schedule)
    fake_amadeus.on(OFFERS_PATH, json={"data": []})

    payload = (await service.get_capacity("LH", "400", "2025-12-01")).to_payload()

    assert fake_amadeus.count(DELAY_PATH) == 0
    assert fake_amadeus.count(AIRCRAFT_PATH) == 0
    assert "delayPrediction" not in payload
    assert "aircraftName" not in payload


async def test_required_failure_aborts_request(service, fake_amadeus):
    _stub_all(fake_amadeus)
    fake_amadeus.on(OFFERS_PATH, status_code=500, json={"errors": [{"status": 500}]})

    with pytest.raises(UpstreamError) as exc_info:
        await service.get_capacity("LH", "400", "2025-12-01", "FRA", "JFK")

    assert exc_info.value.status == 500
    assert fake_amadeus.count(AIRLINES_PATH) == 0


async def test_route_not_found_propagates(service, fake_amadeus):
    fake_amadeus.on(SCHEDULE_PATH, json={"meta": {"count": 0}, "data": []})

    with pytest.raises(RouteNotFoundError):
        await service.get_capacity("LH", "400", "2025-12-01")

    assert fake_amadeus.count(OFFERS_PATH) == 0


@pytest.mark.parametrize(
    ("carrier", "number", "day", "title"),
    [
        ("L", "400", "2025-12-01", "Invalid carrier code"),
        ("L1", "400", "2025-12-01", "Invalid carrier code"),
        ("LH", "40000", "2025-12-01", "Invalid flight number"),
        ("LH", "4a", "2025-12-01", "Invalid flight number"),
        ("LH", "400", "2025/12/01", "Invalid date format"),
        ("LH", "400", "Dec 1", "Invalid date format"),
        ("LH", "400", "2025-02-30", "Invalid date format"),
        ("LH\n", "400", "2025-12-01", "Invalid carrier code"),
        ("LH", "400\n", "2025-12-01", "Invalid flight number"),
        ("LH", "400", "2025-12-01\n", "Invalid date format"),
        ("LH", None, "2025-12-01", "Missing required parameters"),
    ],
)
async def test_validation_happens_before_upstream(
    service, fake_amadeus, carrier, number, day, title
):
    with pytest.raises(ValidationError) as exc_info:
        await service.get_capacity(carrier, number, day)

    assert exc_info.value.title == title
    assert fake_amadeus.requests == []


async def test_invalid_supplied_airport_rejected(service, fake_amadeus):
    with pytest.raises(ValidationError, match="Invalid airport code"):
        await service.get_capacity("LH", "400", "2025-12-01", "FRANKFURT", "JFK")
    assert fake_amadeus.requests == []


@pytest.mark.parametrize("origin", ["FRA\n", "FR"])
async def test_supplied_airport_must_match_whole_value(service, fake_amadeus, origin):
    with pytest.raises(ValidationError, match="Invalid airport code"):
        await service.get_capacity("LH", "400", "2025-12-01", origin, "JFK")
    assert fake_amadeus.requests == []


async def test_fare_window_follows_gateway_settings(settings, fake_amadeus):
    narrow = settings.model_copy(update={"fare_trend_window": 1})
    gateway = AmadeusGateway(narrow, transport=fake_amadeus.transport)
    _stub_all(fake_amadeus)

    try:
        payload = (
            await CapacityService(gateway).get_capacity("LH", "400", "2025-12-01")
        ).to_payload()
    finally:
        await gateway.close()

    assert [p["date"] for p in payload["fareTrend"]] == [
        "2025-11-30",
        "2025-12-01",
        "2025-12-02",
    ]


def test_payload_keeps_null_schedule_but_drops_missing_enrichment():
    response = CapacityResponse(
        query=CapacityQuery(
            carrier="LH",
            number="400",
            flight_code="LH400",
            route="FRA-JFK",
            origin="FRA",
            destination="JFK",
            date="2025-12-01",
        ),
        schedule=None,
        availability=[],
        seat_summary=SeatSummary(offer_count=0, bookable_seats=0, cabins={}),
    )

    payload = response.to_payload()

    assert "schedule" in payload
    assert payload["schedule"] is None
    assert payload["availability"] == []
    for field in ("airline", "aircraft", "aircraftName", "legroom"):
        assert field not in payload
    assert "delayPrediction" not in payload
    assert "fareTrend" not in payload
