"""Flight offers and flight status routers."""

from __future__ import annotations

from typing import Annotated, Any

from fastapi import APIRouter, Depends, Query

from ..dependencies import get_flight_service
from ..schemas.common import ErrorResponse
from ..services.flight_service import FlightService

router = APIRouter(
    tags=["flights"],
    responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)

FlightServiceDep = Annotated[FlightService, Depends(get_flight_service)]


@router.get("/flights")
async def search_flights(
    service: FlightServiceDep,
    origin: Annotated[str | None, Query()] = None,
    destination: Annotated[str | None, Query()] = None,
    date: Annotated[str | None, Query()] = None,
    adults: Annotated[str | None, Query()] = None,
) -> dict[str, Any]:
    """Raw flight offers for a route and date."""
    return await service.search_flights(origin, destination, date, adults)


@router.get("/flight-status")
async def flight_status(
    service: FlightServiceDep,
    carrier: Annotated[str | None, Query()] = None,
    number: Annotated[str | None, Query()] = None,
    date: Annotated[str | None, Query()] = None,
) -> dict[str, Any]:
    """Raw schedule for one dated flight."""
    return await service.flight_status(carrier, number, date)
