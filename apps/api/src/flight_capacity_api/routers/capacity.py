"""Flight capacity router."""

from __future__ import annotations

from typing import Annotated, Any

from fastapi import APIRouter, Depends, Query

from ..dependencies import get_capacity_service
from ..schemas.common import ErrorResponse
from ..services.capacity_service import CapacityService

router = APIRouter(
    tags=["capacity"],
    responses={
        400: {"model": ErrorResponse},
        404: {"model": ErrorResponse},
        500: {"model": ErrorResponse},
    },
)

CapacityServiceDep = Annotated[CapacityService, Depends(get_capacity_service)]


@router.get("/flight-capacity")
async def flight_capacity(
    service: CapacityServiceDep,
    carrier: Annotated[str | None, Query()] = None,
    number: Annotated[str | None, Query()] = None,
    date: Annotated[str | None, Query()] = None,
    origin: Annotated[str | None, Query()] = None,
    destination: Annotated[str | None, Query()] = None,
) -> dict[str, Any]:
    """Seat availability, cabin breakdown, delay risk and fare trend for a flight.

    Origin and destination are looked up from the schedule when omitted.
    """
    response = await service.get_capacity(carrier, number, date, origin, destination)
    return response.to_payload()
