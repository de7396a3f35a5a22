"""FastAPI dependency injection providers."""

from __future__ import annotations

from typing import Annotated

from fastapi import Depends

from flight_capacity_api.amadeus import AmadeusGateway
from flight_capacity_api.services.capacity_service import CapacityService
from flight_capacity_api.services.flight_service import FlightService

_gateway: AmadeusGateway | None = None


def get_gateway() -> AmadeusGateway:
    """Return the process-wide gateway (and with it the cached token)."""
    global _gateway
    if _gateway is None:
        _gateway = AmadeusGateway()
    return _gateway


async def close_gateway() -> None:
    global _gateway
    if _gateway is not None:
        await _gateway.close()
    _gateway = None


GatewayDep = Annotated[AmadeusGateway, Depends(get_gateway)]


def get_capacity_service(gateway: GatewayDep) -> CapacityService:
    return CapacityService(gateway)


def get_flight_service(gateway: GatewayDep) -> FlightService:
    return FlightService(gateway)
