"""CLI for running the API and querying flights from a terminal."""

from __future__ import annotations

import asyncio
import json
import logging
import sys
from typing import TYPE_CHECKING, Any

import click

from flight_capacity_api.config import settings
from flight_capacity_api.errors import FlightCapacityError

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable

    from flight_capacity_api.amadeus import AmadeusGateway

logger = logging.getLogger(__name__)


def _run(call: Callable[[AmadeusGateway], Awaitable[dict[str, Any]]]) -> None:
    from flight_capacity_api.amadeus import AmadeusGateway

    async def _main() -> dict[str, Any]:
        gateway = AmadeusGateway()
        try:
            return await call(gateway)
        finally:
            await gateway.close()

    try:
        result = asyncio.run(_main())
    except FlightCapacityError as exc:
        failure = {
            "success": False,
            "error": exc.title or "Request failed",
            "message": exc.message,
            **exc.details(),
        }
        click.echo(json.dumps(failure, indent=2, default=str), err=True)
        sys.exit(1)
    click.echo(json.dumps(result, indent=2, ensure_ascii=False, default=str))


@click.group()
@click.option("--log-level", default=None, help="Logging level (default: LOG_LEVEL)")
def cli(log_level: str | None) -> None:
    """Flight Capacity CLI."""
    logging.basicConfig(
        level=(log_level or settings.log_level).upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


@cli.command()
@click.option("--host", default=None, help="Bind address (default from HOST)")
@click.option("--port", default=None, type=int, help="Listen port (default from PORT)")
@click.option("--reload", is_flag=True, help="Reload on code changes")
def serve(host: str | None, port: int | None, reload: bool) -> None:
    """Run the HTTP API with uvicorn."""
    import uvicorn

    bind_host = host or settings.host
    bind_port = port or settings.port
    logger.info("FlightCapacity API running on %s:%d", bind_host, bind_port)
    logger.info("Environment: %s", settings.amadeus_env)
    logger.info("Health check: %s/health", settings.public_api_url)
    uvicorn.run(
        "flight_capacity_api.main:app",
        host=bind_host,
        port=bind_port,
        reload=reload,
        log_level=settings.log_level.lower(),
    )


@cli.command()
@click.argument("carrier")
@click.argument("number")
@click.argument("departure_date")
@click.option("--origin", default=None, help="Origin IATA code (resolved if omitted)")
@click.option(
    "--destination", default=None, help="Destination IATA code (resolved if omitted)"
)
def capacity(
    carrier: str,
    number: str,
    departure_date: str,
    origin: str | None,
    destination: str | None,
) -> None:
    """Aggregated capacity for CARRIER NUMBER on DEPARTURE_DATE."""
    from flight_capacity_api.services.capacity_service import CapacityService

    async def _call(gateway: AmadeusGateway) -> dict[str, Any]:
        response = await CapacityService(gateway).get_capacity(
            carrier, number, departure_date, origin, destination
        )
        return response.to_payload()

    _run(_call)


@cli.command()
@click.argument("carrier")
@click.argument("number")
@click.argument("departure_date")
def status(carrier: str, number: str, departure_date: str) -> None:
    """Raw schedule for CARRIER NUMBER on DEPARTURE_DATE."""
    from flight_capacity_api.services.flight_service import FlightService

    _run(lambda gw: FlightService(gw).flight_status(carrier, number, departure_date))


@cli.command()
@click.argument("origin")
@click.argument("destination")
@click.argument("departure_date")
@click.option("--adults", default="1", help="Adult passengers (1-9)")
def offers(origin: str, destination: str, departure_date: str, adults: str) -> None:
    """Raw flight offers from ORIGIN to DESTINATION on DEPARTURE_DATE."""
    from flight_capacity_api.services.flight_service import FlightService

    _run(
        lambda gw: FlightService(gw).search_flights(
            origin, destination, departure_date, adults
        )
    )


if __name__ == "__main__":
    cli()
