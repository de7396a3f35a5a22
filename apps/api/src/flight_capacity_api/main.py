"""FastAPI application factory."""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import TYPE_CHECKING, Any

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from flight_capacity_api.config import settings
from flight_capacity_api.dependencies import close_gateway
from flight_capacity_api.errors import FlightCapacityError
from flight_capacity_api.middleware.request_logging import RequestLoggingMiddleware
from flight_capacity_api.routers import capacity, flights, health

if TYPE_CHECKING:
    from collections.abc import AsyncGenerator

logger = logging.getLogger(__name__)

AVAILABLE_ENDPOINTS = [
    "GET /health",
    "GET /api/flights?origin=XXX&destination=YYY&date=YYYY-MM-DD",
    "GET /api/flight-status?carrier=XX&number=123&date=YYYY-MM-DD",
    "GET /api/flight-capacity?carrier=XX&number=123&date=YYYY-MM-DD"
    "&origin=XXX&destination=YYY",
]

# ``error`` title for failures that do not carry their own.
_FAILURE_TITLES: dict[str, str] = {
    "/api/flights": "Failed to fetch flight data",
    "/api/flight-status": "Failed to fetch flight status",
    "/api/flight-capacity": "Failed to fetch flight capacity",
}


@asynccontextmanager
async def _lifespan(app: FastAPI) -> AsyncGenerator[None]:
    """Manage startup / shutdown resources."""
    logger.info(
        "%s starting (environment=%s)", settings.service_name, settings.amadeus_env
    )
    yield
    await close_gateway()


async def _capacity_error_handler(
    request: Request, exc: FlightCapacityError
) -> JSONResponse:
    if exc.status_code >= 500:
        logger.error("%s failed: %s", request.url.path, exc.message)
    body: dict[str, Any] = {
        "success": False,
        "error": exc.title or _FAILURE_TITLES.get(request.url.path, "Request failed"),
        "message": exc.message,
        **exc.details(),
    }
    return JSONResponse(status_code=exc.status_code, content=body)


async def _request_validation_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={
            "success": False,
            "error": "Invalid request parameters",
            "message": "One or more query parameters are malformed",
            "received": [
                {"loc": list(err.get("loc", ())), "msg": err.get("msg")}
                for err in exc.errors()
            ],
        },
    )


async def _http_error_handler(
    request: Request, exc: StarletteHTTPException
) -> JSONResponse:
    if exc.status_code == status.HTTP_404_NOT_FOUND:
        return JSONResponse(
            status_code=exc.status_code,
            content={
                "error": "Endpoint not found",
                "availableEndpoints": AVAILABLE_ENDPOINTS,
            },
        )
    return JSONResponse(
        status_code=exc.status_code,
        content={"success": False, "error": str(exc.detail)},
        headers=getattr(exc, "headers", None),
    )


def create_app() -> FastAPI:
    """Build and configure the FastAPI application."""
    app = FastAPI(
        title=settings.service_name,
        version="0.1.0",
        lifespan=_lifespan,
    )

    # Middleware (order matters: last added = first executed)
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=False,
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        allow_headers=["Content-Type", "Authorization"],
    )

    app.add_exception_handler(FlightCapacityError, _capacity_error_handler)
    app.add_exception_handler(RequestValidationError, _request_validation_handler)
    app.add_exception_handler(StarletteHTTPException, _http_error_handler)

    # Routers
    app.include_router(health.router)
    app.include_router(flights.router, prefix="/api")
    app.include_router(capacity.router, prefix="/api")

    return app


app = create_app()
