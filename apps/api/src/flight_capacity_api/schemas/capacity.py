"""Flight capacity response schemas."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from flight_capacity_core.schemas import FareTrendPoint, SeatSummary


_OPTIONAL_FIELDS = frozenset(
    {"airline", "aircraft", "aircraftName", "legroom", "delayPrediction", "fareTrend"}
)


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class CapacityQuery(_CamelModel):
    """Normalized query echoed back to the caller."""

    carrier: str
    number: str
    flight_code: str
    route: str
    origin: str
    destination: str
    date: str


class CapacityResponse(_CamelModel):
    """Aggregated capacity payload.

    ``schedule`` and ``availability`` are always present.  Enrichment fields
    stay ``None`` when their upstream call failed or was not attempted and
    are then left out of the serialized body.
    """

    success: bool = True
    query: CapacityQuery
    schedule: Any
    availability: list[dict[str, Any]]
    seat_summary: SeatSummary
    airline: Any = None
    aircraft: Any = None
    aircraft_name: str | None = None
    legroom: dict[str, str] | None = None
    delay_prediction: Any = None
    fare_trend: list[FareTrendPoint] | None = None

    def to_payload(self) -> dict[str, Any]:
        body = self.model_dump(mode="json", by_alias=True)
        return {
            key: value
            for key, value in body.items()
            if value is not None or key not in _OPTIONAL_FIELDS
        }
