"""Flight query and derived capacity DTOs."""

from __future__ import annotations

import datetime as dt

from pydantic import BaseModel, ConfigDict, Field, computed_field
from pydantic.alias_generators import to_camel


class FlightQuery(BaseModel):
    """Normalized flight identification for one capacity request.

    Codes are stored uppercased.  ``origin`` and ``destination`` are filled
    in by route resolution when the caller did not supply them.
    """

    model_config = ConfigDict(frozen=True)

    carrier_code: str = Field(min_length=2, max_length=2)
    flight_number: str = Field(min_length=1, max_length=4, pattern=r"^\d+$")
    date: dt.date
    origin: str | None = Field(default=None, min_length=3, max_length=3)
    destination: str | None = Field(default=None, min_length=3, max_length=3)

    @computed_field  # type: ignore[prop-decorator]
    @property
    def flight_code(self) -> str:
        """Carrier code followed by flight number, e.g. ``LH400``."""
        return f"{self.carrier_code}{self.flight_number}"

    @computed_field  # type: ignore[prop-decorator]
    @property
    def route(self) -> str | None:
        """``ORIGIN-DEST`` once both endpoints are known."""
        if not self.origin or not self.destination:
            return None
        return f"{self.origin}-{self.destination}"

    def with_route(self, origin: str, destination: str) -> FlightQuery:
        return self.model_copy(
            update={"origin": origin.upper(), "destination": destination.upper()}
        )


class FareTrendPoint(BaseModel):
    """Cheapest fare seen for one departure date.

    ``price`` is ``None`` when no offer was found or the lookup failed; it
    is never reported as zero.
    """

    date: dt.date
    price: float | None = None


class SeatSummary(BaseModel):
    """Seat availability rolled up from the matching flight offers."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    offer_count: int = 0
    bookable_seats: int = 0
    cabins: dict[str, int] = Field(default_factory=dict)

    @computed_field(alias="hasSeatData")  # type: ignore[prop-decorator]
    @property
    def has_seat_data(self) -> bool:
        """False when the carrier shared no offers (not the same as full)."""
        return self.offer_count > 0
